"""
Test script for the TicTacToe AI.
Tests both strategies, the AI player, and a scripted console session.

Usage:
    pytest test_ai.py
"""

import itertools
import queue
import sys
from pathlib import Path

import numpy as np
import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from logic.config import GameConfig
from logic.piece import Piece
from logic.game_state import GameState, Player
from logic.win_checker import GameResult
from logic.minimax import MinimaxStrategy
from logic.strategies import StrategyMode, RandomStrategy, create_strategy
from logic.ai_player import AIPlayer
from main import TicTacToeSession, play_games


X = Piece.ATTACKER
O = Piece.DEFENDER


def play_game(x_strategy, o_strategy) -> GameState:
    """Let two strategies play a full game, X first."""
    game = GameState()
    strategies = {X: x_strategy, O: o_strategy}
    piece = X
    while not game.is_game_over():
        move = strategies[piece].select_move(game)
        assert move is not None
        game.set(*move, piece)
        piece = piece.opposite()
    return game


def scripted_input(lines):
    """Stand-in for input() that replays the given lines."""
    it = iter(lines)
    return lambda prompt="": next(it)


# ==================== RANDOM STRATEGY ====================

def test_random_single_open_cell():
    game = GameState.from_rows(["XOX", "XOO", "OX."])
    for seed in range(20):
        assert RandomStrategy(seed=seed).select_move(game) == (2, 2)


def test_random_full_board_returns_none():
    game = GameState.from_rows(["XOX", "XOO", "OXX"])
    assert RandomStrategy(seed=0).select_move(game) is None


def test_random_only_picks_open_cells():
    game = GameState.from_rows(["X.O", ".X.", "O.."])
    strategy = RandomStrategy(seed=3)
    open_cells = set(game.open_cells())
    picks = {strategy.select_move(game) for _ in range(200)}
    assert picks == open_cells


def test_random_is_reproducible_with_seed():
    game = GameState()
    first = RandomStrategy(rng=np.random.default_rng(42))
    second = RandomStrategy(rng=np.random.default_rng(42))
    assert [first.select_move(game) for _ in range(20)] == \
           [second.select_move(game) for _ in range(20)]


def test_random_does_not_touch_board():
    game = GameState.from_rows(["X..", "...", "..."])
    before = game.copy()
    RandomStrategy(seed=1).select_move(game)
    assert game == before


# ==================== MINIMAX STRATEGY ====================

def test_minimax_takes_the_win():
    game = GameState.from_rows(["XX.", "OO.", "..."])
    assert MinimaxStrategy(is_attacking=True).select_move(game) == (0, 2)


def test_minimax_takes_the_win_as_defender():
    game = GameState.from_rows(["XX.", "OO.", "X.."])
    assert MinimaxStrategy(is_attacking=False).select_move(game) == (1, 2)


def test_minimax_blocks():
    game = GameState.from_rows(["XX.", ".O.", "..."])
    assert MinimaxStrategy(is_attacking=False).select_move(game) == (0, 2)


def test_minimax_keeps_first_of_equal_moves():
    # (0,2) and (2,0) both win at once; the first one scanned is kept
    game = GameState.from_rows(["XX.", "X.O", ".O."])
    strategy = MinimaxStrategy(is_attacking=True)

    scores = strategy.score_moves(game)
    assert scores[(0, 2)] == scores[(2, 0)] == GameConfig.WIN_SCORE
    assert strategy.select_move(game) == (0, 2)


def test_minimax_is_deterministic():
    game = GameState.from_rows(["X..", "...", "..."])
    strategy = MinimaxStrategy(is_attacking=False)
    first = strategy.select_move(game)
    assert first is not None
    assert all(strategy.select_move(game) == first for _ in range(3))
    assert MinimaxStrategy(is_attacking=False).select_move(game) == first


def test_minimax_does_not_touch_board():
    game = GameState.from_rows(["X..", ".O.", "..X"])
    before = game.copy()
    strategy = MinimaxStrategy(is_attacking=False)
    strategy.select_move(game)
    assert game == before
    assert strategy.moves_evaluated > 0


def test_minimax_full_board_returns_none():
    game = GameState.from_rows(["XOX", "XOO", "OXX"])
    assert MinimaxStrategy(is_attacking=True).select_move(game) is None


def test_minimax_answers_corner_opening_with_center():
    # Every reply except the center loses against a corner opening
    game = GameState.from_rows(["X..", "...", "..."])
    assert MinimaxStrategy(is_attacking=False).select_move(game) == (1, 1)


def test_minimax_scores_from_its_own_side():
    game = GameState.from_rows(["XX.", "OO.", "..."])
    as_x = MinimaxStrategy(is_attacking=True).score_moves(game)
    assert as_x[(0, 2)] == 10
    # If X wastes the move, O completes its row
    assert as_x[(2, 2)] == -10


@pytest.mark.parametrize("seed", range(15))
def test_minimax_defender_never_loses_to_random(seed):
    game = play_game(RandomStrategy(seed=seed), MinimaxStrategy(is_attacking=False))
    assert game.winner() is not X


@pytest.mark.parametrize("seed", range(2))
def test_minimax_attacker_never_loses_to_random(seed):
    game = play_game(MinimaxStrategy(is_attacking=True), RandomStrategy(seed=seed))
    assert game.winner() is not O


def test_minimax_against_itself_is_a_draw():
    game = play_game(MinimaxStrategy(is_attacking=True), MinimaxStrategy(is_attacking=False))
    assert game.is_draw()


def walk_every_reply(game, strategy, to_move, moves_cache):
    """
    Play the AI against every possible sequence of opponent replies.

    Returns:
        (games played, games the AI lost)
    """
    winner = game.winner()
    if winner is not None:
        return 1, int(winner != strategy.piece)
    if not game.open_cells():
        return 1, 0

    if to_move == strategy.piece:
        key = tuple(tuple(row) for row in game.board)
        if key not in moves_cache:
            moves_cache[key] = strategy.select_move(game)
        candidates = [moves_cache[key]]
    else:
        candidates = game.open_cells()

    games = losses = 0
    for row, col in candidates:
        next_state = game.copy()
        next_state.set(row, col, to_move)
        played, lost = walk_every_reply(next_state, strategy, to_move.opposite(), moves_cache)
        games += played
        losses += lost
    return games, losses


@pytest.mark.parametrize("is_attacking", [True, False])
def test_minimax_never_loses_to_any_opponent(is_attacking):
    strategy = MinimaxStrategy(is_attacking=is_attacking)
    games, losses = walk_every_reply(GameState(), strategy, X, {})

    assert games > 0
    assert losses == 0


def test_minimax_on_decided_board_picks_first_open_cell():
    game = GameState.from_rows(["XXX", "OO.", "..."])
    for is_attacking in (True, False):
        assert MinimaxStrategy(is_attacking=is_attacking).select_move(game) == (1, 2)


def test_minimax_debug_output(capsys):
    config = GameConfig()
    config.DEBUG_MODE = True
    game = GameState.from_rows(["XX.", "OO.", "..."])
    MinimaxStrategy(is_attacking=True, config=config).select_move(game)
    assert "Best move: (0, 2)" in capsys.readouterr().out


# ==================== STRATEGY MODES ====================

def test_strategy_mode_from_name():
    assert StrategyMode.from_name("Unbeatable") is StrategyMode.UNBEATABLE
    assert StrategyMode.from_name(" random ") is StrategyMode.RANDOM
    with pytest.raises(ValueError, match="Unknown strategy"):
        StrategyMode.from_name("medium")


def test_create_strategy():
    unbeatable = create_strategy(StrategyMode.UNBEATABLE, is_attacking=False)
    assert isinstance(unbeatable, MinimaxStrategy)
    assert unbeatable.piece is O

    rng = np.random.default_rng(0)
    random_strategy = create_strategy(StrategyMode.RANDOM, is_attacking=True, rng=rng)
    assert isinstance(random_strategy, RandomStrategy)
    assert random_strategy.rng is rng


# ==================== AI PLAYER ====================

def test_ai_player_defaults_to_random():
    ai = AIPlayer(Player(is_attacking=False))
    assert ai.mode is StrategyMode.RANDOM
    assert isinstance(ai.strategy, RandomStrategy)
    assert ai.piece is O
    assert not ai.is_attacking


def test_ai_player_switches_strategy():
    rng = np.random.default_rng(5)
    ai = AIPlayer(Player(is_attacking=True), rng=rng)

    ai.set_strategy(StrategyMode.UNBEATABLE)
    assert ai.mode is StrategyMode.UNBEATABLE
    assert isinstance(ai.strategy, MinimaxStrategy)
    assert ai.strategy.is_attacking

    ai.set_strategy("random")
    assert isinstance(ai.strategy, RandomStrategy)
    assert ai.strategy.rng is rng


def test_ai_player_take_turn_delegates():
    game = GameState.from_rows(["OO.", "XX.", "X.."])
    ai = AIPlayer(Player(is_attacking=False), mode=StrategyMode.UNBEATABLE)
    before = game.copy()

    assert ai.take_turn(game) == (0, 2)
    assert game == before


def test_ai_player_no_move_on_full_board():
    game = GameState.from_rows(["XOX", "XOO", "OXX"])
    for mode in StrategyMode:
        assert AIPlayer(Player(True), mode=mode).take_turn(game) is None


def test_ai_player_seeded_is_reproducible():
    game = GameState()
    first = AIPlayer(Player(False), rng=np.random.default_rng(11))
    second = AIPlayer(Player(False), rng=np.random.default_rng(11))
    assert [first.take_turn(game) for _ in range(10)] == \
           [second.take_turn(game) for _ in range(10)]


def test_ai_player_take_turn_async():
    game = GameState.from_rows(["XX.", ".O.", "..."])
    ai = AIPlayer(Player(is_attacking=False), mode=StrategyMode.UNBEATABLE)
    replies = queue.Queue()

    thread = ai.take_turn_async(game, replies.put)
    thread.join(timeout=30)

    assert not thread.is_alive()
    assert replies.get_nowait() == (0, 2)
    assert game.get(0, 2) is None


class FailingStrategy:
    """Strategy whose search always blows up."""

    def select_move(self, game_state):
        raise RuntimeError("search failed")


def test_ai_player_async_hands_back_search_error():
    ai = AIPlayer(Player(is_attacking=False))
    ai.strategy = FailingStrategy()
    moves, errors = queue.Queue(), queue.Queue()

    thread = ai.take_turn_async(GameState(), moves.put, error_callback=errors.put)
    thread.join(timeout=5)

    assert not thread.is_alive()
    error = errors.get(timeout=1)
    assert isinstance(error, RuntimeError)
    assert str(error) == "search failed"
    assert moves.empty()


def test_ai_player_async_wakes_caller_on_error(capsys):
    ai = AIPlayer(Player(is_attacking=False))
    ai.strategy = FailingStrategy()
    replies = queue.Queue()

    thread = ai.take_turn_async(GameState(), replies.put)
    thread.join(timeout=5)

    assert replies.get(timeout=1) is None
    assert "AI search failed: search failed" in capsys.readouterr().out


def test_ai_player_uses_config_default():
    config = GameConfig()
    config.DEFAULT_STRATEGY = "unbeatable"
    ai = AIPlayer(Player(True), config=config)
    assert ai.mode is StrategyMode.UNBEATABLE


# ==================== CONSOLE SESSION ====================

def all_cells_forever():
    return itertools.cycle(f"{r} {c}" for r in range(3) for c in range(3))


def test_session_forfeit_is_a_loss(capsys):
    session = TicTacToeSession(human_attacks=True, seed=0, input_fn=scripted_input(["q"]))
    result = session.start()

    assert result == GameResult.LOSS
    assert session.forfeited
    assert session.game_state.occupied_count() == 0
    assert "You gave up" in capsys.readouterr().out


def test_session_ai_opens_when_attacking():
    session = TicTacToeSession(human_attacks=False, seed=0, input_fn=scripted_input(["quit"]))
    session.start()

    assert session.ai.piece is X
    assert session.game_state.occupied_count() == 1


def test_session_rejects_bad_input(capsys):
    session = TicTacToeSession(
        human_attacks=True, seed=0,
        input_fn=scripted_input(["5 5", "x y", "1 1", "1 1", "q"])
    )
    session.start()
    out = capsys.readouterr().out

    assert "Invalid position (5, 5)" in out
    assert "Please type two numbers" in out
    assert "already occupied by X" in out
    assert session.game_state.get(1, 1) is X
    assert session.game_state.occupied_count() == 2


def test_session_plays_to_the_end():
    moves = all_cells_forever()
    session = TicTacToeSession(
        human_attacks=True, seed=4,
        input_fn=lambda prompt="": next(moves)
    )
    result = session.start()

    assert result in (GameResult.WIN, GameResult.LOSS, GameResult.DRAW)
    assert session.game_state.is_game_over()
    assert not session.forfeited


def test_session_unbeatable_ai_never_loses():
    moves = all_cells_forever()
    session = TicTacToeSession(
        human_attacks=True,
        mode=StrategyMode.UNBEATABLE,
        input_fn=lambda prompt="": next(moves)
    )
    result = session.start()

    assert result in (GameResult.LOSS, GameResult.DRAW)


def test_session_reset():
    session = TicTacToeSession(human_attacks=True, seed=0, input_fn=scripted_input(["0 0", "q"]))
    session.start()
    session.reset()

    assert session.result == GameResult.ONGOING
    assert not session.forfeited
    assert session.game_state == GameState()


def test_session_surfaces_ai_error():
    session = TicTacToeSession(human_attacks=True, input_fn=scripted_input(["1 1"]))
    session.ai.strategy = FailingStrategy()

    with pytest.raises(RuntimeError, match="search failed"):
        session.start()


def test_session_new_game_switches_side_and_mode():
    session = TicTacToeSession(human_attacks=True, seed=0, input_fn=scripted_input(["0 0", "q"]))
    session.start()

    session.new_game(human_attacks=False, mode=StrategyMode.UNBEATABLE)

    assert session.game_state == GameState()
    assert session.human.piece is O
    assert session.ai.piece is X
    assert session.ai.mode is StrategyMode.UNBEATABLE
    assert isinstance(session.ai.strategy, MinimaxStrategy)
    assert session.ai.strategy.is_attacking

    session.new_game(mode=StrategyMode.RANDOM)
    assert session.human.piece is O
    assert isinstance(session.ai.strategy, RandomStrategy)


def test_play_games_until_declined(capsys):
    session = TicTacToeSession(
        human_attacks=True, seed=0,
        input_fn=scripted_input([
            "q",              # forfeit game 1
            "y", "o", "hard", # play again as O, unknown difficulty
            "q",              # forfeit game 2
            "yes", "", "unbeatable",
            "q",              # forfeit game 3
            "n",
        ])
    )
    tally = play_games(session)
    out = capsys.readouterr().out

    assert tally[GameResult.LOSS] == 3
    assert tally[GameResult.WIN] == tally[GameResult.DRAW] == 0
    assert "Unknown strategy 'hard'" in out
    assert "Losses: 3" in out
    # The AI played X in game 2 and 3, so it opened both
    assert session.ai.piece is X
    assert session.ai.mode is StrategyMode.UNBEATABLE
    assert session.game_state.occupied_count() == 1


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
