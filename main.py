"""
Console game for TicTacToe.

This script ties together:
- Logic (game state, move validation, win checking)
- AI (random or unbeatable strategy)

Run this script to play TicTacToe against the computer!
"""

import queue
from typing import Callable, Dict, Optional

import numpy as np

from logic.config import GameConfig
from logic.game_state import GameState, Player
from logic.move_validator import MoveValidator
from logic.win_checker import WinChecker, GameResult
from logic.ai_player import AIPlayer
from logic.strategies import StrategyMode


FORFEIT_COMMANDS = ("q", "quit", "forfeit")


class TicTacToeSession:
    """
    One game of TicTacToe between a human (console) and the AI.

    Game flow:
    1. X moves first; if the AI plays X it opens the game
    2. Human types a move as "row col" (or "q" to give up)
    3. After every half-move the board is checked for a win or draw
    4. AI calculates its response and places its piece
    5. Repeat until someone wins, it's a draw, or the human forfeits
    """

    def __init__(
        self,
        human_attacks: Optional[bool] = None,
        mode: StrategyMode = StrategyMode.RANDOM,
        seed: Optional[int] = None,
        config: Optional[GameConfig] = None,
        input_fn: Callable[[str], str] = input
    ):
        """
        Initialize the session.

        Args:
            human_attacks: True if the human plays X. Defaults to config.HUMAN_ATTACKS.
            mode: Strategy the AI plays with.
            seed: Seed for the random strategy.
            config: Game configuration. Uses defaults if not provided.
            input_fn: Where human moves are read from.
        """
        self.config = config or GameConfig()
        if human_attacks is None:
            human_attacks = self.config.HUMAN_ATTACKS

        self.human = Player(is_attacking=human_attacks)

        self.ai = AIPlayer(
            self.human.opponent(),
            mode=mode,
            rng=np.random.default_rng(seed if seed is not None else self.config.RANDOM_SEED),
            config=self.config
        )

        self.game_state = GameState()
        self.validator = MoveValidator()
        self.win_checker = WinChecker()
        self.input_fn = input_fn

        self.result = GameResult.ONGOING
        self.forfeited = False

    @property
    def is_over(self) -> bool:
        return self.result != GameResult.ONGOING

    def start(self) -> GameResult:
        """
        Play the game to the end.

        Returns:
            The result from the human's point of view.
        """
        print("\n" + "=" * 40)
        print("   TicTacToe")
        print(f"   Human plays: {self.human}")
        print(f"   AI plays:    {self.ai.player} [{self.ai.mode.value}]")
        print("=" * 40)
        print(f"Enter moves as 'row col' (0-{self.config.BOARD_SIZE - 1}). Type 'q' to give up.")

        # X always opens the game
        if self.ai.is_attacking:
            self._ai_move()

        while not self.is_over:
            self.game_state.print_board()

            move = self._read_human_move()
            if move is None:
                self.forfeit()
                break

            self._process_human_move(*move)
            if self._check_game_over():
                break

            self._ai_move()
            self._check_game_over()

        self._show_game_result()
        return self.result

    def _read_human_move(self):
        """
        Prompt until the human types a legal move.

        Returns:
            (row, col), or None if the human gave up.
        """
        while True:
            text = self.input_fn(f"Your move ({self.human.piece.glyph}): ").strip()

            if text.lower() in FORFEIT_COMMANDS:
                return None

            move = self.validator.parse_move(text)
            if move is None:
                print("Please type two numbers, e.g. '1 2'.")
                continue

            result = self.validator.validate_move(self.game_state, *move)
            if not result.is_valid:
                print(result.error_message)
                continue

            return move

    def _process_human_move(self, row: int, col: int):
        """Place the human's piece."""
        self.game_state.set(row, col, self.human.piece)
        print(f"\n>>> Human placed {self.human.piece.glyph} at ({row}, {col})")

    def _ai_move(self):
        """
        Let the AI pick and place its piece.

        The search runs on a worker thread; the chosen cell (or the error
        that stopped the search) is handed back through a queue and handled
        here, on the thread that owns the board.
        """
        print("\n>>> AI is thinking...")

        replies = queue.Queue()
        self.ai.take_turn_async(self.game_state, replies.put, error_callback=replies.put)
        move = replies.get()

        if isinstance(move, Exception):
            raise move

        if move is None:
            print("AI has no move to make.")
            return

        row, col = move
        self.game_state.set(row, col, self.ai.piece)
        print(f">>> AI placed {self.ai.piece.glyph} at ({row}, {col})")

    def _check_game_over(self) -> bool:
        """Update the result after a half-move. Returns True if the game ended."""
        self.result = self.human.result(self.game_state)
        return self.is_over

    def forfeit(self):
        """The human gives up, which counts as a loss."""
        self.forfeited = True
        self.result = GameResult.LOSS

    def reset(self):
        """Clear the board for a new round with the same players."""
        self.game_state = GameState()
        self.result = GameResult.ONGOING
        self.forfeited = False

    def new_game(
        self,
        human_attacks: Optional[bool] = None,
        mode: Optional[StrategyMode] = None
    ):
        """
        Set up the next game, optionally switching sides or difficulty.

        Args:
            human_attacks: True if the human plays X next game. Keeps the current side if None.
            mode: Strategy for the AI. Keeps the current one if None.
        """
        self.reset()

        if human_attacks is not None and human_attacks != self.human.is_attacking:
            self.human = Player(is_attacking=human_attacks)
            self.ai.player = self.human.opponent()
            # Rebuild the strategy so it plays for the AI's new side
            self.ai.set_strategy(mode or self.ai.mode)
        elif mode is not None and mode != self.ai.mode:
            self.ai.set_strategy(mode)

    def _show_game_result(self):
        """Show the final game result."""
        print("\n" + "=" * 40)
        print("   GAME OVER!")
        print("=" * 40)

        self.game_state.print_board()

        line = self.win_checker.get_winning_line(self.game_state)
        if line is not None:
            print(f"\nWinning line: {line}")

        if self.forfeited:
            print("\nYou gave up. The AI wins this one!")
        elif self.result == GameResult.WIN:
            print("\nCongratulations! You won!")
        elif self.result == GameResult.LOSS:
            print("\nYou lose. Maybe next time!")
        else:
            print("\nDraw game! Maybe try one more time?")


def _ask(session: TicTacToeSession, prompt: str) -> str:
    return session.input_fn(prompt).strip().lower()


def play_games(session: TicTacToeSession) -> Dict[GameResult, int]:
    """
    Play games until the human declines another one.

    Between games the human may switch sides and difficulty.

    Returns:
        How many games ended in each result, from the human's point of view.
    """
    tally = {result: 0 for result in (GameResult.WIN, GameResult.LOSS, GameResult.DRAW)}

    while True:
        tally[session.start()] += 1

        if _ask(session, "\nPlay again? [y/N]: ") not in ("y", "yes"):
            break

        side = _ask(session, "Play as X or O? [enter keeps current]: ")
        human_attacks = {"x": True, "o": False}.get(side)

        mode = None
        name = _ask(session, "Difficulty (random/unbeatable) [enter keeps current]: ")
        if name:
            try:
                mode = StrategyMode.from_name(name)
            except ValueError as e:
                print(f"{e}. Keeping {session.ai.mode.value}.")

        session.new_game(human_attacks=human_attacks, mode=mode)

    print(f"\nWins: {tally[GameResult.WIN]}  "
          f"Losses: {tally[GameResult.LOSS]}  "
          f"Draws: {tally[GameResult.DRAW]}")
    return tally


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="TicTacToe against the computer")
    parser.add_argument(
        "--unbeatable",
        action="store_true",
        help="Play against the minimax AI instead of the random one"
    )
    parser.add_argument(
        "--ai-first",
        action="store_true",
        help="Let the AI play first (as X)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random AI"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print AI search details"
    )

    args = parser.parse_args()

    config = GameConfig()
    config.DEBUG_MODE = args.debug
    if args.ai_first:
        config.HUMAN_ATTACKS = False

    session = TicTacToeSession(
        mode=StrategyMode.UNBEATABLE if args.unbeatable else StrategyMode.RANDOM,
        seed=args.seed,
        config=config
    )

    try:
        play_games(session)
    except (KeyboardInterrupt, EOFError):
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")


if __name__ == "__main__":
    main()
