"""
AI player for TicTacToe.
Owns the active strategy and chooses moves for the computer side.
"""

import threading
from typing import Callable, Optional, Union

import numpy as np

from .config import GameConfig
from .game_state import GameState, Player, Cell
from .piece import Piece
from .strategies import StrategyMode, create_strategy


class AIPlayer:
    """
    The computer-controlled player.

    Starts with the random strategy unless told otherwise. The strategy can
    be swapped between games with set_strategy(); the new strategy is always
    bound to the side this AI plays.
    """

    def __init__(
        self,
        player: Player = Player(is_attacking=False),
        mode: Optional[StrategyMode] = None,
        rng: Optional[np.random.Generator] = None,
        config: Optional[GameConfig] = None
    ):
        """
        Initialize the AI player.

        Args:
            player: Which side the AI controls (default: defender, O)
            mode: Starting strategy. Defaults to config.DEFAULT_STRATEGY.
            rng: Random generator for the random strategy. Shared by every
                strategy this player builds, so a seeded AI stays reproducible.
            config: Game configuration. Uses defaults if not provided.
        """
        self.player = player
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.RANDOM_SEED)

        self.mode = StrategyMode.RANDOM
        self.strategy = None
        self.set_strategy(mode or StrategyMode.from_name(self.config.DEFAULT_STRATEGY))

    @property
    def is_attacking(self) -> bool:
        return self.player.is_attacking

    @property
    def piece(self) -> Piece:
        return self.player.piece

    def set_strategy(self, mode: Union[StrategyMode, str]):
        """
        Switch to another strategy.

        Args:
            mode: A StrategyMode, or its name ("random" / "unbeatable").
        """
        if isinstance(mode, str):
            mode = StrategyMode.from_name(mode)

        self.mode = mode
        self.strategy = create_strategy(mode, self.is_attacking, rng=self.rng, config=self.config)

        if self.config.DEBUG_MODE:
            print(f"AI ({self.player}) now using {mode.value} strategy")

    def take_turn(self, game_state: GameState) -> Optional[Cell]:
        """
        Choose the AI's next move.

        The board is only read; the caller places the piece.

        Returns:
            (row, col) to play, or None if no moves are available.
        """
        return self.strategy.select_move(game_state)

    def take_turn_async(
        self,
        game_state: GameState,
        callback: Callable[[Optional[Cell]], None],
        error_callback: Optional[Callable[[Exception], None]] = None
    ) -> threading.Thread:
        """
        Choose the AI's next move on a background thread.

        The search works on its own copy of the board, so the caller may
        keep using `game_state` meanwhile. `callback` is invoked with the
        chosen cell from the worker thread; hand it back to whatever
        thread owns the board before placing the piece.

        If the search fails, `error_callback` receives the exception. Without
        one, the error is printed and `callback` gets None, so a caller
        waiting on it is always woken up.

        Returns:
            The started worker thread.
        """
        snapshot = game_state.copy()

        def _worker():
            try:
                move = self.take_turn(snapshot)
            except Exception as e:
                if error_callback is not None:
                    error_callback(e)
                else:
                    print(f"ERROR: AI search failed: {e}")
                    callback(None)
                return
            callback(move)

        thread = threading.Thread(target=_worker, daemon=True)
        thread.start()
        return thread
