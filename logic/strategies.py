"""
AI strategies for TicTacToe.

Two strategies exist: RandomStrategy (easy) picks any open cell, and
MinimaxStrategy (unbeatable) searches the whole game tree. Both expose
select_move(game_state) -> Optional[(row, col)].
"""

from enum import Enum
from typing import Optional

import numpy as np

from .config import GameConfig
from .game_state import GameState, Cell
from .minimax import MinimaxStrategy


class StrategyMode(Enum):
    """AI difficulty levels."""
    RANDOM = "random"          # Random moves
    UNBEATABLE = "unbeatable"  # Full minimax

    @classmethod
    def from_name(cls, name: str) -> "StrategyMode":
        """Look up a mode by its name, case-insensitively."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(mode.value for mode in cls)
            raise ValueError(f"Unknown strategy {name!r}. Choose one of: {choices}") from None


class RandomStrategy:
    """
    An AI strategy that picks uniformly among the open cells.
    No look-ahead and no memory between calls.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None, seed: Optional[int] = None):
        """
        Initialize the strategy.

        Args:
            rng: Random generator to draw from. Built from `seed` if not provided.
            seed: Seed for a new generator (ignored when `rng` is given).
        """
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def select_move(self, game_state: GameState) -> Optional[Cell]:
        """
        Get a random open cell.

        Returns:
            (row, col), or None if the board is full.
        """
        open_cells = game_state.open_cells()

        if not open_cells:
            return None

        index = int(self.rng.integers(0, len(open_cells)))
        return open_cells[index]


def create_strategy(
    mode: StrategyMode,
    is_attacking: bool,
    rng: Optional[np.random.Generator] = None,
    config: Optional[GameConfig] = None
):
    """
    Build the strategy for a mode, bound to the side the AI plays.

    Args:
        mode: Which strategy to build.
        is_attacking: True if the AI places X.
        rng: Random generator handed to the random strategy.
        config: Game configuration. Uses defaults if not provided.

    Returns:
        A RandomStrategy or MinimaxStrategy.
    """
    config = config or GameConfig()

    if mode == StrategyMode.RANDOM:
        return RandomStrategy(rng=rng, seed=config.RANDOM_SEED)
    if mode == StrategyMode.UNBEATABLE:
        return MinimaxStrategy(is_attacking, config)

    raise ValueError(f"Unsupported strategy mode: {mode}")
