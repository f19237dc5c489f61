"""
Logic module for TicTacToe.
Handles game state, rules, and the AI opponent.
"""

__version__ = "1.0.0"

from .config import GameConfig
from .piece import Piece
from .game_state import (
    GameState,
    Player,
    InvalidMoveError,
    OutOfBoundsError,
    CellOccupiedError,
)
from .move_validator import MoveValidator, ValidationResult
from .win_checker import WinChecker, GameResult
from .minimax import MinimaxStrategy
from .strategies import StrategyMode, RandomStrategy, create_strategy
from .ai_player import AIPlayer
