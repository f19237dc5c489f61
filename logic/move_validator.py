"""
Move validator for TicTacToe.
Checks untrusted moves (typed by a human) before they reach the board.
"""

from typing import Optional
from dataclasses import dataclass

from .game_state import GameState, Cell, BOARD_SIZE


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates TicTacToe moves without raising.

    Rules:
    1. Can only place on cells inside the 3x3 grid
    2. Can only place on empty cells
    3. Game must not be over
    """

    def validate_move(
        self,
        game_state: GameState,
        row: int,
        col: int
    ) -> ValidationResult:
        """
        Validate a move.

        Args:
            game_state: Current game state.
            row: Row to place piece (0-2).
            col: Column to place piece (0-2).

        Returns:
            ValidationResult with is_valid and error_message.
        """
        # Check if game is over
        if game_state.is_game_over():
            return ValidationResult(
                is_valid=False,
                error_message="Game is already over!"
            )

        # Check if row/col are in valid range
        if not game_state.in_bounds(row, col):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid position ({row}, {col}). Must be 0-{BOARD_SIZE - 1}."
            )

        # Check if cell is empty
        occupant = game_state.get(row, col)
        if occupant is not None:
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell ({row}, {col}) is already occupied by {occupant.glyph}"
            )

        return ValidationResult(is_valid=True)

    def parse_move(self, text: str) -> Optional[Cell]:
        """
        Turn "row col" (or "row,col") typed input into a cell.

        Returns:
            (row, col), or None if the text is not two integers.
        """
        parts = text.replace(",", " ").split()
        if len(parts) != 2:
            return None
        try:
            return int(parts[0]), int(parts[1])
        except ValueError:
            return None
