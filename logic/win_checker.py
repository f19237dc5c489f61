"""
Win checker for TicTacToe.
Checks if a side has won, if the game is a draw, and how a finished
game looks from one player's point of view.
"""

from enum import Enum
from typing import Optional, List, Tuple

from .piece import Piece


# All possible winning lines (as list of (row, col) tuples), in the order
# they are checked: rows top to bottom, columns left to right, then diagonals
WINNING_LINES = [
    # Rows
    [(0, 0), (0, 1), (0, 2)],
    [(1, 0), (1, 1), (1, 2)],
    [(2, 0), (2, 1), (2, 2)],
    # Columns
    [(0, 0), (1, 0), (2, 0)],
    [(0, 1), (1, 1), (2, 1)],
    [(0, 2), (1, 2), (2, 2)],
    # Diagonals
    [(0, 0), (1, 1), (2, 2)],
    [(0, 2), (1, 1), (2, 0)],
]


class GameResult(Enum):
    """Outcome of a game from one player's perspective."""
    ONGOING = "ongoing"
    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"


class WinChecker:
    """
    Checks for win conditions in TicTacToe.

    Win condition: 3 identical pieces in a row
    (horizontally, vertically, or diagonally)
    """

    WINNING_LINES = WINNING_LINES

    def check_winner(self, game_state: "GameState") -> Optional[Piece]:
        """
        Check if there's a winner.

        Args:
            game_state: The current game state.

        Returns:
            The piece on the first completed line, or None if no winner yet.
        """
        for line in self.WINNING_LINES:
            winner = self._check_line(game_state.board, line)
            if winner is not None:
                return winner

        return None

    def _check_line(
        self,
        board: List[List[Optional[Piece]]],
        line: List[Tuple[int, int]]
    ) -> Optional[Piece]:
        """
        Check if a single line has a winner.

        Args:
            board: The game board.
            line: List of (row, col) positions to check.

        Returns:
            The piece if all 3 cells hold it, None otherwise.
        """
        (r0, c0), (r1, c1), (r2, c2) = line
        first = board[r0][c0]
        if first is None:
            return None  # Empty cell, no winner on this line

        if first == board[r1][c1] == board[r2][c2]:
            return first

        return None

    def check_draw(self, game_state: "GameState") -> bool:
        """
        Check if the game is a draw.

        A draw occurs when all cells are filled AND no one has won.
        """
        if self.check_winner(game_state) is not None:
            return False

        return len(game_state.open_cells()) == 0

    def get_winning_line(self, game_state: "GameState") -> Optional[List[Tuple[int, int]]]:
        """
        Get the winning line if there is one.

        Args:
            game_state: The game state.

        Returns:
            The winning line as list of (row, col), or None.
        """
        for line in self.WINNING_LINES:
            if self._check_line(game_state.board, line) is not None:
                return line
        return None

    def result_for(self, game_state: "GameState", piece: Piece) -> GameResult:
        """
        Interpret the board from the point of view of whoever plays `piece`.
        """
        winner = self.check_winner(game_state)

        if winner is not None:
            return GameResult.WIN if winner == piece else GameResult.LOSS
        if not game_state.open_cells():
            return GameResult.DRAW
        return GameResult.ONGOING
