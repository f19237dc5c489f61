"""
Game state management for TicTacToe.
Tracks the board, enforces placement rules, and records which side
each player controls.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Sequence, Tuple

from .config import GameConfig
from .piece import Piece
from .win_checker import WinChecker, GameResult


BOARD_SIZE = GameConfig.BOARD_SIZE

Cell = Tuple[int, int]

_win_checker = WinChecker()


class InvalidMoveError(Exception):
    """A placement or lookup the board cannot honour."""

    def __init__(self, row: int, col: int, message: str):
        super().__init__(message)
        self.row = row
        self.col = col


class OutOfBoundsError(InvalidMoveError, IndexError):
    """Row or column outside the 3x3 grid."""

    def __init__(self, row: int, col: int):
        super().__init__(
            row, col,
            f"Invalid position ({row}, {col}). Must be 0-{BOARD_SIZE - 1}."
        )


class CellOccupiedError(InvalidMoveError):
    """Attempt to place a piece on a cell that already holds one."""

    def __init__(self, row: int, col: int, occupant: Piece):
        super().__init__(
            row, col,
            f"Cell ({row}, {col}) is already occupied by {occupant.glyph}"
        )
        self.occupant = occupant


@dataclass(frozen=True)
class Player:
    """
    A participant in the game.

    Only records whether it controls the attacking (X) or the defending (O)
    piece. Used for both the human and the computer side.
    """
    is_attacking: bool

    @property
    def piece(self) -> Piece:
        """The piece this player places."""
        return Piece.for_side(self.is_attacking)

    def opponent(self) -> "Player":
        """The player on the other side of the board."""
        return Player(not self.is_attacking)

    def result(self, game_state: "GameState") -> GameResult:
        """Win, loss, draw or ongoing, from this player's point of view."""
        return _win_checker.result_for(game_state, self.piece)

    def __str__(self) -> str:
        side = "attacker" if self.is_attacking else "defender"
        return f"{side} ({self.piece.glyph})"


def _empty_board() -> List[List[Optional[Piece]]]:
    return [[None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]


@dataclass
class GameState:
    """
    The state of a TicTacToe board.

    A 3x3 grid where every cell is either empty (None) or holds a Piece.
    Pieces are only ever added; `set` refuses to overwrite a cell.
    `copy()` returns a fully independent board, which is what the AI
    search relies on when it explores hypothetical moves.
    """

    # The 3x3 board - None means empty
    board: List[List[Optional[Piece]]] = field(default_factory=_empty_board)

    def __post_init__(self):
        if len(self.board) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in self.board):
            raise ValueError(f"Board must be {BOARD_SIZE}x{BOARD_SIZE}")

    @classmethod
    def new(cls) -> "GameState":
        """Create an empty board."""
        return cls()

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "GameState":
        """
        Build a board from three strings of glyphs.

        Any character other than X or O is an empty cell, e.g.
        GameState.from_rows(["XX.", ".O.", "..O"]).
        """
        if len(rows) != BOARD_SIZE:
            raise ValueError(f"Expected {BOARD_SIZE} rows, got {len(rows)}")

        glyphs = {piece.glyph: piece for piece in Piece}
        board = []
        for line in rows:
            if len(line) != BOARD_SIZE:
                raise ValueError(f"Row {line!r} must have {BOARD_SIZE} cells")
            board.append([glyphs.get(ch.upper()) for ch in line])
        return cls(board=board)

    @staticmethod
    def in_bounds(row: int, col: int) -> bool:
        """True if (row, col) addresses a cell on the board."""
        return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE

    def get(self, row: int, col: int) -> Optional[Piece]:
        """
        Get the piece at a position.

        Raises:
            OutOfBoundsError: row or col is not in 0-2.
        """
        if not self.in_bounds(row, col):
            raise OutOfBoundsError(row, col)
        return self.board[row][col]

    def set(self, row: int, col: int, piece: Piece):
        """
        Place a piece on an empty cell.

        Raises:
            OutOfBoundsError: row or col is not in 0-2.
            CellOccupiedError: the cell already holds a piece. The board
                is left untouched.
        """
        if not self.in_bounds(row, col):
            raise OutOfBoundsError(row, col)

        occupant = self.board[row][col]
        if occupant is not None:
            raise CellOccupiedError(row, col, occupant)

        self.board[row][col] = piece

    def open_cells(self) -> List[Cell]:
        """
        Get all empty cells on the board, row by row, left to right.

        The order matters: the AI strategies break ties by it.
        """
        return [
            (row, col)
            for row in range(BOARD_SIZE)
            for col in range(BOARD_SIZE)
            if self.board[row][col] is None
        ]

    def occupied_count(self) -> int:
        return sum(1 for row in self.board for cell in row if cell is not None)

    def is_full(self) -> bool:
        return not self.open_cells()

    def winner(self) -> Optional[Piece]:
        """The piece that completed a line, or None."""
        return _win_checker.check_winner(self)

    def is_draw(self) -> bool:
        """True when the board is full and nobody has won."""
        return _win_checker.check_draw(self)

    def is_game_over(self) -> bool:
        return self.winner() is not None or self.is_full()

    def copy(self) -> "GameState":
        """Create a deep copy of the board."""
        return GameState(board=[list(row) for row in self.board])

    def render(self) -> str:
        """Text drawing of the board with row/column indices."""
        lines = ["  0   1   2", "┌───┬───┬───┐"]
        for row in range(BOARD_SIZE):
            cells = " │ ".join(
                piece.glyph if piece is not None else " "
                for piece in self.board[row]
            )
            lines.append(f"│ {cells} │ {row}")
            if row < BOARD_SIZE - 1:
                lines.append("├───┼───┼───┤")
        lines.append("└───┴───┴───┘")
        return "\n".join(lines)

    def print_board(self):
        """Print the board to console."""
        print()
        print(self.render())
