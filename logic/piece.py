"""
Pieces for TicTacToe.
X is the attacking player's piece, O is the defending player's piece.
"""

from enum import Enum


class Piece(Enum):
    """The two marks that can be placed on the board."""
    ATTACKER = "X"
    DEFENDER = "O"

    @property
    def glyph(self) -> str:
        """The character drawn for this piece."""
        return self.value

    def is_attacker(self) -> bool:
        return self is Piece.ATTACKER

    def opposite(self) -> "Piece":
        """Get the other side's piece."""
        return Piece.DEFENDER if self is Piece.ATTACKER else Piece.ATTACKER

    @classmethod
    def attacking(cls) -> "Piece":
        return cls.ATTACKER

    @classmethod
    def defending(cls) -> "Piece":
        return cls.DEFENDER

    @classmethod
    def for_side(cls, is_attacking: bool) -> "Piece":
        """Get the piece placed by the attacking (True) or defending (False) side."""
        return cls.attacking() if is_attacking else cls.defending()

    def __str__(self) -> str:
        return self.value
