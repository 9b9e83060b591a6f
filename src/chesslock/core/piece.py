"""Piece value object and material values."""

from __future__ import annotations

import math
from dataclasses import dataclass

from chesslock.core.enums import Color, PieceType
from chesslock.errors import MalformedNotation

# Heuristic material values. The king is never a capture target.
PIECE_VALUES: dict[PieceType, float] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
    PieceType.KING: math.inf,
}

_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
_TYPES_BY_LETTER: dict[str, PieceType] = {v: k for k, v in _LETTERS.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        letter = _LETTERS[self.piece_type]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        ptype = _TYPES_BY_LETTER.get(char.lower()) if len(char) == 1 else None
        if ptype is None:
            raise MalformedNotation(f"Invalid piece character: {char!r}")
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(color, ptype)

    @property
    def value(self) -> float:
        return PIECE_VALUES[self.piece_type]


def piece_type_from_letter(letter: str) -> PieceType | None:
    """Map a case-insensitive letter such as 'q' or 'N' to a piece type."""
    if len(letter) != 1:
        return None
    return _TYPES_BY_LETTER.get(letter.lower())


def piece_letter(piece_type: PieceType) -> str:
    return _LETTERS[piece_type]
