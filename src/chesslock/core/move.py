"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass, field

from chesslock.core.enums import MoveFlag, PieceType
from chesslock.core.piece import Piece, piece_letter
from chesslock.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """A single move, meaningful only against the position it came from.

    ``piece`` and ``captured`` are context filled in by the generator; they
    do not take part in equality so hand-built moves still compare equal.
    """

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None
    piece: Piece | None = field(default=None, compare=False)
    captured: Piece | None = field(default=None, compare=False)

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += piece_letter(self.promotion)
        return base

    @property
    def uci(self) -> str:
        """Long-algebraic text, e.g. ``e7e8q``."""
        return str(self)

    @property
    def is_capture(self) -> bool:
        return self.captured is not None or self.flag == MoveFlag.EN_PASSANT

    @property
    def is_castling(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)

    @property
    def is_en_passant(self) -> bool:
        return self.flag == MoveFlag.EN_PASSANT

    @property
    def is_promotion(self) -> bool:
        return self.flag == MoveFlag.PROMOTION
