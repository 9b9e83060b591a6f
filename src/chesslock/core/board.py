"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from chesslock.core.enums import Color, PieceType
from chesslock.core.piece import Piece
from chesslock.core.types import Square, make_square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 64-square board with a per-piece square index."""

    __slots__ = ("_squares", "_index")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        # piece -> squares it occupies; kept in sync by __setitem__.
        self._index: dict[Piece, set[Square]] = {}

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        old_piece = self._squares[sq]
        if old_piece == piece:
            return
        if old_piece is not None:
            self._index[old_piece].discard(sq)
        self._squares[sq] = piece
        if piece is not None:
            self._index.setdefault(piece, set()).add(sq)

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*, in ascending order."""
        return sorted(self._index.get(Piece(color, piece_type), ()))

    def count(self, color: Color, piece_type: PieceType) -> int:
        return len(self._index.get(Piece(color, piece_type), ()))

    def has_piece(self, color: Color, piece_type: PieceType) -> bool:
        return self.count(color, piece_type) > 0

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*, in ascending order."""
        return [
            sq
            for sq, piece in enumerate(self._squares)
            if piece is not None and piece.color == color
        ]

    def occupied_count(self) -> int:
        return sum(1 for piece in self._squares if piece is not None)

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        squares = self._index.get(Piece(color, PieceType.KING))
        if not squares:
            raise ValueError(f"No {color.name} king on board")
        return min(squares)

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        b._index = {piece: squares.copy() for piece, squares in self._index.items()}
        return b

    def clear(self) -> None:
        self._squares = [None] * 64
        self._index = {}

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f, pt in enumerate(_BACK_RANK):
            b[make_square(f, 0)] = Piece(Color.WHITE, pt)
            b[make_square(f, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            b[make_square(f, 6)] = Piece(Color.BLACK, PieceType.PAWN)
            b[make_square(f, 7)] = Piece(Color.BLACK, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self[make_square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
