"""Core enumerations and flags for the chess domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class MoveFlag(IntEnum):
    """Special move classification."""

    NORMAL = 0
    DOUBLE_PAWN = 1
    EN_PASSANT = 2
    CASTLE_KINGSIDE = 3
    CASTLE_QUEENSIDE = 4
    PROMOTION = 5


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH


class GameResult(IntEnum):
    """Outcome of a game.

    Terminal results are never reverted except by an undo or a new position.
    """

    IN_PROGRESS = 0
    WHITE_WINS_CHECKMATE = 1
    BLACK_WINS_CHECKMATE = 2
    STALEMATE = 3
    DRAW_FIFTY_MOVE = 4
    DRAW_INSUFFICIENT_MATERIAL = 5
    DRAW_THREEFOLD_REPETITION = 6

    @classmethod
    def checkmate(cls, winner: Color) -> GameResult:
        if winner == Color.WHITE:
            return cls.WHITE_WINS_CHECKMATE
        return cls.BLACK_WINS_CHECKMATE

    @property
    def is_terminal(self) -> bool:
        return self != GameResult.IN_PROGRESS

    @property
    def is_checkmate(self) -> bool:
        return self in (GameResult.WHITE_WINS_CHECKMATE, GameResult.BLACK_WINS_CHECKMATE)

    @property
    def is_draw(self) -> bool:
        return self.is_terminal and not self.is_checkmate

    @property
    def winner(self) -> Color | None:
        if self == GameResult.WHITE_WINS_CHECKMATE:
            return Color.WHITE
        if self == GameResult.BLACK_WINS_CHECKMATE:
            return Color.BLACK
        return None

    @property
    def description(self) -> str:
        return _RESULT_DESCRIPTIONS[self]


_RESULT_DESCRIPTIONS: dict[GameResult, str] = {
    GameResult.IN_PROGRESS: "Game in progress",
    GameResult.WHITE_WINS_CHECKMATE: "White wins by checkmate",
    GameResult.BLACK_WINS_CHECKMATE: "Black wins by checkmate",
    GameResult.STALEMATE: "Draw by stalemate",
    GameResult.DRAW_FIFTY_MOVE: "Draw by 50-move rule",
    GameResult.DRAW_INSUFFICIENT_MATERIAL: "Draw by insufficient material",
    GameResult.DRAW_THREEFOLD_REPETITION: "Draw by threefold repetition",
}
