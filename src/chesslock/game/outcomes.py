"""Outcome values returned by :meth:`GameController.attempt_move`."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TypeAlias

from chesslock.core.enums import GameResult
from chesslock.core.move import Move
from chesslock.core.piece import Piece
from chesslock.core.types import Square


class RejectReason(IntEnum):
    """Why a move attempt was refused. Every reason is recoverable."""

    NO_PIECE_AT_ORIGIN = auto()
    WRONG_SIDE_TO_MOVE = auto()
    ILLEGAL_DESTINATION = auto()  # geometry, blocked path or own-piece capture
    WOULD_EXPOSE_OWN_KING = auto()
    AMBIGUOUS_PROMOTION = auto()  # missing or invalid promotion piece


@dataclass(frozen=True, slots=True)
class Accepted:
    """A move was applied."""

    move: Move
    gives_check: bool
    is_capture: bool
    is_castling: bool
    is_promotion: bool
    is_en_passant: bool
    result: GameResult
    fen: str

    @property
    def ok(self) -> bool:
        return True

    @property
    def ended_game(self) -> bool:
        return self.result.is_terminal


@dataclass(frozen=True, slots=True)
class Rejected:
    """A move attempt was refused; the game state is untouched.

    The context fields let a presentation layer build an explanation.
    """

    reason: RejectReason
    origin: Square
    destination: Square
    piece: Piece | None
    target: Piece | None
    legal_move_count: int
    piece_move_count: int

    @property
    def ok(self) -> bool:
        return False


MoveOutcome: TypeAlias = Accepted | Rejected
