"""Abstract interfaces for the game layer.

Collaborators (presentation layers, the opponent scheduler) depend on
these ABCs, not on the concrete controller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chesslock.core.enums import Color, GameResult, PieceType
    from chesslock.core.move import Move
    from chesslock.core.types import Square
    from chesslock.game.outcomes import Accepted, MoveOutcome


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    ENDED = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def load_position(self, text: str) -> None:
        """Replace the current game with the position encoded in *text*."""

    @abstractmethod
    def new_game(self) -> None:
        """Reset to the standard starting position."""

    @abstractmethod
    def attempt_move(
        self,
        origin: str | Square,
        destination: str | Square,
        promotion: str | PieceType | None = None,
    ) -> MoveOutcome:
        """Try to play a move; returns an accepted or rejected outcome."""

    @abstractmethod
    def apply_move(self, move: Move) -> Accepted:
        """Apply a move taken from :meth:`legal_moves`."""

    @abstractmethod
    def undo_last_move(self) -> Move:
        """Take back the last move and return it."""

    @abstractmethod
    def legal_moves(self) -> list[Move]:
        """Legal moves in the current position."""

    @property
    @abstractmethod
    def side_to_move(self) -> Color: ...

    @property
    @abstractmethod
    def fen(self) -> str: ...

    @property
    @abstractmethod
    def result(self) -> GameResult: ...

    @property
    @abstractmethod
    def phase(self) -> GamePhase: ...
