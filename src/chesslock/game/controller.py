"""GameController: the central orchestrator of a chess game.

Coordinates: GameState, MoveGenerator, Rules.
Emits events via simple callbacks so collaborators / tests can subscribe.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field

from chesslock.core.enums import Color, GameResult, PieceType
from chesslock.core.move import Move
from chesslock.core.move_generator import MoveGenerator
from chesslock.core.piece import piece_type_from_letter
from chesslock.core.position import Position
from chesslock.core.types import Square, is_valid_square, parse_square
from chesslock.errors import GameAlreadyEnded, MalformedNotation
from chesslock.game.interfaces import GamePhase, IGameController
from chesslock.game.outcomes import Accepted, MoveOutcome, Rejected, RejectReason
from chesslock.game.state import GameState, MoveRecord

_LOGGER = logging.getLogger(__name__)

_PROMOTION_CHOICES = frozenset(
    (PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT)
)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Accepted], None]
ResultCallback = Callable[[GameResult], None]
CheckCallback = Callable[[Color], None]  # side now in check
ResetCallback = Callable[[], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_result: list[ResultCallback] = field(default_factory=list)
    on_check: list[CheckCallback] = field(default_factory=list)
    on_reset: list[ResetCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Validates and applies moves, tracks history, notifies listeners.

    Thread-safety: mutations and queries share one re-entrant lock, so a
    reader never sees the trial moves of a legality check and
    ``attempt_move`` / ``apply_move`` / ``undo_last_move`` never interleave.
    Listeners are invoked synchronously while the lock is held; they may
    call back into the controller.
    """

    __slots__ = ("_state", "_lock", "events")

    def __init__(self, events: GameEvents | None = None) -> None:
        self._state = GameState()
        self._lock = threading.RLock()
        self.events = events if events is not None else GameEvents()

    # ── Listener registration ────────────────────────────────────────────

    def add_move_listener(self, callback: MoveCallback) -> None:
        self.events.on_move.append(callback)

    def add_result_listener(self, callback: ResultCallback) -> None:
        self.events.on_result.append(callback)

    def add_check_listener(self, callback: CheckCallback) -> None:
        self.events.on_check.append(callback)

    def add_reset_listener(self, callback: ResetCallback) -> None:
        self.events.on_reset.append(callback)

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        """The live state; not guarded by the controller lock."""
        return self._state

    @property
    def side_to_move(self) -> Color:
        with self._lock:
            return self._state.side_to_move

    @property
    def fen(self) -> str:
        with self._lock:
            return self._state.fen

    @property
    def result(self) -> GameResult:
        with self._lock:
            return self._state.result

    @property
    def phase(self) -> GamePhase:
        with self._lock:
            return self._state.phase

    @property
    def is_in_check(self) -> bool:
        with self._lock:
            return self._state.is_in_check()

    @property
    def legal_move_count(self) -> int:
        with self._lock:
            return len(self._state.legal_moves())

    @property
    def history_length(self) -> int:
        with self._lock:
            return self._state.ply_count

    @property
    def history(self) -> tuple[MoveRecord, ...]:
        with self._lock:
            return tuple(self._state.move_history)

    def legal_moves(self) -> list[Move]:
        with self._lock:
            return self._state.legal_moves()

    def position_copy(self) -> Position:
        """Independent copy of the current position, safe to search on."""
        with self._lock:
            return self._state.position.copy()

    # ── IGameController impl ─────────────────────────────────────────────

    def load_position(self, text: str) -> None:
        self._reset(text)

    def new_game(self) -> None:
        self._reset(None)

    def _reset(self, text: str | None) -> None:
        with self._lock:
            self._state.setup(text)
            _LOGGER.info(
                "Loaded position %s (result: %s)",
                self._state.fen,
                self._state.result.name,
            )
            self._emit_reset()

    def attempt_move(
        self,
        origin: str | Square,
        destination: str | Square,
        promotion: str | PieceType | None = None,
    ) -> MoveOutcome:
        with self._lock:
            self._ensure_playable()
            from_sq = _coerce_square(origin)
            to_sq = _coerce_square(destination)

            match = self._match_move(from_sq, to_sq, promotion)
            if isinstance(match, Rejected):
                _LOGGER.warning(
                    "Rejected move %s -> %s: %s", origin, destination, match.reason.name
                )
                return match
            return self._apply(match)

    def validate_move(
        self,
        origin: str | Square,
        destination: str | Square,
        promotion: str | PieceType | None = None,
    ) -> RejectReason | None:
        """Reason *origin*→*destination* would be rejected, or ``None``."""
        with self._lock:
            match = self._match_move(
                _coerce_square(origin), _coerce_square(destination), promotion
            )
            return match.reason if isinstance(match, Rejected) else None

    def apply_move(self, move: Move) -> Accepted:
        with self._lock:
            self._ensure_playable()
            for legal in self._state.legal_moves():
                if legal == move:
                    return self._apply(legal)
            raise ValueError(f"Move {move} is not legal in {self._state.fen}")

    def undo_last_move(self) -> Move:
        with self._lock:
            move = self._state.undo_last_move()
            _LOGGER.debug("Undid %s", move)
            return move

    # ── Internal helpers ─────────────────────────────────────────────────

    def _ensure_playable(self) -> None:
        if self._state.is_game_over:
            raise GameAlreadyEnded(
                f"Game already ended: {self._state.result.description}"
            )

    def _match_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: str | PieceType | None,
    ) -> Move | Rejected:
        position = self._state.position
        piece = position.board[from_sq]
        legal = self._state.legal_moves()
        from_origin = [m for m in legal if m.from_sq == from_sq]

        def reject(reason: RejectReason) -> Rejected:
            return Rejected(
                reason=reason,
                origin=from_sq,
                destination=to_sq,
                piece=piece,
                target=position.board[to_sq],
                legal_move_count=len(legal),
                piece_move_count=len(from_origin),
            )

        if piece is None:
            return reject(RejectReason.NO_PIECE_AT_ORIGIN)
        if piece.color != position.side_to_move:
            return reject(RejectReason.WRONG_SIDE_TO_MOVE)

        candidates = [m for m in from_origin if m.to_sq == to_sq]
        if not candidates:
            gen = MoveGenerator(position)
            if any(m.to_sq == to_sq for m in gen.moves_from(from_sq)):
                return reject(RejectReason.WOULD_EXPOSE_OWN_KING)
            return reject(RejectReason.ILLEGAL_DESTINATION)

        wanted = _coerce_promotion(promotion)
        if candidates[0].is_promotion:
            for move in candidates:
                if move.promotion == wanted:
                    return move
            return reject(RejectReason.AMBIGUOUS_PROMOTION)

        if promotion is not None:
            return reject(RejectReason.ILLEGAL_DESTINATION)
        return candidates[0]

    def _apply(self, move: Move) -> Accepted:
        was_not_started = self._state.phase == GamePhase.NOT_STARTED
        record = self._state.apply_move(move)
        outcome = Accepted(
            move=move,
            gives_check=record.gives_check,
            is_capture=move.is_capture,
            is_castling=move.is_castling,
            is_promotion=move.is_promotion,
            is_en_passant=move.is_en_passant,
            result=record.result,
            fen=record.fen_after,
        )
        if was_not_started:
            _LOGGER.info("Game started")
        _LOGGER.debug("Applied %s -> %s", move, record.fen_after)

        self._emit_move(outcome)
        if record.result.is_terminal:
            _LOGGER.info("Game over: %s", record.result.description)
            self._emit_result(record.result)
        elif record.gives_check:
            self._emit_check(self._state.side_to_move)
        return outcome

    def _emit_move(self, outcome: Accepted) -> None:
        for cb in list(self.events.on_move):
            cb(outcome)

    def _emit_result(self, result: GameResult) -> None:
        for cb in list(self.events.on_result):
            cb(result)

    def _emit_check(self, color: Color) -> None:
        for cb in list(self.events.on_check):
            cb(color)

    def _emit_reset(self) -> None:
        for cb in list(self.events.on_reset):
            cb()


def _coerce_square(value: str | Square) -> Square:
    if isinstance(value, str):
        return parse_square(value)
    if isinstance(value, int) and is_valid_square(value):
        return value
    raise MalformedNotation(f"Invalid square: {value!r}")


def _coerce_promotion(value: str | PieceType | None) -> PieceType | None:
    """Map a promotion argument to a piece type; invalid input maps to None."""
    if value is None:
        return None
    if isinstance(value, PieceType):
        piece_type = value
    elif isinstance(value, str):
        text = value.strip()
        piece_type = piece_type_from_letter(text) or PieceType.__members__.get(
            text.upper()
        )
    else:
        return None
    return piece_type if piece_type in _PROMOTION_CHOICES else None
