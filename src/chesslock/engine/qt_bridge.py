"""Qt bridge that plays the opponent's move after a thinking delay."""

from __future__ import annotations

import logging
import random

from PyQt6.QtCore import QObject, QTimer, pyqtSignal, pyqtSlot

from chesslock.config import EngineSettings
from chesslock.engine.heuristic import HeuristicOpponent
from chesslock.errors import ChessLockError
from chesslock.game.controller import GameController
from chesslock.game.interfaces import GamePhase

_LOGGER = logging.getLogger(__name__)


class OpponentSession(QObject):
    """Schedules at most one opponent move at a time on the Qt event loop.

    The move is chosen and applied when a single-shot timer fires. If the
    game was reset, undone or otherwise changed in the meantime the request
    is dropped without touching the controller.
    """

    move_applied = pyqtSignal(object)  # Accepted outcome
    move_failed = pyqtSignal(str)

    def __init__(
        self,
        controller: GameController,
        opponent: HeuristicOpponent | None = None,
        settings: EngineSettings | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        if settings is None:
            settings = opponent.settings if opponent is not None else EngineSettings()
        settings.validate()
        self._settings = settings
        self._controller = controller
        self._opponent = opponent if opponent is not None else HeuristicOpponent(settings)
        self._rng = random.Random(settings.seed)

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._on_timeout)

        self._request_id = 0
        self._pending_request: int | None = None
        self._pending_snapshot: tuple[str, int] | None = None

        controller.add_reset_listener(self.cancel)

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def is_pending(self) -> bool:
        return self._pending_request is not None

    @property
    def last_delay_ms(self) -> int:
        """Delay used for the most recent request (0 before any request)."""
        return self._timer.interval() if self._request_id else 0

    def request_move(self) -> bool:
        """Schedule the opponent's move; ``False`` if nothing was scheduled."""
        if self.is_pending:
            _LOGGER.debug("Opponent move already pending")
            return False
        if self._controller.phase == GamePhase.ENDED:
            return False
        if self._controller.legal_move_count == 0:
            return False

        self._request_id += 1
        self._pending_request = self._request_id
        self._pending_snapshot = self._snapshot()
        delay = self._rng.randint(
            self._settings.think_delay_min_ms, self._settings.think_delay_max_ms
        )
        _LOGGER.debug("Opponent request %d scheduled in %d ms", self._request_id, delay)
        self._timer.start(delay)
        return True

    @pyqtSlot()
    def cancel(self) -> None:
        """Drop the pending request, if any."""
        self._timer.stop()
        if self._pending_request is not None:
            _LOGGER.debug("Opponent request %d cancelled", self._pending_request)
        self._clear_pending_request()

    # ── Internal ─────────────────────────────────────────────────────────

    def _snapshot(self) -> tuple[str, int]:
        return self._controller.fen, self._controller.history_length

    def _clear_pending_request(self) -> None:
        self._pending_request = None
        self._pending_snapshot = None

    def _on_timeout(self) -> None:
        request_id = self._pending_request
        snapshot = self._pending_snapshot
        self._clear_pending_request()
        if request_id is None or snapshot is None:
            return
        if snapshot != self._snapshot() or self._controller.phase == GamePhase.ENDED:
            _LOGGER.debug("Opponent request %d is stale; dropped", request_id)
            return

        controller = self._controller
        try:
            choice = self._opponent.choose(
                controller.position_copy(), controller.legal_moves()
            )
            outcome = controller.apply_move(choice.move)
        except (ChessLockError, ValueError) as exc:
            _LOGGER.warning("Opponent request %d failed: %s", request_id, exc)
            self.move_failed.emit(str(exc))
            return

        _LOGGER.debug("Opponent played %s via %s", choice.move, choice.tier)
        self.move_applied.emit(outcome)
