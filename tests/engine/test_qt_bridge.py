"""Tests for the Qt opponent session."""

from __future__ import annotations

import pytest
from PyQt6.QtTest import QSignalSpy

from chesslock.config import EngineSettings
from chesslock.core.enums import Color
from chesslock.engine import HeuristicOpponent, OpponentSession
from chesslock.game import Accepted, GameController

FAST = EngineSettings(think_delay_min_ms=0, think_delay_max_ms=10, seed=3)


@pytest.fixture()
def ctrl() -> GameController:
    c = GameController()
    c.new_game()
    return c


class TestOpponentSession:
    def test_plays_one_move(self, qapp: object, ctrl: GameController) -> None:
        del qapp
        ctrl.attempt_move("e2", "e4")
        session = OpponentSession(ctrl, settings=FAST)
        applied = QSignalSpy(session.move_applied)

        assert session.request_move()
        assert session.is_pending
        assert applied.wait(1000)

        assert len(applied) == 1
        outcome = applied[0][0]
        assert isinstance(outcome, Accepted)
        assert ctrl.history_length == 2
        assert ctrl.side_to_move == Color.WHITE
        assert not session.is_pending

    def test_second_request_while_pending(
        self, qapp: object, ctrl: GameController
    ) -> None:
        del qapp
        session = OpponentSession(ctrl, settings=FAST)
        assert session.request_move()
        assert not session.request_move()
        session.cancel()

    def test_cancel_drops_request(self, qapp: object, ctrl: GameController) -> None:
        del qapp
        session = OpponentSession(ctrl, settings=FAST)
        applied = QSignalSpy(session.move_applied)
        session.request_move()
        session.cancel()
        assert not session.is_pending
        assert not applied.wait(100)
        assert ctrl.history_length == 0

    def test_reset_cancels_pending_request(
        self, qapp: object, ctrl: GameController
    ) -> None:
        del qapp
        session = OpponentSession(ctrl, settings=FAST)
        applied = QSignalSpy(session.move_applied)
        session.request_move()
        ctrl.new_game()
        assert not session.is_pending
        assert not applied.wait(100)
        assert ctrl.history_length == 0

    def test_stale_request_after_undo(self, qapp: object, ctrl: GameController) -> None:
        del qapp
        ctrl.attempt_move("e2", "e4")
        session = OpponentSession(ctrl, settings=FAST)
        applied = QSignalSpy(session.move_applied)
        failed = QSignalSpy(session.move_failed)
        session.request_move()
        ctrl.undo_last_move()
        assert not applied.wait(100)
        assert len(failed) == 0
        assert ctrl.history_length == 0
        assert not session.is_pending

    def test_no_request_when_game_over(
        self, qapp: object, ctrl: GameController
    ) -> None:
        del qapp
        ctrl.load_position("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        session = OpponentSession(ctrl, settings=FAST)
        assert not session.request_move()
        assert not session.is_pending

    def test_fixed_delay(self, qapp: object, ctrl: GameController) -> None:
        del qapp
        settings = EngineSettings(think_delay_min_ms=5, think_delay_max_ms=5)
        session = OpponentSession(ctrl, settings=settings)
        assert session.last_delay_ms == 0
        session.request_move()
        assert session.last_delay_ms == 5
        session.cancel()

    def test_uses_opponent_settings(self, qapp: object, ctrl: GameController) -> None:
        del qapp
        opponent = HeuristicOpponent(FAST)
        session = OpponentSession(ctrl, opponent)
        applied = QSignalSpy(session.move_applied)
        session.request_move()
        assert applied.wait(1000)
        assert ctrl.history_length == 1

    def test_invalid_settings_rejected(self, qapp: object, ctrl: GameController) -> None:
        del qapp
        with pytest.raises(ValueError):
            OpponentSession(
                ctrl, settings=EngineSettings(think_delay_min_ms=-1)
            )
