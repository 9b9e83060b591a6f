"""Tests for position reports and move feedback."""

from __future__ import annotations

import pytest

from chesslock.analysis import (
    analyze_position,
    describe_move,
    explain_rejection,
    movement_rule,
)
from chesslock.core.enums import Color, GameResult, PieceType
from chesslock.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from chesslock.game import Accepted, GameController, Rejected

FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"


def _controller(fen: str | None = None) -> GameController:
    ctrl = GameController()
    if fen is None:
        ctrl.new_game()
    else:
        ctrl.load_position(fen)
    return ctrl


def _rejected(ctrl: GameController, origin: str, dest: str) -> Rejected:
    outcome = ctrl.attempt_move(origin, dest)
    assert isinstance(outcome, Rejected)
    return outcome


def _accepted(
    ctrl: GameController, origin: str, dest: str, promo: str | None = None
) -> Accepted:
    outcome = ctrl.attempt_move(origin, dest, promo)
    assert isinstance(outcome, Accepted)
    return outcome


class TestAnalyzePosition:
    def test_starting_position(self) -> None:
        position = position_from_fen(STARTING_FEN)
        report = analyze_position(position)
        assert report.fen == STARTING_FEN
        assert report.side_to_move == Color.WHITE
        assert not report.in_check
        assert report.legal_move_count == 20
        assert report.repetition_count == 1
        assert report.result == GameResult.IN_PROGRESS
        assert not report.is_terminal
        assert report.white_material == 39
        assert report.material_balance == 0

    def test_checkmated_position(self) -> None:
        position = position_from_fen(FOOLS_MATE)
        report = analyze_position(position)
        assert report.in_check
        assert report.legal_move_count == 0
        assert report.result == GameResult.BLACK_WINS_CHECKMATE
        assert report.is_terminal
        assert report.halfmove_clock == 1
        assert report.fullmove_number == 3
        assert position_to_fen(position) == FOOLS_MATE

    def test_material_balance(self) -> None:
        report = analyze_position(position_from_fen("4k3/8/8/3n4/8/8/8/3RK3 w - - 0 1"))
        assert report.white_material == 5
        assert report.black_material == 3
        assert report.material_balance == 2


class TestMovementRule:
    @pytest.mark.parametrize("piece_type", list(PieceType))
    def test_every_piece_has_a_rule(self, piece_type: PieceType) -> None:
        assert movement_rule(piece_type)

    def test_knight_rule(self) -> None:
        assert "L-shape" in movement_rule(PieceType.KNIGHT)


class TestExplainRejection:
    def test_no_piece(self) -> None:
        text = explain_rejection(_rejected(_controller(), "e4", "e5"))
        assert text.startswith("There is no piece on e4.")

    def test_wrong_side(self) -> None:
        text = explain_rejection(_rejected(_controller(), "e7", "e5"))
        assert text == "You selected a black pawn, but it is white's turn to move."

    def test_own_piece_capture(self) -> None:
        text = explain_rejection(_rejected(_controller(), "d1", "d2"))
        assert text.startswith("You cannot capture your own pieces.")

    def test_wrong_shape_explains_movement(self) -> None:
        text = explain_rejection(_rejected(_controller(), "g1", "g3"))
        assert text == movement_rule(PieceType.KNIGHT)

    def test_pawn_too_far(self) -> None:
        text = explain_rejection(_rejected(_controller(), "e2", "e5"))
        assert text == movement_rule(PieceType.PAWN)

    def test_piece_without_moves(self) -> None:
        text = explain_rejection(_rejected(_controller(), "c1", "e3"))
        assert text == "This white bishop has no legal moves right now."

    def test_blocked_path(self) -> None:
        ctrl = _controller("4k3/8/8/8/8/8/P7/R3K3 w - - 0 1")
        text = explain_rejection(_rejected(ctrl, "a1", "a4"))
        assert text.startswith("The path between a1 and a4 is blocked.")

    def test_pinned_piece(self) -> None:
        ctrl = _controller("4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1")
        text = explain_rejection(_rejected(ctrl, "e2", "d3"))
        assert "pinned piece" in text
        assert text.startswith("This white bishop cannot move")

    def test_leaves_king_in_check(self) -> None:
        ctrl = _controller("4k3/8/8/3R4/8/8/8/r3K3 w - - 0 1")
        text = explain_rejection(_rejected(ctrl, "d5", "d6"))
        assert text.startswith("This move would leave your king in check")

    def test_promotion_choice(self) -> None:
        ctrl = _controller("7k/4P3/8/8/8/8/8/4K3 w - - 0 1")
        text = explain_rejection(_rejected(ctrl, "e7", "e8"))
        assert "promotes the pawn" in text


class TestDescribeMove:
    def test_standard(self) -> None:
        assert describe_move(_accepted(_controller(), "e2", "e4")) == "Standard move."

    def test_capture(self) -> None:
        ctrl = _controller("4k3/8/8/3n4/8/8/8/3RK3 w - - 0 1")
        assert describe_move(_accepted(ctrl, "d1", "d5")).startswith("Capture")

    def test_check(self) -> None:
        ctrl = _controller("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
        assert describe_move(_accepted(ctrl, "a1", "a8")).startswith("Check")

    def test_castling(self) -> None:
        ctrl = _controller("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        assert describe_move(_accepted(ctrl, "e1", "c1")).startswith("Castling")

    def test_en_passant(self) -> None:
        ctrl = _controller("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        assert describe_move(_accepted(ctrl, "e5", "d6")).startswith("En passant")

    def test_promotion(self) -> None:
        ctrl = _controller("7k/4P3/8/8/8/8/8/4K3 w - - 0 1")
        assert describe_move(_accepted(ctrl, "e7", "e8", "q")).startswith(
            "Pawn promotion"
        )

    def test_checkmate(self) -> None:
        ctrl = _controller()
        for origin, dest in [("f2", "f3"), ("e7", "e5"), ("g2", "g4")]:
            _accepted(ctrl, origin, dest)
        assert describe_move(_accepted(ctrl, "d8", "h4")).startswith("Checkmate")
