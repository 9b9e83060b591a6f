"""Tests for the heuristic opponent and its tiers."""

from __future__ import annotations

import random

import pytest

from chesslock.config import EngineSettings
from chesslock.core.move import Move
from chesslock.core.move_generator import MoveGenerator
from chesslock.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from chesslock.core.position import Position
from chesslock.core.types import C4, D1, D2, D5, E1, E2, E3, H1, H5
from chesslock.engine import (
    DEFAULT_TIERS,
    BalancedMix,
    Consolidation,
    HeuristicOpponent,
    MoveContext,
    SafeCheck,
)
from chesslock.errors import NoLegalMoves

CHECKED_BY_QUEEN = "4k3/8/8/8/8/8/3q4/4K3 w - - 0 1"
FREE_KNIGHT = "4k3/8/8/3n4/8/8/8/3RK3 w - - 0 1"
ROOK_CHECK = "4k3/8/8/8/8/8/8/R3K3 w - - 0 1"
HANGING_BISHOP = "2r1k3/8/8/8/2B5/8/8/R3K3 w - - 0 1"
ROOK_THREAT = "4k3/8/8/n7/8/8/8/4K2R w - - 0 1"


class _FixedRandom(random.Random):
    """Random source whose ``random()`` always returns *value*."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self._value = value

    def random(self) -> float:
        return self._value


def _legal(position: Position) -> list[Move]:
    return MoveGenerator(position).generate_legal_moves()


def _context(fen: str, rng: random.Random | None = None) -> MoveContext:
    position = position_from_fen(fen)
    return MoveContext(
        position, _legal(position), EngineSettings(), rng or random.Random(0)
    )


class TestMoveContext:
    def test_facts_for_every_move(self) -> None:
        ctx = _context(STARTING_FEN)
        assert len(ctx.facts) == 20
        assert not ctx.in_check
        assert not ctx.has_hanging_piece

    def test_position_left_unchanged(self) -> None:
        position = position_from_fen(HANGING_BISHOP)
        MoveContext(position, _legal(position), EngineSettings(), random.Random(0))
        assert position_to_fen(position) == HANGING_BISHOP

    def test_hanging_piece_detected(self) -> None:
        assert _context(HANGING_BISHOP).has_hanging_piece

    def test_capture_facts(self) -> None:
        ctx = _context(FREE_KNIGHT)
        capture = next(f for f in ctx.facts if f.move == Move(D1, D5))
        assert capture.is_capture
        assert capture.captured_value == 3
        assert capture.destination_safe

    def test_threat_facts(self) -> None:
        ctx = _context(ROOK_THREAT)
        assert [f.move for f in ctx.threats()] == [Move(H1, H5)]
        assert not _context(STARTING_FEN).threats()


class TestTiers:
    def _choose(self, fen: str) -> tuple[Move, str]:
        position = position_from_fen(fen)
        choice = HeuristicOpponent(EngineSettings(seed=1)).choose(
            position, _legal(position)
        )
        return choice.move, choice.tier

    def test_critical_defense_prefers_king_capture(self) -> None:
        move, tier = self._choose(CHECKED_BY_QUEEN)
        assert tier == "critical_defense"
        assert move == Move(E1, D2)

    def test_valuable_capture(self) -> None:
        move, tier = self._choose(FREE_KNIGHT)
        assert tier == "valuable_capture"
        assert move == Move(D1, D5)

    def test_safe_check(self) -> None:
        move, tier = self._choose(ROOK_CHECK)
        assert tier == "safe_check"
        assert position_from_fen(ROOK_CHECK).board[move.from_sq] is not None
        assert move.to_sq == 56

    def test_no_check_while_piece_hangs(self) -> None:
        assert SafeCheck().select(_context(HANGING_BISHOP)) is None

    def test_escape_moves_hanging_piece(self) -> None:
        move, tier = self._choose(HANGING_BISHOP)
        assert tier == "escape"
        assert move.from_sq == C4

    def test_balanced_mix_skipped_by_probability(self) -> None:
        assert BalancedMix().select(_context(ROOK_THREAT, _FixedRandom(0.99))) is None

    def test_balanced_mix_takes_capture(self) -> None:
        move = BalancedMix().select(_context(FREE_KNIGHT, _FixedRandom(0.0)))
        assert move == Move(D1, D5)

    def test_balanced_mix_plays_threat(self) -> None:
        move = BalancedMix().select(_context(ROOK_THREAT, _FixedRandom(0.0)))
        assert move == Move(H1, H5)

    def test_balanced_mix_needs_capture_or_threat(self) -> None:
        assert BalancedMix().select(_context(STARTING_FEN, _FixedRandom(0.0))) is None

    def test_consolidation_blocks_near_king(self) -> None:
        assert Consolidation().select(_context(STARTING_FEN)) == Move(E2, E3)

    def test_consolidation_falls_back_to_development(self) -> None:
        move = Consolidation().select(_context("k7/8/8/8/8/8/8/K6N w - - 0 1"))
        assert move is not None
        assert move.from_sq == H1


class TestHeuristicOpponent:
    def test_default_tier_order(self) -> None:
        assert HeuristicOpponent().tier_names == (
            "critical_defense",
            "valuable_capture",
            "safe_check",
            "escape",
            "balanced_mix",
            "consolidation",
            "random",
        )
        assert len(DEFAULT_TIERS) == 7

    @pytest.mark.parametrize(
        "fen",
        [STARTING_FEN, CHECKED_BY_QUEEN, FREE_KNIGHT, ROOK_CHECK, HANGING_BISHOP],
    )
    def test_always_returns_a_legal_move(self, fen: str) -> None:
        position = position_from_fen(fen)
        legal = _legal(position)
        opponent = HeuristicOpponent(EngineSettings(seed=7))
        for _ in range(10):
            assert opponent.choose_move(position, legal) in legal
        assert position_to_fen(position) == fen

    def test_same_seed_same_moves(self) -> None:
        position = position_from_fen(STARTING_FEN)
        legal = _legal(position)
        a = HeuristicOpponent(EngineSettings(seed=42))
        b = HeuristicOpponent(EngineSettings(seed=42))
        assert [a.choose_move(position, legal) for _ in range(5)] == [
            b.choose_move(position, legal) for _ in range(5)
        ]

    def test_only_random_tier_left(self) -> None:
        position = position_from_fen(STARTING_FEN)
        opponent = HeuristicOpponent(
            rng=_FixedRandom(0.99), tiers=(BalancedMix(),)
        )
        choice = opponent.choose(position, _legal(position))
        assert choice.tier == "random"

    def test_no_legal_moves_raises(self) -> None:
        with pytest.raises(NoLegalMoves):
            HeuristicOpponent().choose_move(position_from_fen(STARTING_FEN), [])

    def test_invalid_settings_rejected(self) -> None:
        with pytest.raises(ValueError):
            HeuristicOpponent(EngineSettings(mix_probability=1.5))
        with pytest.raises(ValueError):
            HeuristicOpponent(
                EngineSettings(think_delay_min_ms=10, think_delay_max_ms=5)
            )
