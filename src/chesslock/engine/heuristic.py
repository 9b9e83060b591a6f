"""Heuristic opponent: an ordered cascade of one-ply move selectors.

Each tier looks at the full list of legal moves through a shared
:class:`MoveContext` and either picks a move or passes. The first tier that
picks wins; the last tier always picks.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from chesslock.config import EngineSettings
from chesslock.core.enums import Color, PieceType
from chesslock.core.move_generator import MoveGenerator
from chesslock.core.piece import PIECE_VALUES
from chesslock.core.types import Square, center_distance, manhattan_distance, rank_of
from chesslock.errors import NoLegalMoves

if TYPE_CHECKING:
    from chesslock.core.move import Move
    from chesslock.core.position import Position

_LOGGER = logging.getLogger(__name__)


# ── Per-move facts ───────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class MoveFacts:
    """One-ply facts about a single legal move."""

    move: Move
    piece_type: PieceType
    mover_value: float
    captured_value: float
    gives_check: bool
    destination_safe: bool  # not attacked once the move is played
    origin_attacked: bool  # attacked before the move
    threatens: bool  # attacks an enemy piece from its new square

    @property
    def is_capture(self) -> bool:
        return self.captured_value > 0

    @property
    def is_king_move(self) -> bool:
        return self.piece_type == PieceType.KING


class MoveContext:
    """Everything the tiers need, computed once per decision.

    Attack facts come from :meth:`MoveGenerator.is_square_attacked` and
    threats from :meth:`MoveGenerator.moves_from`. The position is examined
    with make/unmake and left as it was.
    """

    __slots__ = (
        "color",
        "facts",
        "in_check",
        "has_hanging_piece",
        "own_king",
        "enemy_king",
        "settings",
        "rng",
    )

    def __init__(
        self,
        position: Position,
        legal_moves: Sequence[Move],
        settings: EngineSettings,
        rng: random.Random,
    ) -> None:
        self.settings = settings
        self.rng = rng
        self.color: Color = position.side_to_move
        opponent = self.color.opposite
        gen = MoveGenerator(position)
        board = position.board

        self.in_check = gen.is_in_check(self.color)
        self.own_king: Square = board.king_square(self.color)
        self.enemy_king: Square = board.king_square(opponent)
        self.has_hanging_piece = False
        for sq in gen.attacked_pieces(self.color):
            piece = board[sq]
            if piece is not None and piece.piece_type != PieceType.KING:
                if piece.value >= settings.minor_piece_value:
                    self.has_hanging_piece = True
                    break

        facts: list[MoveFacts] = []
        for move in legal_moves:
            piece = board[move.from_sq]
            if piece is None:
                raise ValueError(f"Move {move} does not start on a piece")
            captured = move.captured
            if captured is None and move.is_en_passant:
                captured_value: float = PIECE_VALUES[PieceType.PAWN]
            elif captured is None:
                captured_value = 0
            else:
                captured_value = captured.value
            origin_attacked = gen.is_square_attacked(move.from_sq, opponent)

            position.make_move(move)
            try:
                gives_check = gen.is_in_check(opponent)
                destination_safe = not gen.is_square_attacked(move.to_sq, opponent)
                threatens = any(
                    m.captured is not None for m in gen.moves_from(move.to_sq)
                )
            finally:
                position.unmake_move()

            facts.append(
                MoveFacts(
                    move=move,
                    piece_type=piece.piece_type,
                    mover_value=piece.value,
                    captured_value=captured_value,
                    gives_check=gives_check,
                    destination_safe=destination_safe,
                    origin_attacked=origin_attacked,
                    threatens=threatens,
                )
            )
        self.facts: tuple[MoveFacts, ...] = tuple(facts)

    def safe_captures(self) -> list[MoveFacts]:
        return [f for f in self.facts if f.is_capture and f.destination_safe]

    def threats(self) -> list[MoveFacts]:
        return [f for f in self.facts if f.threatens]

    def is_forward(self, facts: MoveFacts) -> bool:
        """Does the move advance towards the opponent's side?"""
        from_rank = rank_of(facts.move.from_sq)
        to_rank = rank_of(facts.move.to_sq)
        return to_rank > from_rank if self.color == Color.WHITE else to_rank < from_rank


def _best(
    candidates: Sequence[MoveFacts], key: Callable[[MoveFacts], float]
) -> Move | None:
    """First candidate with the maximal *key*, or ``None``."""
    if not candidates:
        return None
    return max(candidates, key=key).move


# ── Tiers ────────────────────────────────────────────────────────────────────


class OpponentTier(Protocol):
    """A named selector; returns ``None`` to pass to the next tier."""

    name: str

    def select(self, ctx: MoveContext) -> Move | None: ...


class CriticalDefense:
    """King attacked: every legal move resolves it, pick the most valuable."""

    name = "critical_defense"

    def select(self, ctx: MoveContext) -> Move | None:
        if not ctx.in_check:
            return None
        bonus = ctx.settings.king_move_bonus

        def defensive_value(f: MoveFacts) -> float:
            return 2 * f.captured_value + (bonus if f.is_king_move else 0)

        return _best(ctx.facts, defensive_value)


class ValuableCapture:
    name = "valuable_capture"

    def select(self, ctx: MoveContext) -> Move | None:
        captures = ctx.safe_captures()
        if not any(f.captured_value >= ctx.settings.minor_piece_value for f in captures):
            return None
        return _best(captures, lambda f: f.captured_value)


class SafeCheck:
    """Give check, unless something of ours is hanging."""

    name = "safe_check"

    def select(self, ctx: MoveContext) -> Move | None:
        if ctx.in_check or ctx.has_hanging_piece:
            return None
        for f in ctx.facts:
            if f.gives_check:
                return f.move
        return None


class Escape:
    """Move the most valuable attacked piece to a safe square."""

    name = "escape"

    def select(self, ctx: MoveContext) -> Move | None:
        escapes = [f for f in ctx.facts if f.origin_attacked and f.destination_safe]
        return _best(escapes, lambda f: f.mover_value)


class BalancedMix:
    """Sometimes grab material, otherwise make a threat near the enemy king."""

    name = "balanced_mix"

    def select(self, ctx: MoveContext) -> Move | None:
        settings = ctx.settings
        captures = ctx.safe_captures()
        threats = ctx.threats()
        if not captures and not threats:
            return None
        if ctx.rng.random() >= settings.mix_probability:
            return None

        if captures and ctx.rng.random() < settings.mix_capture_probability:
            return _best(captures, lambda f: f.captured_value)
        if not threats:
            return captures[0].move

        def threat(f: MoveFacts) -> float:
            to_sq = f.move.to_sq
            return (8 - center_distance(to_sq)) + (
                8 - manhattan_distance(to_sq, ctx.enemy_king)
            )

        return _best(threats, threat)


class Consolidation:
    """Block near our own king, else make a developing or central move."""

    name = "consolidation"

    def select(self, ctx: MoveContext) -> Move | None:
        radius = ctx.settings.near_king_distance
        for f in ctx.facts:
            if (
                not f.is_king_move
                and manhattan_distance(f.move.to_sq, ctx.own_king) <= radius
            ):
                return f.move

        for f in ctx.facts:
            if self._is_positional(ctx, f):
                return f.move
        return None

    @staticmethod
    def _is_positional(ctx: MoveContext, f: MoveFacts) -> bool:
        central = center_distance(f.move.to_sq) < 4
        if f.piece_type == PieceType.PAWN:
            return ctx.is_forward(f)
        if f.piece_type in (PieceType.KNIGHT, PieceType.BISHOP):
            return central or ctx.is_forward(f)
        if f.piece_type in (PieceType.ROOK, PieceType.QUEEN):
            return central
        return False


class RandomMove:
    name = "random"

    def select(self, ctx: MoveContext) -> Move | None:
        return ctx.rng.choice(ctx.facts).move


DEFAULT_TIERS: tuple[OpponentTier, ...] = (
    CriticalDefense(),
    ValuableCapture(),
    SafeCheck(),
    Escape(),
    BalancedMix(),
    Consolidation(),
    RandomMove(),
)


# ── Opponent ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class OpponentChoice:
    """The chosen move and the tier that chose it."""

    move: Move
    tier: str


class HeuristicOpponent:
    """Picks one of the supplied legal moves without any deep search."""

    __slots__ = ("_settings", "_rng", "_tiers")

    def __init__(
        self,
        settings: EngineSettings | None = None,
        rng: random.Random | None = None,
        tiers: Sequence[OpponentTier] = DEFAULT_TIERS,
    ) -> None:
        self._settings = settings if settings is not None else EngineSettings()
        self._settings.validate()
        self._rng = rng if rng is not None else random.Random(self._settings.seed)
        self._tiers = tuple(tiers)

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    @property
    def tier_names(self) -> tuple[str, ...]:
        return tuple(tier.name for tier in self._tiers)

    def choose_move(self, position: Position, legal_moves: Sequence[Move]) -> Move:
        """Return one element of *legal_moves*."""
        return self.choose(position, legal_moves).move

    def choose(self, position: Position, legal_moves: Sequence[Move]) -> OpponentChoice:
        if not legal_moves:
            raise NoLegalMoves("Opponent asked to move with no legal moves")

        ctx = MoveContext(position.copy(), legal_moves, self._settings, self._rng)
        for tier in self._tiers:
            move = tier.select(ctx)
            if move is not None:
                _LOGGER.debug("Tier %s chose %s", tier.name, move)
                return OpponentChoice(move, tier.name)

        move = self._rng.choice(list(legal_moves))
        _LOGGER.debug("No tier chose; falling back to %s", move)
        return OpponentChoice(move, "random")
