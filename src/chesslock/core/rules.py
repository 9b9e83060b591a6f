"""High-level chess rules: checkmate, stalemate, draw detection."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from chesslock.core.enums import Color, GameResult, PieceType
from chesslock.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chesslock.core.move import Move
    from chesslock.core.position import Position

_MINORS = (PieceType.KNIGHT, PieceType.BISHOP)


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    # Every draw is automatic; there are no claim-based draws.

    @staticmethod
    def is_in_check(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        if not Rules.is_in_check(position):
            return False
        gen = MoveGenerator(position)
        return len(gen.generate_legal_moves()) == 0

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        if Rules.is_in_check(position):
            return False
        gen = MoveGenerator(position)
        return len(gen.generate_legal_moves()) == 0

    @staticmethod
    def is_insufficient_material(position: Position) -> bool:
        """K vs K, K+minor vs K, K+N vs K+N.

        Anything else counts as sufficient, including K+B vs K+B and
        two minors on one side.
        """
        white = _non_king_material(position, Color.WHITE)
        black = _non_king_material(position, Color.BLACK)

        if not white and not black:
            return True

        if not white or not black:
            lone = white or black
            return len(lone) == 1 and lone[0] in _MINORS

        return white == [PieceType.KNIGHT] and black == [PieceType.KNIGHT]

    @staticmethod
    def is_fifty_move_rule(position: Position) -> bool:
        return position.halfmove_clock >= 100  # 100 half-moves = 50 full moves

    @staticmethod
    def is_threefold_repetition(position: Position) -> bool:
        return position.repetition_count() >= 3

    @staticmethod
    def game_result(
        position: Position, legal_moves: Sequence[Move] | None = None
    ) -> GameResult:
        """Determine the current game result.

        Checks run in a fixed order: no legal moves (mate or stalemate),
        fifty-move rule, insufficient material, threefold repetition.
        *legal_moves* may be passed when the caller already generated them.
        """
        gen = MoveGenerator(position)
        if legal_moves is None:
            legal_moves = gen.generate_legal_moves()

        if not legal_moves:
            if gen.is_in_check(position.side_to_move):
                return GameResult.checkmate(position.side_to_move.opposite)
            return GameResult.STALEMATE

        if Rules.is_fifty_move_rule(position):
            return GameResult.DRAW_FIFTY_MOVE

        if Rules.is_insufficient_material(position):
            return GameResult.DRAW_INSUFFICIENT_MATERIAL

        if Rules.is_threefold_repetition(position):
            return GameResult.DRAW_THREEFOLD_REPETITION

        return GameResult.IN_PROGRESS


def _non_king_material(position: Position, color: Color) -> list[PieceType]:
    board = position.board
    material: list[PieceType] = []
    for piece_type in PieceType:
        if piece_type == PieceType.KING:
            continue
        material.extend([piece_type] * board.count(color, piece_type))
    return material
