"""Data models produced by position analysis."""

from __future__ import annotations

from dataclasses import dataclass

from chesslock.core.enums import Color, GameResult


@dataclass(slots=True, frozen=True)
class PositionReport:
    """Snapshot of the facts a presentation layer usually shows."""

    fen: str
    side_to_move: Color
    in_check: bool
    legal_move_count: int
    halfmove_clock: int
    fullmove_number: int
    repetition_count: int
    result: GameResult
    white_material: int
    black_material: int

    @property
    def is_terminal(self) -> bool:
        return self.result.is_terminal

    @property
    def material_balance(self) -> int:
        """White-centric material difference in pawns."""
        return self.white_material - self.black_material
