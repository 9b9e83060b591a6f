"""Position analysis and move feedback APIs."""

from chesslock.analysis.models import PositionReport
from chesslock.analysis.service import (
    analyze_position,
    describe_move,
    explain_rejection,
    movement_rule,
)

__all__ = [
    "PositionReport",
    "analyze_position",
    "describe_move",
    "explain_rejection",
    "movement_rule",
]
