"""Opponent package: heuristic move selection and Qt scheduling bridge."""

from chesslock.engine.heuristic import (
    DEFAULT_TIERS,
    BalancedMix,
    Consolidation,
    CriticalDefense,
    Escape,
    HeuristicOpponent,
    MoveContext,
    MoveFacts,
    OpponentChoice,
    OpponentTier,
    RandomMove,
    SafeCheck,
    ValuableCapture,
)
from chesslock.engine.qt_bridge import OpponentSession

__all__ = [
    "DEFAULT_TIERS",
    "BalancedMix",
    "Consolidation",
    "CriticalDefense",
    "Escape",
    "HeuristicOpponent",
    "MoveContext",
    "MoveFacts",
    "OpponentChoice",
    "OpponentSession",
    "OpponentTier",
    "RandomMove",
    "SafeCheck",
    "ValuableCapture",
]
