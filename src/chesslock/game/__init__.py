"""Game management layer: controller, state machine, move outcomes.

Quick start::

    from chesslock.game import GameController

    ctrl = GameController()
    ctrl.new_game()
    outcome = ctrl.attempt_move("e2", "e4")
"""

from chesslock.game.controller import GameController, GameEvents
from chesslock.game.interfaces import GamePhase, IGameController
from chesslock.game.outcomes import Accepted, MoveOutcome, Rejected, RejectReason
from chesslock.game.state import GameState, MoveRecord

__all__ = [
    # Interfaces
    "GamePhase",
    "IGameController",
    # Outcomes
    "Accepted",
    "MoveOutcome",
    "Rejected",
    "RejectReason",
    # Concrete
    "GameController",
    "GameEvents",
    "GameState",
    "MoveRecord",
]
