"""Exception hierarchy shared by every layer of the engine."""

from __future__ import annotations


class ChessLockError(Exception):
    """Base class for all engine errors."""


class MalformedNotation(ChessLockError, ValueError):
    """Position, square or promotion text could not be parsed.

    Always reported, never silently repaired.
    """


class GameAlreadyEnded(ChessLockError):
    """A move was submitted after the game reached a terminal result."""


class NothingToUndo(ChessLockError):
    """Undo was requested with an empty move history."""


class NoLegalMoves(ChessLockError, ValueError):
    """The opponent was asked to move in a position without legal moves."""
