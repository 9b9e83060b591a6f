"""Notation package: FEN parsing and serialization."""

from chesslock.core.notation.fen import (
    STARTING_FEN,
    board_from_placement,
    placement_from_board,
    position_from_fen,
    position_to_fen,
    repetition_signature,
)

__all__ = [
    "STARTING_FEN",
    "board_from_placement",
    "placement_from_board",
    "position_from_fen",
    "position_to_fen",
    "repetition_signature",
]
