"""Zobrist keys for the incremental repetition signature.

The signature covers piece placement, side to move and castling rights.
The en-passant target is not part of it.
"""

from __future__ import annotations

import random
from typing import Final

from chesslock.core.enums import CastlingRights
from chesslock.core.piece import Piece
from chesslock.core.types import Square

_SEED: Final = 0x5EED_C4E5_10C4

_rng = random.Random(_SEED)

_PIECE_KEYS: Final = tuple(
    tuple(tuple(_rng.getrandbits(64) for _sq in range(64)) for _ptype in range(6))
    for _color in range(2)
)
_SIDE_TO_MOVE_KEY: Final = _rng.getrandbits(64)
_CASTLING_KEYS: Final = tuple(_rng.getrandbits(64) for _idx in range(16))

del _rng


def piece_key(piece: Piece, sq: Square) -> int:
    """Hash key for a specific piece on a square."""
    return _PIECE_KEYS[int(piece.color)][int(piece.piece_type) - 1][sq]


def side_to_move_key() -> int:
    """Toggled in whenever black is to move."""
    return _SIDE_TO_MOVE_KEY


def castling_key(castling: CastlingRights) -> int:
    return _CASTLING_KEYS[int(castling) & 0xF]
