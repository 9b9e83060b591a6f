"""Core domain layer: pure chess logic with zero external dependencies.

Quick start::

    from chesslock.core import MoveGenerator, Rules, position_from_fen, STARTING_FEN

    pos = position_from_fen(STARTING_FEN)
    gen = MoveGenerator(pos)
    for move in gen.generate_legal_moves():
        print(move)
    print(Rules.game_result(pos).description)
"""

from chesslock.core.board import Board
from chesslock.core.enums import CastlingRights, Color, GameResult, MoveFlag, PieceType
from chesslock.core.move import Move
from chesslock.core.move_generator import MoveGenerator
from chesslock.core.notation import (
    STARTING_FEN,
    board_from_placement,
    placement_from_board,
    position_from_fen,
    position_to_fen,
    repetition_signature,
)
from chesslock.core.piece import PIECE_VALUES, Piece
from chesslock.core.position import Position
from chesslock.core.rules import Rules
from chesslock.core.types import (
    Square,
    center_distance,
    file_of,
    make_square,
    manhattan_distance,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "MoveFlag",
    "PieceType",
    # Types / helpers
    "Square",
    "center_distance",
    "file_of",
    "make_square",
    "manhattan_distance",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "PIECE_VALUES",
    "Piece",
    "Position",
    "Rules",
    # Notation
    "STARTING_FEN",
    "board_from_placement",
    "placement_from_board",
    "position_from_fen",
    "position_to_fen",
    "repetition_signature",
]
