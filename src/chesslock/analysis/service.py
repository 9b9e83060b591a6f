"""Position reports and plain-language move feedback."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesslock.analysis.models import PositionReport
from chesslock.core.enums import Color, PieceType
from chesslock.core.move_generator import MoveGenerator
from chesslock.core.notation import position_to_fen
from chesslock.core.piece import PIECE_VALUES
from chesslock.core.rules import Rules
from chesslock.core.types import Square, file_of, rank_of, square_name
from chesslock.game.outcomes import RejectReason

if TYPE_CHECKING:
    from chesslock.core.position import Position
    from chesslock.game.outcomes import Accepted, Rejected

_MOVEMENT_RULES: dict[PieceType, str] = {
    PieceType.PAWN: (
        "Pawns move forward one square, or two squares from their starting "
        "position. They capture diagonally."
    ),
    PieceType.KNIGHT: (
        "Knights move in an L-shape: 2 squares in one direction and 1 square "
        "perpendicular."
    ),
    PieceType.BISHOP: "Bishops move diagonally any number of squares.",
    PieceType.ROOK: "Rooks move horizontally or vertically any number of squares.",
    PieceType.QUEEN: (
        "Queens move horizontally, vertically, or diagonally any number of squares."
    ),
    PieceType.KING: "Kings move one square in any direction.",
}


def analyze_position(position: Position) -> PositionReport:
    """Summarise *position* without modifying it."""
    gen = MoveGenerator(position)
    legal_moves = gen.generate_legal_moves()
    return PositionReport(
        fen=position_to_fen(position),
        side_to_move=position.side_to_move,
        in_check=gen.is_in_check(position.side_to_move),
        legal_move_count=len(legal_moves),
        halfmove_clock=position.halfmove_clock,
        fullmove_number=position.fullmove_number,
        repetition_count=position.repetition_count(),
        result=Rules.game_result(position, legal_moves),
        white_material=_material(position, Color.WHITE),
        black_material=_material(position, Color.BLACK),
    )


def movement_rule(piece_type: PieceType) -> str:
    """One-sentence description of how *piece_type* moves."""
    return _MOVEMENT_RULES[piece_type]


def explain_rejection(rejected: Rejected) -> str:
    """Build a human explanation from a rejection's reason and context."""
    reason = rejected.reason
    piece = rejected.piece
    origin = square_name(rejected.origin)
    destination = square_name(rejected.destination)

    if reason == RejectReason.NO_PIECE_AT_ORIGIN or piece is None:
        return (
            f"There is no piece on {origin}. "
            "Select a square that contains one of your pieces."
        )

    name = f"{piece.color} {piece.piece_type.name.lower()}"
    if reason == RejectReason.WRONG_SIDE_TO_MOVE:
        return (
            f"You selected a {name}, but it is {piece.color.opposite}'s turn to move."
        )

    if reason == RejectReason.AMBIGUOUS_PROMOTION:
        return (
            f"Moving to {destination} promotes the pawn. "
            "Choose a queen, rook, bishop or knight."
        )

    if reason == RejectReason.WOULD_EXPOSE_OWN_KING:
        if rejected.piece_move_count == 0:
            return (
                f"This {name} cannot move because it would expose your king "
                "to check (pinned piece)."
            )
        return (
            "This move would leave your king in check, which is not allowed. "
            "You must protect your king."
        )

    target = rejected.target
    if target is not None and target.color == piece.color:
        return (
            "You cannot capture your own pieces. "
            "You can only capture your opponent's pieces."
        )
    if not _shape_matches(piece.piece_type, rejected.origin, rejected.destination):
        return movement_rule(piece.piece_type)
    if rejected.piece_move_count == 0:
        return f"This {name} has no legal moves right now."
    return (
        f"The path between {origin} and {destination} is blocked. "
        "Only knights can jump over other pieces."
    )


def describe_move(outcome: Accepted) -> str:
    """Short feedback line for an applied move."""
    if outcome.result.is_checkmate:
        return "Checkmate - game winning move!"
    if outcome.is_castling:
        return "Castling - moving your king to safety!"
    if outcome.is_en_passant:
        return "En passant capture - a special pawn capture!"
    if outcome.is_promotion:
        return "Pawn promotion - your pawn becomes a stronger piece!"
    if outcome.gives_check:
        return "Check - you are attacking the opponent's king!"
    if outcome.is_capture:
        return "Capture - you are taking an opponent's piece!"
    return "Standard move."


def _shape_matches(piece_type: PieceType, origin: Square, destination: Square) -> bool:
    """Could *piece_type* reach *destination* on an empty board (loosely)?"""
    df = abs(file_of(destination) - file_of(origin))
    dr = abs(rank_of(destination) - rank_of(origin))
    if piece_type == PieceType.PAWN:
        return df <= 1 and dr <= 2
    if piece_type == PieceType.KNIGHT:
        return (df, dr) in ((1, 2), (2, 1))
    if piece_type == PieceType.BISHOP:
        return df == dr
    if piece_type == PieceType.ROOK:
        return df == 0 or dr == 0
    if piece_type == PieceType.QUEEN:
        return df == 0 or dr == 0 or df == dr
    # castling moves the king two files
    return dr <= 1 and df <= 2


def _material(position: Position, color: Color) -> int:
    board = position.board
    return int(
        sum(
            PIECE_VALUES[pt] * board.count(color, pt)
            for pt in PieceType
            if pt != PieceType.KING
        )
    )
