"""FEN parsing and serialization."""

from __future__ import annotations

from chesslock.core.board import Board
from chesslock.core.enums import CastlingRights, Color, PieceType
from chesslock.core.piece import Piece
from chesslock.core.position import Position
from chesslock.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)
from chesslock.errors import MalformedNotation

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_LETTERS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)

# right -> (king home, rook home); used when the castling field is omitted
_CASTLING_HOMES: dict[CastlingRights, tuple[Square, Square]] = {
    CastlingRights.WHITE_KINGSIDE: (make_square(4, 0), make_square(7, 0)),
    CastlingRights.WHITE_QUEENSIDE: (make_square(4, 0), make_square(0, 0)),
    CastlingRights.BLACK_KINGSIDE: (make_square(4, 7), make_square(7, 7)),
    CastlingRights.BLACK_QUEENSIDE: (make_square(4, 7), make_square(0, 7)),
}


# -- Placement field ---------------------------------------------------------


def board_from_placement(placement: str) -> Board:
    """Parse the placement field (eight ``/``-separated rows, rank 8 first).

    Kings are not required here; :func:`position_from_fen` checks them.
    """
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise MalformedNotation(
            f"Invalid placement (must contain 8 ranks): {placement!r}"
        )
    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise MalformedNotation(f"Invalid placement digit {ch!r}")
                file += step
            else:
                if file >= 8:
                    raise MalformedNotation(f"Invalid rank width: {rank_text!r}")
                board[make_square(file, rank)] = Piece.from_char(ch)
                file += 1
            if file > 8:
                raise MalformedNotation(f"Invalid rank width: {rank_text!r}")
        if file != 8:
            raise MalformedNotation(f"Invalid rank width: {rank_text!r}")
    return board


def placement_from_board(board: Board) -> str:
    """Serialise piece placement; exact inverse of :func:`board_from_placement`."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = board[make_square(file, rank)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)


# -- Full position -----------------------------------------------------------


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`.

    Only the placement field is mandatory. Omitted trailing fields default
    to white to move, castling rights inferred from kings and rooks still on
    their home squares, no en-passant target, and clocks ``0 1``.
    """
    parts = fen.split()
    if not (1 <= len(parts) <= 6):
        raise MalformedNotation(f"Invalid FEN (need 1-6 fields): {fen!r}")

    # 1. Piece placement
    board = board_from_placement(parts[0])
    for color in Color:
        kings = board.count(color, PieceType.KING)
        if kings != 1:
            raise MalformedNotation(
                f"Invalid FEN: expected one {color} king, found {kings}: {fen!r}"
            )

    # 2. Side to move
    side = Color.WHITE
    if len(parts) > 1:
        if parts[1] == "w":
            side = Color.WHITE
        elif parts[1] == "b":
            side = Color.BLACK
        else:
            raise MalformedNotation(f"Invalid FEN side-to-move field: {parts[1]!r}")

    # 3. Castling
    if len(parts) > 2:
        castling = _parse_castling(parts[2])
    else:
        castling = _infer_castling(board)

    # 4. En passant
    ep: Square | None = None
    if len(parts) > 3 and parts[3] != "-":
        ep = parse_square(parts[3])
        expected_ep_rank = 5 if side == Color.WHITE else 2
        if rank_of(ep) != expected_ep_rank:
            raise MalformedNotation(
                f"Invalid FEN en-passant square for side-to-move: {parts[3]!r}"
            )
        _check_en_passant(board, side, ep, parts[3])

    # 5–6. Clocks
    halfmove = _parse_counter(parts[4], "halfmove clock", 0) if len(parts) > 4 else 0
    fullmove = _parse_counter(parts[5], "fullmove number", 1) if len(parts) > 5 else 1

    return Position(board, side, castling, ep, halfmove, fullmove)


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN (always all six fields)."""
    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"
    return (
        f"{repetition_signature(pos)} {ep_str} "
        f"{pos.halfmove_clock} {pos.fullmove_number}"
    )


def repetition_signature(pos: Position) -> str:
    """Placement, side to move and castling fields only."""
    side_str = "w" if pos.side_to_move == Color.WHITE else "b"
    return f"{placement_from_board(pos.board)} {side_str} {_castling_text(pos.castling)}"


# -- Helpers -----------------------------------------------------------------


def _parse_castling(text: str) -> CastlingRights:
    castling = CastlingRights.NONE
    if text == "-":
        return castling
    rights = dict(_CASTLING_LETTERS)
    seen: set[str] = set()
    for ch in text:
        right = rights.get(ch)
        if right is None or ch in seen:
            raise MalformedNotation(f"Invalid FEN castling field: {text!r}")
        seen.add(ch)
        castling |= right
    return castling


def _infer_castling(board: Board) -> CastlingRights:
    castling = CastlingRights.NONE
    for right, (king_sq, rook_sq) in _CASTLING_HOMES.items():
        color = Color.WHITE if right & CastlingRights.WHITE_BOTH else Color.BLACK
        if board[king_sq] == Piece(color, PieceType.KING) and board[rook_sq] == Piece(
            color, PieceType.ROOK
        ):
            castling |= right
    return castling


def _check_en_passant(board: Board, side: Color, ep: Square, text: str) -> None:
    """The target must be empty, with the double-stepped pawn just past it."""
    step = -1 if side == Color.WHITE else 1
    pawn_sq = make_square(file_of(ep), rank_of(ep) + step)
    origin_sq = make_square(file_of(ep), rank_of(ep) - step)
    if (
        board[ep] is not None
        or board[origin_sq] is not None
        or board[pawn_sq] != Piece(side.opposite, PieceType.PAWN)
    ):
        raise MalformedNotation(
            f"Invalid FEN en-passant square, no pawn just double-stepped: {text!r}"
        )


def _castling_text(castling: CastlingRights) -> str:
    text = "".join(letter for letter, right in _CASTLING_LETTERS if castling & right)
    return text or "-"


def _parse_counter(text: str, name: str, minimum: int) -> int:
    try:
        value = int(text)
    except ValueError:
        raise MalformedNotation(f"Invalid FEN {name}: {text!r}") from None
    if value < minimum:
        raise MalformedNotation(f"Invalid FEN {name}: {text!r}")
    return value
