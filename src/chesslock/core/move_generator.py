"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesslock.core.enums import CastlingRights, Color, MoveFlag, PieceType
from chesslock.core.move import Move
from chesslock.core.piece import Piece
from chesslock.core.types import Square, file_of, make_square, rank_of

if TYPE_CHECKING:
    from chesslock.core.position import Position


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

# color -> (forward rank step, start rank, promotion rank)
_PAWN_GEOMETRY: dict[Color, tuple[int, int, int]] = {
    Color.WHITE: (1, 1, 7),
    Color.BLACK: (-1, 6, 0),
}

_KINGSIDE_RIGHT: dict[Color, CastlingRights] = {
    Color.WHITE: CastlingRights.WHITE_KINGSIDE,
    Color.BLACK: CastlingRights.BLACK_KINGSIDE,
}
_QUEENSIDE_RIGHT: dict[Color, CastlingRights] = {
    Color.WHITE: CastlingRights.WHITE_QUEENSIDE,
    Color.BLACK: CastlingRights.BLACK_QUEENSIDE,
}


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        moves: list[Square] = []
        for df, dr in offsets:
            af = file_of(sq) + df
            ar = rank_of(sq) + dr
            if 0 <= af < 8 and 0 <= ar < 8:
                moves.append(make_square(af, ar))
        targets.append(tuple(moves))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_of(sq) + df
            ar = rank_of(sq) + dr
            ray: list[Square] = []
            while 0 <= af < 8 and 0 <= ar < 8:
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


def _build_pawn_captures(color: Color) -> tuple[tuple[Square, ...], ...]:
    step = _PAWN_GEOMETRY[color][0]
    return _build_targets(((-1, step), (1, step)))


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_PAWN_CAPTURES: dict[Color, tuple[tuple[Square, ...], ...]] = {
    color: _build_pawn_captures(color) for color in Color
}

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_SLIDER_RAYS: dict[PieceType, tuple[tuple[tuple[Square, ...], ...], ...]] = {
    PieceType.BISHOP: _BISHOP_RAYS,
    PieceType.ROOK: _ROOK_RAYS,
    PieceType.QUEEN: _QUEEN_RAYS,
}


def _capturable(target: Piece | None, color: Color) -> bool:
    """Enemy pieces other than the king may be captured."""
    return (
        target is not None
        and target.color != color
        and target.piece_type != PieceType.KING
    )


class MoveGenerator:
    """Generates moves for a given :class:`Position`.

    The generator mutates the position via ``make_move`` / ``unmake_move``
    while filtering for legality but always restores it before returning.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        moving_color = self._pos.side_to_move
        return [
            move
            for move in self.generate_pseudo_legal_moves(moving_color)
            if not self.leaves_king_attacked(move)
        ]

    def generate_pseudo_legal_moves(self, color: Color | None = None) -> list[Move]:
        """All pseudo-legal moves for *color* (default: side to move).

        Pseudo-legal moves obey movement geometry and occupancy but may
        leave the mover's own king attacked.
        """
        if color is None:
            color = self._pos.side_to_move
        moves: list[Move] = []
        board = self._board

        for sq in board.pieces(color, PieceType.PAWN):
            self._gen_pawn(sq, color, moves)
        for sq in board.pieces(color, PieceType.KNIGHT):
            self._gen_steps(sq, color, _KNIGHT_TARGETS[sq], moves)
        for piece_type, rays in _SLIDER_RAYS.items():
            for sq in board.pieces(color, piece_type):
                self._gen_sliding(sq, color, rays[sq], moves)
        for sq in board.pieces(color, PieceType.KING):
            self._gen_steps(sq, color, _KING_TARGETS[sq], moves)
            self._gen_castling(sq, color, moves)

        return moves

    def moves_from(self, sq: Square) -> list[Move]:
        """Pseudo-legal moves of the piece standing on *sq*."""
        piece = self._board[sq]
        if piece is None:
            return []
        return [
            m for m in self.generate_pseudo_legal_moves(piece.color) if m.from_sq == sq
        ]

    def legal_moves_from(self, sq: Square) -> list[Move]:
        """Legal moves of the side-to-move piece standing on *sq*."""
        piece = self._board[sq]
        if piece is None or piece.color != self._pos.side_to_move:
            return []
        return [m for m in self.moves_from(sq) if not self.leaves_king_attacked(m)]

    def leaves_king_attacked(self, move: Move) -> bool:
        """Would playing *move* leave the mover's own king attacked?"""
        moving_color = self._pos.side_to_move
        self._pos.make_move(move)
        try:
            return self.is_in_check(moving_color)
        finally:
            self._pos.unmake_move()

    def gives_check(self, move: Move) -> bool:
        """Would playing *move* put the opponent's king in check?"""
        opponent = self._pos.side_to_move.opposite
        self._pos.make_move(move)
        try:
            return self.is_in_check(opponent)
        finally:
            self._pos.unmake_move()

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_sq = self._board.king_square(color)
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?

        The capture geometry of pseudo-legal generation is walked backwards
        from *sq*: pawns attack diagonally forward whether or not the
        square is occupied, everything else as it moves.
        """
        board = self._board

        for from_sq in _PAWN_CAPTURES[by_color.opposite][sq]:
            if board[from_sq] == Piece(by_color, PieceType.PAWN):
                return True

        for from_sq in _KNIGHT_TARGETS[sq]:
            if board[from_sq] == Piece(by_color, PieceType.KNIGHT):
                return True

        for from_sq in _KING_TARGETS[sq]:
            if board[from_sq] == Piece(by_color, PieceType.KING):
                return True

        for rays, slider in (
            (_BISHOP_RAYS[sq], PieceType.BISHOP),
            (_ROOK_RAYS[sq], PieceType.ROOK),
        ):
            for ray in rays:
                for to_sq in ray:
                    piece = board[to_sq]
                    if piece is None:
                        continue
                    if piece.color == by_color and piece.piece_type in (
                        slider,
                        PieceType.QUEEN,
                    ):
                        return True
                    break

        return False

    def attacked_pieces(self, color: Color) -> list[Square]:
        """Squares of *color*'s pieces currently attacked by the opponent."""
        opponent = color.opposite
        return [
            sq
            for sq in self._board.all_pieces(color)
            if self.is_square_attacked(sq, opponent)
        ]

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        step, start_rank, promo_rank = _PAWN_GEOMETRY[color]
        pawn = Piece(color, PieceType.PAWN)
        file_idx = file_of(sq)
        next_rank = rank_of(sq) + step
        if not 0 <= next_rank < 8:
            return

        one_step = make_square(file_idx, next_rank)
        if board.is_empty(one_step):
            self._add_pawn_move(sq, one_step, pawn, None, next_rank == promo_rank, moves)
            if rank_of(sq) == start_rank:
                two_step = make_square(file_idx, next_rank + step)
                if board.is_empty(two_step):
                    moves.append(Move(sq, two_step, MoveFlag.DOUBLE_PAWN, piece=pawn))

        en_passant = self._pos.en_passant if color == self._pos.side_to_move else None
        enemy_pawn = Piece(color.opposite, PieceType.PAWN)
        for cap_sq in _PAWN_CAPTURES[color][sq]:
            target = board[cap_sq]
            if _capturable(target, color):
                self._add_pawn_move(
                    sq, cap_sq, pawn, target, next_rank == promo_rank, moves
                )
            elif (
                target is None
                and cap_sq == en_passant
                and board[make_square(file_of(cap_sq), rank_of(sq))] == enemy_pawn
            ):
                moves.append(
                    Move(
                        sq,
                        cap_sq,
                        MoveFlag.EN_PASSANT,
                        piece=pawn,
                        captured=enemy_pawn,
                    )
                )

    @staticmethod
    def _add_pawn_move(
        from_sq: Square,
        to_sq: Square,
        pawn: Piece,
        captured: Piece | None,
        promotes: bool,
        moves: list[Move],
    ) -> None:
        if not promotes:
            moves.append(Move(from_sq, to_sq, piece=pawn, captured=captured))
            return
        for pt in PROMOTION_TYPES:
            moves.append(
                Move(from_sq, to_sq, MoveFlag.PROMOTION, pt, piece=pawn, captured=captured)
            )

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        piece = board[sq]
        for to_sq in targets:
            target = board[to_sq]
            if target is None or _capturable(target, color):
                moves.append(Move(sq, to_sq, piece=piece, captured=target))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        piece = board[sq]
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq, piece=piece))
                    continue
                if _capturable(target, color):
                    moves.append(Move(sq, to_sq, piece=piece, captured=target))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        back_rank = 0 if color == Color.WHITE else 7
        if king_sq != make_square(4, back_rank):
            return
        rights = self._pos.castling
        if not rights & (_KINGSIDE_RIGHT[color] | _QUEENSIDE_RIGHT[color]):
            return
        if self.is_in_check(color):
            return

        board = self._board
        king = board[king_sq]
        rook = Piece(color, PieceType.ROOK)
        opponent = color.opposite

        if rights & _KINGSIDE_RIGHT[color] and board[make_square(7, back_rank)] == rook:
            f_sq = make_square(5, back_rank)
            g_sq = make_square(6, back_rank)
            if (
                board.is_empty(f_sq)
                and board.is_empty(g_sq)
                and not self.is_square_attacked(f_sq, opponent)
                and not self.is_square_attacked(g_sq, opponent)
            ):
                moves.append(Move(king_sq, g_sq, MoveFlag.CASTLE_KINGSIDE, piece=king))

        if rights & _QUEENSIDE_RIGHT[color] and board[make_square(0, back_rank)] == rook:
            b_sq = make_square(1, back_rank)
            c_sq = make_square(2, back_rank)
            d_sq = make_square(3, back_rank)
            if (
                board.is_empty(b_sq)
                and board.is_empty(c_sq)
                and board.is_empty(d_sq)
                and not self.is_square_attacked(c_sq, opponent)
                and not self.is_square_attacked(d_sq, opponent)
            ):
                moves.append(Move(king_sq, c_sq, MoveFlag.CASTLE_QUEENSIDE, piece=king))
