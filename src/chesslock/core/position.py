"""Position: complete game state (board + metadata) with make/unmake."""

from __future__ import annotations

from dataclasses import dataclass

from chesslock.core.board import Board
from chesslock.core.enums import CastlingRights, Color, MoveFlag, PieceType
from chesslock.core.move import Move
from chesslock.core.piece import Piece
from chesslock.core.types import Square, file_of, make_square, rank_of
from chesslock.core.zobrist import castling_key, piece_key, side_to_move_key

_ROOK_CORNERS: dict[Square, CastlingRights] = {
    make_square(0, 0): CastlingRights.WHITE_QUEENSIDE,
    make_square(7, 0): CastlingRights.WHITE_KINGSIDE,
    make_square(0, 7): CastlingRights.BLACK_QUEENSIDE,
    make_square(7, 7): CastlingRights.BLACK_KINGSIDE,
}

# castle flag -> (rook origin file, rook destination file)
_CASTLE_ROOK_FILES: dict[MoveFlag, tuple[int, int]] = {
    MoveFlag.CASTLE_KINGSIDE: (7, 5),
    MoveFlag.CASTLE_QUEENSIDE: (0, 3),
}


@dataclass(slots=True)
class _PositionState:
    """Snapshot saved before each move so it can be undone exactly."""

    move: Move
    castling: CastlingRights
    en_passant: Square | None
    halfmove_clock: int
    fullmove_number: int
    captured_piece: Piece | None
    signature: int


class Position:
    """Full chess position: board + side to move + castling + en passant + clocks.

    :meth:`make_move` / :meth:`unmake_move` keep an internal undo stack, and
    a rolling count of repetition signatures (placement, side to move and
    castling rights) so repetitions are counted without replaying history.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
        "_signature",
        "_history",
        "_signature_counts",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number
        self._signature = self._compute_signature()
        self._history: list[_PositionState] = []
        self._signature_counts: dict[int, int] = {self._signature: 1}

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(self, move: Move) -> None:
        """Apply *move*, pushing undo state onto the history stack."""
        board = self.board
        piece = board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq}")

        capture_sq = move.to_sq
        if move.flag == MoveFlag.EN_PASSANT:
            capture_sq = make_square(file_of(move.to_sq), rank_of(move.from_sq))
        captured = board[capture_sq]
        if captured is not None and captured.piece_type == PieceType.KING:
            raise ValueError(f"Move {move} would capture a king")

        rook_files = _CASTLE_ROOK_FILES.get(move.flag)
        if rook_files is not None:
            rook_from = make_square(rook_files[0], rank_of(move.from_sq))
            if board[rook_from] is None:
                raise ValueError(f"Castling move {move} without a rook on {rook_from}")

        self._history.append(
            _PositionState(
                move=move,
                castling=self.castling,
                en_passant=self.en_passant,
                halfmove_clock=self.halfmove_clock,
                fullmove_number=self.fullmove_number,
                captured_piece=captured,
                signature=self._signature,
            )
        )

        self._lift(move.from_sq)
        if captured is not None:
            self._lift(capture_sq)

        placed = piece
        if move.flag == MoveFlag.PROMOTION and move.promotion is not None:
            placed = Piece(piece.color, move.promotion)
        self._drop(move.to_sq, placed)

        if rook_files is not None:
            rank = rank_of(move.from_sq)
            rook = self._lift(make_square(rook_files[0], rank))
            assert rook is not None
            self._drop(make_square(rook_files[1], rank), rook)

        self.en_passant = None
        if move.flag == MoveFlag.DOUBLE_PAWN:
            self.en_passant = make_square(
                file_of(move.from_sq),
                (rank_of(move.from_sq) + rank_of(move.to_sq)) // 2,
            )

        self._update_castling(move, piece)

        if piece.piece_type == PieceType.PAWN or captured is not None:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1

        if self.side_to_move == Color.BLACK:
            self.fullmove_number += 1

        self.side_to_move = self.side_to_move.opposite
        self._signature ^= side_to_move_key()
        self._signature_counts[self._signature] = (
            self._signature_counts.get(self._signature, 0) + 1
        )

    def unmake_move(self) -> Move:
        """Undo the last :meth:`make_move` and return the undone move."""
        if not self._history:
            raise IndexError("No move to unmake")
        state = self._history.pop()
        move = state.move

        count = self._signature_counts[self._signature] - 1
        if count:
            self._signature_counts[self._signature] = count
        else:
            del self._signature_counts[self._signature]

        board = self.board
        piece = board[move.to_sq]
        assert piece is not None
        if move.flag == MoveFlag.PROMOTION:
            piece = Piece(piece.color, PieceType.PAWN)

        board[move.from_sq] = piece
        if move.flag == MoveFlag.EN_PASSANT:
            board[move.to_sq] = None
            board[make_square(file_of(move.to_sq), rank_of(move.from_sq))] = (
                state.captured_piece
            )
        else:
            board[move.to_sq] = state.captured_piece

        rook_files = _CASTLE_ROOK_FILES.get(move.flag)
        if rook_files is not None:
            rank = rank_of(move.from_sq)
            board[make_square(rook_files[0], rank)] = board[
                make_square(rook_files[1], rank)
            ]
            board[make_square(rook_files[1], rank)] = None

        self.side_to_move = self.side_to_move.opposite
        self.castling = state.castling
        self.en_passant = state.en_passant
        self.halfmove_clock = state.halfmove_clock
        self.fullmove_number = state.fullmove_number
        self._signature = state.signature
        return move

    # ── Board / hash bookkeeping ─────────────────────────────────────────

    def _lift(self, sq: Square) -> Piece | None:
        piece = self.board[sq]
        if piece is not None:
            self._signature ^= piece_key(piece, sq)
            self.board[sq] = None
        return piece

    def _drop(self, sq: Square, piece: Piece) -> None:
        self.board[sq] = piece
        self._signature ^= piece_key(piece, sq)

    def _update_castling(self, move: Move, piece: Piece) -> None:
        rights = self.castling
        if piece.piece_type == PieceType.KING:
            if piece.color == Color.WHITE:
                rights &= ~CastlingRights.WHITE_BOTH
            else:
                rights &= ~CastlingRights.BLACK_BOTH

        for sq in (move.from_sq, move.to_sq):
            corner = _ROOK_CORNERS.get(sq)
            if corner is not None:
                rights &= ~corner

        if rights != self.castling:
            self._signature ^= castling_key(self.castling) ^ castling_key(rights)
            self.castling = rights

    def _compute_signature(self) -> int:
        key = castling_key(self.castling)
        if self.side_to_move == Color.BLACK:
            key ^= side_to_move_key()
        for sq in range(64):
            piece = self.board[sq]
            if piece is not None:
                key ^= piece_key(piece, sq)
        return key

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Deep copy; the undo stack is not carried, repetition counts are."""
        pos = Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
        )
        pos._signature_counts = self._signature_counts.copy()
        return pos

    def repetition_count(self) -> int:
        """How many times the current signature occurred, current one included."""
        return self._signature_counts.get(self._signature, 0)

    @property
    def signature(self) -> int:
        """Hash of placement + side to move + castling rights."""
        return self._signature

    @property
    def ply(self) -> int:
        """Number of moves applied since this object was created."""
        return len(self._history)

    @property
    def last_move(self) -> Move | None:
        return self._history[-1].move if self._history else None
