"""Tests for Board."""

import pytest

from chesslock.core.board import Board
from chesslock.core.enums import Color, PieceType
from chesslock.core.piece import Piece
from chesslock.core.types import (
    A1, B1, C1, D1, E1, F1, G1, H1,
    A8, B8, C8, D8, E8, F8, G8, H8,
    E2, E4, D5,
)


class TestBoardInitial:
    def test_white_back_rank(self) -> None:
        board = Board.initial()
        expected = [
            (A1, PieceType.ROOK), (B1, PieceType.KNIGHT), (C1, PieceType.BISHOP),
            (D1, PieceType.QUEEN), (E1, PieceType.KING), (F1, PieceType.BISHOP),
            (G1, PieceType.KNIGHT), (H1, PieceType.ROOK),
        ]
        for sq, pt in expected:
            assert board[sq] == Piece(Color.WHITE, pt), f"Mismatch at square {sq}"

    def test_black_back_rank(self) -> None:
        board = Board.initial()
        expected = [
            (A8, PieceType.ROOK), (B8, PieceType.KNIGHT), (C8, PieceType.BISHOP),
            (D8, PieceType.QUEEN), (E8, PieceType.KING), (F8, PieceType.BISHOP),
            (G8, PieceType.KNIGHT), (H8, PieceType.ROOK),
        ]
        for sq, pt in expected:
            assert board[sq] == Piece(Color.BLACK, pt), f"Mismatch at square {sq}"

    def test_pawn_ranks(self) -> None:
        board = Board.initial()
        assert board.pieces(Color.WHITE, PieceType.PAWN) == list(range(8, 16))
        assert board.pieces(Color.BLACK, PieceType.PAWN) == list(range(48, 56))

    def test_empty_middle(self) -> None:
        board = Board.initial()
        assert all(board.is_empty(sq) for sq in range(16, 48))
        assert board.occupied_count() == 32


class TestBoardIndex:
    def test_set_and_get(self) -> None:
        board = Board()
        piece = Piece(Color.WHITE, PieceType.PAWN)
        board[E4] = piece
        assert board[E4] == piece
        assert board.is_empty(E2)
        assert board.pieces(Color.WHITE, PieceType.PAWN) == [E4]

    def test_overwrite_updates_index(self) -> None:
        board = Board()
        board[D5] = Piece(Color.BLACK, PieceType.PAWN)
        board[D5] = Piece(Color.WHITE, PieceType.KNIGHT)
        assert board.count(Color.BLACK, PieceType.PAWN) == 0
        assert board.pieces(Color.WHITE, PieceType.KNIGHT) == [D5]

    def test_clearing_square_updates_index(self) -> None:
        board = Board.initial()
        board[A1] = None
        assert board.count(Color.WHITE, PieceType.ROOK) == 1
        assert board.has_piece(Color.WHITE, PieceType.ROOK)

    def test_copy_independence(self) -> None:
        board = Board.initial()
        copy = board.copy()
        assert board == copy
        copy[E1] = None
        assert board != copy
        assert board.king_square(Color.WHITE) == E1
        assert not copy.has_piece(Color.WHITE, PieceType.KING)

    def test_king_square(self) -> None:
        board = Board.initial()
        assert board.king_square(Color.WHITE) == E1
        assert board.king_square(Color.BLACK) == E8

    def test_king_square_missing_raises(self) -> None:
        board = Board()
        with pytest.raises(ValueError, match="No WHITE king"):
            board.king_square(Color.WHITE)

    def test_all_pieces_count(self) -> None:
        board = Board.initial()
        assert len(board.all_pieces(Color.WHITE)) == 16
        assert len(board.all_pieces(Color.BLACK)) == 16

    def test_clear(self) -> None:
        board = Board.initial()
        board.clear()
        assert board.occupied_count() == 0
        assert board.pieces(Color.WHITE, PieceType.PAWN) == []

    def test_repr_not_empty(self) -> None:
        text = repr(Board.initial())
        assert "K" in text
        assert "a b c d e f g h" in text
