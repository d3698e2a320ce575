"""Tests for Board."""

import pytest

from tilechess.core.board import Board
from tilechess.core.enums import Color, PieceType
from tilechess.core.types import Coordinate


class TestBoardInitial:
    def test_piece_count(self) -> None:
        board = Board.initial()
        assert len(board.pieces) == 32
        assert len(board.pieces_of(Color.WHITE)) == 16
        assert len(board.pieces_of(Color.BLACK)) == 16

    def test_kings(self) -> None:
        board = Board.initial()
        assert board.king(Color.WHITE).position == Coordinate(5, 1)
        assert board.king(Color.BLACK).position == Coordinate(5, 8)

    def test_queens(self) -> None:
        board = Board.initial()
        queen = board.piece_at(Coordinate(4, 1))
        assert queen is not None and queen.piece_type == PieceType.QUEEN
        queen = board.piece_at(Coordinate(4, 8))
        assert queen is not None and queen.color == Color.BLACK

    def test_back_ranks_mirror(self) -> None:
        board = Board.initial()
        for x in range(1, 9):
            white = board.piece_at(Coordinate(x, 1))
            black = board.piece_at(Coordinate(x, 8))
            assert white is not None and black is not None
            assert white.piece_type == black.piece_type

    def test_pawns(self) -> None:
        board = Board.initial()
        for x in range(1, 9):
            white = board.piece_at(Coordinate(x, 2))
            black = board.piece_at(Coordinate(x, 7))
            assert white is not None and white.is_pawn and white.color == Color.WHITE
            assert black is not None and black.is_pawn and black.color == Color.BLACK

    def test_empty_middle(self) -> None:
        board = Board.initial()
        for y in range(3, 7):
            for x in range(1, 9):
                assert not board.is_occupied(Coordinate(x, y))

    def test_ids_are_sequential_per_type_and_color(self) -> None:
        board = Board.initial()
        knight_1 = board.get("knight-white-1")
        knight_2 = board.get("knight-white-2")
        assert knight_1 is not None and knight_1.position == Coordinate(2, 1)
        assert knight_2 is not None and knight_2.position == Coordinate(7, 1)
        pawn = board.get("pawn-black-8")
        assert pawn is not None and pawn.position == Coordinate(8, 7)

    def test_ids_unique(self) -> None:
        board = Board.initial()
        ids = [p.id for p in board.pieces]
        assert len(set(ids)) == 32

    def test_nothing_has_moved(self) -> None:
        board = Board.initial()
        assert not any(p.has_moved for p in board.pieces)


class TestBoardQueries:
    def test_unknown_id(self) -> None:
        assert Board.initial().get("dragon-white-1") is None

    def test_piece_at_empty(self) -> None:
        assert Board.initial().piece_at(Coordinate(4, 4)) is None

    def test_captured_pieces_are_invisible(self) -> None:
        board = Board.initial()
        pawn = board.piece_at(Coordinate(1, 2))
        assert pawn is not None
        board.capture(pawn)
        assert pawn.captured
        assert board.piece_at(Coordinate(1, 2)) is None
        assert pawn not in board.pieces
        assert pawn in board.all_pieces()
        assert board.get(pawn.id) is pawn

    def test_king_missing_raises(self) -> None:
        board = Board()
        with pytest.raises(ValueError, match="No WHITE king"):
            board.king(Color.WHITE)


class TestBoardMutation:
    def test_add_occupied_raises(self, kings_only: Board) -> None:
        with pytest.raises(ValueError, match="already occupied"):
            kings_only.add(PieceType.ROOK, Color.WHITE, Coordinate(5, 1))

    def test_add_off_board_raises(self) -> None:
        with pytest.raises(ValueError, match="off the board"):
            Board().add(PieceType.ROOK, Color.WHITE, Coordinate(0, 1))

    def test_duplicate_id_raises(self, kings_only: Board) -> None:
        with pytest.raises(ValueError, match="Duplicate piece id"):
            kings_only.add(PieceType.ROOK, Color.WHITE, Coordinate(1, 1), piece_id="king-white-1")

    def test_move_updates_index(self, kings_only: Board) -> None:
        rook = kings_only.add(PieceType.ROOK, Color.WHITE, Coordinate(1, 1))
        kings_only.move_piece(rook, Coordinate(1, 5))
        assert kings_only.piece_at(Coordinate(1, 5)) is rook
        assert not kings_only.is_occupied(Coordinate(1, 1))
        assert rook.has_moved

    def test_move_onto_occupied_raises(self, kings_only: Board) -> None:
        rook = kings_only.add(PieceType.ROOK, Color.WHITE, Coordinate(1, 1))
        with pytest.raises(ValueError, match="already occupied"):
            kings_only.move_piece(rook, Coordinate(5, 1))

    def test_knight_does_not_track_first_move(self, kings_only: Board) -> None:
        knight = kings_only.add(PieceType.KNIGHT, Color.WHITE, Coordinate(2, 1))
        kings_only.move_piece(knight, Coordinate(3, 3))
        assert not knight.first_move_tracked
        assert not knight.has_moved

    def test_double_advance_flag(self) -> None:
        board = Board.initial()
        pawn = board.get("pawn-white-5")
        assert pawn is not None
        board.move_piece(pawn, Coordinate(5, 4))
        assert pawn.just_double_advanced
        board.move_piece(pawn, Coordinate(5, 5))
        assert not pawn.just_double_advanced

    def test_clear_double_advances_keeps_mover(self) -> None:
        board = Board.initial()
        white = board.get("pawn-white-5")
        black = board.get("pawn-black-4")
        assert white is not None and black is not None
        board.move_piece(white, Coordinate(5, 4))
        board.move_piece(black, Coordinate(4, 5))
        board.clear_double_advances(keep=black)
        assert not white.just_double_advanced
        assert black.just_double_advanced


class TestBoardDunder:
    def test_equality(self) -> None:
        assert Board.initial() == Board.initial()
        board = Board.initial()
        pawn = board.get("pawn-white-1")
        assert pawn is not None
        board.move_piece(pawn, Coordinate(1, 3))
        assert board != Board.initial()

    def test_repr(self) -> None:
        text = repr(Board.initial())
        assert text.splitlines()[0] == "8 r n b q k b n r"
        assert "a b c d e f g h" in text
