"""Tests for FEN placement parsing and serialization."""

import pytest

from tilechess.core.board import Board
from tilechess.core.enums import Color, PieceType
from tilechess.core.notation import STARTING_PLACEMENT, board_from_placement, board_to_placement
from tilechess.core.types import Coordinate


class TestPlacementParsing:
    def test_starting_matches_initial(self) -> None:
        board = board_from_placement(STARTING_PLACEMENT)
        assert len(board.pieces) == 32
        for x in range(1, 9):
            for y in (1, 2, 7, 8):
                expected = Board.initial().piece_at(Coordinate(x, y))
                actual = board.piece_at(Coordinate(x, y))
                assert expected is not None and actual is not None
                assert (actual.piece_type, actual.color) == (expected.piece_type, expected.color)

    def test_home_pieces_unmoved(self) -> None:
        board = board_from_placement(STARTING_PLACEMENT)
        assert not any(p.has_moved for p in board.pieces)

    def test_displaced_pieces_have_moved(self) -> None:
        board = board_from_placement("r3k3/8/8/8/4P3/8/8/1R2K3")
        pawn = board.piece_at(Coordinate(5, 4))
        rook = board.piece_at(Coordinate(2, 1))
        black_rook = board.piece_at(Coordinate(1, 8))
        assert pawn is not None and pawn.has_moved
        assert rook is not None and rook.has_moved
        assert black_rook is not None and not black_rook.has_moved

    def test_ids_follow_rank_eight_first(self) -> None:
        board = board_from_placement("k7/8/8/8/8/8/8/RR2K3")
        assert board.get("rook-white-1").position == Coordinate(1, 1)
        assert board.get("rook-white-2").position == Coordinate(2, 1)
        assert board.get("king-black-1").position == Coordinate(1, 8)

    def test_castling_field_strips_rights(self) -> None:
        board = board_from_placement("r3k2r/8/8/8/8/8/8/R3K2R", castling="Kq")
        assert not board.piece_at(Coordinate(8, 1)).has_moved
        assert board.piece_at(Coordinate(1, 1)).has_moved
        assert board.piece_at(Coordinate(8, 8)).has_moved
        assert not board.piece_at(Coordinate(1, 8)).has_moved
        assert not board.king(Color.WHITE).has_moved

    def test_no_castling_marks_kings_moved(self) -> None:
        board = board_from_placement("r3k2r/8/8/8/8/8/8/R3K2R", castling="-")
        assert board.king(Color.WHITE).has_moved
        assert board.king(Color.BLACK).has_moved

    def test_en_passant_field(self) -> None:
        board = board_from_placement("4k3/8/8/3Pp3/8/8/8/4K3", en_passant="e6")
        pawn = board.piece_at(Coordinate(5, 5))
        assert pawn is not None
        assert pawn.piece_type == PieceType.PAWN
        assert pawn.just_double_advanced

    def test_bad_en_passant_field(self) -> None:
        with pytest.raises(ValueError, match="just passed"):
            board_from_placement("4k3/8/8/8/8/8/8/4K3", en_passant="e6")

    def test_bad_castling_field(self) -> None:
        with pytest.raises(ValueError, match="castling"):
            board_from_placement(STARTING_PLACEMENT, castling="KX")

    @pytest.mark.parametrize(
        "placement,match",
        [
            ("8/8/8/8/8/8/8", "8 ranks"),
            ("9/8/8/8/8/8/8/8", "digit"),
            ("k8/8/8/8/8/8/8/K7", "width"),
            ("k7/8/8/8/8/8/8/7", "width"),
            ("k7/8/8/8/8/8/8/X6K", "piece character"),
            ("8/8/8/8/8/8/8/4K3", "black king"),
            ("kk6/8/8/8/8/8/8/4K3", "black king"),
        ],
    )
    def test_invalid_placement(self, placement: str, match: str) -> None:
        with pytest.raises(ValueError, match=match):
            board_from_placement(placement)


class TestPlacementSerialization:
    def test_starting(self) -> None:
        assert board_to_placement(Board.initial()) == STARTING_PLACEMENT

    @pytest.mark.parametrize(
        "placement",
        [
            "r3k2r/8/8/8/8/8/8/R3K2R",
            "6k1/8/8/8/8/8/5PPP/r5K1",
            "k7/8/8/1b6/8/3N4/8/5K2",
        ],
    )
    def test_roundtrip(self, placement: str) -> None:
        assert board_to_placement(board_from_placement(placement)) == placement

    def test_captured_pieces_omitted(self) -> None:
        board = Board.initial()
        board.capture(board.piece_at(Coordinate(1, 2)))
        assert board_to_placement(board).endswith("/1PPPPPPP/RNBQKBNR")
