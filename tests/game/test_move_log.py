"""Tests for move text formatting and the turn-indexed log."""

import pytest

from tilechess.core.enums import Color, Maneuver, PieceType
from tilechess.core.moves import MoveRecord
from tilechess.core.types import Coordinate
from tilechess.game.move_log import MoveLog, ScoreEntry, format_move


def _record(
    piece_type: PieceType,
    color: Color,
    origin: tuple[int, int],
    dest: tuple[int, int],
    maneuver: Maneuver = Maneuver.NONE,
    captured_id: str | None = None,
) -> MoveRecord:
    return MoveRecord(
        piece_id=f"{piece_type}-{color}-1",
        piece_type=piece_type,
        color=color,
        origin=Coordinate(*origin),
        destination=Coordinate(*dest),
        maneuver=maneuver,
        captured_id=captured_id,
    )


class TestFormatMove:
    @pytest.mark.parametrize(
        "piece_type,origin,dest,expected",
        [
            (PieceType.PAWN, (5, 2), (5, 4), "e4"),
            (PieceType.KNIGHT, (7, 1), (6, 3), "Nf3"),
            (PieceType.BISHOP, (6, 1), (3, 4), "Bc4"),
            (PieceType.ROOK, (1, 1), (1, 5), "Ra5"),
            (PieceType.QUEEN, (4, 1), (8, 5), "Qh5"),
            (PieceType.KING, (5, 1), (5, 2), "Ke2"),
        ],
    )
    def test_quiet_moves(
        self, piece_type: PieceType, origin: tuple[int, int], dest: tuple[int, int], expected: str
    ) -> None:
        assert format_move(_record(piece_type, Color.WHITE, origin, dest)) == expected

    def test_piece_capture(self) -> None:
        record = _record(PieceType.BISHOP, Color.WHITE, (3, 3), (5, 5), Maneuver.CAPTURE, "x")
        assert format_move(record) == "Bxe5"

    def test_pawn_capture_uses_origin_file(self) -> None:
        record = _record(PieceType.PAWN, Color.BLACK, (4, 6), (5, 5), Maneuver.CAPTURE, "x")
        assert format_move(record) == "dxe5"

    def test_en_passant_suffix(self) -> None:
        record = _record(PieceType.PAWN, Color.WHITE, (4, 5), (5, 6), Maneuver.EN_PASSANT, "x")
        assert format_move(record) == "dxe6 e.p."
        assert format_move(record, check=True) == "dxe6+ e.p."

    def test_castling(self) -> None:
        kingside = _record(PieceType.KING, Color.WHITE, (5, 1), (7, 1), Maneuver.CASTLE_KINGSIDE)
        queenside = _record(PieceType.KING, Color.BLACK, (5, 8), (3, 8), Maneuver.CASTLE_QUEENSIDE)
        assert format_move(kingside) == "O-O"
        assert format_move(queenside, check=True) == "O-O-O+"

    def test_mate_overrides_check(self) -> None:
        record = _record(PieceType.QUEEN, Color.BLACK, (4, 8), (8, 4))
        assert format_move(record, check=True, mate=True) == "Qh4#"


class TestMoveLog:
    def test_empty(self) -> None:
        log = MoveLog()
        assert log.turn == 0
        assert log.turn_history == [ScoreEntry()]
        assert log.latest_entry() == ""
        assert len(log) == 0

    def test_white_then_black(self) -> None:
        log = MoveLog()
        log.record(_record(PieceType.PAWN, Color.WHITE, (5, 2), (5, 4)))
        assert log.turn == 0
        assert log.latest_entry() == "e4"
        log.record(_record(PieceType.PAWN, Color.BLACK, (5, 7), (5, 5)))
        assert log.turn == 1
        assert log.turn_history == [ScoreEntry("e4", "e5"), ScoreEntry()]
        assert log.latest_entry() == "e5"
        assert len(log) == 2

    def test_record_returns_text(self) -> None:
        log = MoveLog()
        text = log.record(_record(PieceType.KNIGHT, Color.WHITE, (7, 1), (6, 3)), check=True)
        assert text == "Nf3+"

    def test_score_entry_indexing(self) -> None:
        entry = ScoreEntry()
        entry[Color.BLACK] = "Nc6"
        assert entry[Color.BLACK] == "Nc6"
        assert entry[Color.WHITE] == ""

    def test_repr_numbers_turns(self) -> None:
        log = MoveLog()
        log.write("e4", Color.WHITE)
        log.write("e5", Color.BLACK)
        log.write("Nf3", Color.WHITE)
        assert repr(log) == "1. e4 e5\n2. Nf3"

    def test_equality(self) -> None:
        a, b = MoveLog(), MoveLog()
        a.write("e4", Color.WHITE)
        assert a != b
        b.write("e4", Color.WHITE)
        assert a == b
