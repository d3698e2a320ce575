"""Tests for GameState: turn order, history and checkmate bookkeeping."""

from tilechess.core.enums import Color, GameResult, Maneuver
from tilechess.core.types import Coordinate
from tilechess.game.interfaces import GamePhase
from tilechess.game.state import GameState


def _move(state: GameState, piece_id: str, x: int, y: int, **kwargs):
    piece = state.board.get(piece_id)
    assert piece is not None
    return state.apply_move(piece, Coordinate(x, y), **kwargs)


class TestSetup:
    def test_defaults(self) -> None:
        state = GameState()
        assert state.side_to_move == Color.WHITE
        assert state.phase == GamePhase.AWAITING_MOVE
        assert state.result == GameResult.IN_PROGRESS
        assert state.ply_count == 0
        assert len(state.board.pieces) == 32

    def test_setup_from_placement(self) -> None:
        state = GameState()
        state.setup("4r2k/8/8/8/8/8/8/4K3", Color.WHITE)
        assert len(state.board.pieces) == 3
        king = state.board.king(Color.WHITE)
        assert king.checked
        assert king.threatener_id == "rook-black-1"

    def test_setup_resets_history(self) -> None:
        state = GameState()
        _move(state, "pawn-white-5", 5, 4)
        state.setup()
        assert state.ply_count == 0
        assert state.side_to_move == Color.WHITE
        assert state.move_log.latest_entry() == ""


class TestApplyMove:
    def test_turn_flips(self) -> None:
        state = GameState()
        _move(state, "pawn-white-5", 5, 4)
        assert state.side_to_move == Color.BLACK
        assert state.is_players_turn(Color.BLACK)
        assert not state.is_players_turn(Color.WHITE)

    def test_history_and_log(self) -> None:
        state = GameState()
        record = _move(state, "knight-white-2", 6, 3)
        assert state.move_history == [record]
        assert record.origin == Coordinate(7, 1)
        assert state.move_log.latest_entry() == "Nf3"

    def test_check_is_logged(self) -> None:
        state = GameState()
        state.setup("k7/8/8/8/8/8/8/R3K3")
        _move(state, "rook-white-1", 1, 7)
        assert state.move_log.latest_entry() == "Ra7+"
        assert state.board.king(Color.BLACK).checked
        assert state.result == GameResult.IN_PROGRESS

    def test_fools_mate(self) -> None:
        state = GameState()
        _move(state, "pawn-white-6", 6, 3)
        _move(state, "pawn-black-5", 5, 5)
        _move(state, "pawn-white-7", 7, 4)
        _move(state, "queen-black-1", 8, 4)
        assert repr(state.move_log) == "1. f3 e5\n2. g4 Qh4#"
        assert state.result == GameResult.BLACK_WINS
        assert state.phase == GamePhase.GAME_OVER
        assert state.is_game_over
        assert state.checkmated == Color.WHITE

    def test_advisory_mate(self) -> None:
        state = GameState()
        state.setup("k7/7R/8/8/8/8/8/4K1R1")
        record = _move(state, "rook-white-2", 7, 8, enforce_game_over=False)
        assert record.maneuver == Maneuver.NONE
        assert state.result == GameResult.WHITE_WINS
        assert state.checkmated == Color.BLACK
        assert state.phase == GamePhase.AWAITING_MOVE
        assert not state.is_game_over
