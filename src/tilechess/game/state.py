"""Game state machine: tracks turn order, phase, result and move history."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tilechess.core.board import Board
from tilechess.core.enums import Color, GameResult
from tilechess.core.moves import MoveRecord, apply_move
from tilechess.core.notation import board_from_placement
from tilechess.core.rules import Rules
from tilechess.game.interfaces import GamePhase
from tilechess.game.move_log import MoveLog

if TYPE_CHECKING:
    from tilechess.core.piece import Piece
    from tilechess.core.types import Coordinate


@dataclass
class GameState:
    """Board plus everything needed to continue the game.

    This is a pure data/logic class with no storage and no UI. Legality is the
    caller's job; :meth:`apply_move` commits whatever it is given.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    phase: GamePhase = GamePhase.AWAITING_MOVE
    result: GameResult = GameResult.IN_PROGRESS
    move_history: list[MoveRecord] = field(default_factory=list)
    move_log: MoveLog = field(default_factory=MoveLog)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(
        self,
        placement: str | None = None,
        side_to_move: Color = Color.WHITE,
        *,
        castling: str | None = None,
        en_passant: str | None = None,
    ) -> None:
        """Initialise (or reset) the game, optionally from a FEN placement."""
        if placement is None:
            self.board = Board.initial()
        else:
            self.board = board_from_placement(placement, castling=castling, en_passant=en_passant)
        self.side_to_move = side_to_move
        self.phase = GamePhase.AWAITING_MOVE
        self.result = GameResult.IN_PROGRESS
        self.move_history = []
        self.move_log = MoveLog()
        Rules.refresh_check_state(self.board)

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(
        self,
        piece: Piece,
        dest: Coordinate,
        *,
        strict_castling: bool = True,
        enforce_game_over: bool = True,
    ) -> MoveRecord:
        """Commit a validated move, then re-evaluate check and checkmate.

        The board, check flags, history, log and turn marker are all updated
        before this returns, so observers never see a half-applied move.
        """
        record = apply_move(self.board, piece, dest)
        Rules.refresh_check_state(self.board)

        opponent = piece.color.opposite
        checked = self.board.king(opponent).checked
        mated = checked and not Rules.has_escape(
            self.board, opponent, strict_castling=strict_castling
        )

        self.move_history.append(record)
        self.move_log.record(record, check=checked, mate=mated)
        self.side_to_move = opponent

        if mated:
            self.result = (
                GameResult.WHITE_WINS if piece.color == Color.WHITE else GameResult.BLACK_WINS
            )
            if enforce_game_over:
                self.phase = GamePhase.GAME_OVER
        return record

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    @property
    def checkmated(self) -> Color | None:
        """Side that has been mated, if any."""
        if self.result == GameResult.WHITE_WINS:
            return Color.BLACK
        if self.result == GameResult.BLACK_WINS:
            return Color.WHITE
        return None

    def is_players_turn(self, color: Color) -> bool:
        return color == self.side_to_move
