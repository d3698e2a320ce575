"""High-level chess rules: check state and checkmate detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tilechess.core.enums import Color, GameResult
from tilechess.core.legality import legal_destinations
from tilechess.core.threats import threateners

if TYPE_CHECKING:
    from tilechess.core.board import Board
    from tilechess.core.types import Coordinate


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    # Product policy:
    # - Checkmate is the only game-ending condition; stalemate and draws
    #   are not detected.

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return bool(threateners(board.king(color), board))

    @staticmethod
    def refresh_check_state(board: Board) -> None:
        """Recompute ``checked`` / ``threatener_id`` on both kings."""
        for color in Color:
            king = board.king(color)
            checkers = threateners(king, board)
            if not checkers:
                king.leave_check()
                continue
            current = next((c for c in checkers if c.id == king.threatener_id), checkers[0])
            king.enter_check(current)

    @staticmethod
    def legal_moves(
        board: Board, color: Color, *, strict_castling: bool = True
    ) -> dict[str, list[Coordinate]]:
        """Piece id → legal destinations, for every live piece of *color*."""
        return {
            piece.id: legal_destinations(piece, board, strict_castling=strict_castling)
            for piece in board.pieces_of(color)
        }

    @staticmethod
    def has_escape(board: Board, color: Color, *, strict_castling: bool = True) -> bool:
        """Whether any piece of *color* (king included) has a legal move."""
        return any(
            legal_destinations(piece, board, strict_castling=strict_castling)
            for piece in board.pieces_of(color)
        )

    @staticmethod
    def is_checkmate(board: Board, color: Color, *, strict_castling: bool = True) -> bool:
        if not Rules.is_in_check(board, color):
            return False
        return not Rules.has_escape(board, color, strict_castling=strict_castling)

    @staticmethod
    def game_result(board: Board, *, strict_castling: bool = True) -> GameResult:
        """Determine the current game result."""
        if Rules.is_checkmate(board, Color.WHITE, strict_castling=strict_castling):
            return GameResult.BLACK_WINS
        if Rules.is_checkmate(board, Color.BLACK, strict_castling=strict_castling):
            return GameResult.WHITE_WINS
        return GameResult.IN_PROGRESS
