"""Move records and atomic move application."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tilechess.core.enums import Color, Maneuver, PieceType
from tilechess.core.special_moves import castling_options, en_passant_option
from tilechess.core.types import Coordinate

if TYPE_CHECKING:
    from tilechess.core.board import Board
    from tilechess.core.piece import Piece


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A committed move, as fed to the move log."""

    piece_id: str
    piece_type: PieceType
    color: Color
    origin: Coordinate
    destination: Coordinate
    maneuver: Maneuver = Maneuver.NONE
    captured_id: str | None = None


def apply_move(board: Board, piece: Piece, dest: Coordinate) -> MoveRecord:
    """Commit *piece* to *dest* with every side effect of the move.

    Castling relocates the rook, en passant removes the passed pawn, a direct
    capture tombstones the occupant, and every other pawn's double-advance
    flag is cleared. The caller is responsible for legality.
    """
    origin = piece.position
    maneuver = Maneuver.NONE
    captured: Piece | None = None
    rook_move: tuple[Piece, Coordinate] | None = None

    occupant = board.piece_at(dest)
    if occupant is not None:
        if occupant.color == piece.color:
            raise ValueError(f"{piece.id} cannot capture friendly piece {occupant.id}")
        if occupant.is_king:
            raise ValueError(f"{piece.id} cannot capture king {occupant.id}")
        captured = occupant
        maneuver = Maneuver.CAPTURE
    elif piece.is_pawn:
        ep = en_passant_option(piece, board)
        if ep is not None and ep.destination == dest:
            captured = ep.captured_pawn
            maneuver = Maneuver.EN_PASSANT
    elif piece.is_king:
        for option in castling_options(piece, board):
            if option.king_destination == dest:
                rook = board.piece_at(option.rook_origin)
                assert rook is not None
                rook_move = (rook, option.rook_destination)
                maneuver = option.maneuver
                break

    if captured is not None:
        board.capture(captured)
    board.move_piece(piece, dest)
    if rook_move is not None:
        rook, rook_dest = rook_move
        board.move_piece(rook, rook_dest)
    board.clear_double_advances(keep=piece)

    return MoveRecord(
        piece_id=piece.id,
        piece_type=piece.piece_type,
        color=piece.color,
        origin=origin,
        destination=dest,
        maneuver=maneuver,
        captured_id=captured.id if captured is not None else None,
    )
