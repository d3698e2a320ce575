"""Castling, en passant and double pawn advance eligibility.

All functions here are pure queries: they describe what a piece may do
without writing anything back onto it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tilechess.core.enums import Maneuver, PieceType
from tilechess.core.types import Coordinate, is_valid

if TYPE_CHECKING:
    from tilechess.core.board import Board
    from tilechess.core.piece import Piece

# (maneuver, king step, rook offset from the king)
_CASTLING_SIDES: tuple[tuple[Maneuver, int, int], ...] = (
    (Maneuver.CASTLE_KINGSIDE, 2, 3),
    (Maneuver.CASTLE_QUEENSIDE, -2, -4),
)


@dataclass(frozen=True, slots=True)
class CastlingOption:
    """An available castling maneuver for a king."""

    maneuver: Maneuver
    king_destination: Coordinate
    rook_origin: Coordinate
    rook_destination: Coordinate
    # Squares the king crosses, landing square excluded.
    transit: tuple[Coordinate, ...]


@dataclass(frozen=True, slots=True)
class EnPassantOption:
    destination: Coordinate
    captured_pawn: Piece


def castling_options(king: Piece, board: Board) -> list[CastlingOption]:
    """Castling maneuvers *king* is eligible for (occupancy and first-move only)."""
    if not king.is_king or king.has_moved:
        return []

    options: list[CastlingOption] = []
    origin = king.position
    for maneuver, king_step, rook_offset in _CASTLING_SIDES:
        rook_origin = origin.offset(rook_offset, 0)
        if not is_valid(rook_origin):
            continue
        rook = board.piece_at(rook_origin)
        if (
            rook is None
            or rook.piece_type != PieceType.ROOK
            or rook.color != king.color
            or rook.has_moved
        ):
            continue

        sign = 1 if rook_offset > 0 else -1
        between = [origin.offset(sign * i, 0) for i in range(1, abs(rook_offset))]
        if any(board.is_occupied(sq) for sq in between):
            continue

        king_destination = origin.offset(king_step, 0)
        options.append(
            CastlingOption(
                maneuver=maneuver,
                king_destination=king_destination,
                rook_origin=rook_origin,
                rook_destination=king_destination.offset(-sign, 0),
                transit=(origin.offset(sign, 0),),
            )
        )
    return options


def castling_destinations(king: Piece, board: Board) -> tuple[Coordinate | None, Coordinate | None]:
    """``(kingside, queenside)`` king destinations, ``None`` where unavailable."""
    kingside: Coordinate | None = None
    queenside: Coordinate | None = None
    for option in castling_options(king, board):
        if option.maneuver == Maneuver.CASTLE_KINGSIDE:
            kingside = option.king_destination
        else:
            queenside = option.king_destination
    return kingside, queenside


def en_passant_option(pawn: Piece, board: Board) -> EnPassantOption | None:
    """En passant capture open to *pawn*, if an adjacent enemy just double-advanced."""
    if not pawn.is_pawn:
        return None
    for dx in (-1, 1):
        beside = pawn.position.offset(dx, 0)
        if not is_valid(beside):
            continue
        victim = board.piece_at(beside)
        if (
            victim is not None
            and victim.is_pawn
            and victim.color != pawn.color
            and victim.just_double_advanced
        ):
            destination = beside.offset(0, pawn.color.forward)
            if is_valid(destination) and not board.is_occupied(destination):
                return EnPassantOption(destination, victim)
    return None


def double_advance_destination(pawn: Piece, board: Board) -> Coordinate | None:
    """Two-square first move of *pawn* when both squares ahead are free."""
    if not pawn.is_pawn or pawn.has_moved:
        return None
    one = pawn.position.offset(0, pawn.color.forward)
    two = one.offset(0, pawn.color.forward)
    if not is_valid(two) or board.is_occupied(one) or board.is_occupied(two):
        return None
    return two


def special_destinations(piece: Piece, board: Board) -> list[Coordinate]:
    """Extra candidates beyond :func:`calculate_movement` for pawns and kings."""
    if piece.is_pawn:
        tiles: list[Coordinate] = []
        double = double_advance_destination(piece, board)
        if double is not None:
            tiles.append(double)
        ep = en_passant_option(piece, board)
        if ep is not None:
            tiles.append(ep.destination)
        return tiles
    if piece.is_king:
        return [option.king_destination for option in castling_options(piece, board)]
    return []
