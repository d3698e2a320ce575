"""Threat lines against kings, attack coverage and pins."""

from __future__ import annotations

from collections.abc import Collection
from typing import TYPE_CHECKING

from tilechess.core.enums import Direction, PieceType
from tilechess.core.movement import (
    QUEEN_DIRS,
    SLIDING_DIRS,
    calculate_movement,
    knight_targets,
    pawn_diagonals,
)
from tilechess.core.types import BOARD_SIZE, Coordinate, is_valid

if TYPE_CHECKING:
    from tilechess.core.board import Board
    from tilechess.core.enums import Color
    from tilechess.core.piece import Piece


def direction_between(origin: Coordinate, target: Coordinate) -> Direction | None:
    """Compass direction from *origin* to *target* if they share a line."""
    dx = target.x - origin.x
    dy = target.y - origin.y
    if dx == 0 and dy == 0:
        return None
    if dx != 0 and dy != 0 and abs(dx) != abs(dy):
        return None
    return Direction(((dx > 0) - (dx < 0), (dy > 0) - (dy < 0)))


def squares_between(origin: Coordinate, target: Coordinate) -> list[Coordinate]:
    """Squares strictly between two aligned coordinates (empty if not aligned)."""
    direction = direction_between(origin, target)
    if direction is None:
        return []
    squares: list[Coordinate] = []
    current = origin.step(direction)
    while current != target:
        squares.append(current)
        current = current.step(direction)
    return squares


def threat_squares(piece: Piece, board: Board) -> list[Coordinate]:
    """Squares through which *piece* currently checks the enemy king.

    Empty when there is no check. For a line piece the result is the
    piece's own square, every square up to the king, then the king's
    square; knights and pawns can only be captured, so their own square is
    the whole answer. Kings never give check.
    """
    king = board.king(piece.color.opposite)
    target = king.position

    if piece.is_sliding:
        direction = direction_between(piece.position, target)
        if direction is None or direction not in SLIDING_DIRS[piece.piece_type]:
            return []
        between = squares_between(piece.position, target)
        if any(board.is_occupied(sq) for sq in between):
            return []
        return [piece.position, *between, target]

    if piece.piece_type == PieceType.KNIGHT:
        if target in calculate_movement(piece, board):
            return [piece.position]
        return []

    if piece.is_pawn:
        if target in pawn_diagonals(piece):
            return [piece.position]
        return []

    return []


def attacked_squares(
    piece: Piece, board: Board, transparent: Piece | None = None
) -> list[Coordinate]:
    """Every square *piece* attacks or defends.

    Unlike :func:`calculate_movement` this keeps squares held by the piece's
    own side, counts pawn diagonals whether or not they hold a target, and
    lets sliders see through *transparent* (the king being moved).
    """
    if piece.is_pawn:
        return pawn_diagonals(piece)
    if piece.piece_type == PieceType.KNIGHT:
        return knight_targets(piece.position)

    if piece.is_king:
        directions, max_distance = QUEEN_DIRS, 1
    else:
        directions, max_distance = SLIDING_DIRS[piece.piece_type], BOARD_SIZE

    squares: list[Coordinate] = []
    for direction in directions:
        for distance in range(1, max_distance + 1):
            dest = piece.position.step(direction, distance)
            if not is_valid(dest):
                break
            squares.append(dest)
            occupant = board.piece_at(dest)
            if occupant is not None and occupant is not transparent:
                break
    return squares


def is_attacked(
    coord: Coordinate, by_color: Color, board: Board, transparent: Piece | None = None
) -> bool:
    """Is *coord* attacked or defended by any live piece of *by_color*?"""
    return any(
        coord in attacked_squares(enemy, board, transparent)
        for enemy in board.pieces_of(by_color)
    )


def threateners(king: Piece, board: Board) -> list[Piece]:
    """Enemy pieces currently giving check to *king*."""
    return [enemy for enemy in board.pieces_of(king.color.opposite) if threat_squares(enemy, board)]


def pin_line(piece: Piece, board: Board) -> list[Coordinate] | None:
    """Squares a pinned *piece* may still use, or ``None`` when it is free.

    A piece is pinned when it is the only piece between its own king and an
    enemy slider aimed along that line. It may then move along the line or
    capture the pinner.
    """
    if piece.is_king:
        return None
    king = board.king(piece.color)
    if direction_between(king.position, piece.position) is None:
        return None

    for enemy in board.pieces_of(piece.color.opposite):
        if not enemy.is_sliding:
            continue
        direction = direction_between(enemy.position, king.position)
        if direction is None or direction not in SLIDING_DIRS[enemy.piece_type]:
            continue
        # X-ray scan: the king is only reached if no piece of the slider's
        # own side stands in between.
        if king.position not in calculate_movement(enemy, board, stop_at_first_enemy=False):
            continue
        between = squares_between(enemy.position, king.position)
        blockers = [board.piece_at(sq) for sq in between if board.is_occupied(sq)]
        if len(blockers) == 1 and blockers[0] is piece:
            return [enemy.position, *(sq for sq in between if sq != piece.position)]
    return None



def is_exposed_after(
    king: Piece,
    board: Board,
    vacated: Collection[Coordinate],
    filled: Coordinate,
) -> bool:
    """Would an enemy slider reach *king* once *vacated* empty and *filled* fills?

    Used for moves that clear more than one square at once (en passant),
    which a single-blocker pin scan cannot see.
    """
    for direction in QUEEN_DIRS:
        current = king.position.step(direction)
        while is_valid(current):
            if current == filled:
                break
            occupant = board.piece_at(current)
            if occupant is not None and current not in vacated:
                if (
                    occupant.color != king.color
                    and occupant.is_sliding
                    and direction.opposite in SLIDING_DIRS[occupant.piece_type]
                ):
                    return True
                break
            current = current.step(direction)
    return False
