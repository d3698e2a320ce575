"""Move legality filter: the squares the UI may accept as a drop target."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tilechess.core.movement import calculate_movement
from tilechess.core.special_moves import castling_options, en_passant_option, special_destinations
from tilechess.core.threats import (
    direction_between,
    is_attacked,
    is_exposed_after,
    pin_line,
    threat_squares,
    threateners,
)

if TYPE_CHECKING:
    from tilechess.core.board import Board
    from tilechess.core.piece import Piece
    from tilechess.core.types import Coordinate


def legal_destinations(
    piece: Piece, board: Board, *, strict_castling: bool = True
) -> list[Coordinate]:
    """Highlighted destinations for *piece* on *board*.

    Raw movement plus special moves, pruned so that the move does not
    leave (or put) the mover's own king in check. With *strict_castling*
    the king may not castle out of check or across an attacked square.
    """
    if piece.captured:
        return []

    enemy_king = board.king(piece.color.opposite)
    candidates = [
        c
        for c in calculate_movement(piece, board) + special_destinations(piece, board)
        if c != enemy_king.position
    ]
    king = board.king(piece.color)
    checkers = threateners(king, board)

    if piece.is_king:
        return _filter_king_moves(piece, board, candidates, checkers, strict_castling)

    if checkers:
        candidates = _resolve_check(piece, board, candidates, checkers)

    pinned = pin_line(piece, board)
    if pinned is not None:
        candidates = [c for c in candidates if c in pinned]

    # En passant empties two squares at once.
    ep = en_passant_option(piece, board)
    if ep is not None and ep.destination in candidates:
        vacated = (piece.position, ep.captured_pawn.position)
        if is_exposed_after(king, board, vacated, ep.destination):
            candidates.remove(ep.destination)
    return candidates


def _resolve_check(
    piece: Piece, board: Board, candidates: list[Coordinate], checkers: list[Piece]
) -> list[Coordinate]:
    """Keep only captures of the checker or interpositions on its line."""
    allowed = set(threat_squares(checkers[0], board))
    for checker in checkers[1:]:
        allowed &= set(threat_squares(checker, board))

    # En passant lands behind the checking pawn rather than on it.
    ep = en_passant_option(piece, board)
    if ep is not None and len(checkers) == 1 and checkers[0] is ep.captured_pawn:
        allowed.add(ep.destination)

    return [c for c in candidates if c in allowed]


def _filter_king_moves(
    king: Piece,
    board: Board,
    candidates: list[Coordinate],
    checkers: list[Piece],
    strict_castling: bool,
) -> list[Coordinate]:
    unsafe: set[Coordinate] = set()
    for checker in checkers:
        # The checker's own square stays available; capturing it is only
        # refused below if another enemy piece defends it.
        unsafe.update(sq for sq in threat_squares(checker, board) if sq != checker.position)
        if checker.is_sliding:
            direction = direction_between(checker.position, king.position)
            if direction is not None:
                unsafe.add(king.position.step(direction))

    castles = {option.king_destination: option for option in castling_options(king, board)}
    enemy = king.color.opposite

    result: list[Coordinate] = []
    for dest in candidates:
        if dest in unsafe:
            continue
        if is_attacked(dest, enemy, board, transparent=king):
            continue
        option = castles.get(dest)
        if option is not None and strict_castling:
            if checkers or any(is_attacked(sq, enemy, board) for sq in option.transit):
                continue
        result.append(dest)
    return result
