"""Raw geometric movement per piece type (check safety ignored)."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from tilechess.core.enums import Direction, PieceType
from tilechess.core.types import BOARD_SIZE, Coordinate, is_valid

if TYPE_CHECKING:
    from tilechess.core.board import Board
    from tilechess.core.piece import Piece


ROOK_DIRS: tuple[Direction, ...] = (Direction.N, Direction.E, Direction.S, Direction.W)
BISHOP_DIRS: tuple[Direction, ...] = (Direction.NE, Direction.NW, Direction.SE, Direction.SW)
QUEEN_DIRS: tuple[Direction, ...] = ROOK_DIRS + BISHOP_DIRS

SLIDING_DIRS: dict[PieceType, tuple[Direction, ...]] = {
    PieceType.ROOK: ROOK_DIRS,
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}


def _build_knight_offsets() -> tuple[tuple[int, int], ...]:
    # Two squares along a primary axis, then one square to either side of it.
    offsets: list[tuple[int, int]] = []
    for primary in (Direction.W, Direction.E, Direction.S, Direction.N):
        secondaries = (
            (Direction.S, Direction.N) if primary.dy == 0 else (Direction.W, Direction.E)
        )
        for secondary in secondaries:
            offsets.append(
                (primary.dx * 2 + secondary.dx, primary.dy * 2 + secondary.dy)
            )
    return tuple(offsets)


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = _build_knight_offsets()

MovementFn = Callable[["Piece", "Board", bool], list[Coordinate]]


def calculate_movement(
    piece: Piece, board: Board, stop_at_first_enemy: bool = True
) -> list[Coordinate]:
    """Squares *piece* could reach on *board*, ignoring check safety.

    ``stop_at_first_enemy=False`` lets sliding pieces record an enemy-occupied
    square and keep scanning past it (x-ray). Other piece types ignore it.
    """
    return _MOVEMENT[piece.piece_type](piece, board, stop_at_first_enemy)


def walk(
    piece: Piece,
    board: Board,
    directions: tuple[Direction, ...],
    max_distance: int = BOARD_SIZE,
    stop_at_first_enemy: bool = True,
) -> list[Coordinate]:
    """Walk each direction in order, one square at a time."""
    tiles: list[Coordinate] = []
    origin = piece.position
    for direction in directions:
        for distance in range(1, max_distance + 1):
            dest = origin.step(direction, distance)
            if not is_valid(dest):
                break
            occupant = board.piece_at(dest)
            if occupant is None:
                tiles.append(dest)
                continue
            if occupant.color == piece.color:
                break
            tiles.append(dest)
            if stop_at_first_enemy:
                break
    return tiles


def pawn_diagonals(piece: Piece) -> list[Coordinate]:
    """The two forward-diagonal squares of a pawn that are on the board."""
    ahead = piece.position.y + piece.color.forward
    return [
        coord
        for coord in (Coordinate(piece.position.x - 1, ahead), Coordinate(piece.position.x + 1, ahead))
        if is_valid(coord)
    ]


def knight_targets(origin: Coordinate) -> list[Coordinate]:
    targets = (origin.offset(dx, dy) for dx, dy in KNIGHT_OFFSETS)
    return [t for t in targets if is_valid(t)]


# -- Per-type movement --------------------------------------------------------


def _sliding_movement(piece: Piece, board: Board, stop_at_first_enemy: bool) -> list[Coordinate]:
    return walk(
        piece,
        board,
        SLIDING_DIRS[piece.piece_type],
        stop_at_first_enemy=stop_at_first_enemy,
    )


def _king_movement(piece: Piece, board: Board, stop_at_first_enemy: bool) -> list[Coordinate]:
    return walk(piece, board, QUEEN_DIRS, max_distance=1)


def _knight_movement(piece: Piece, board: Board, stop_at_first_enemy: bool) -> list[Coordinate]:
    tiles: list[Coordinate] = []
    for dest in knight_targets(piece.position):
        occupant = board.piece_at(dest)
        if occupant is None or occupant.color != piece.color:
            tiles.append(dest)
    return tiles


def _pawn_movement(piece: Piece, board: Board, stop_at_first_enemy: bool) -> list[Coordinate]:
    tiles: list[Coordinate] = []
    ahead = piece.position.offset(0, piece.color.forward)
    if is_valid(ahead) and not board.is_occupied(ahead):
        tiles.append(ahead)

    # Diagonals only when there is something to capture.
    for diagonal in pawn_diagonals(piece):
        occupant = board.piece_at(diagonal)
        if occupant is not None and occupant.color != piece.color:
            tiles.append(diagonal)
    return tiles


_MOVEMENT: dict[PieceType, MovementFn] = {
    PieceType.PAWN: _pawn_movement,
    PieceType.KNIGHT: _knight_movement,
    PieceType.BISHOP: _sliding_movement,
    PieceType.ROOK: _sliding_movement,
    PieceType.QUEEN: _sliding_movement,
    PieceType.KING: _king_movement,
}
