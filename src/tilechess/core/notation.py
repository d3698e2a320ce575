"""FEN-style piece placement parsing and serialization."""

from __future__ import annotations

from tilechess.core.board import Board
from tilechess.core.enums import Color, PieceType
from tilechess.core.piece import piece_type_from_letter
from tilechess.core.types import BOARD_SIZE, Coordinate, parse_tile

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

# Castling letter → (color, rook file).
_CASTLING_ROOKS: dict[str, tuple[Color, int]] = {
    "K": (Color.WHITE, BOARD_SIZE),
    "Q": (Color.WHITE, 1),
    "k": (Color.BLACK, BOARD_SIZE),
    "q": (Color.BLACK, 1),
}


def _on_home_square(color: Color, piece_type: PieceType, coord: Coordinate) -> bool:
    if piece_type == PieceType.PAWN:
        return coord.y == color.home_rank + color.forward
    if piece_type == PieceType.KING:
        return coord == Coordinate(5, color.home_rank)
    if piece_type == PieceType.ROOK:
        return coord.y == color.home_rank and coord.x in (1, BOARD_SIZE)
    return True


def board_from_placement(
    placement: str,
    *,
    castling: str | None = None,
    en_passant: str | None = None,
) -> Board:
    """Build a :class:`Board` from the piece-placement field of a FEN string.

    First-move flags are inferred: a pawn, rook or king away from its home
    square has moved. When *castling* is given (``"KQkq"`` subset or
    ``"-"``), rooks without a matching right are marked as moved too, and a
    king with no rights at all is marked as moved. *en_passant* names the
    square behind a pawn that has just double-advanced.
    """
    ranks = placement.split("/")
    if len(ranks) != BOARD_SIZE:
        raise ValueError(f"Invalid placement (must contain 8 ranks): {placement!r}")

    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        y = BOARD_SIZE - rank_idx
        x = 1
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= BOARD_SIZE):
                    raise ValueError(f"Invalid placement digit {ch!r}: {placement!r}")
                x += step
            else:
                if x > BOARD_SIZE:
                    raise ValueError(f"Invalid placement rank width: {placement!r}")
                color, ptype = piece_type_from_letter(ch)
                coord = Coordinate(x, y)
                board.add(ptype, color, coord, has_moved=not _on_home_square(color, ptype, coord))
                x += 1
            if x > BOARD_SIZE + 1:
                raise ValueError(f"Invalid placement rank width: {placement!r}")
        if x != BOARD_SIZE + 1:
            raise ValueError(f"Invalid placement rank width: {placement!r}")

    for color in Color:
        kings = [p for p in board.pieces_of(color) if p.is_king]
        if len(kings) != 1:
            raise ValueError(f"Placement needs exactly one {color} king: {placement!r}")

    if castling is not None:
        _apply_castling_rights(board, castling)
    if en_passant is not None and en_passant != "-":
        _apply_en_passant(board, en_passant)
    return board


def _apply_castling_rights(board: Board, castling: str) -> None:
    rights = set() if castling == "-" else set(castling)
    if not rights <= set(_CASTLING_ROOKS):
        raise ValueError(f"Invalid castling field: {castling!r}")
    for letter, (color, rook_file) in _CASTLING_ROOKS.items():
        if letter in rights:
            continue
        rook = board.piece_at(Coordinate(rook_file, color.home_rank))
        if rook is not None and rook.piece_type == PieceType.ROOK and rook.color == color:
            rook.has_moved = True
    for color in Color:
        if not rights & {k for k, (c, _) in _CASTLING_ROOKS.items() if c == color}:
            board.king(color).has_moved = True


def _apply_en_passant(board: Board, en_passant: str) -> None:
    target = parse_tile(en_passant)
    for color in Color:
        pawn = board.piece_at(target.offset(0, color.forward))
        if (
            pawn is not None
            and pawn.is_pawn
            and pawn.color == color
            and target.y == color.home_rank + 2 * color.forward
        ):
            pawn.just_double_advanced = True
            return
    raise ValueError(f"No pawn can have just passed {en_passant!r}")


def board_to_placement(board: Board) -> str:
    """Serialise the live pieces of *board* to a FEN placement field."""
    rows: list[str] = []
    for y in range(BOARD_SIZE, 0, -1):
        empty = 0
        row = ""
        for x in range(1, BOARD_SIZE + 1):
            piece = board.piece_at(Coordinate(x, y))
            if piece is None:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)
