"""Board snapshot and occupancy queries."""

from __future__ import annotations

from collections.abc import Iterator

from tilechess.core.enums import Color, PieceType
from tilechess.core.piece import Piece, make_piece_id
from tilechess.core.types import BOARD_SIZE, Coordinate, is_valid

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Ordered piece collection with a position index.

    Captured pieces stay in the collection as tombstones (``captured=True``)
    for history purposes but are invisible to every occupancy query.
    """

    __slots__ = ("_pieces", "_by_id", "_index", "_sequences")

    def __init__(self) -> None:
        self._pieces: list[Piece] = []
        self._by_id: dict[str, Piece] = {}
        # Coordinate -> live piece on it.
        self._index: dict[Coordinate, Piece] = {}
        # (type, color) -> last sequence number handed out.
        self._sequences: dict[tuple[PieceType, Color], int] = {}

    # -- Setup ----------------------------------------------------------------

    def add(
        self,
        piece_type: PieceType,
        color: Color,
        position: Coordinate,
        *,
        piece_id: str | None = None,
        has_moved: bool = False,
        just_double_advanced: bool = False,
        captured: bool = False,
    ) -> Piece:
        """Place a new piece, assigning the next id for its type and color."""
        if not is_valid(position):
            raise ValueError(f"Cannot place {color} {piece_type} off the board at {position}")
        if not captured and position in self._index:
            raise ValueError(f"Square {position} is already occupied")

        key = (piece_type, color)
        sequence = self._sequences.get(key, 0) + 1
        self._sequences[key] = sequence
        if piece_id is None:
            piece_id = make_piece_id(piece_type, color, sequence)
        if piece_id in self._by_id:
            raise ValueError(f"Duplicate piece id: {piece_id!r}")

        piece = Piece(
            id=piece_id,
            piece_type=piece_type,
            color=color,
            position=position,
            captured=captured,
            has_moved=has_moved and piece_type in (PieceType.PAWN, PieceType.ROOK, PieceType.KING),
            just_double_advanced=just_double_advanced and piece_type == PieceType.PAWN,
        )
        self._pieces.append(piece)
        self._by_id[piece_id] = piece
        if not captured:
            self._index[position] = piece
        return piece

    @classmethod
    def initial(cls) -> Board:
        """Standard 32-piece starting layout."""
        b = cls()
        for color, back, front in ((Color.WHITE, 1, 2), (Color.BLACK, BOARD_SIZE, BOARD_SIZE - 1)):
            for x in range(1, BOARD_SIZE + 1):
                b.add(PieceType.PAWN, color, Coordinate(x, front))
            for x, pt in enumerate(_BACK_RANK, start=1):
                b.add(pt, color, Coordinate(x, back))
        return b

    # -- Queries --------------------------------------------------------------

    @property
    def pieces(self) -> list[Piece]:
        """Live (non-captured) pieces in creation order."""
        return [p for p in self._pieces if not p.captured]

    def all_pieces(self) -> list[Piece]:
        """Every piece ever placed, captured ones included."""
        return list(self._pieces)

    def pieces_of(self, color: Color) -> list[Piece]:
        return [p for p in self._pieces if not p.captured and p.color == color]

    def get(self, piece_id: str) -> Piece | None:
        """Look a piece up by id; ``None`` when unknown."""
        return self._by_id.get(piece_id)

    def piece_at(self, coord: Coordinate) -> Piece | None:
        return self._index.get(coord)

    def is_occupied(self, coord: Coordinate) -> bool:
        return coord in self._index

    def king(self, color: Color) -> Piece:
        """Return the single live king of *color*."""
        for piece in self._pieces:
            if piece.is_king and piece.color == color and not piece.captured:
                return piece
        raise ValueError(f"No {color.name} king on board")

    # -- Mutation -------------------------------------------------------------

    def move_piece(self, piece: Piece, dest: Coordinate) -> None:
        """Relocate *piece*; the destination must already be vacated."""
        if piece.captured:
            raise ValueError(f"Cannot move captured piece {piece.id}")
        occupant = self._index.get(dest)
        if occupant is not None and occupant is not piece:
            raise ValueError(f"Square {dest} is already occupied by {occupant.id}")
        del self._index[piece.position]
        piece.move_to(dest)
        self._index[dest] = piece

    def capture(self, piece: Piece) -> None:
        """Tombstone *piece* and drop it from the position index."""
        if piece.captured:
            return
        del self._index[piece.position]
        piece.captured = True
        piece.just_double_advanced = False

    def clear_double_advances(self, keep: Piece | None = None) -> None:
        """Close the en passant window for every pawn except *keep*."""
        for piece in self._pieces:
            if piece is not keep and piece.just_double_advanced:
                piece.just_double_advanced = False

    # -- Dunder helpers -------------------------------------------------------

    def __iter__(self) -> Iterator[Piece]:
        return iter(self.pieces)

    def __len__(self) -> int:
        return len(self._index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._pieces == other._pieces

    def __repr__(self) -> str:
        rows: list[str] = []
        for y in range(BOARD_SIZE, 0, -1):
            row = []
            for x in range(1, BOARD_SIZE + 1):
                p = self.piece_at(Coordinate(x, y))
                row.append(str(p) if p else ".")
            rows.append(f"{y} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
