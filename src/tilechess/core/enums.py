"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import Enum, IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def forward(self) -> int:
        """Rank step of this side's pawns (white climbs, black descends)."""
        return 1 if self == Color.WHITE else -1

    @property
    def home_rank(self) -> int:
        return 1 if self == Color.WHITE else 8

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    def __str__(self) -> str:
        return self.name.lower()


class Maneuver(Enum):
    """How a committed move was carried out."""

    NONE = "none"
    CAPTURE = "capture"
    EN_PASSANT = "en passant"
    CASTLE_KINGSIDE = "castling king"
    CASTLE_QUEENSIDE = "castling queen"

    @property
    def is_castling(self) -> bool:
        return self in (Maneuver.CASTLE_KINGSIDE, Maneuver.CASTLE_QUEENSIDE)


class Direction(Enum):
    """Compass step on the board (x grows toward file h, y toward rank 8)."""

    N = (0, 1)
    NE = (1, 1)
    E = (1, 0)
    SE = (1, -1)
    S = (0, -1)
    SW = (-1, -1)
    W = (-1, 0)
    NW = (-1, 1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> Direction:
        return Direction((-self.dx, -self.dy))


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
