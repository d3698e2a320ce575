"""Board coordinates and tile-name helpers.

Coordinates are 1-indexed: ``x`` is the file (1 = a … 8 = h) and ``y`` the
rank (1 … 8). White starts on ranks 1-2, black on ranks 7-8.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tilechess.core.enums import Direction

BOARD_SIZE = 8

_FILES = "abcdefgh"


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Immutable grid position. Equality is by field."""

    x: int
    y: int

    def step(self, direction: Direction, distance: int = 1) -> Coordinate:
        """Coordinate *distance* squares away along *direction*."""
        return Coordinate(self.x + direction.dx * distance, self.y + direction.dy * distance)

    def offset(self, dx: int, dy: int) -> Coordinate:
        return Coordinate(self.x + dx, self.y + dy)

    @property
    def name(self) -> str:
        """Tile name, e.g. ``Coordinate(5, 4).name == 'e4'``."""
        return tile_name(self)

    def __str__(self) -> str:
        return f"[{self.x}/{self.y}]"


def is_valid(coord: Coordinate) -> bool:
    """True iff *coord* lies on the board."""
    return 1 <= coord.x <= BOARD_SIZE and 1 <= coord.y <= BOARD_SIZE


def tile_name(coord: Coordinate) -> str:
    if not is_valid(coord):
        raise ValueError(f"Coordinate off the board: {coord}")
    return f"{_FILES[coord.x - 1]}{coord.y}"


def parse_tile(name: str) -> Coordinate:
    """Parse a tile name, e.g. 'e4' → Coordinate(5, 4). Case-insensitive."""
    if len(name) != 2:
        raise ValueError(f"Invalid tile name: {name!r}")
    letter, digit = name[0].lower(), name[1]
    if letter not in _FILES or digit not in "12345678":
        raise ValueError(f"Invalid tile name: {name!r}")
    return Coordinate(_FILES.index(letter) + 1, int(digit))
