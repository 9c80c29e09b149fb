from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple

from .coords import CardinalDirection, Coordinate
from .tiles import Floor, Tile, Wall

_FLOOR = Floor()
_WALL = Wall()


@dataclass(frozen=True)
class Room:
    """Rectangular block of tiles in its own (row, col) frame.

    A room never knows where it sits in the dungeon; placement supplies an
    absolute offset for its top-left tile.
    """

    height: int
    width: int
    tiles: Tuple[Tuple[Tile, ...], ...] = field(repr=False)
    is_corridor: bool = False

    def __post_init__(self):
        if self.height < 1 or self.width < 1:
            raise ValueError(f"room dimensions must be positive, got {self.height}x{self.width}")
        if len(self.tiles) != self.height or any(len(r) != self.width for r in self.tiles):
            raise ValueError("tile matrix does not match room dimensions")

    def get_tile(self, row: int, col: int) -> Tile:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"({row}, {col}) outside {self.height}x{self.width} room")
        return self.tiles[row][col]

    def cells(self) -> Iterator[Tuple[Coordinate, Tile]]:
        for row, line in enumerate(self.tiles):
            for col, tile in enumerate(line):
                yield Coordinate(row, col), tile

    def is_not_a_corner(self, coord: Coordinate) -> bool:
        row, col = coord
        return not (row in (0, self.height - 1) and col in (0, self.width - 1))

    def determine_wall_direction(self, coord: Coordinate) -> Optional[CardinalDirection]:
        """Return the wall ``coord`` lies on, or None for interior tiles.

        Rows are checked before columns, so corners report NORTH or SOUTH.
        """
        row, col = coord
        if row == 0:
            return CardinalDirection.NORTH
        if row == self.height - 1:
            return CardinalDirection.SOUTH
        if col == 0:
            return CardinalDirection.WEST
        if col == self.width - 1:
            return CardinalDirection.EAST
        return None

    @property
    def area(self) -> int:
        return self.height * self.width


def create_empty_room(height: int, width: int) -> Room:
    """Walled room: Wall ring around a Floor interior."""
    tiles = tuple(
        tuple(
            _WALL if row in (0, height - 1) or col in (0, width - 1) else _FLOOR
            for col in range(width)
        )
        for row in range(height)
    )
    return Room(height, width, tiles)


def create_corridor(height: int, width: int) -> Room:
    if height != 1 and width != 1:
        raise ValueError(f"corridor must be one tile wide or tall, got {height}x{width}")
    tiles = tuple(tuple(_FLOOR for _ in range(width)) for _ in range(height))
    return Room(height, width, tiles, is_corridor=True)


__all__ = ["Room", "create_empty_room", "create_corridor"]
