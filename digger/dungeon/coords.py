"""Coordinate and direction value types.

Coordinates are (row, col) pairs. Rows grow downward, so NORTH is row - 1.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class CardinalDirection(Enum):
    NORTH = (-1, 0)
    SOUTH = (1, 0)
    EAST = (0, 1)
    WEST = (0, -1)

    @property
    def delta(self) -> "Coordinate":
        return Coordinate(*self.value)


class Coordinate(NamedTuple):
    row: int
    col: int

    def __add__(self, other) -> "Coordinate":  # type: ignore[override]
        return Coordinate(self.row + other[0], self.col + other[1])

    def neighbor(self, direction: CardinalDirection) -> "Coordinate":
        return self + direction.value


ORIGIN = Coordinate(0, 0)

__all__ = ["CardinalDirection", "Coordinate", "ORIGIN"]
