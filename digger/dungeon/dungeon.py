"""Dungeon grid: the shared structure rooms, corridors and doors are stamped into.

The grid is sparse (``Coordinate -> Tile``) because digging starts with the
first room at the origin and grows in every direction, including into
negative rows and columns. An optional ``extent`` bounds both axes to
``[-extent, extent)``.

Public contract consumed by the generator:
    can_add_room(room, offset) -> bool
    add_room(room, offset)
    add_tile(coord, tile)
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterator, List, Optional, Tuple

from .coords import Coordinate
from .rooms import Room
from .tiles import EMPTY, Tile


class Dungeon:
    def __init__(self, extent: Optional[int] = None):
        self.extent = extent
        self._tiles: Dict[Coordinate, Tile] = {}
        # every stamped shape in commit order, corridors included
        self.placements: List[Tuple[Room, Coordinate]] = []

    # ------------------------------------------------------------------
    # Collision / commit
    # ------------------------------------------------------------------
    def in_bounds(self, coord: Coordinate) -> bool:
        if self.extent is None:
            return True
        return -self.extent <= coord[0] < self.extent and -self.extent <= coord[1] < self.extent

    def can_add_room(self, room: Room, offset: Coordinate) -> bool:
        for rel, _tile in room.cells():
            coord = rel + offset
            if not self.in_bounds(coord) or coord in self._tiles:
                return False
        return True

    def add_room(self, room: Room, offset: Coordinate) -> None:
        offset = Coordinate(*offset)
        for rel, tile in room.cells():
            self._tiles[rel + offset] = tile
        self.placements.append((room, offset))

    def add_tile(self, coord: Coordinate, tile: Tile) -> None:
        self._tiles[Coordinate(*coord)] = tile

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def tile_at(self, coord: Coordinate) -> Optional[Tile]:
        return self._tiles.get(Coordinate(*coord))

    def __contains__(self, coord) -> bool:
        return Coordinate(*coord) in self._tiles

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[Tuple[Coordinate, Tile]]:
        return iter(self._tiles.items())

    @property
    def rooms(self) -> List[Tuple[Room, Coordinate]]:
        return [(r, o) for r, o in self.placements if not r.is_corridor]

    @property
    def corridors(self) -> List[Tuple[Room, Coordinate]]:
        return [(r, o) for r, o in self.placements if r.is_corridor]

    def bounding_box(self) -> Optional[Tuple[Coordinate, Coordinate]]:
        """Return (top_left, bottom_right) of occupied tiles, inclusive."""
        if not self._tiles:
            return None
        rows = [c.row for c in self._tiles]
        cols = [c.col for c in self._tiles]
        return Coordinate(min(rows), min(cols)), Coordinate(max(rows), max(cols))

    def counts(self) -> Dict[str, int]:
        counter = Counter(type(t).__name__.lower() for t in self._tiles.values())
        return {kind: counter.get(kind, 0) for kind in ("floor", "wall", "door")}

    def to_rows(self) -> List[str]:
        box = self.bounding_box()
        if box is None:
            return []
        top_left, bottom_right = box
        rows = []
        for row in range(top_left.row, bottom_right.row + 1):
            line = []
            for col in range(top_left.col, bottom_right.col + 1):
                tile = self._tiles.get(Coordinate(row, col))
                line.append(tile.char if tile is not None else EMPTY)
            rows.append("".join(line))
        return rows

    def render(self) -> str:
        return "\n".join(self.to_rows())


__all__ = ["Dungeon"]
