# Tile variants and their render characters
from dataclasses import dataclass

EMPTY = " "
FLOOR = "."
WALL = "#"
DOOR = "+"
LOCKED_DOOR = "L"


@dataclass(frozen=True)
class Tile:
    @property
    def char(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class Floor(Tile):
    @property
    def char(self) -> str:
        return FLOOR


@dataclass(frozen=True)
class Wall(Tile):
    @property
    def char(self) -> str:
        return WALL


@dataclass(frozen=True)
class Door(Tile):
    locked: bool = False

    @property
    def char(self) -> str:
        return LOCKED_DOOR if self.locked else DOOR


def char_to_type(ch: str) -> str:
    if ch == FLOOR:
        return "floor"
    if ch == WALL:
        return "wall"
    if ch == DOOR:
        return "door"
    if ch == LOCKED_DOOR:
        return "locked_door"
    return "empty"


__all__ = ["EMPTY", "FLOOR", "WALL", "DOOR", "LOCKED_DOOR", "Tile", "Floor", "Wall", "Door", "char_to_type"]
