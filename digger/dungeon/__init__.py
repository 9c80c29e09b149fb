"""Public dungeon package interface."""

from .config import DungeonConfig, apply_env_overrides
from .coords import CardinalDirection, Coordinate
from .digging import DigResult, dig_dungeon
from .dungeon import Dungeon
from .errors import DoorLocationExhausted, GenerationError, RoomPlacementExhausted
from .generator import LinearDiggingGenerator, corridor_offset, last_corridor_tile
from .rooms import Room, create_corridor, create_empty_room
from .tiles import DOOR, EMPTY, FLOOR, LOCKED_DOOR, WALL, Door, Floor, Tile, Wall  # noqa: F401

__all__ = [
    "CardinalDirection",
    "Coordinate",
    "DigResult",
    "DoorLocationExhausted",
    "Dungeon",
    "DungeonConfig",
    "GenerationError",
    "LinearDiggingGenerator",
    "Room",
    "RoomPlacementExhausted",
    "apply_env_overrides",
    "corridor_offset",
    "create_corridor",
    "create_empty_room",
    "dig_dungeon",
    "last_corridor_tile",
    "DOOR",
    "EMPTY",
    "FLOOR",
    "LOCKED_DOOR",
    "WALL",
    "Door",
    "Floor",
    "Tile",
    "Wall",
]
