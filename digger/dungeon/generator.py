"""Linear digging generator.

Starts with a room at the origin, then for each subsequent room picks a door
on the previous room, digs a straight corridor out of it and tries to attach
a new room to the corridor's far end. Every step is randomized and bounded:

    * room dimensions are drawn once per placement call,
    * a door location gets ``max_door_tries`` draws,
    * the (door, corridor, room offset) combination gets ``max_room_tries``.

A door-location failure is not caught by the outer loop; it aborts the whole
placement call.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Optional, Protocol

from ..logging_utils import get_logger
from .config import (  # noqa: F401
    MAX_CORRIDOR_LENGTH,
    MAX_DOOR_TRIES,
    MAX_ROOM_HEIGHT,
    MAX_ROOM_TRIES,
    MAX_ROOM_WIDTH,
    MIN_CORRIDOR_LENGTH,
    MIN_ROOM_HEIGHT,
    MIN_ROOM_WIDTH,
    DungeonConfig,
)
from .coords import ORIGIN, CardinalDirection, Coordinate
from .dungeon import Dungeon
from .errors import DoorLocationExhausted, RoomPlacementExhausted
from .metrics import init_metrics
from .rooms import Room, create_corridor, create_empty_room
from .tiles import Door, Wall

log = get_logger("digger.generator")


class RandomSource(Protocol):
    def randrange(self, start: int, stop: int) -> int: ...


@dataclass
class DiggingContext:
    rng: RandomSource
    previous_offset: Coordinate = field(default=ORIGIN)


def corridor_offset(room: Room, door_location: Coordinate, room_offset: Coordinate, corridor_length: int) -> Coordinate:
    """Absolute offset of a corridor leaving ``room`` through ``door_location``.

    Top and left corridors end at the door, so their offset is the far end.
    Bottom and right corridors start next to the door.
    """
    door = door_location + room_offset
    if door_location.row == 0:
        return Coordinate(door.row - corridor_length, door.col)
    if door_location.row == room.height - 1:
        return Coordinate(door.row + 1, door.col)
    if door_location.col == 0:
        return Coordinate(door.row, door.col - corridor_length)
    return Coordinate(door.row, door.col + 1)


def last_corridor_tile(corridor: Room, direction: CardinalDirection, offset: Coordinate) -> Coordinate:
    """Tile of the corridor furthest from the room it leaves."""
    if direction in (CardinalDirection.NORTH, CardinalDirection.WEST):
        return Coordinate(offset.row, offset.col)
    if direction is CardinalDirection.SOUTH:
        return Coordinate(offset.row + corridor.height - 1, offset.col)
    return Coordinate(offset.row, offset.col + corridor.width - 1)


class LinearDiggingGenerator:
    def __init__(
        self,
        dungeon: Dungeon,
        rng: Optional[RandomSource] = None,
        config: Optional[DungeonConfig] = None,
    ):
        self.dungeon = dungeon
        self.config = config or DungeonConfig()
        if rng is None:
            rng = random.Random(self.config.seed)
        self.context = DiggingContext(rng=rng)
        self.metrics = init_metrics()

    @property
    def rng(self) -> RandomSource:
        return self.context.rng

    @property
    def previous_offset(self) -> Coordinate:
        return self.context.previous_offset

    # ---------------- Candidate generators ---------------------------------------
    def generate_room(self) -> Room:
        cfg = self.config
        height = self.rng.randrange(cfg.min_room_height, cfg.max_room_height + 1)
        width = self.rng.randrange(cfg.min_room_width, cfg.max_room_width + 1)
        return create_empty_room(height, width)

    def choose_door_location(self, room: Room) -> Coordinate:
        """Pick a non-corner Wall tile of ``room``, relative to the room."""
        tries = self.config.max_door_tries
        for _ in range(tries):
            row = self.rng.randrange(0, room.height)
            col = self.rng.randrange(0, room.width)
            self.metrics["door_draws"] += 1
            location = Coordinate(row, col)
            if room.is_not_a_corner(location) and isinstance(room.get_tile(row, col), Wall):
                return location
        log.warn(event="door_location_exhausted", tries=tries, height=room.height, width=room.width)
        raise DoorLocationExhausted(f"no door location found in {tries} tries", tries=tries)

    def choose_corridor_length(self) -> int:
        return self.rng.randrange(self.config.min_corridor_length, self.config.max_corridor_length)

    @staticmethod
    def generate_corridor(room: Room, door_location: Coordinate, length: int) -> Room:
        if door_location.row in (0, room.height - 1):
            return create_corridor(length, 1)
        return create_corridor(1, length)

    def choose_room_offset(self, room: Room, direction: CardinalDirection, last_tile: Coordinate) -> Coordinate:
        """Offset for ``room`` so ``last_tile`` abuts a non-corner tile of its wall."""
        if direction in (CardinalDirection.NORTH, CardinalDirection.SOUTH):
            span = room.width - 2
            col = self.rng.randrange(last_tile.col - span, last_tile.col)
            if direction is CardinalDirection.NORTH:
                return Coordinate(last_tile.row - room.height, col)
            return Coordinate(last_tile.row + 1, col)
        span = room.height - 2
        row = self.rng.randrange(last_tile.row - span, last_tile.row)
        if direction is CardinalDirection.WEST:
            return Coordinate(row, last_tile.col - room.width)
        return Coordinate(row, last_tile.col + 1)

    @staticmethod
    def generate_door() -> Door:
        # TODO: locked and secret door variants
        return Door(locked=False)

    # ---------------- Placement --------------------------------------------------
    def place_next_room(self, previous_room: Optional[Room]) -> Room:
        started = time.perf_counter()
        try:
            return self._place(previous_room)
        finally:
            self.metrics["runtime_ms"] += round((time.perf_counter() - started) * 1000, 3)

    def _place(self, previous_room: Optional[Room]) -> Room:
        room = self.generate_room()
        if previous_room is None:
            self.dungeon.add_room(room, ORIGIN)
            self.context.previous_offset = ORIGIN
            self.metrics["rooms_placed"] += 1
            log.info(event="room_placed", row=0, col=0, height=room.height, width=room.width, first=True)
            return room

        for attempt in range(1, self.config.max_room_tries + 1):
            self.metrics["room_tries"] += 1
            door_location = self.choose_door_location(previous_room)

            length = self.choose_corridor_length()
            offset = corridor_offset(previous_room, door_location, self.previous_offset, length)
            corridor = self.generate_corridor(previous_room, door_location, length)
            if not self.dungeon.can_add_room(corridor, offset):
                self.metrics["rejected_corridors"] += 1
                log.debug(event="placement_attempt_rejected", attempt=attempt, reason="corridor")
                continue

            direction = previous_room.determine_wall_direction(door_location)
            last_tile = last_corridor_tile(corridor, direction, offset)
            room_offset = self.choose_room_offset(room, direction, last_tile)
            if not self.dungeon.can_add_room(room, room_offset):
                self.metrics["rejected_rooms"] += 1
                log.debug(event="placement_attempt_rejected", attempt=attempt, reason="room")
                continue

            self.dungeon.add_tile(door_location + self.previous_offset, self.generate_door())
            self.dungeon.add_room(corridor, offset)
            self.dungeon.add_room(room, room_offset)
            self.dungeon.add_tile(last_tile.neighbor(direction), self.generate_door())
            self.context.previous_offset = room_offset

            self.metrics["rooms_placed"] += 1
            self.metrics["corridors_created"] += 1
            self.metrics["doors_created"] += 2
            log.info(
                event="room_placed",
                row=room_offset.row,
                col=room_offset.col,
                height=room.height,
                width=room.width,
                direction=direction.name,
                corridor_length=length,
                attempt=attempt,
            )
            return room

        tries = self.config.max_room_tries
        log.warn(event="room_placement_exhausted", tries=tries)
        raise RoomPlacementExhausted(f"no room location found in {tries} tries", tries=tries)


__all__ = [
    "MIN_ROOM_HEIGHT",
    "MIN_ROOM_WIDTH",
    "MAX_ROOM_HEIGHT",
    "MAX_ROOM_WIDTH",
    "MIN_CORRIDOR_LENGTH",
    "MAX_CORRIDOR_LENGTH",
    "MAX_DOOR_TRIES",
    "MAX_ROOM_TRIES",
    "DiggingContext",
    "LinearDiggingGenerator",
    "RandomSource",
    "corridor_offset",
    "last_corridor_tile",
]
