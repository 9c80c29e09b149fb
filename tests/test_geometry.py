import pytest

from digger.dungeon import CardinalDirection, Coordinate, create_corridor, create_empty_room
from digger.dungeon.generator import corridor_offset, last_corridor_tile

ROOM = create_empty_room(5, 5)
ROOM_OFFSET = Coordinate(10, 20)


@pytest.mark.parametrize(
    "door,expected",
    [
        ((0, 2), (7, 22)),  # top wall: far end touches the door
        ((4, 2), (15, 22)),  # bottom wall: near end touches the door
        ((2, 0), (12, 17)),  # left wall
        ((2, 4), (12, 25)),  # right wall
    ],
)
def test_corridor_offset_per_wall(door, expected):
    assert corridor_offset(ROOM, Coordinate(*door), ROOM_OFFSET, 3) == Coordinate(*expected)


def test_corridor_offset_from_origin():
    assert corridor_offset(ROOM, Coordinate(0, 2), Coordinate(0, 0), 3) == Coordinate(-3, 2)


@pytest.mark.parametrize(
    "shape,direction,offset,expected",
    [
        ((3, 1), CardinalDirection.NORTH, (7, 22), (7, 22)),
        ((3, 1), CardinalDirection.SOUTH, (15, 22), (17, 22)),
        ((1, 3), CardinalDirection.WEST, (12, 17), (12, 17)),
        ((1, 3), CardinalDirection.EAST, (12, 25), (12, 27)),
    ],
)
def test_last_corridor_tile(shape, direction, offset, expected):
    corridor = create_corridor(*shape)
    assert last_corridor_tile(corridor, direction, Coordinate(*offset)) == Coordinate(*expected)


@pytest.mark.parametrize("door", [(0, 2), (4, 3), (1, 0), (3, 4)])
def test_corridor_abuts_door(door):
    """The corridor tile nearest the room is always the door's outward neighbor."""
    door = Coordinate(*door)
    length = 4
    direction = ROOM.determine_wall_direction(door)
    offset = corridor_offset(ROOM, door, ROOM_OFFSET, length)
    shape = (length, 1) if direction in (CardinalDirection.NORTH, CardinalDirection.SOUTH) else (1, length)
    corridor = create_corridor(*shape)
    tiles = {rel + offset for rel, _t in corridor.cells()}
    door_abs = door + ROOM_OFFSET
    assert door_abs.neighbor(direction) in tiles
    assert door_abs not in tiles
    last = last_corridor_tile(corridor, direction, offset)
    assert last in tiles
    assert last.neighbor(direction) not in tiles
