import random

import pytest

from digger.dungeon import (
    CardinalDirection,
    Door,
    DungeonConfig,
    RoomPlacementExhausted,
    Wall,
    dig_dungeon,
)
from digger.dungeon import digging as digging_mod

SEEDS = [random.randint(1, 1_000_000) for _ in range(5)] + [42, 314159]


def _dig(seed, rooms=12):
    return dig_dungeon(DungeonConfig(rooms=rooms, seed=seed, stop_on_exhaustion=True))


@pytest.mark.structure
@pytest.mark.parametrize("seed", SEEDS)
def test_no_overlapping_shapes(seed):
    result = _dig(seed)
    d = result.dungeon
    # doors only overwrite wall tiles, so stamped area equals occupied tiles
    stamped = sum(room.area for room, _offset in d.placements)
    assert len(d) == stamped, f"seed={seed} overlapping placements"


@pytest.mark.structure
@pytest.mark.parametrize("seed", SEEDS)
def test_dimensions_within_bounds(seed):
    result = _dig(seed)
    for room, _offset in result.dungeon.rooms:
        assert 5 <= room.height <= 15 and 5 <= room.width <= 15
    for corridor, _offset in result.dungeon.corridors:
        length = max(corridor.height, corridor.width)
        assert min(corridor.height, corridor.width) == 1
        assert 1 <= length < 10


@pytest.mark.structure
@pytest.mark.parametrize("seed", SEEDS)
def test_every_corridor_has_a_door_at_each_end(seed):
    result = _dig(seed)
    d = result.dungeon
    placed = len(result.rooms)
    assert len(d.rooms) == placed
    assert len(d.corridors) == placed - 1
    assert d.counts()["door"] == 2 * (placed - 1)

    corridor_tiles = set()
    for corridor, offset in d.corridors:
        corridor_tiles.update(rel + offset for rel, _t in corridor.cells())
    for coord, tile in d:
        if not isinstance(tile, Door):
            continue
        assert not tile.locked
        neighbors = [coord.neighbor(direction) for direction in CardinalDirection]
        assert sum(1 for n in neighbors if n in corridor_tiles) == 1, f"door {coord} seed={seed}"
        # the door sits in a room wall: walls continue on both sides along it
        assert sum(1 for n in neighbors if isinstance(d.tile_at(n), (Wall, Door))) >= 2


@pytest.mark.structure
def test_first_room_at_origin():
    result = _dig(7, rooms=3)
    room, offset = result.dungeon.rooms[0]
    assert offset == (0, 0)
    assert result.rooms[0] is room


def test_same_seed_same_dungeon():
    a = _dig(2024)
    b = _dig(2024)
    assert a.dungeon.to_rows() == b.dungeon.to_rows()
    assert a.offsets == b.offsets


def test_to_dict_shape():
    result = _dig(99, rooms=4)
    data = result.to_dict()
    assert data["seed"] == 99
    assert len(data["rooms"]) == len(result.rooms)
    assert data["rooms"][0] == {
        "row": 0,
        "col": 0,
        "height": result.rooms[0].height,
        "width": result.rooms[0].width,
    }
    assert len(data["grid"]) >= result.rooms[0].height
    assert set(data["counts"]) == {"floor", "wall", "door"}
    assert data["metrics"]["rooms_placed"] == len(result.rooms)


class _FailsOnThirdRoom(digging_mod.LinearDiggingGenerator):
    def place_next_room(self, previous_room):
        if self.metrics["rooms_placed"] == 2:
            raise RoomPlacementExhausted("boxed in", tries=self.config.max_room_tries)
        return super().place_next_room(previous_room)


def test_exhaustion_propagates_by_default(monkeypatch):
    monkeypatch.setattr(digging_mod, "LinearDiggingGenerator", _FailsOnThirdRoom)
    with pytest.raises(RoomPlacementExhausted):
        dig_dungeon(DungeonConfig(rooms=5, seed=1))


def test_stop_on_exhaustion_returns_partial(monkeypatch):
    monkeypatch.setattr(digging_mod, "LinearDiggingGenerator", _FailsOnThirdRoom)
    result = dig_dungeon(DungeonConfig(rooms=5, seed=1, stop_on_exhaustion=True))
    assert len(result.rooms) == 2
    assert result.metrics["aborted"] == "room_placement_exhausted"
    assert result.dungeon.counts()["door"] == 2


def test_zero_rooms_is_empty():
    result = dig_dungeon(DungeonConfig(rooms=0, seed=5))
    assert result.rooms == []
    assert len(result.dungeon) == 0


def test_random_seed_assigned_when_missing():
    result = dig_dungeon(DungeonConfig(rooms=2))
    assert isinstance(result.seed, int)


def test_random_seed_does_not_leak_into_caller_config():
    config = DungeonConfig(rooms=2)
    first = dig_dungeon(config)
    assert config.seed is None
    assert isinstance(first.seed, int)
