import pytest

from digger.dungeon import DungeonConfig, apply_env_overrides


def test_defaults():
    cfg = DungeonConfig()
    assert (cfg.min_room_height, cfg.max_room_height) == (5, 15)
    assert (cfg.min_room_width, cfg.max_room_width) == (5, 15)
    assert (cfg.min_corridor_length, cfg.max_corridor_length) == (1, 10)
    assert cfg.max_room_tries == 25
    assert cfg.max_door_tries == 60
    assert cfg.validate() is cfg


@pytest.mark.parametrize(
    "kwargs",
    [
        {"min_room_height": 9, "max_room_height": 8},
        {"min_room_width": 2},
        {"min_corridor_length": 4, "max_corridor_length": 4},
        {"max_room_tries": 0},
        {"rooms": -1},
        {"extent": 10},
    ],
)
def test_validate_rejects_inconsistent_bounds(kwargs):
    with pytest.raises(ValueError):
        DungeonConfig(**kwargs).validate()


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DIGGER_ROOMS", "17")
    monkeypatch.setenv("DIGGER_SEED", "1234")
    monkeypatch.setenv("DIGGER_STOP_ON_EXHAUSTION", "yes")
    monkeypatch.setenv("DIGGER_EXTENT", "")
    cfg = apply_env_overrides(DungeonConfig())
    assert cfg.rooms == 17
    assert cfg.seed == 1234
    assert cfg.stop_on_exhaustion is True
    assert cfg.extent == 200


def test_env_override_invalid_value(monkeypatch):
    monkeypatch.setenv("DIGGER_ROOMS", "many")
    with pytest.raises(ValueError, match="DIGGER_ROOMS"):
        apply_env_overrides(DungeonConfig())
