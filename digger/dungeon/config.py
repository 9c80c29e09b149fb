import os
from dataclasses import dataclass
from typing import Optional

MIN_ROOM_HEIGHT = 5
MIN_ROOM_WIDTH = 5
MAX_ROOM_HEIGHT = 15
MAX_ROOM_WIDTH = 15
MIN_CORRIDOR_LENGTH = 1
MAX_CORRIDOR_LENGTH = 10  # exclusive
MAX_DOOR_TRIES = 2 * (MAX_ROOM_HEIGHT + MAX_ROOM_WIDTH)
MAX_ROOM_TRIES = 25


@dataclass
class DungeonConfig:
    rooms: int = 10
    seed: Optional[int] = None
    extent: Optional[int] = 200
    min_room_height: int = MIN_ROOM_HEIGHT
    max_room_height: int = MAX_ROOM_HEIGHT
    min_room_width: int = MIN_ROOM_WIDTH
    max_room_width: int = MAX_ROOM_WIDTH
    min_corridor_length: int = MIN_CORRIDOR_LENGTH
    max_corridor_length: int = MAX_CORRIDOR_LENGTH
    max_room_tries: int = MAX_ROOM_TRIES
    stop_on_exhaustion: bool = False

    @property
    def max_door_tries(self) -> int:
        return 2 * (self.max_room_height + self.max_room_width)

    def validate(self) -> "DungeonConfig":
        if self.rooms < 0:
            raise ValueError("rooms must be >= 0")
        if not 1 <= self.min_room_height <= self.max_room_height:
            raise ValueError("room height bounds must satisfy 1 <= min <= max")
        if not 1 <= self.min_room_width <= self.max_room_width:
            raise ValueError("room width bounds must satisfy 1 <= min <= max")
        # a 3x3 room is the smallest with a non-corner wall tile on every side
        if self.min_room_height < 3 or self.min_room_width < 3:
            raise ValueError("rooms must be at least 3x3 to carry doors")
        if not 1 <= self.min_corridor_length < self.max_corridor_length:
            raise ValueError("corridor length bounds must satisfy 1 <= min < max")
        if self.max_room_tries < 1:
            raise ValueError("max_room_tries must be >= 1")
        if self.extent is not None and self.extent < max(self.max_room_height, self.max_room_width):
            raise ValueError("extent must fit at least one maximum-size room")
        return self


_TRUTHY = {"1", "true", "yes", "on"}


def apply_env_overrides(config: DungeonConfig) -> DungeonConfig:
    """Apply DIGGER_* environment variables on top of ``config``."""
    env_map = {
        "DIGGER_ROOMS": ("rooms", int),
        "DIGGER_SEED": ("seed", int),
        "DIGGER_EXTENT": ("extent", int),
        "DIGGER_MAX_ROOM_TRIES": ("max_room_tries", int),
        "DIGGER_STOP_ON_EXHAUSTION": ("stop_on_exhaustion", lambda v: v.lower() in _TRUTHY),
    }
    for env_key, (attr, convert) in env_map.items():
        raw = os.environ.get(env_key)
        if raw is None or raw.strip() == "":
            continue
        try:
            setattr(config, attr, convert(raw.strip()))
        except ValueError as exc:
            raise ValueError(f"invalid value for {env_key}: {raw!r}") from exc
    return config


__all__ = ["DungeonConfig", "apply_env_overrides"]
