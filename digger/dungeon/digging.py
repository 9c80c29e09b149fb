"""Outer digging loop: build a dungeon of ``config.rooms`` rooms.

Each call to ``place_next_room`` receives the room returned by the previous
call, which keeps the dungeon a single chain of rooms.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional

from ..logging_utils import get_logger
from .config import DungeonConfig
from .coords import Coordinate
from .dungeon import Dungeon
from .errors import GenerationError
from .generator import LinearDiggingGenerator, RandomSource
from .rooms import Room

log = get_logger("digger.digging")


@dataclass
class DigResult:
    dungeon: Dungeon
    rooms: List[Room]
    metrics: Dict[str, Any]
    seed: Optional[int]

    @property
    def offsets(self) -> List[Coordinate]:
        return [offset for _room, offset in self.dungeon.rooms]

    def to_dict(self) -> Dict[str, Any]:
        box = self.dungeon.bounding_box()
        return {
            "seed": self.seed,
            "rooms": [
                {"row": o.row, "col": o.col, "height": r.height, "width": r.width}
                for r, o in self.dungeon.rooms
            ],
            "origin": [box[0].row, box[0].col] if box else [0, 0],
            "grid": self.dungeon.to_rows(),
            "counts": self.dungeon.counts(),
            "metrics": dict(self.metrics),
        }


def dig_dungeon(config: Optional[DungeonConfig] = None, rng: Optional[RandomSource] = None) -> DigResult:
    """Dig ``config.rooms`` rooms into a fresh Dungeon.

    Generation failures propagate unless ``config.stop_on_exhaustion`` is set,
    in which case the partial dungeon is returned with ``metrics["aborted"]``
    naming the failure kind.
    """
    config = (config or DungeonConfig()).validate()
    if config.seed is None and rng is None:
        config = replace(config, seed=random.randint(1, 1_000_000))
    dungeon = Dungeon(extent=config.extent)
    generator = LinearDiggingGenerator(dungeon, rng=rng, config=config)
    rooms: List[Room] = []
    previous: Optional[Room] = None
    for index in range(config.rooms):
        try:
            previous = generator.place_next_room(previous)
        except GenerationError as exc:
            if not config.stop_on_exhaustion:
                raise
            generator.metrics["aborted"] = exc.kind
            log.warn(event="dig_aborted", kind=exc.kind, placed=index, target=config.rooms)
            break
        rooms.append(previous)
    log.info(
        event="dig_complete",
        seed=config.seed,
        rooms=len(rooms),
        tiles=len(dungeon),
        runtime_ms=generator.metrics["runtime_ms"],
    )
    return DigResult(dungeon=dungeon, rooms=rooms, metrics=generator.metrics, seed=config.seed)


__all__ = ["DigResult", "dig_dungeon"]
