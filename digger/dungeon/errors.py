"""Generation failures surfaced to callers of the digging generator.

Neither failure is retried beyond the generator's own bounded loops. Failed
candidates are never committed, so the grid is unchanged when one is raised.
"""


class GenerationError(RuntimeError):
    kind = "generation_error"

    def __init__(self, message: str, tries: int = 0):
        super().__init__(message)
        self.tries = tries

    def to_dict(self):
        return {"error": str(self), "kind": self.kind, "tries": self.tries}


class DoorLocationExhausted(GenerationError):
    kind = "door_location_exhausted"


class RoomPlacementExhausted(GenerationError):
    kind = "room_placement_exhausted"


__all__ = ["GenerationError", "DoorLocationExhausted", "RoomPlacementExhausted"]
