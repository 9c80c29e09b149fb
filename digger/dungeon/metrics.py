from typing import Dict


def init_metrics() -> Dict[str, int | float | str | None]:
    return {
        'rooms_placed': 0,
        'corridors_created': 0,
        'doors_created': 0,
        'room_tries': 0,
        'door_draws': 0,
        'rejected_corridors': 0,
        'rejected_rooms': 0,
        'aborted': None,
        'runtime_ms': 0.0,
    }
