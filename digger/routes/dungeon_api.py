"""
project: Digger
module: dungeon_api.py
License: MIT

Dungeon generation API routes.

Endpoints dig a linear dungeon for a seed and return it as JSON or plain
text. Generation failures map to HTTP 422 with the failure kind.
"""

import hashlib
import random
import re
import threading

from flask import Blueprint, Response, current_app, jsonify, request

from digger.dungeon import DungeonConfig, GenerationError, dig_dungeon
from digger.dungeon.tiles import DOOR, EMPTY, FLOOR, LOCKED_DOOR, WALL, char_to_type
from digger.logging_utils import get_logger

log = get_logger("digger.api")

bp_dungeon = Blueprint("dungeon", __name__)

SEED_MAX = 2**31 - 1
_INT_SEED = re.compile(r"-?[0-9]+")

# Simple in-process cache (seed, rooms, extent, stop flag) -> DigResult, bounded by insertion order.
_dig_cache = {}
_dig_cache_lock = threading.Lock()
_DIG_CACHE_MAX = 8


def _coerce_seed(raw):
    """Convert a provided seed (int-like or arbitrary string) into a bounded int."""
    if raw is None:
        return random.randint(1, 1_000_000)
    s = str(raw).strip()
    if not s:
        return random.randint(1, 1_000_000)
    if _INT_SEED.fullmatch(s):
        return int(s) % SEED_MAX
    h = hashlib.sha256(s.encode("utf-8")).digest()
    return int.from_bytes(h[:8], "big") % SEED_MAX


def _requested_rooms():
    raw = request.args.get("rooms")
    if raw is None or raw == "":
        return current_app.config["DIGGER_DEFAULT_ROOMS"]
    rooms = int(raw)  # ValueError handled by caller
    if not 1 <= rooms <= current_app.config["DIGGER_MAX_ROOMS"]:
        raise ValueError(f"rooms must be between 1 and {current_app.config['DIGGER_MAX_ROOMS']}")
    return rooms


def get_cached_dig(seed: int, rooms: int):
    cfg = current_app.config
    config = DungeonConfig(
        rooms=rooms,
        seed=seed,
        extent=cfg["DIGGER_EXTENT"],
        stop_on_exhaustion=cfg["DIGGER_STOP_ON_EXHAUSTION"],
    )
    if cfg.get("DIGGER_DISABLE_CACHE"):
        return dig_dungeon(config)
    key = (seed, rooms, config.extent, config.stop_on_exhaustion)
    with _dig_cache_lock:
        result = _dig_cache.get(key)
    if result is not None:
        return result
    result = dig_dungeon(config)
    with _dig_cache_lock:
        _dig_cache[key] = result
        if len(_dig_cache) > _DIG_CACHE_MAX:
            first_key = next(iter(_dig_cache.keys()))
            if first_key != key:
                _dig_cache.pop(first_key, None)
    return result


def _dig_from_request():
    """Return (result, None) or (None, error_response)."""
    try:
        rooms = _requested_rooms()
    except ValueError as exc:
        return None, (jsonify({"error": str(exc)}), 400)
    seed = _coerce_seed(request.args.get("seed"))
    try:
        return get_cached_dig(seed, rooms), None
    except GenerationError as exc:
        log.warn(event="api_generation_failed", seed=seed, rooms=rooms, kind=exc.kind)
        payload = exc.to_dict()
        payload["seed"] = seed
        return None, (jsonify(payload), 422)


@bp_dungeon.route("/api/dungeon/generate")
def generate():
    """
    Dig a dungeon.
    Query: seed (int or string, optional), rooms (int, optional)
    Response: { seed, rooms: [{row,col,height,width}], origin, grid, counts, metrics }
    """
    result, error = _dig_from_request()
    if error is not None:
        return error
    return jsonify(result.to_dict())


@bp_dungeon.route("/api/dungeon/ascii")
def ascii_map():
    result, error = _dig_from_request()
    if error is not None:
        return error
    return Response(result.dungeon.render() + "\n", mimetype="text/plain")


@bp_dungeon.route("/api/dungeon/legend")
def legend():
    chars = (FLOOR, WALL, DOOR, LOCKED_DOOR, EMPTY)
    return jsonify({ch: char_to_type(ch) for ch in chars})


@bp_dungeon.route("/api/dungeon/config")
def dungeon_config():
    defaults = DungeonConfig(extent=current_app.config["DIGGER_EXTENT"])
    return jsonify(
        {
            "rooms": current_app.config["DIGGER_DEFAULT_ROOMS"],
            "max_rooms": current_app.config["DIGGER_MAX_ROOMS"],
            "extent": defaults.extent,
            "room_height": [defaults.min_room_height, defaults.max_room_height],
            "room_width": [defaults.min_room_width, defaults.max_room_width],
            "corridor_length": [defaults.min_corridor_length, defaults.max_corridor_length],
            "max_room_tries": defaults.max_room_tries,
            "max_door_tries": defaults.max_door_tries,
        }
    )
