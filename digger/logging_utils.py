"""Structured logging for digging runs.

Each record is one line of key=value pairs (or one JSON object) carrying a
timestamp, the level and the logger name, so generation runs are easy to grep.

Usage:
    from digger.logging_utils import get_logger
    log = get_logger("digger.generator")
    log.info(event="room_placed", row=3, col=-2)

Environment:
    DIGGER_LOG_LEVEL   debug | info | warn | error (default: info)
    DIGGER_LOG_JSON    1/true/yes/on for JSON lines

debug and info go to stdout, warn and error to stderr. Commands that print
their result on stdout wrap the run in ``diverted(sys.stderr)`` so every
record lands on stderr instead. Values of None are dropped. Reserved keys:
level, ts.
"""

from __future__ import annotations

import json
import os
import sys
import time
from contextlib import contextmanager

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("DIGGER_LOG_LEVEL", "info").lower(), 20)
JSON_MODE = os.getenv("DIGGER_LOG_JSON", "0").lower() in ("1", "true", "yes", "on")

# Set by diverted(); None means pick the stream from the record's level.
_diverted_to = None


def _stream_for(level: str):
    if _diverted_to is not None:
        return _diverted_to
    return sys.stderr if LEVELS[level] >= LEVELS["warn"] else sys.stdout


@contextmanager
def diverted(stream):
    """Send every record to ``stream`` for the duration of the block."""
    global _diverted_to
    saved = _diverted_to
    _diverted_to = stream
    try:
        yield stream
    finally:
        _diverted_to = saved


def _text_value(value) -> str:
    if isinstance(value, (int, float)):
        return str(value)
    return str(value).replace(" ", "_")


def _format(level: str, fields: dict) -> str:
    present = {k: v for k, v in fields.items() if v is not None}
    ts = int(time.time())
    if JSON_MODE:
        return json.dumps({**present, "level": level, "ts": ts}, separators=(",", ":"), default=str)
    head = [f"level={level}", f"ts={ts}"]
    return " ".join(head + [f"{k}={_text_value(v)}" for k, v in present.items()])


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "digger"

    def enabled_for(self, level: str) -> bool:
        return LEVELS[level] >= CURRENT_LEVEL

    def log(self, level: str, **fields):
        if not self.enabled_for(level):
            return
        fields.setdefault("logger", self.name)
        print(_format(level, fields), file=_stream_for(level))

    def debug(self, **fields):
        self.log("debug", **fields)

    def info(self, **fields):
        self.log("info", **fields)

    def warn(self, **fields):
        self.log("warn", **fields)

    def error(self, **fields):
        self.log("error", **fields)


_LOGGER_CACHE: dict[str, _Logger] = {}


def get_logger(name: str) -> _Logger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("digger")
