"""Minimal structured logging helper.

Every record is one line on stdout (stderr for errors): key=value pairs led
by level and timestamp, or a compact JSON object when LABYRINTH_LOG_JSON is
set. Generation retries, fallbacks, match outcomes and API submissions all
go through here so the output stays grep-able.

Usage:
    from labyrinth.logging_utils import get_logger
    log = get_logger("labyrinth.maze")
    log.info(event="maze_generated", seed=42, attempts=3)

    # fields repeated on every line of one match
    match_log = log.bind(seed=42)
    match_log.warn(event="slots_rejected")

None values are dropped, floats are rounded to 3 places and other values
are str()'d with spaces replaced. Reserved keys (level, ts) passed as
fields come out with a trailing underscore, e.g. ``level_=2``.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("LABYRINTH_LOG_LEVEL", "info").lower(), 20)
JSON_MODE = os.getenv("LABYRINTH_LOG_JSON", "0") in ("1", "true", "TRUE", "yes", "on")


def set_level(name: str) -> int:
    """Change the global threshold at runtime (CLI --log-level)."""
    global CURRENT_LEVEL
    key = name.lower()
    if key not in LEVELS:
        raise ValueError(f"unknown log level: {name}")
    CURRENT_LEVEL = LEVELS[key]
    return CURRENT_LEVEL


def _value(v):
    if isinstance(v, bool):
        return str(v).lower()
    if isinstance(v, float):
        return round(v, 3)
    if isinstance(v, int):
        return v
    return str(v).replace(" ", "_")


RESERVED = ("level", "ts")


def _format(lvl: str, **fields):
    ts = int(time.time())
    # caller fields never shadow the record header
    fields = {(f"{k}_" if k in RESERVED else k): v for k, v in fields.items() if v is not None}
    if JSON_MODE:
        rec = {"level": lvl, "ts": ts}
        rec.update(fields)
        try:
            return json.dumps(rec, separators=(",", ":"))
        except (TypeError, ValueError):
            return json.dumps({"level": lvl, "ts": ts, "error": "json_encode_failed"})
    parts = [f"level={lvl}", f"ts={ts}"]
    parts += [f"{k}={_value(v)}" for k, v in fields.items()]
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None, defaults: dict | None = None):
        self.name = name or "labyrinth"
        self.defaults = dict(defaults or {})

    def bind(self, **fields) -> "_Logger":
        """Child logger that adds ``fields`` to every record (call-site keys win)."""
        return _Logger(self.name, {**self.defaults, **fields})

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < CURRENT_LEVEL:
            return
        record = {**self.defaults, **fields}
        record.setdefault("logger", self.name)
        print(_format(lvl, **record), file=sys.stderr if lvl == "error" else sys.stdout)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str):
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("labyrinth")
