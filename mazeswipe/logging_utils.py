"""Minimal structured logging helper.

Emits key=value pairs (or one JSON object per line) with a timestamp and
level. Game events are logged through this helper; the server process
additionally configures stdlib logging for Flask/Socket.IO output.

Usage:
    from mazeswipe.logging_utils import get_logger
    log = get_logger("mazeswipe.round")
    log.info(event="round_started", round_id=3)

Non-numeric values are str()'d with spaces replaced. Reserved keys: level, ts.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("MAZESWIPE_LOG_LEVEL", "info").lower(), 20)
JSON_MODE = os.getenv("MAZESWIPE_LOG_JSON", "0") in ("1", "true", "TRUE", "yes", "on")


def set_level(level: str) -> None:
    global CURRENT_LEVEL
    if level.lower() not in LEVELS:
        raise ValueError(f"unknown log level {level!r}")
    CURRENT_LEVEL = LEVELS[level.lower()]


def set_json_mode(enabled: bool) -> None:
    global JSON_MODE
    JSON_MODE = bool(enabled)


def _format(level: str, **fields):
    if JSON_MODE:
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        return json.dumps(rec, separators=(",", ":"), default=str)
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            parts.append(f"{k}={v}")
        else:
            s = str(v).replace(" ", "")
            parts.append(f"{k}={s}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "mazeswipe"

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < CURRENT_LEVEL:
            return
        if "logger" not in fields:
            fields["logger"] = self.name
        print(_format(lvl, **fields), file=sys.stdout if lvl != "error" else sys.stderr)

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


log = get_logger("mazeswipe")
