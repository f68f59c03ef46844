"""Structured key=value logging for the level generator.

Records go through print() as ``level=... ts=... logger=... event=...``
pairs, or as one JSON object per line when DELVE_LOG_JSON is set. Error
records go to stderr, everything else to stdout.

Usage:
    from .logging_utils import get_logger
    log = get_logger("delve.levelgen")
    log.info(event="level_generated", environment="cavern", attempts=3)

Values of None are dropped; spaces in string values become underscores so a
line always splits cleanly on whitespace. Reserved keys: level, ts.

DELVE_LOG_LEVEL and DELVE_LOG_JSON are read on every call so they can be
changed while the process runs (tests rely on this).
"""

from __future__ import annotations

import json
import os
import sys
import time
from typing import Dict

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_TRUE = ("1", "true", "TRUE", "yes", "on")


def current_level() -> int:
    return LEVELS.get(os.getenv("DELVE_LOG_LEVEL", "info").lower(), 20)


def json_mode() -> bool:
    return os.getenv("DELVE_LOG_JSON", "0") in _TRUE


def _format(level: str, **fields) -> str:
    if json_mode():
        rec = {k: (v if isinstance(v, (int, float, bool, str)) else str(v)) for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        return json.dumps(rec, separators=(",", ":"))
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            s = str(v).replace(" ", "_")
            parts.append(f"{k}={s}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "delve"

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < current_level():
            return
        fields.setdefault("logger", self.name)
        print(_format(lvl, **fields), file=sys.stdout if lvl != "error" else sys.stderr)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE: Dict[str, _Logger] = {}


def get_logger(name: str) -> _Logger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("delve")
