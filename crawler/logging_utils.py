"""Minimal structured logging helper.

Emits one key=value line per event with a timestamp and level, or one JSON
object per line when JSON mode is on. Levels below the current threshold are
dropped; ``error`` goes to stderr, everything else to stdout.

Usage:
    from crawler.logging_utils import get_logger
    log = get_logger("crawler.loader")
    log.info(event="level_loaded", rows=5, cols=7)

Environment:
    CRAWLER_LOG_LEVEL   debug | info | warn | error   (default: warn)
    CRAWLER_LOG_JSON    1/true/yes/on to emit JSON lines

Reserved keys: level, ts, logger.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
TRUTHY = ("1", "true", "TRUE", "yes", "on")

CURRENT_LEVEL = LEVELS.get(os.getenv("CRAWLER_LOG_LEVEL", "warn"), 30)
JSON_MODE = os.getenv("CRAWLER_LOG_JSON", "0") in TRUTHY


def configure(level: str | None = None, json_mode: bool | None = None) -> None:
    """Override the threshold / output mode picked up from the environment."""
    global CURRENT_LEVEL, JSON_MODE
    if level is not None:
        if level not in LEVELS:
            raise ValueError(f"unknown log level {level!r}; expected one of {', '.join(LEVELS)}")
        CURRENT_LEVEL = LEVELS[level]
    if json_mode is not None:
        JSON_MODE = bool(json_mode)


def _format(level: str, **fields) -> str:
    if JSON_MODE:
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        return json.dumps(rec, separators=(",", ":"), default=str)
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
        self.name = name or "crawler"

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < CURRENT_LEVEL:
            return
        fields.setdefault("logger", self.name)
        print(_format(lvl, **fields), file=sys.stderr if lvl == "error" else sys.stdout)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str) -> _Logger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]
