"""Runtime configuration sourced from environment variables.

A ``.env`` file is loaded first (python-dotenv), searched for from the current
working directory upwards, so settings can be kept next to a level collection
without exporting shell variables. Existing environment variables win over the
file.

    CRAWLER_CELL_LIMIT   max cells a grid may hold (default: 2**31 - 1)
    CRAWLER_LOG_LEVEL    debug | info | warn | error (default: warn)
    CRAWLER_LOG_JSON     emit JSON log lines when truthy
    CRAWLER_COLOR        colourize CLI output when truthy (default: 1)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .dungeon.grid import CELL_LIMIT
from .logging_utils import LEVELS, TRUTHY


@dataclass
class CrawlerConfig:
    cell_limit: int = CELL_LIMIT
    log_level: str = "warn"
    log_json: bool = False
    color: bool = True

    def __post_init__(self):
        if self.cell_limit < 2:
            raise ValueError(f"cell_limit must be at least 2, got {self.cell_limit}")
        if self.log_level not in LEVELS:
            raise ValueError(f"unknown log level {self.log_level!r}")

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "CrawlerConfig":
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv(find_dotenv(usecwd=True))
        raw_limit = os.getenv("CRAWLER_CELL_LIMIT")
        try:
            cell_limit = int(raw_limit) if raw_limit else CELL_LIMIT
        except ValueError as exc:
            raise ValueError(f"CRAWLER_CELL_LIMIT must be an integer, got {raw_limit!r}") from exc
        return cls(
            cell_limit=cell_limit,
            log_level=os.getenv("CRAWLER_LOG_LEVEL", "warn").lower(),
            log_json=os.getenv("CRAWLER_LOG_JSON", "0") in TRUTHY,
            color=os.getenv("CRAWLER_COLOR", "1") in TRUTHY,
        )


__all__ = ["CrawlerConfig"]
