"""
project: Dungeon Crawl
module: __init__.py
License: MIT

Core simulation logic for a grid-based dungeon crawler.

The package is split the same way the game loop consumes it:

- ``crawler.dungeon``   tile alphabet, grid container, level loader
- ``crawler.models``    player state
- ``crawler.services``  movement resolution and monster AI

Rendering and the input loop live outside this package; ``run.py`` only
provides an inspection CLI for level files.
"""

from .dungeon import Grid, Tile, allocate, deallocate, load_level, parse_level, resize  # noqa: F401
from .errors import CrawlerError, FailureKind, GridError, LevelError  # noqa: F401
from .models import Player  # noqa: F401
from .services import Outcome, map_direction, monster_turn, move  # noqa: F401

__version__ = "0.2.0"

__all__ = [
    "CrawlerError",
    "FailureKind",
    "Grid",
    "GridError",
    "LevelError",
    "Outcome",
    "Player",
    "Tile",
    "allocate",
    "deallocate",
    "load_level",
    "map_direction",
    "monster_turn",
    "move",
    "parse_level",
    "resize",
]
