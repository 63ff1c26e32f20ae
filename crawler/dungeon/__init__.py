"""Public dungeon package interface: tile alphabet, grid container, level loader."""

from .grid import CELL_LIMIT, Grid, allocate, check_dimensions, deallocate, resize  # noqa: F401
from .loader import format_level, load_level, parse_level  # noqa: F401
from .tiles import BLOCKING, LEVEL_TILES, Tile, tile_name  # noqa: F401

__all__ = [
    "BLOCKING",
    "CELL_LIMIT",
    "Grid",
    "LEVEL_TILES",
    "Tile",
    "allocate",
    "check_dimensions",
    "deallocate",
    "format_level",
    "load_level",
    "parse_level",
    "resize",
    "tile_name",
]
