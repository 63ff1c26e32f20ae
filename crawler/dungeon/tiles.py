# Tile alphabet centralized for modular imports
from __future__ import annotations

from enum import Enum
from typing import Optional


class Tile(str, Enum):
    OPEN = "-"
    PLAYER = "o"
    TREASURE = "$"
    AMULET = "@"
    MONSTER = "M"
    PILLAR = "+"
    DOOR = "?"
    EXIT = "!"

    @classmethod
    def from_symbol(cls, ch: str) -> Optional["Tile"]:
        try:
            return cls(ch)
        except ValueError:
            return None


# Tiles a level file may contain; the player cell comes from the header instead.
LEVEL_TILES = frozenset(t for t in Tile if t is not Tile.PLAYER)

# Tiles the player can never step onto, whatever else the cell means.
BLOCKING = frozenset({Tile.PILLAR, Tile.MONSTER})


def tile_name(tile: Tile) -> str:
    return tile.name.lower()


__all__ = ["Tile", "LEVEL_TILES", "BLOCKING", "tile_name"]
