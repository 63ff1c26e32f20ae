"""Monster line-of-sight chase.

Each turn the four cardinal rays leaving the player's cell are scanned
outward in the order up, down, right, left:

 - A PILLAR ends the ray; nothing beyond it sees the player.
 - Every MONSTER met before a pillar steps one cell toward the player (its cell
   becomes OPEN, the nearer cell becomes MONSTER) and the scan carries on, so a
   line of monsters shuffles forward together in one turn.
 - A monster that starts next to the player steps onto the player's cell and
   the player is captured.

Rays only touch their own cells, so the order does not change the result; all
four are processed even after a capture.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Tuple

from ..dungeon.grid import Grid
from ..dungeon.tiles import Tile
from ..models import Player

Coord = Tuple[int, int]

RAYS = (
    ("up", -1, 0),
    ("down", 1, 0),
    ("right", 0, 1),
    ("left", 0, -1),
)


def _ray(grid: Grid, row: int, col: int, d_row: int, d_col: int) -> Iterator[Coord]:
    r, c = row + d_row, col + d_col
    while grid.in_bounds(r, c):
        yield r, c
        r += d_row
        c += d_col


def line_of_sight(grid: Grid, player: Player) -> Dict[str, List[Coord]]:
    """Cells visible from the player along each ray, up to the first pillar."""
    visible: Dict[str, List[Coord]] = {}
    for name, d_row, d_col in RAYS:
        cells: List[Coord] = []
        for r, c in _ray(grid, player.row, player.col, d_row, d_col):
            if grid.get(r, c) is Tile.PILLAR:
                break
            cells.append((r, c))
        visible[name] = cells
    return visible


def monster_turn(grid: Grid, player: Player) -> bool:
    """Advance every monster in sight one step; True if one reached the player."""
    captured = False
    for _name, d_row, d_col in RAYS:
        for distance, (r, c) in enumerate(_ray(grid, player.row, player.col, d_row, d_col), start=1):
            tile = grid.get(r, c)
            if tile is Tile.PILLAR:
                break
            if tile is Tile.MONSTER:
                grid.set(r, c, Tile.OPEN)
                grid.set(r - d_row, c - d_col, Tile.MONSTER)
                if distance == 1:
                    captured = True
    return captured


__all__ = ["RAYS", "line_of_sight", "monster_turn"]
