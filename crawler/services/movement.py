"""Player movement: key to delta mapping and move resolution.

Rules for ``move`` are checked in order and the first match wins:

  1. target outside the grid              -> STAYED
  2. target is MONSTER or PILLAR          -> STAYED
  3. target is EXIT, no treasure yet      -> STAYED
  4. target is EXIT, treasure collected   -> move, ESCAPED
  5. target is DOOR                       -> move, LEFT_ROOM
  6. target is TREASURE                   -> treasure += 1, move, COLLECTED_TREASURE
  7. target is AMULET                     -> move, COLLECTED_AMULET
  8. target is OPEN                       -> move, MOVED

Anything else (the player's own cell) is STAYED. Every STAYED leaves grid and
player untouched.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Tuple

from ..dungeon.grid import Grid
from ..dungeon.tiles import BLOCKING, Tile
from ..models import Player

# Keyboard bindings
INPUT_QUIT = "q"
INPUT_STAY = "e"
MOVE_UP = "w"
MOVE_LEFT = "a"
MOVE_DOWN = "s"
MOVE_RIGHT = "d"

DELTAS = {
    MOVE_UP: (-1, 0),
    MOVE_DOWN: (1, 0),
    MOVE_LEFT: (0, -1),
    MOVE_RIGHT: (0, 1),
    INPUT_STAY: (0, 0),
}


class Outcome(IntEnum):
    STAYED = 0
    MOVED = 1
    COLLECTED_TREASURE = 2
    COLLECTED_AMULET = 3
    LEFT_ROOM = 4
    ESCAPED = 5


_STEP_OUTCOMES = {
    Tile.DOOR: Outcome.LEFT_ROOM,
    Tile.TREASURE: Outcome.COLLECTED_TREASURE,
    Tile.AMULET: Outcome.COLLECTED_AMULET,
    Tile.OPEN: Outcome.MOVED,
}


def map_direction(symbol: str) -> Tuple[int, int]:
    """Return the (d_row, d_col) for an input key; unknown keys do not move."""
    return DELTAS.get(symbol, (0, 0))


def is_quit(symbol: str) -> bool:
    return symbol == INPUT_QUIT


def next_position(player: Player, symbol: str) -> Tuple[int, int]:
    d_row, d_col = map_direction(symbol)
    return player.row + d_row, player.col + d_col


def _relocate(grid: Grid, player: Player, row: int, col: int) -> None:
    grid.set(player.row, player.col, Tile.OPEN)
    grid.set(row, col, Tile.PLAYER)
    player.row, player.col = row, col


def move(grid: Grid, player: Player, row: int, col: int) -> Outcome:
    if not grid.in_bounds(row, col):
        return Outcome.STAYED
    target = grid.get(row, col)
    if target in BLOCKING:
        return Outcome.STAYED
    if target is Tile.EXIT:
        if player.treasure == 0:
            return Outcome.STAYED
        _relocate(grid, player, row, col)
        return Outcome.ESCAPED
    outcome = _STEP_OUTCOMES.get(target)
    if outcome is None:
        return Outcome.STAYED
    if target is Tile.TREASURE:
        player.treasure += 1
    _relocate(grid, player, row, col)
    return outcome


__all__ = [
    "DELTAS",
    "INPUT_QUIT",
    "INPUT_STAY",
    "MOVE_DOWN",
    "MOVE_LEFT",
    "MOVE_RIGHT",
    "MOVE_UP",
    "Outcome",
    "is_quit",
    "map_direction",
    "move",
    "next_position",
]
