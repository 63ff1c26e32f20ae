"""Grid container for the dungeon field.

Cells live in one flat row-major list (``cells[row * cols + col]``) rather
than a list of row lists, so a resize is a single allocation and an empty grid
is just ``rows == cols == 0`` with no storage.

Lifecycle:
    grid = allocate(rows, cols)      # every cell OPEN
    grid = resize(grid)              # old grid is always released
    deallocate(grid)                 # idempotent

Dimension checks use a 32-bit signed cell limit (``CELL_LIMIT``) so a level
that loads can always be written back out by tools that store the cell count
in an ``int32``. Callers may pass a smaller ``limit`` to cap growth.
"""

from __future__ import annotations

from typing import Iterator, List, Tuple

from ..errors import FailureKind, GridError
from ..logging_utils import get_logger
from .tiles import Tile

CELL_LIMIT = 2**31 - 1

Coord = Tuple[int, int]

log = get_logger("crawler.grid")


class Grid:
    __slots__ = ("rows", "cols", "_cells")

    def __init__(self, rows: int, cols: int, cells: List[Tile]):
        if len(cells) != rows * cols:
            raise ValueError(f"expected {rows * cols} cells, got {len(cells)}")
        self.rows = rows
        self.cols = cols
        self._cells = cells

    def __repr__(self):
        return f"Grid(rows={self.rows}, cols={self.cols})"

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return self.rows == other.rows and self.cols == other.cols and self._cells == other._cells

    @property
    def size(self) -> Coord:
        return (self.rows, self.cols)

    def is_empty(self) -> bool:
        return not self._cells

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _index(self, row: int, col: int) -> int:
        if not self.in_bounds(row, col):
            raise IndexError(f"cell ({row}, {col}) outside {self.rows}x{self.cols} grid")
        return row * self.cols + col

    def get(self, row: int, col: int) -> Tile:
        return self._cells[self._index(row, col)]

    def set(self, row: int, col: int, tile: Tile) -> None:
        self._cells[self._index(row, col)] = tile

    def count(self, tile: Tile) -> int:
        return self._cells.count(tile)

    def find(self, tile: Tile) -> Iterator[Coord]:
        for idx, t in enumerate(self._cells):
            if t is tile:
                yield divmod(idx, self.cols)

    def rows_iter(self) -> Iterator[Tuple[Tile, ...]]:
        for r in range(self.rows):
            start = r * self.cols
            yield tuple(self._cells[start : start + self.cols])

    def copy(self) -> "Grid":
        return Grid(self.rows, self.cols, list(self._cells))


def check_dimensions(rows: int, cols: int, *, limit: int = CELL_LIMIT) -> None:
    """Raise GridError unless a rows x cols grid fits within ``limit`` cells."""
    if rows <= 0 or cols <= 0:
        raise GridError(FailureKind.INVALID_DIMENSIONS, f"grid dimensions must be positive, got {rows}x{cols}")
    if rows > limit // cols or cols > limit // rows:
        raise GridError(FailureKind.ALLOCATION_OVERFLOW, f"{rows}x{cols} grid exceeds the {limit} cell limit")


def allocate(rows: int, cols: int, *, limit: int = CELL_LIMIT) -> Grid:
    check_dimensions(rows, cols, limit=limit)
    return Grid(rows, cols, [Tile.OPEN] * (rows * cols))


def deallocate(grid: Grid) -> None:
    grid._cells = []
    grid.rows = 0
    grid.cols = 0


def resize(grid: Grid, *, limit: int = CELL_LIMIT) -> Grid:
    """Return a grid twice as tall and twice as wide, tiled 2x2 from ``grid``.

    The top-left quadrant is the original; the other three are copies with the
    player replaced by OPEN so only one PLAYER tile survives. ``grid`` is
    released whether or not the resize succeeds.
    """
    rows, cols = grid.rows, grid.cols
    try:
        if grid.is_empty():
            raise GridError(FailureKind.INVALID_DIMENSIONS, "cannot resize an empty grid")
        new_grid = allocate(rows * 2, cols * 2, limit=limit)
    except GridError as exc:
        deallocate(grid)
        log.info(event="grid_resize_failed", rows=rows, cols=cols, kind=exc.kind.value)
        raise

    width = new_grid.cols
    for r, row in enumerate(grid.rows_iter()):
        copy = [Tile.OPEN if t is Tile.PLAYER else t for t in row]
        top = r * width
        new_grid._cells[top : top + width] = list(row) + copy
        bottom = (r + rows) * width
        new_grid._cells[bottom : bottom + width] = copy + copy

    deallocate(grid)
    log.debug(event="grid_resized", rows=new_grid.rows, cols=new_grid.cols)
    return new_grid


__all__ = ["CELL_LIMIT", "Grid", "allocate", "check_dimensions", "deallocate", "resize"]
