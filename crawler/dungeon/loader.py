"""Level file loader.

Format (whitespace separated):

    rows cols
    start_row start_col
    <rows * cols tile characters, row-major>

Header values are 32-bit integers written in ASCII digits. Tiles are read one
non-whitespace character at a time, so ``- $ -`` and ``-$-`` describe the same
row. The cell at the start position is always stored as PLAYER and its source
character is ignored.

Validation happens in file order and the first problem wins; each problem has
its own :class:`~crawler.errors.FailureKind`. A grid allocated during a failed
parse is released before the error propagates, so callers only ever receive a
complete, valid level.
"""

from __future__ import annotations

import os
import re
from typing import Optional, Tuple, Union

from ..errors import FailureKind, GridError, LevelError
from ..logging_utils import get_logger
from ..models import Player
from .grid import CELL_LIMIT, Grid, allocate, check_dimensions, deallocate
from .tiles import LEVEL_TILES, Tile

PathLike = Union[str, "os.PathLike[str]"]

_INT_RE = re.compile(r"[+-]?[0-9]+")
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

log = get_logger("crawler.loader")


class _Scanner:
    """Cursor over level text reading integers and single tile characters."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def _skip_ws(self) -> None:
        n = len(self.text)
        while self.pos < n and self.text[self.pos].isspace():
            self.pos += 1

    def read_int(self) -> Optional[int]:
        self._skip_ws()
        m = _INT_RE.match(self.text, self.pos)
        if not m:
            return None
        self.pos = m.end()
        return int(m.group())

    def read_char(self) -> Optional[str]:
        self._skip_ws()
        if self.pos >= len(self.text):
            return None
        ch = self.text[self.pos]
        self.pos += 1
        return ch

    def at_end(self) -> bool:
        self._skip_ws()
        return self.pos >= len(self.text)


def _header_value(scanner: _Scanner, what: str, source: Optional[str]) -> int:
    try:
        value = scanner.read_int()
    except ValueError as exc:
        # int() refuses digit strings past the interpreter's conversion limit
        raise LevelError(FailureKind.MALFORMED_HEADER, f"{what} is too long", source=source) from exc
    if value is None:
        raise LevelError(FailureKind.MALFORMED_HEADER, f"missing or non-numeric {what}", source=source)
    if not INT32_MIN <= value <= INT32_MAX:
        raise LevelError(FailureKind.MALFORMED_HEADER, f"{what} {value} does not fit in 32 bits", source=source)
    return value


def parse_level(text: str, *, source: Optional[str] = None, limit: int = CELL_LIMIT) -> Tuple[Grid, Player]:
    """Parse level text into ``(grid, player)``; raises LevelError on any problem."""
    scanner = _Scanner(text)
    rows = _header_value(scanner, "row count", source)
    cols = _header_value(scanner, "column count", source)
    if rows <= 0 or cols <= 0 or rows * cols <= 1:
        raise LevelError(FailureKind.DEGENERATE_LEVEL, f"{rows}x{cols} level has too few cells", source=source)
    try:
        check_dimensions(rows, cols, limit=limit)
    except GridError as exc:
        raise LevelError(exc.kind, exc.message, source=source) from exc

    start_row = _header_value(scanner, "start row", source)
    start_col = _header_value(scanner, "start column", source)
    if not (0 <= start_row < rows and 0 <= start_col < cols):
        raise LevelError(
            FailureKind.OUT_OF_BOUNDS,
            f"start ({start_row}, {start_col}) outside {rows}x{cols} level",
            source=source,
            row=start_row,
            col=start_col,
        )

    grid = allocate(rows, cols, limit=limit)
    try:
        _fill_tiles(scanner, grid, start_row, start_col, source)
        if not scanner.at_end():
            raise LevelError(FailureKind.TRAILING_DATA, "unexpected data after the last tile", source=source)
        if grid.count(Tile.DOOR) == 0 and grid.count(Tile.EXIT) == 0:
            raise LevelError(FailureKind.MISSING_EXIT_OR_DOOR, "level has neither a door nor an exit", source=source)
    except LevelError:
        deallocate(grid)
        raise
    return grid, Player(start_row, start_col)


def _fill_tiles(scanner: _Scanner, grid: Grid, start_row: int, start_col: int, source: Optional[str]) -> None:
    for row in range(grid.rows):
        for col in range(grid.cols):
            ch = scanner.read_char()
            if ch is None:
                raise LevelError(
                    FailureKind.EXHAUSTED_INPUT,
                    f"expected {grid.rows * grid.cols} tiles, input ended at ({row}, {col})",
                    source=source,
                    row=row,
                    col=col,
                )
            if row == start_row and col == start_col:
                grid.set(row, col, Tile.PLAYER)
                continue
            tile = Tile.from_symbol(ch)
            if tile not in LEVEL_TILES:
                raise LevelError(
                    FailureKind.INVALID_TILE,
                    f"invalid tile {ch!r} at ({row}, {col})",
                    source=source,
                    row=row,
                    col=col,
                )
            grid.set(row, col, tile)


def load_level(path: PathLike, *, limit: int = CELL_LIMIT) -> Tuple[Grid, Player]:
    """Load a level file from ``path``.

    Raises LevelError with ``kind`` IO_FAILURE when the file cannot be read,
    otherwise whatever :func:`parse_level` raises.
    """
    source = os.fspath(path)
    try:
        with open(source, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        log.info(event="level_rejected", source=source, kind=FailureKind.IO_FAILURE.value)
        raise LevelError(FailureKind.IO_FAILURE, f"cannot read level: {exc}", source=source) from exc
    try:
        grid, player = parse_level(text, source=source, limit=limit)
    except LevelError as exc:
        log.info(event="level_rejected", source=source, kind=exc.kind.value, row=exc.row, col=exc.col)
        raise
    log.info(event="level_loaded", source=source, rows=grid.rows, cols=grid.cols, start=f"{player.row},{player.col}")
    return grid, player


def format_level(grid: Grid, player: Player) -> str:
    """Serialize ``grid`` back into level text.

    The player's cell is written as OPEN since the header already records the
    start position; ``parse_level(format_level(g, p))`` reproduces ``g``.
    """
    lines = [f"{grid.rows} {grid.cols}", f"{player.row} {player.col}"]
    for row in grid.rows_iter():
        lines.append(" ".join(Tile.OPEN.value if t is Tile.PLAYER else t.value for t in row))
    return "\n".join(lines) + "\n"


__all__ = ["format_level", "load_level", "parse_level"]
