"""Failure taxonomy for level loading and grid management.

Every failure carries a ``kind`` (a :class:`FailureKind`) and a human readable
message so callers can branch on the kind and still show something useful:

    try:
        grid, player = load_level(path)
    except LevelError as exc:
        print(exc.kind.value, exc.message)

Movement and monster turns never raise; blocked moves are ordinary outcomes.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class FailureKind(Enum):
    IO_FAILURE = "io_failure"
    MALFORMED_HEADER = "malformed_header"
    DEGENERATE_LEVEL = "degenerate_level"
    OUT_OF_BOUNDS = "out_of_bounds"
    INVALID_TILE = "invalid_tile"
    TRAILING_DATA = "trailing_data"
    MISSING_EXIT_OR_DOOR = "missing_exit_or_door"
    ALLOCATION_OVERFLOW = "allocation_overflow"
    EXHAUSTED_INPUT = "exhausted_input"
    INVALID_DIMENSIONS = "invalid_dimensions"


class CrawlerError(Exception):
    def __init__(self, kind: FailureKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def to_dict(self):
        return {"kind": self.kind.value, "error": self.message}


class GridError(CrawlerError):
    """Raised by allocate / resize when dimensions are unusable."""


class LevelError(CrawlerError):
    """Raised by the level loader; ``row``/``col`` locate the offending tile when known."""

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        *,
        source: Optional[str] = None,
        row: Optional[int] = None,
        col: Optional[int] = None,
    ):
        super().__init__(kind, message)
        self.source = source
        self.row = row
        self.col = col

    def to_dict(self):
        out = super().to_dict()
        for key in ("source", "row", "col"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        return out


__all__ = ["FailureKind", "CrawlerError", "GridError", "LevelError"]
