import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from crawler import logging_utils  # noqa: E402
from crawler.dungeon import parse_level  # noqa: E402

LEVELS_DIR = os.path.join(os.path.dirname(__file__), "levels")

CRAWLER_ENV = ("CRAWLER_CELL_LIMIT", "CRAWLER_LOG_LEVEL", "CRAWLER_LOG_JSON", "CRAWLER_COLOR")


@pytest.fixture(autouse=True)
def _isolate_logging_and_env(monkeypatch):
    """Keep CLI/config tests from leaking log thresholds or CRAWLER_* settings."""
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["warn"])
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    for key in CRAWLER_ENV:
        monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture()
def level_file(tmp_path):
    """Return a writer: level_file(text, name="level.txt") -> path of the written file."""

    def _write(text, name="level.txt"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture()
def level_path():
    def _path(name):
        return os.path.join(LEVELS_DIR, name)

    return _path


@pytest.fixture()
def make_level():
    """Parse a level from header values plus row strings: make_level(1, 1, "---", "-o-", "--!")."""

    def _make(start_row, start_col, *rows):
        text = f"{len(rows)} {len(rows[0])}\n{start_row} {start_col}\n" + "\n".join(rows) + "\n"
        return parse_level(text)

    return _make
