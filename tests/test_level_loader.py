import pytest

from crawler.dungeon import Tile, format_level, load_level, parse_level
from crawler.errors import FailureKind, LevelError

from tests.level_test_utils import assert_player_synced, grid_rows


def _kind_of(text, **kwargs):
    with pytest.raises(LevelError) as exc:
        parse_level(text, **kwargs)
    return exc.value.kind


def test_load_sample_dungeon(level_path):
    grid, player = load_level(level_path("dungeon.txt"))
    assert grid.size == (5, 7)
    assert player.position == (2, 3)
    assert player.treasure == 0
    assert_player_synced(grid, player)
    assert grid_rows(grid) == [
        "---+--?",
        "-M---$-",
        "---o---",
        "@+---M-",
        "---!---",
    ]


def test_start_cell_symbol_is_discarded():
    # 'X' would be invalid anywhere else; under the start position it is ignored.
    grid, player = parse_level("2 2 0 0 X - - !")
    assert grid.get(0, 0) is Tile.PLAYER
    assert grid.count(Tile.PLAYER) == 1


def test_start_cell_overrides_valid_symbol():
    grid, _player = parse_level("2 2 1 1 - - ? $")
    assert grid.get(1, 1) is Tile.PLAYER
    assert grid.count(Tile.TREASURE) == 0


def test_tiles_may_be_packed_without_spaces():
    packed, _ = parse_level("2 3\n0 0\n-$-\n?@M\n")
    spaced, _ = parse_level("2 3 0 0 - $ - ? @ M")
    assert packed == spaced


def test_exit_alone_is_enough():
    grid, _ = parse_level("1 2 0 0 - !")
    assert grid.count(Tile.EXIT) == 1


def test_door_alone_is_enough():
    grid, _ = parse_level("2 1 1 0 ? -")
    assert grid.count(Tile.DOOR) == 1


def test_missing_file_is_io_failure(tmp_path):
    with pytest.raises(LevelError) as exc:
        load_level(tmp_path / "nope.txt")
    assert exc.value.kind is FailureKind.IO_FAILURE
    assert exc.value.source.endswith("nope.txt")


def test_directory_is_io_failure(tmp_path):
    with pytest.raises(LevelError) as exc:
        load_level(tmp_path)
    assert exc.value.kind is FailureKind.IO_FAILURE


@pytest.mark.parametrize("text", ["", "   \n", "three 3 0 0 - !", "3", "3 x 0 0"])
def test_bad_dimensions_are_malformed_header(text):
    assert _kind_of(text) is FailureKind.MALFORMED_HEADER


@pytest.mark.parametrize("text", ["2 2", "2 2 1", "2 2 a 0 - - - !", "2 2 0 b - - - !"])
def test_bad_start_is_malformed_header(text):
    assert _kind_of(text) is FailureKind.MALFORMED_HEADER


def test_overlong_header_number_is_malformed():
    assert _kind_of("9" * 5000 + " 2 0 0 - !") is FailureKind.MALFORMED_HEADER


def test_overlong_column_count_in_file(level_file):
    path = level_file("2 " + "1" * 5000 + "\n0 0\n- !\n")
    with pytest.raises(LevelError) as exc:
        load_level(path)
    assert exc.value.kind is FailureKind.MALFORMED_HEADER
    assert exc.value.source == str(path)


@pytest.mark.parametrize("text", ["2147483648 2 0 0 - - - !", "2 2 0 -2147483649 - - - !"])
def test_header_outside_int32_is_malformed(text):
    assert _kind_of(text) is FailureKind.MALFORMED_HEADER


@pytest.mark.parametrize("text", ["２ ２ 0 0 - - - !", "2 2 ١ 0 - - - !"])
def test_non_ascii_digits_are_malformed(text):
    assert _kind_of(text) is FailureKind.MALFORMED_HEADER


@pytest.mark.parametrize("text", ["1 1 0 0 .", "1 1 0 0 !", "0 5 0 0", "-2 -2 0 0 - - - !", "1 0"])
def test_degenerate_levels(text):
    assert _kind_of(text) is FailureKind.DEGENERATE_LEVEL


def test_oversized_level_is_allocation_overflow():
    assert _kind_of("10 10 0 0", limit=50) is FailureKind.ALLOCATION_OVERFLOW


@pytest.mark.parametrize("start", ["2 0", "0 2", "-1 0", "0 -1", "5 5"])
def test_start_outside_grid(start):
    with pytest.raises(LevelError) as exc:
        parse_level(f"2 2 {start} - - - !")
    assert exc.value.kind is FailureKind.OUT_OF_BOUNDS


def test_invalid_tile_reports_position(level_path):
    with pytest.raises(LevelError) as exc:
        load_level(level_path("bad_tile.txt"))
    assert exc.value.kind is FailureKind.INVALID_TILE
    assert (exc.value.row, exc.value.col) == (1, 2)


def test_player_symbol_is_not_accepted_from_source():
    assert _kind_of("2 2 0 0 - o - !") is FailureKind.INVALID_TILE


def test_too_few_tiles_is_exhausted_input():
    with pytest.raises(LevelError) as exc:
        parse_level("2 3 0 0 - - ! -")
    assert exc.value.kind is FailureKind.EXHAUSTED_INPUT
    assert (exc.value.row, exc.value.col) == (1, 1)


@pytest.mark.parametrize("tail", ["-", "!", "7", "extra words"])
def test_trailing_data(tail):
    assert _kind_of(f"2 2 0 0 - - - ! {tail}") is FailureKind.TRAILING_DATA


def test_trailing_whitespace_is_fine():
    grid, _ = parse_level("2 2 0 0 - - - !\n\n   \n")
    assert grid.size == (2, 2)


def test_level_without_door_or_exit(level_path):
    with pytest.raises(LevelError) as exc:
        load_level(level_path("no_exit.txt"))
    assert exc.value.kind is FailureKind.MISSING_EXIT_OR_DOOR


def test_only_exit_under_start_does_not_count():
    # The exit symbol under the start cell is replaced by the player.
    assert _kind_of("1 2 0 0 ! -") is FailureKind.MISSING_EXIT_OR_DOOR


def test_error_to_dict_includes_location():
    with pytest.raises(LevelError) as exc:
        parse_level("2 2 0 0 - Z - !", source="inline")
    assert exc.value.to_dict() == {
        "kind": "invalid_tile",
        "error": "invalid tile 'Z' at (0, 1)",
        "source": "inline",
        "row": 0,
        "col": 1,
    }


def test_format_level_round_trip(level_path):
    grid, player = load_level(level_path("dungeon.txt"))
    text = format_level(grid, player)
    assert text.splitlines()[:3] == ["5 7", "2 3", "- - - + - - ?"]
    again, again_player = parse_level(text)
    assert again == grid
    assert again_player == player


def test_loading_logs_outcome(level_path, capsys, monkeypatch):
    from crawler import logging_utils

    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    load_level(level_path("dungeon.txt"))
    with pytest.raises(LevelError):
        load_level(level_path("no_exit.txt"))
    out = capsys.readouterr().out
    assert "event=level_loaded" in out
    assert "event=level_rejected" in out
    assert "kind=missing_exit_or_door" in out
