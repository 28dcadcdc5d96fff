import copy

import pytest

from solong.mapfile import MapError, build_map
from solong.validation import (
    REACHED,
    copy_grid,
    flood_fill,
    validate_map,
    validate_track,
)

VALID = ["11111", "1P0C1", "100E1", "11111"]


def _snapshot(game_map):
    return copy.deepcopy(game_map.grid)


def test_valid_map_passes_and_is_unchanged():
    game_map = build_map(VALID)
    before = _snapshot(game_map)
    assert validate_map(game_map) is None
    assert validate_track(game_map) is None
    assert game_map.grid == before


def test_enemy_character_is_allowed():
    game_map = build_map(["111111", "1PM0C1", "1000E1", "111111"])
    before = _snapshot(game_map)
    assert validate_map(game_map) is None
    assert game_map.grid == before


def test_not_rectangular():
    with pytest.raises(MapError, match="Map is not rectangular"):
        validate_map(build_map(["11111", "1P0C1", "1E01", "11111"]))


def test_missing_wall():
    with pytest.raises(MapError, match="Map is not surrounded by wall"):
        validate_map(build_map(["11111", "1P0C0", "100E1", "11111"]))


def test_empty_first_line_is_not_walled():
    with pytest.raises(MapError, match="wall"):
        validate_map(build_map(["", ""]))


def test_invalid_character():
    with pytest.raises(MapError, match="Map contain invalid character"):
        validate_map(build_map(["11111", "1PZC1", "100E1", "11111"]))


@pytest.mark.parametrize(
    "lines",
    [
        ["11111", "1PPC1", "100E1", "11111"],
        ["11111", "1P0C1", "1E0E1", "11111"],
        ["11111", "1P001", "100E1", "11111"],
        ["11111", "100C1", "100E1", "11111"],
    ],
)
def test_invalid_element_counts(lines):
    with pytest.raises(MapError, match="Invalid number of the element"):
        validate_map(build_map(lines))


def test_copy_grid_is_independent():
    game_map = build_map(VALID)
    copied = copy_grid(game_map)
    assert copied == game_map.grid
    copied[1][1] = "0"
    assert game_map.cell(1, 1) == "P"


def test_flood_fill_marks_every_open_cell():
    game_map = build_map(VALID)
    filled = flood_fill(game_map)
    assert all(char in ("1", REACHED) for row in filled for char in row)
    assert filled[game_map.start.y][game_map.start.x] == REACHED
    assert game_map.cell(game_map.start.x, game_map.start.y) == "P"


def test_flood_fill_stops_at_walls():
    game_map = build_map(["111111", "1P1C01", "111111"])
    filled = flood_fill(game_map)
    assert filled[1][3] == "C"
    assert filled[1][4] == "0"
    assert sum(row.count(REACHED) for row in filled) == 1


def test_flood_fill_without_start():
    with pytest.raises(MapError):
        flood_fill(build_map(["111", "101", "111"]))


def test_unreachable_collectible():
    game_map = build_map(["111111", "1P1CE1", "111111"])
    validate_map(game_map)
    with pytest.raises(MapError, match="Some collectible are not accessible"):
        validate_track(game_map)


def test_unreachable_exit():
    game_map = build_map(["1111111", "1PC1E01", "1111111"])
    validate_map(game_map)
    with pytest.raises(MapError, match="Exit is not accessible"):
        validate_track(game_map)


def test_fill_passes_through_exit():
    game_map = build_map(["1111111", "1PE0C01", "1111111"])
    filled = flood_fill(game_map)
    assert filled[1][4] == REACHED
    assert validate_track(game_map) is None
    assert game_map.cell(4, 1) == "C"