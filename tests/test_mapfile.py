import pytest

from solong.mapfile import (
    GameMap,
    MapError,
    Position,
    build_map,
    check_extension,
    parse_map,
    read_map_lines,
)

LINES = ["11111", "1P0C1", "1C0E1", "11111"]


@pytest.mark.parametrize(
    "name, expected",
    [
        ("map.ber", True),
        (".ber", True),
        ("maps/level.ber", True),
        ("map.txt", False),
        ("ber", False),
        ("map.ber.txt", False),
        ("map.BER", False),
    ],
)
def test_check_extension(name, expected):
    assert check_extension(name) is expected


def test_read_rejects_wrong_extension(tmp_path):
    path = tmp_path / "map.txt"
    path.write_text("111\n")
    with pytest.raises(MapError, match="extension"):
        read_map_lines(path)


def test_read_missing_file(tmp_path):
    with pytest.raises(MapError, match="unable to open"):
        read_map_lines(tmp_path / "absent.ber")


def test_read_empty_file(tmp_path):
    path = tmp_path / "empty.ber"
    path.write_text("")
    with pytest.raises(MapError):
        read_map_lines(path)


@pytest.mark.parametrize("ending", ["\n", ""])
def test_read_strips_line_breaks(tmp_path, ending):
    path = tmp_path / "map.ber"
    path.write_text("\n".join(LINES) + ending)
    assert read_map_lines(path) == LINES


def test_read_keeps_blank_lines(tmp_path):
    path = tmp_path / "map.ber"
    path.write_text("111\n\n111\n")
    assert read_map_lines(path) == ["111", "", "111"]


def test_build_map_dimensions():
    game_map = build_map(LINES)
    assert game_map.width == len(LINES[0])
    assert game_map.height == len(LINES)


def test_build_map_locates_elements():
    game_map = build_map(LINES)
    assert game_map.cell(game_map.start.x, game_map.start.y) == "P"
    assert game_map.cell(game_map.exit.x, game_map.exit.y) == "E"
    assert game_map.collectible == 2


def test_build_map_last_player_wins():
    lines = ["11111", "1P001", "100P1", "11111"]
    game_map = build_map(lines)
    assert game_map.start.y == max(i for i, line in enumerate(lines) if "P" in line)
    assert game_map.cell(game_map.start.x, game_map.start.y) == "P"


def test_build_map_without_player_has_no_start():
    game_map = build_map(["111", "101", "111"])
    assert game_map.start is None
    assert game_map.exit is None
    assert game_map.collectible == 0


def test_build_map_empty_raises():
    with pytest.raises(MapError):
        build_map([])


def test_parse_map_round_trip(tmp_path):
    path = tmp_path / "level.ber"
    path.write_text("\n".join(LINES) + "\n")
    game_map = parse_map(path)
    assert ["".join(row) for row in game_map.grid] == LINES


def test_cell_out_of_range():
    game_map = build_map(LINES)
    with pytest.raises(IndexError):
        game_map.cell(len(LINES[0]), 0)
    with pytest.raises(IndexError):
        game_map.cell(0, -1)


def test_position_is_hashable_value():
    assert {Position(2, 3), Position(2, 3)} == {Position(2, 3)}
    assert isinstance(build_map(LINES), GameMap)
    assert build_map(LINES).start == build_map(list(LINES)).start