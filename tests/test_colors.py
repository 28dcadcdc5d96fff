import pytest

from solong.colors import lookup_color, text_to_rgb


@pytest.mark.parametrize(
    "name, expected",
    [
        ("snow", 0xFFFAFA),
        ("red", 0xFF0000),
        ("navy", 0x80),
        ("gray50", 0x7F7F7F),
        ("lightgreen", 0x90EE90),
    ],
)
def test_lookup_known_names(name, expected):
    assert lookup_color(name) == expected


def test_lookup_is_case_insensitive():
    assert lookup_color("SNOW") == lookup_color("snow")
    assert lookup_color("Ghost White") == lookup_color("ghost white")


def test_lookup_none_is_transparent():
    assert lookup_color("none") == -1
    assert lookup_color("None") == -1


def test_lookup_unknown_returns_none():
    assert lookup_color("no such colour") is None


def test_duplicate_name_first_entry_wins():
    assert lookup_color("dark slate") == 0x2F4F4F
    assert lookup_color("light slate") == 0x778899
    assert lookup_color("light goldenrod") == 0xFAFAD2


def test_gray_and_grey_agree():
    for level in range(101):
        assert lookup_color(f"gray{level}") == lookup_color(f"grey{level}")


def test_numbered_grays_are_neutral_and_increasing():
    values = [lookup_color(f"gray{level}") for level in range(101)]
    for value in values:
        red, green, blue = (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF
        assert red == green == blue
    assert values == sorted(values)
    assert values[0] == lookup_color("black")
    assert values[-1] == lookup_color("white")


def test_text_to_rgb_hex():
    assert text_to_rgb("#FF0000", None) == 0xFF0000
    assert text_to_rgb("#00ff00", "ignored") == 0x00FF00


def test_text_to_rgb_hex_stops_at_non_hex():
    assert text_to_rgb("#abcxyz", None) == 0xABC
    assert text_to_rgb("#", None) == 0


def test_text_to_rgb_name_without_end():
    assert text_to_rgb("tomato", None) == lookup_color("tomato")
    assert text_to_rgb("none", None) == -1


def test_text_to_rgb_joins_end_with_space():
    assert text_to_rgb("navy", "blue") == lookup_color("navy blue")
    assert text_to_rgb("Alice", "Blue") == lookup_color("alice blue")


def test_text_to_rgb_unknown_is_zero():
    assert text_to_rgb("nonexistent", None) == 0
    assert text_to_rgb("dark slate", "gray") == 0


def test_text_to_rgb_empty_end_is_ignored():
    assert text_to_rgb("white", "") == lookup_color("white")