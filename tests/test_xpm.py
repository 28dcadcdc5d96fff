import pytest

from solong.xpm import (
    TRANSPARENT,
    XpmError,
    XpmImage,
    good_color,
    load_xpm,
    parse_xpm_lines,
    parse_xpm_text,
    split_words,
    strip_comments,
)

RGB565 = (11, 5, 5, 6, 0, 5)

SAMPLE_FILE = """/* XPM */
static char *demo[] = {
/* columns rows colors chars-per-pixel */
"2 2 3 1",
"a c #00FF00", // green
"b c None",
"d c light grey",
"ab",
"da"
};
"""


def test_split_words_spaces_and_tabs():
    assert split_words("  3  4\t5 ") == ["3", "4", "5"]


def test_split_words_empty():
    assert split_words(" \t ") == []


def test_strip_comments_keeps_quoted_text():
    assert strip_comments('"a/*b" /* x */') == '"a/*b" ' + " " * 7


def test_strip_comments_line_comment_with_newline():
    assert strip_comments("a//b\nc") == "a    c"


def test_strip_comments_unterminated_block():
    assert strip_comments("ab/*cd") == "ab   d"


def test_strip_comments_unterminated_line_comment():
    assert strip_comments("x//y") == "x  y"


def test_strip_comments_preserves_length():
    text = '/* head */ "a//b" // tail\n"c"'
    assert len(strip_comments(text)) == len(text)


def test_parse_basic_palette():
    image = parse_xpm_lines(["4 2 3 1", ". c None", "# c #FF0000", "o c blue", ".#o.", "oo##"])
    assert image.width == 4
    assert image.height == 2
    assert image.pixels[0] == (TRANSPARENT, 0xFF0000, 0xFF, TRANSPARENT)
    assert image.pixels[1] == (0xFF, 0xFF, 0xFF0000, 0xFF0000)


def test_pixel_accessor_and_bounds():
    image = parse_xpm_lines(["1 1 1 1", "a c #123456", "a"])
    assert image.pixel(0, 0) == 0x123456
    with pytest.raises(IndexError):
        image.pixel(1, 0)


def test_two_word_colour_name():
    image = parse_xpm_lines(["1 1 1 1", "o c light grey", "o"])
    assert image.pixel(0, 0) == 0xD3D3D3


def test_unknown_symbol_is_black():
    image = parse_xpm_lines(["2 1 1 1", "a c #FFFFFF", "az"])
    assert image.pixels == ((0xFFFFFF, 0),)


def test_long_keys_first_definition_wins():
    image = parse_xpm_lines(["2 1 2 3", "aaa c #000001", "aaa c #000002", "aaaaaa"])
    assert image.pixels == ((1, 1),)


def test_short_keys_last_definition_wins():
    image = parse_xpm_lines(["1 1 2 1", "a c #000001", "a c #000002", "a"])
    assert image.pixels == ((2,),)


def test_three_char_keys():
    image = parse_xpm_lines(["2 1 2 3", "aaa c #000001", "bbb c #000002", "bbbaaa"])
    assert image.pixels == ((2, 1),)


def test_header_words_read_as_leading_integers():
    image = parse_xpm_lines(["2px 1 1 1 extra", "a c #000003", "aa"])
    assert image.width == 2


@pytest.mark.parametrize(
    "lines",
    [
        ["0 1 1 1", "a c #000000", "a"],
        ["1 1 1", "a c #000000", "a"],
        ["1 1 1 1", "a s foo", "a"],
        ["1 1 1 1", "a c", "a"],
        ["1 2 1 1", "a c #000000", "a"],
        [],
    ],
)
def test_malformed_data_raises(lines):
    with pytest.raises(XpmError):
        parse_xpm_lines(lines)


def test_parse_file_text():
    image = parse_xpm_text(SAMPLE_FILE)
    assert image == XpmImage(
        width=2,
        height=2,
        pixels=((0x00FF00, TRANSPARENT), (0xD3D3D3, 0x00FF00)),
    )


def test_load_xpm_from_file(tmp_path):
    path = tmp_path / "open.xpm"
    path.write_text(SAMPLE_FILE)
    image = load_xpm(path)
    assert (image.width, image.height) == (2, 2)
    assert image.pixel(1, 0) == TRANSPARENT


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(XpmError):
        load_xpm(tmp_path / "missing.xpm")


@pytest.mark.parametrize("depth", [24, 32])
def test_good_color_true_colour_is_identity(depth):
    assert good_color(0x11FF80, depth, (0, 0, 0, 0, 0, 0)) == 0x11FF80


def test_good_color_rgb565_white():
    assert good_color(0xFFFFFF, 16, RGB565) == 0xFFFF


def test_good_color_rgb565_primaries():
    assert good_color(0xFF0000, 16, RGB565) == 0xF800
    assert good_color(0x00FF00, 16, RGB565) == 0x07E0
    assert good_color(0x0000FF, 16, RGB565) == 0x001F
    assert good_color(0x000000, 16, RGB565) == 0