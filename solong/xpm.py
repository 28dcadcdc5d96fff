"""Reading XPM pixmaps into plain RGB pixel grids."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from solong.colors import text_to_rgb

TRANSPARENT = 0xFF000000
"""Pixel value written for the XPM colour ``None``."""

_WORD_SEPARATOR = re.compile(r"[ \t]+")
_QUOTED = re.compile(r'"([^"]*)"')
_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read or is malformed."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded XPM image: rows of 32-bit 0xAARRGGBB pixel values."""

    width: int
    height: int
    pixels: tuple[tuple[int, ...], ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel value at column ``x`` and row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return self.pixels[y][x]


def split_words(line: str) -> list[str]:
    """Split a line into words separated by spaces and tabs."""
    return [word for word in _WORD_SEPARATOR.split(line) if word]


def _find_unquoted(text: str, needle: str) -> int:
    """Index of the first ``needle`` outside double quotes, or -1."""
    quoted = False
    pattern = re.compile('"|' + re.escape(needle))
    for match in pattern.finditer(text):
        if match.group() == '"':
            quoted = not quoted
        elif not quoted:
            return match.start()
    return -1


def _blank(text: str, start: int, length: int) -> str:
    end = min(len(text), start + length)
    return text[:start] + " " * (end - start) + text[end:]


def strip_comments(text: str) -> str:
    """Replace C block and line comments outside quotes with spaces.

    The text keeps its length. An unterminated block comment blanks only
    its opening and one more character; an unterminated line comment
    blanks only its two slashes.
    """
    while (begin := _find_unquoted(text, "/*")) != -1:
        end = text.find("*/", begin + 2)
        length = end - begin + 2 if end != -1 else 3
        text = _blank(text, begin, length)
    while (begin := _find_unquoted(text, "//")) != -1:
        end = text.find("\n", begin + 2)
        length = end - begin + 1 if end != -1 else 2
        text = _blank(text, begin, length)
    return text


def _atoi(word: str) -> int:
    match = _ATOI.match(word)
    return int(match.group(1)) if match else 0


def _color_from_words(words: Sequence[str]) -> int:
    try:
        key_index = words.index("c")
    except ValueError:
        raise XpmError("colour definition has no 'c' key") from None
    if key_index + 1 >= len(words):
        raise XpmError("colour definition has no value after 'c'")
    name = words[key_index + 1]
    end = words[key_index + 2] if key_index + 2 < len(words) else None
    return text_to_rgb(name, end)


def _pixel_value(color: int) -> int:
    return TRANSPARENT if color == -1 else color & 0xFFFFFFFF


def parse_xpm_lines(lines: Iterable[str]) -> XpmImage:
    """Decode XPM data given as its sequence of string entries."""
    source: Iterator[str] = iter(lines)

    def next_line(what: str) -> str:
        try:
            return next(source)
        except StopIteration:
            raise XpmError(f"XPM data ends before its {what}") from None

    header = split_words(next_line("header"))
    if len(header) < 4:
        raise XpmError("XPM header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in header[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError("XPM header values must be positive integers")

    # With one or two characters per pixel a later definition replaces an
    # earlier one; with longer keys the first definition is kept.
    direct = cpp <= 2
    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = next_line("colour definitions")
        color = _color_from_words(split_words(line[cpp:]))
        if direct:
            palette[line[:cpp]] = color
        else:
            palette.setdefault(line[:cpp], color)

    rows = []
    for _ in range(height):
        line = next_line("pixel rows")
        rows.append(
            tuple(
                _pixel_value(palette.get(line[x * cpp:(x + 1) * cpp], 0))
                for x in range(width)
            )
        )
    return XpmImage(width=width, height=height, pixels=tuple(rows))


def parse_xpm_text(text: str) -> XpmImage:
    """Decode the text of an XPM file (C source with quoted strings)."""
    stripped = strip_comments(text)
    return parse_xpm_lines(match.group(1) for match in _QUOTED.finditer(stripped))


def load_xpm(path: str | Path) -> XpmImage:
    """Read and decode an XPM file."""
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return parse_xpm_text(text)


def good_color(color: int, depth: int, shifts: Sequence[int]) -> int:
    """Convert 0xRRGGBB to a visual's pixel value.

    ``shifts`` holds offset and width of the red, green and blue fields,
    in that order. Visuals of depth 24 or more take the colour unchanged.
    """
    if depth >= 24:
        return color
    red_off, red_len, green_off, green_len, blue_off, blue_len = shifts
    red = (color >> 8) & 0xFF00
    green = color & 0xFF00
    blue = (color << 8) & 0xFF00
    return (
        ((red >> (16 - red_len)) << red_off)
        + ((green >> (16 - green_len)) << green_off)
        + ((blue >> (16 - blue_len)) << blue_off)
    )