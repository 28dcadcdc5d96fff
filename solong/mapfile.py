"""Reading ``.ber`` map files into a grid with its key positions."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

MAP_EXTENSION = ".ber"

PLAYER = "P"
EXIT = "E"
COLLECTIBLE = "C"
WALL = "1"
FLOOR = "0"
ENEMY = "M"


class MapError(ValueError):
    """Raised when a map file cannot be read or the map is not playable."""


@dataclass(frozen=True)
class Position:
    """A cell coordinate: column ``x`` and row ``y``."""

    x: int
    y: int


@dataclass
class GameMap:
    """A map grid with its size, collectible count, start and exit."""

    grid: list[list[str]]
    width: int
    height: int
    collectible: int = 0
    start: Position | None = None
    exit: Position | None = None
    _unused: None = field(default=None, repr=False, compare=False)

    def cell(self, x: int, y: int) -> str:
        """Return the character at column ``x`` and row ``y``."""
        if not (0 <= y < len(self.grid) and 0 <= x < len(self.grid[y])):
            raise IndexError(f"cell ({x}, {y}) is outside the map")
        return self.grid[y][x]


def check_extension(path: str | os.PathLike[str]) -> bool:
    """Tell whether ``path`` names a file with the ``.ber`` extension."""
    return os.fspath(path).endswith(MAP_EXTENSION)


def read_map_lines(path: str | os.PathLike[str]) -> list[str]:
    """Read the lines of a map file, without their line breaks."""
    if not check_extension(path):
        raise MapError("invalid file extension")
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise MapError("unable to open file") from exc
    lines = data.decode("latin-1").split("\n")
    if lines[-1] == "":
        lines.pop()
    if not lines:
        raise MapError("map file is empty")
    return lines


def build_map(lines: Iterable[str]) -> GameMap:
    """Build a map from its text lines and locate its elements.

    The width is the length of the first line. When the player or the exit
    appears more than once, the last one in reading order is kept.
    """
    rows = [list(line) for line in lines]
    if not rows:
        raise MapError("map has no lines")
    game_map = GameMap(grid=rows, width=len(rows[0]), height=len(rows))
    for y, row in enumerate(rows):
        for x, char in enumerate(row[: game_map.width]):
            if char == PLAYER:
                game_map.start = Position(x, y)
            elif char == EXIT:
                game_map.exit = Position(x, y)
            elif char == COLLECTIBLE:
                game_map.collectible += 1
    return game_map


def parse_map(path: str | os.PathLike[str]) -> GameMap:
    """Read a ``.ber`` file and build its map."""
    return build_map(read_map_lines(path))