"""Checks that a map is well formed and can be finished."""

from __future__ import annotations

from collections.abc import Iterator

from solong.mapfile import (
    COLLECTIBLE,
    ENEMY,
    EXIT,
    FLOOR,
    PLAYER,
    WALL,
    GameMap,
    MapError,
)

REACHED = "X"
"""Mark left by the flood fill on every cell the player can reach."""

_ALLOWED = frozenset({FLOOR, WALL, COLLECTIBLE, PLAYER, EXIT, ENEMY})


def _cells(game_map: GameMap) -> Iterator[tuple[int, int, str]]:
    for y, row in enumerate(game_map.grid[: game_map.height]):
        for x, char in enumerate(row[: game_map.width]):
            yield x, y, char


def copy_grid(game_map: GameMap) -> list[list[str]]:
    """Return an independent copy of the grid, each row cut to the map width."""
    return [row[: game_map.width] for row in game_map.grid[: game_map.height]]


def flood_fill(game_map: GameMap) -> list[list[str]]:
    """Return a copy of the grid with every cell reachable from the start marked.

    Only walls stop the fill; the map itself is left untouched.
    """
    if game_map.start is None:
        raise MapError("Map has no player start")
    grid = copy_grid(game_map)
    pending = [(game_map.start.x, game_map.start.y)]
    while pending:
        x, y = pending.pop()
        if not (0 <= y < len(grid) and 0 <= x < min(game_map.width, len(grid[y]))):
            continue
        if grid[y][x] in (WALL, REACHED):
            continue
        grid[y][x] = REACHED
        pending.extend(((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)))
    return grid


def _surrounded_by_walls(game_map: GameMap) -> bool:
    if game_map.width == 0 or game_map.height == 0:
        return False
    grid = game_map.grid
    top, bottom = grid[0], grid[game_map.height - 1]
    if any(top[x] != WALL or bottom[x] != WALL for x in range(game_map.width)):
        return False
    return all(
        row[0] == WALL and row[game_map.width - 1] == WALL
        for row in grid[: game_map.height]
    )


def validate_map(game_map: GameMap) -> None:
    """Raise MapError unless the map is a walled rectangle of known elements.

    It must hold exactly one player, one exit and at least one collectible.
    """
    if any(len(row) != game_map.width for row in game_map.grid[: game_map.height]):
        raise MapError("Map is not rectangular")
    if not _surrounded_by_walls(game_map):
        raise MapError("Map is not surrounded by wall")
    if any(char not in _ALLOWED for _, _, char in _cells(game_map)):
        raise MapError("Map contain invalid character")
    players = sum(1 for _, _, char in _cells(game_map) if char == PLAYER)
    exits = sum(1 for _, _, char in _cells(game_map) if char == EXIT)
    if players != 1 or exits != 1 or game_map.collectible < 1:
        raise MapError("Invalid number of the element")


def validate_track(game_map: GameMap) -> None:
    """Raise MapError unless every collectible and the exit can be reached."""
    reached = flood_fill(game_map)
    accessible = sum(
        1
        for x, y, char in _cells(game_map)
        if char == COLLECTIBLE and reached[y][x] == REACHED
    )
    if accessible != game_map.collectible:
        raise MapError("Some collectible are not accessible")
    if not any(
        char == EXIT and reached[y][x] == REACHED for x, y, char in _cells(game_map)
    ):
        raise MapError("Exit is not accessible")