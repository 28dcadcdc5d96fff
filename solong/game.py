"""Game state: the player, roaming enemies, moves, pickups and win or loss."""

from __future__ import annotations

import enum
import os
import random
from collections.abc import Callable
from dataclasses import dataclass, field

from solong.mapfile import (
    COLLECTIBLE,
    ENEMY,
    EXIT,
    FLOOR,
    WALL,
    GameMap,
    MapError,
    Position,
    parse_map,
)
from solong.validation import validate_map, validate_track

TILE_SIZE = 64

KEY_ESC = 65307
KEY_W = 119
KEY_A = 97
KEY_S = 115
KEY_D = 100
KEY_UP = 65362
KEY_DOWN = 65364
KEY_RIGHT = 65363
KEY_LEFT = 65361

ANIM_FRAMES = 4
"""Number of player animation frames."""

FRAME_WRAP = 1000
"""The animation counter returns to zero when it reaches this value."""

ENEMY_INTERVAL = 10000
"""Loop ticks between two enemy steps."""

_KEY_DIRECTIONS: dict[int, tuple[int, int]] = {
    KEY_W: (0, -1),
    KEY_UP: (0, -1),
    KEY_S: (0, 1),
    KEY_DOWN: (0, 1),
    KEY_A: (-1, 0),
    KEY_LEFT: (-1, 0),
    KEY_D: (1, 0),
    KEY_RIGHT: (1, 0),
}

# Enemy step for each value drawn from the random source.
_ENEMY_STEPS: tuple[tuple[int, int], ...] = ((1, 0), (0, 1), (-1, 0), (0, -1))

_ENEMY_BLOCKERS = frozenset({WALL, COLLECTIBLE, EXIT})


class Outcome(enum.Enum):
    """What an action leaves the game in."""

    CONTINUE = "continue"
    QUIT = "quit"
    WIN = "win"
    DEAD = "dead"


@dataclass
class Enemy:
    """An enemy on the map."""

    pos: Position
    direction: int = 1


@dataclass
class Player:
    """The player's position, collected items and number of moves."""

    pos: Position
    collect: int = 0
    move: int = 0


def spawn_enemies(game_map: GameMap) -> list[Enemy]:
    """Take every enemy mark off the map, in reading order, as enemies.

    Each enemy cell becomes floor.
    """
    enemies = []
    for y, row in enumerate(game_map.grid[: game_map.height]):
        for x in range(min(game_map.width, len(row))):
            if row[x] == ENEMY:
                enemies.append(Enemy(Position(x, y)))
                row[x] = FLOOR
    return enemies


@dataclass
class Game:
    """A running game on one map."""

    game_map: GameMap
    player: Player
    enemies: list[Enemy]
    rng: random.Random = field(default_factory=random.Random)
    frame: int = 0
    speed_anim: int = 1
    enemy_interval: int = ENEMY_INTERVAL
    log: Callable[[str], None] = print
    _tick_count: int = field(default=0, init=False, repr=False)

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.game_map.width and 0 <= y < self.game_map.height

    def press_key(self, keycode: int) -> Outcome:
        """Act on a key: escape quits, WASD and arrows move the player."""
        if keycode == KEY_ESC:
            return Outcome.QUIT
        step = _KEY_DIRECTIONS.get(keycode)
        if step is None:
            return Outcome.CONTINUE
        return self.move_player(*step)

    def move_player(self, dx: int, dy: int) -> Outcome:
        """Move the player one step unless a wall or the map edge is in the way."""
        x = self.player.pos.x + dx
        y = self.player.pos.y + dy
        if not self._inside(x, y) or self.game_map.grid[y][x] == WALL:
            return Outcome.CONTINUE
        self.player.pos = Position(x, y)
        self.player.move += 1
        self.update_anim()
        self.log(f"Move :{self.player.move}")
        total = self.game_map.collectible
        cell = self.game_map.grid[y][x]
        if cell == COLLECTIBLE:
            self.game_map.grid[y][x] = FLOOR
            self.player.collect += 1
            self.log(f"Collect !!! : {self.player.collect}/{total}")
        elif cell == EXIT:
            if self.player.collect == total:
                self.log("\n WIN ! ;)")
                self.log(f"Total move : {self.player.move}")
                return Outcome.WIN
            self.log(f"Collect all collectible first ! {self.player.collect}/{total}")
        return self.check_enemy_collision()

    def _enemy_can_enter(self, x: int, y: int) -> bool:
        return self._inside(x, y) and self.game_map.grid[y][x] not in _ENEMY_BLOCKERS

    def update_enemies(self) -> None:
        """Step every enemy once in a random direction, if the cell is free."""
        for enemy in self.enemies:
            dx, dy = _ENEMY_STEPS[self.rng.randrange(len(_ENEMY_STEPS))]
            x, y = enemy.pos.x + dx, enemy.pos.y + dy
            if self._enemy_can_enter(x, y):
                enemy.pos = Position(x, y)

    def check_enemy_collision(self) -> Outcome:
        """Report DEAD when an enemy stands on the player's cell."""
        if any(enemy.pos == self.player.pos for enemy in self.enemies):
            self.log("\n GAME OVER !!")
            self.log("Your are dead by enemy *)")
            return Outcome.DEAD
        return Outcome.CONTINUE

    def tick(self) -> Outcome:
        """Advance the loop counter; every ``enemy_interval`` ticks enemies move."""
        self._tick_count += 1
        if self._tick_count < self.enemy_interval:
            return Outcome.CONTINUE
        self._tick_count = 0
        self.update_enemies()
        return self.check_enemy_collision()

    def update_anim(self) -> None:
        """Advance the animation counter, wrapping at FRAME_WRAP."""
        self.frame += 1
        if self.frame >= FRAME_WRAP:
            self.frame = 0

    def player_frame_index(self) -> int:
        """Index of the player animation frame to show."""
        return (self.frame // self.speed_anim) % ANIM_FRAMES

    def moves_text(self) -> str:
        """The move counter as shown on screen."""
        return f"Moves: {self.player.move}"

    def items_text(self) -> str:
        """The collected items as shown on screen."""
        return f"Items: {self.player.collect}/{self.game_map.collectible}"


def load_game(path: str | os.PathLike[str], rng: random.Random | None = None) -> Game:
    """Read, check and set up a game from a ``.ber`` file.

    Raises MapError when the file cannot be read or the map is not playable.
    """
    game_map = parse_map(path)
    validate_map(game_map)
    validate_track(game_map)
    if game_map.start is None:
        raise MapError("Map has no player start")
    return Game(
        game_map=game_map,
        player=Player(pos=game_map.start),
        enemies=spawn_enemies(game_map),
        rng=rng if rng is not None else random.Random(),
    )