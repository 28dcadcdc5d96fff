"""Window, textures, drawing and the event loop of the game."""

from __future__ import annotations

import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

import pygame

from solong.game import (
    KEY_DOWN,
    KEY_ESC,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_UP,
    TILE_SIZE,
    Game,
    Outcome,
    load_game,
)
from solong.mapfile import COLLECTIBLE, EXIT, WALL, MapError
from solong.xpm import TRANSPARENT, XpmError, XpmImage, load_xpm

WINDOW_TITLE = "so_long"
TEXTURE_DIR = "textures"

TEXTURE_FILES: dict[str, str] = {
    "wall": "asset_wall_3.xpm",
    "floor": "asset_floor.xpm",
    "player": "asset_player_2.xpm",
    "collect": "asset_collect_2.xpm",
    "exit": "asset_exit_3.xpm",
    "enemy": "asset_enemy.xpm",
    "player_frame": "asset_player_9.xpm",
    "player_frame2": "asset_player_10.xpm",
    "player_frame3": "asset_player_11.xpm",
}

PLAYER_FRAMES = ("player", "player_frame", "player_frame2", "player_frame3")

_TILE_TEXTURES = {WALL: "wall", COLLECTIBLE: "collect", EXIT: "exit"}

TEXT_COLOR = (0, 0, 0)
TEXT_SIZE = 20
MOVES_BASELINE = (10, 20)
ITEMS_BASELINE = (10, 40)

_PYGAME_KEYS: dict[int, int] = {
    pygame.K_ESCAPE: KEY_ESC,
    pygame.K_UP: KEY_UP,
    pygame.K_DOWN: KEY_DOWN,
    pygame.K_LEFT: KEY_LEFT,
    pygame.K_RIGHT: KEY_RIGHT,
}


def image_to_surface(image: XpmImage) -> pygame.Surface:
    """Turn a decoded XPM image into a surface with per-pixel alpha."""
    surface = pygame.Surface((image.width, image.height), pygame.SRCALPHA)
    for y, row in enumerate(image.pixels):
        for x, value in enumerate(row):
            if value == TRANSPARENT:
                color = (0, 0, 0, 0)
            else:
                color = ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, 255)
            surface.set_at((x, y), color)
    return surface


def load_textures(directory: str | Path) -> dict[str, pygame.Surface]:
    """Load every game texture from ``directory``.

    Raises XpmError when any of them cannot be read.
    """
    base = Path(directory)
    return {
        name: image_to_surface(load_xpm(base / filename))
        for name, filename in TEXTURE_FILES.items()
    }


def keycode_from_pygame(key: int) -> int:
    """Translate a pygame key constant to the game's key code."""
    return _PYGAME_KEYS.get(key, key)


class Renderer:
    """Draws a game onto a surface and runs its event loop."""

    def __init__(
        self,
        game: Game,
        textures: Mapping[str, pygame.Surface],
        surface: pygame.Surface | None = None,
    ) -> None:
        self.game = game
        self.textures = dict(textures)
        self._window = surface is None
        if surface is None:
            pygame.display.init()
            surface = pygame.display.set_mode(
                (game.game_map.width * TILE_SIZE, game.game_map.height * TILE_SIZE)
            )
            pygame.display.set_caption(WINDOW_TITLE)
        self.surface = surface
        self._font: pygame.font.Font | None = None

    def _text(self, text: str, baseline: tuple[int, int]) -> None:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, TEXT_SIZE)
        rendered = self._font.render(text, True, TEXT_COLOR)
        x, y = baseline
        self.surface.blit(rendered, (x, y - self._font.get_ascent()))

    def draw(self) -> None:
        """Draw the map, the enemies, the player and the counters."""
        game_map = self.game.game_map
        floor = self.textures["floor"]
        for y, row in enumerate(game_map.grid[: game_map.height]):
            for x, char in enumerate(row[: game_map.width]):
                spot = (x * TILE_SIZE, y * TILE_SIZE)
                self.surface.blit(floor, spot)
                overlay = _TILE_TEXTURES.get(char)
                if overlay is not None:
                    self.surface.blit(self.textures[overlay], spot)
        for enemy in self.game.enemies:
            self.surface.blit(
                self.textures["enemy"], (enemy.pos.x * TILE_SIZE, enemy.pos.y * TILE_SIZE)
            )
        player = self.game.player
        frame = PLAYER_FRAMES[self.game.player_frame_index()]
        self.surface.blit(
            self.textures[frame], (player.pos.x * TILE_SIZE, player.pos.y * TILE_SIZE)
        )
        self._text(self.game.moves_text(), MOVES_BASELINE)
        self._text(self.game.items_text(), ITEMS_BASELINE)
        if self._window:
            pygame.display.flip()

    def handle_key(self, key: int) -> Outcome:
        """Act on a released pygame key and redraw while the game goes on."""
        outcome = self.game.press_key(keycode_from_pygame(key))
        if outcome is Outcome.CONTINUE:
            self.draw()
        return outcome

    def _enemy_positions(self) -> tuple:
        return tuple(enemy.pos for enemy in self.game.enemies)

    def run(self) -> Outcome:
        """Process events and loop ticks until the game ends; return how it ended."""
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return Outcome.QUIT
                if event.type == pygame.KEYUP:
                    outcome = self.handle_key(event.key)
                    if outcome is not Outcome.CONTINUE:
                        return outcome
            before = self._enemy_positions()
            outcome = self.game.tick()
            if outcome is not Outcome.CONTINUE:
                return outcome
            if self._enemy_positions() != before:
                self.draw()


def main(argv: Sequence[str] | None = None) -> int:
    """Start the game on the map named on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print("Missing map.ber or fail game init *)")
        return 1
    try:
        game = load_game(args[0])
    except MapError as exc:
        print(f"Error\n{exc} *)")
        print("Missing map.ber or fail game init *)")
        return 1
    width = game.game_map.width * TILE_SIZE
    height = game.game_map.height * TILE_SIZE
    print("Game init OK !")
    print(f"Window {width}x{height} pixel")
    try:
        textures = load_textures(TEXTURE_DIR)
    except XpmError:
        print("Error\nFail to load all texture *)")
        return 1
    print("Texture is load !")
    try:
        renderer = Renderer(game, textures)
    except pygame.error:
        print("Error\nFail window creation *)")
        pygame.quit()
        return 1
    try:
        renderer.draw()
        print("Map OK !\nGame start !\nControl W/S/A/D or ARROW KEYS")
        print("ESC for quit")
        renderer.run()
    finally:
        pygame.quit()
    return 0