# solong

A small top-down puzzle game. You walk a character around a walled map,
pick up every collectible, then reach the exit. Enemies wander the map
at random; sharing a cell with one ends the game.

## Installing

```
pip install .
```

## Playing

```
solong path/to/level.ber
```

The command takes exactly one argument, a map file with the `.ber`
extension. If the argument is missing, the file cannot be read, has the
wrong extension or the map fails validation, an error is printed and the
command exits with status 1. It also exits with status 1 when the
textures cannot be loaded or the window cannot be opened.

Controls (acted on when the key is released):

| Key               | Action     |
|-------------------|------------|
| `W` / Up arrow    | move up    |
| `S` / Down arrow  | move down  |
| `A` / Left arrow  | move left  |
| `D` / Right arrow | move right |
| `Esc`             | quit       |

Closing the window also quits. Walls and the map edge block movement.
Stepping on the exit before every collectible is taken only prints a
reminder; stepping on it with all of them wins. Each move, pickup, win
or loss is printed to the terminal, and the window shows `Moves: n` and
`Items: collected/total` in its top-left corner.

Enemies take one step in a random direction every 10000 turns of the
event loop; they cannot enter walls, collectibles or the exit.

## Map format

A map is a plain-text grid, one row per line:

| Char | Meaning                  |
|------|--------------------------|
| `1`  | wall                     |
| `0`  | floor                    |
| `P`  | player start (exactly 1) |
| `E`  | exit (exactly 1)         |
| `C`  | collectible (at least 1) |
| `M`  | enemy start              |

A map is accepted only if:

- every row is as long as the first;
- the outer border is made entirely of walls;
- it contains no other characters;
- it has exactly one `P`, exactly one `E` and at least one `C`;
- every collectible and the exit can be reached from the start
  (only walls block the way).

Example:

```
1111111
1P0C0E1
10M0001
1111111
```

## Textures

Tiles and sprites are read from XPM files in a `textures/` directory
under the current working directory: `asset_wall_3.xpm`,
`asset_floor.xpm`, `asset_collect_2.xpm`, `asset_exit_3.xpm`,
`asset_enemy.xpm`, and the four player animation frames
`asset_player_2.xpm`, `asset_player_9.xpm`, `asset_player_10.xpm` and
`asset_player_11.xpm`. Each tile occupies 64×64 pixels. These image
files are not part of the package; they must be supplied.

## Using the pieces as a library

- `solong.mapfile.parse_map(path)` reads a `.ber` file into a `GameMap`;
  `build_map(lines)` does the same from a list of strings.
- `solong.validation.validate_map(game_map)` and
  `validate_track(game_map)` raise `MapError` when a map is malformed or
  cannot be finished; `flood_fill(game_map)` returns the grid with every
  reachable cell marked `X`.
- `solong.game.load_game(path, rng=None)` builds a `Game` whose
  `press_key`, `move_player`, `tick`, `update_enemies` and
  `check_enemy_collision` methods run the rules without a window and
  return an `Outcome` (`CONTINUE`, `QUIT`, `WIN` or `DEAD`).
- `solong.xpm.load_xpm(path)` and `parse_xpm_text(text)` decode XPM data
  into an `XpmImage`; the colour `None` becomes the value
  `solong.xpm.TRANSPARENT`.
- `solong.colors.lookup_color(name)` and `text_to_rgb(name, end)` resolve
  X11 colour names and `#rrggbb` values.
- `solong.app.Renderer` draws a `Game` onto a pygame surface and runs
  its event loop.

## Running the tests

```
pip install .[test]
pytest
```