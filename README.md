# sollong

A small top-down puzzle game. You walk a player around a walled map.
You pick up every collectible and then step onto the exit to win.

## Installing

```
pip install .
```

## Playing

```
sollong path/to/map.ber
```

The map file must end in `.ber`. Tile images are read as XPM files from an
`images/` directory in the current working directory. The files are
`player.xpm`, `wall.xpm`, `floor.xpm`, `collect.xpm` and `exit.xpm`.
Every tile is drawn at the size of `exit.xpm`, which is the last image loaded.

Controls:

- `W` / `A` / `S` / `D` move up, left, down and right
- `Esc` or closing the window quits

Each move prints the move count. Picking up an item prints how many items you
have collected so far. If you step onto the exit before collecting every item,
the game prints a reminder and still makes the move. Once every item is
collected, stepping onto the exit prints a goal banner and the game ends.

## Map format

A map is a plain text file made of these characters:

| Char | Meaning      |
|------|--------------|
| `0`  | empty floor  |
| `1`  | wall         |
| `C`  | collectible  |
| `E`  | exit         |
| `P`  | player start |

A map is accepted only when all of these hold:

- it is not empty, and no line is empty or made only of whitespace
- every line has the same length, so the map is rectangular
- it contains only the five characters above
- the border is made entirely of walls
- there is exactly one `P`, exactly one `E` and at least one `C`
- the player can reach every `C` and the `E` from `P`

Example:

```
1111111
1P0C0E1
1111111
```

When a map is rejected, the program writes an error naming the reason to
standard error and exits with status 1.

## Using it as a library

```python
from sollong.game import Game

game = Game.from_file("maps/map.ber")
outcome = game.move(1, 0)          # a sollong.game.MoveOutcome
print(game.player_position())      # (col, row)
```

Modules:

- `sollong.game`
  - `Game` holds the map and the counters.
  - `Game.from_grid` and `Game.from_file` validate a map and start a game on it.
  - `Game.move` and `Game.handle_key` return a `MoveOutcome`.
- `sollong.validate`
  - `validate_map` raises `MapError` for a bad grid.
  - The individual checks are also available, for example `is_rectangular`,
    `is_surrounded_by_walls` and `is_map_solvable`.
- `sollong.mapfile`
  - `read_map` returns the lines of a map file.
  - It raises `MapLoadError` when the file cannot be read.
- `sollong.xpm`
  - `load_xpm` and `parse_xpm_text` decode XPM images into an `XpmImage`
    with 32-bit pixel values.
  - They raise `XpmError` when the image cannot be read or parsed.
- `sollong.colors`
  - `lookup_color` and `color_from_text` resolve X11 colour names and
    `#rrggbb` specs.
- `sollong.render`
  - `load_images` builds an `ImageSet` of pygame surfaces.
  - `Renderer` draws a game onto any surface with `blit`.
- `sollong.cli`
  - `main` is the `sollong` command.

## What it does not include

The package contains no tile images and no example maps. You must provide an
`images/` directory with the five XPM files and a `.ber` map before the game
can be played.

## Running the tests

```
pip install .[test]
pytest
```