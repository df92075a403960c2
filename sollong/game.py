"""Game state and the rules for moving the player around a validated map."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path
from typing import Callable, Sequence

from sollong.mapfile import read_map
from sollong.validate import Tile, find_element, validate_map

Position = tuple[int, int]

CHECK = "\033[32m[✔]\033[0m"
CROSS = "\033[31m[✘]\033[0m"
GREEN = "\033[0;32m"
RESET = "\033[0m"

GOAL_BANNER = (
    GREEN
    + "\n==============================\n"
    "     ★☆★☆  GOAL!!  ★☆★☆      "
    "\n==============================\n"
    + RESET
)


class Key(IntEnum):
    """Key codes the game reacts to."""

    ESC = 65307
    W = 119
    A = 97
    S = 115
    D = 100


class MoveOutcome(Enum):
    """What a key press or move attempt led to."""

    NONE = "none"
    BLOCKED = "blocked"
    MOVED = "moved"
    WON = "won"
    QUIT = "quit"


_DIRECTIONS: dict[int, Position] = {
    Key.W: (0, -1),
    Key.S: (0, 1),
    Key.A: (-1, 0),
    Key.D: (1, 0),
}


def direction_for_key(keycode: int) -> Position:
    """Return the ``(delta_col, delta_row)`` for a movement key, else ``(0, 0)``."""
    return _DIRECTIONS.get(keycode, (0, 0))


def count_collectibles(grid: Sequence[str]) -> int:
    """Count the collectible tiles on the map."""
    return sum(line.count(Tile.COLLECT.value) for line in grid)


def _write_stdout(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


@dataclass
class Game:
    """Mutable state of one game: the map, counters and the exit position."""

    grid: list[list[str]]
    collect_count: int
    exit_pos: Position | None
    collected: int = 0
    move_count: int = 0
    echo: Callable[[str], None] = field(
        default=_write_stdout, repr=False, compare=False
    )

    @classmethod
    def from_grid(cls, grid: Sequence[str]) -> "Game":
        """Validate ``grid`` and start a game on it; raises MapError if invalid."""
        lines = list(grid)
        validate_map(lines)
        return cls(
            grid=[list(line) for line in lines],
            collect_count=count_collectibles(lines),
            exit_pos=find_element(lines, Tile.EXIT.value),
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "Game":
        """Load, validate and start a game from a map file."""
        return cls.from_grid(read_map(path))

    @property
    def rows(self) -> int:
        """Number of map rows."""
        return len(self.grid)

    @property
    def cols(self) -> int:
        """Length of the first map row."""
        return len(self.grid[0]) if self.grid else 0

    def player_position(self) -> Position | None:
        """Return the player's ``(col, row)``, or None when absent."""
        return find_element(["".join(row) for row in self.grid], Tile.PLAYER.value)

    def can_move(self, col: int, row: int) -> bool:
        """True when ``(col, row)`` lies on the map and is not a wall."""
        if not (0 <= row < self.rows and 0 <= col < len(self.grid[row])):
            return False
        return self.grid[row][col] != Tile.WALL.value

    def try_exit(self, col: int, row: int) -> bool:
        """True when ``(col, row)`` is the exit and every item is collected."""
        if self.grid[row][col] != Tile.EXIT.value:
            return False
        if self.collected < self.collect_count:
            self.echo(CROSS + "Items remain!\n")
            return False
        self.echo(GOAL_BANNER)
        return True

    def _step(self, col: int, row: int, next_col: int, next_row: int) -> None:
        if self.grid[next_row][next_col] == Tile.COLLECT.value:
            self.collected += 1
            self.echo(
                CHECK
                + f"Collected an item! ({self.collected}/{self.collect_count})\n"
            )
        left = Tile.EXIT if self.exit_pos == (col, row) else Tile.EMPTY
        self.grid[row][col] = left.value
        self.grid[next_row][next_col] = Tile.PLAYER.value
        self.move_count += 1
        self.echo(f"Move count: {self.move_count}\n")

    def move(self, delta_col: int, delta_row: int) -> MoveOutcome:
        """Move the player by the given deltas and report the outcome."""
        if delta_col == 0 and delta_row == 0:
            return MoveOutcome.NONE
        position = self.player_position()
        if position is None:
            return MoveOutcome.NONE
        col, row = position
        next_col, next_row = col + delta_col, row + delta_row
        if not self.can_move(next_col, next_row):
            return MoveOutcome.BLOCKED
        if self.try_exit(next_col, next_row):
            return MoveOutcome.WON
        self._step(col, row, next_col, next_row)
        return MoveOutcome.MOVED

    def handle_key(self, keycode: int) -> MoveOutcome:
        """React to a key press."""
        if self.player_position() is None:
            return MoveOutcome.NONE
        if keycode == Key.ESC:
            return MoveOutcome.QUIT
        return self.move(*direction_for_key(keycode))