"""Map tiles, element lookup and the checks a playable map must pass."""

from __future__ import annotations

from collections import deque
from enum import Enum
from typing import Sequence

Grid = Sequence[str]
Position = tuple[int, int]

_C_SPACE = " \t\n\v\f\r"


class Tile(str, Enum):
    """Characters a map may contain."""

    EMPTY = "0"
    WALL = "1"
    COLLECT = "C"
    EXIT = "E"
    PLAYER = "P"


_VALID = frozenset(tile.value for tile in Tile)


class MapError(ValueError):
    """Raised when a map fails validation."""


def find_element(grid: Grid, target: str) -> Position | None:
    """Return ``(col, row)`` of the first ``target`` in reading order, or None."""
    for row, line in enumerate(grid):
        col = line.find(target)
        if col != -1:
            return col, row
    return None


def has_no_empty_lines(grid: Grid) -> bool:
    """True when no line is empty or made only of whitespace."""
    return all(line.strip(_C_SPACE) for line in grid)


def is_rectangular(grid: Grid) -> tuple[int, int] | None:
    """Return ``(width, height)`` when every line has the same length, else None."""
    if not grid:
        return None
    width = len(grid[0])
    if any(len(line) != width for line in grid):
        return None
    return width, len(grid)


def has_only_valid_chars(grid: Grid) -> bool:
    """True when every character is one of the map tiles."""
    return all(char in _VALID for line in grid for char in line)


def is_surrounded_by_walls(grid: Grid) -> bool:
    """True when the first and last rows and columns are all walls."""
    if not grid:
        return True
    wall = Tile.WALL.value
    if any(char != wall for char in grid[0] + grid[-1]):
        return False
    return all(line[0] == wall and line[-1] == wall for line in grid if line)


def count_elements(grid: Grid) -> dict[Tile, int]:
    """Count players, exits and collectibles on the map."""
    counts = {Tile.PLAYER: 0, Tile.EXIT: 0, Tile.COLLECT: 0}
    for tile in counts:
        counts[tile] = sum(line.count(tile.value) for line in grid)
    return counts


def check_required_elements(grid: Grid) -> None:
    """Require exactly one player, exactly one exit and at least one collectible."""
    counts = count_elements(grid)
    if counts[Tile.PLAYER] != 1:
        raise MapError("Invalid number of player (P)")
    if counts[Tile.EXIT] != 1:
        raise MapError("Invalid number of exit (E)")
    if counts[Tile.COLLECT] < 1:
        raise MapError("No collectible (C) found")


def reachable_cells(grid: Grid, start: Position) -> set[Position]:
    """Return every ``(col, row)`` reachable from ``start`` without crossing walls."""
    rows = len(grid)
    cols = len(grid[0]) if grid else 0
    wall = Tile.WALL.value

    def open_cell(col: int, row: int) -> bool:
        return 0 <= row < rows and 0 <= col < cols and grid[row][col] != wall

    seen: set[Position] = set()
    if not open_cell(*start):
        return seen
    seen.add(start)
    queue = deque([start])
    while queue:
        col, row = queue.popleft()
        for ncol, nrow in ((col, row + 1), (col, row - 1), (col + 1, row), (col - 1, row)):
            if (ncol, nrow) not in seen and open_cell(ncol, nrow):
                seen.add((ncol, nrow))
                queue.append((ncol, nrow))
    return seen


def is_map_solvable(grid: Grid) -> bool:
    """True when every collectible and the exit can be reached by the player."""
    start = find_element(grid, Tile.PLAYER.value)
    if start is None:
        return False
    reached = reachable_cells(grid, start)
    targets = (Tile.COLLECT.value, Tile.EXIT.value)
    return all(
        (col, row) in reached
        for row, line in enumerate(grid)
        for col, char in enumerate(line)
        if char in targets
    )


def validate_map(grid: Grid) -> None:
    """Run all map checks in order, raising MapError at the first failure.

    When the required elements are missing, the specific reason is kept as
    the error's ``__cause__``.
    """
    if not grid:
        raise MapError("Map is empty or not loaded")
    if not has_no_empty_lines(grid):
        raise MapError("Empty line in map")
    if is_rectangular(grid) is None:
        raise MapError("Map is not rectangular")
    if not has_only_valid_chars(grid):
        raise MapError("Invalid character in map")
    if not is_surrounded_by_walls(grid):
        raise MapError("Map is not surrounded by walls")
    try:
        check_required_elements(grid)
    except MapError as exc:
        raise MapError("Map does not have required elements P/E/C") from exc
    if not is_map_solvable(grid):
        raise MapError("Map is not solvable")