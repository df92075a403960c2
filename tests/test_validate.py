import pytest

from sollong.validate import (
    MapError,
    Tile,
    check_required_elements,
    count_elements,
    find_element,
    has_no_empty_lines,
    has_only_valid_chars,
    is_map_solvable,
    is_rectangular,
    is_surrounded_by_walls,
    reachable_cells,
    validate_map,
)

VALID = ["1111111", "1P0C0E1", "1111111"]
BLOCKED = ["1111111", "1P01CE1", "1111111"]


def test_tile_values_match_map_characters():
    row = "".join(tile.value for tile in Tile)
    assert row == "01CEP"
    assert has_only_valid_chars([row])
    assert is_surrounded_by_walls([Tile.WALL.value * 3] * 3)
    assert find_element(VALID, Tile.PLAYER.value) == (1, 1)


def test_find_element_first_in_reading_order():
    grid = ["111", "1C1", "1C1", "111"]
    col, row = find_element(grid, "C")
    assert grid[row][col] == "C"
    assert row == 1


def test_find_element_missing_and_empty():
    assert find_element(VALID, "X") is None
    assert find_element([], "P") is None


def test_has_no_empty_lines():
    assert has_no_empty_lines(VALID)
    assert not has_no_empty_lines(["111", "", "111"])
    assert not has_no_empty_lines(["111", " \t ", "111"])


def test_is_rectangular():
    assert is_rectangular(VALID) == (len(VALID[0]), len(VALID))
    assert is_rectangular(["111", "11", "111"]) is None
    assert is_rectangular([]) is None


def test_has_only_valid_chars():
    assert has_only_valid_chars(VALID)
    assert not has_only_valid_chars(["111", "1X1", "111"])


def test_is_surrounded_by_walls():
    assert is_surrounded_by_walls(VALID)
    assert not is_surrounded_by_walls(["1111", "1PCE", "1111"])
    assert not is_surrounded_by_walls(["1101", "1P01", "1111"])


def test_count_elements_matches_characters():
    grid = ["11111", "1PCC1", "1CE01", "11111"]
    counts = count_elements(grid)
    for tile in (Tile.PLAYER, Tile.EXIT, Tile.COLLECT):
        assert counts[tile] == "".join(grid).count(tile.value)


def test_check_required_elements_passes_valid():
    check_required_elements(VALID)
    assert count_elements(VALID)[Tile.PLAYER] == 1


@pytest.mark.parametrize(
    "grid, message",
    [
        (["111111", "1PPCE1", "111111"], "Invalid number of player (P)"),
        (["11111", "10CE1", "11111"], "Invalid number of player (P)"),
        (["111111", "1PCEE1", "111111"], "Invalid number of exit (E)"),
        (["11111", "1P0E1", "11111"], "No collectible (C) found"),
    ],
)
def test_check_required_elements_errors(grid, message):
    with pytest.raises(MapError) as info:
        check_required_elements(grid)
    assert str(info.value) == message


def test_reachable_cells_invariants():
    start = find_element(BLOCKED, "P")
    reached = reachable_cells(BLOCKED, start)
    assert start in reached
    assert all(BLOCKED[row][col] != "1" for col, row in reached)
    assert find_element(BLOCKED, "E") not in reached


def test_reachable_cells_covers_open_region():
    start = find_element(VALID, "P")
    reached = reachable_cells(VALID, start)
    open_cells = {
        (col, row)
        for row, line in enumerate(VALID)
        for col, char in enumerate(line)
        if char != "1"
    }
    assert reached == open_cells


def test_reachable_cells_from_wall_is_empty():
    assert reachable_cells(VALID, (0, 0)) == set()


def test_is_map_solvable():
    assert is_map_solvable(VALID)
    assert not is_map_solvable(BLOCKED)
    assert not is_map_solvable(["111", "1C1", "111"])


def test_validate_map_accepts_valid():
    validate_map(VALID)
    assert is_map_solvable(VALID)


@pytest.mark.parametrize(
    "grid, message",
    [
        ([], "Map is empty or not loaded"),
        (["1111", "", "1111"], "Empty line in map"),
        (["11111", "1PCE", "11111"], "Map is not rectangular"),
        (["111111", "1PXCE1", "111111"], "Invalid character in map"),
        (["11111", "1PCE0", "11111"], "Map is not surrounded by walls"),
        (["11111", "1P0E1", "11111"], "Map does not have required elements P/E/C"),
        (BLOCKED, "Map is not solvable"),
    ],
)
def test_validate_map_errors(grid, message):
    with pytest.raises(MapError) as info:
        validate_map(grid)
    assert str(info.value) == message


def test_validate_map_keeps_specific_cause():
    with pytest.raises(MapError) as info:
        validate_map(["1111111", "1PPC0E1", "1111111"])
    assert str(info.value.__cause__) == "Invalid number of player (P)"