import pytest

from sollong.game import (
    Game,
    Key,
    MoveOutcome,
    count_collectibles,
    direction_for_key,
)
from sollong.validate import MapError

SIMPLE = ["11111", "1PCE1", "11111"]
EXIT_FIRST = ["111111", "1PEC01", "111111"]


def test_direction_for_key():
    assert direction_for_key(Key.W) == (0, -1)
    assert direction_for_key(Key.S) == (0, 1)
    assert direction_for_key(Key.A) == (-1, 0)
    assert direction_for_key(Key.D) == (1, 0)
    assert direction_for_key(12345) == (0, 0)


def test_key_codes_fixed():
    assert direction_for_key(ord("w")) == (0, -1)
    assert direction_for_key(ord("d")) == (1, 0)
    game = Game.from_grid(SIMPLE)
    assert game.handle_key(65307) is MoveOutcome.QUIT


def test_count_collectibles():
    assert count_collectibles(["1C1", "CC0"]) == 3
    assert count_collectibles(["111"]) == 0


def test_from_grid_state():
    game = Game.from_grid(SIMPLE)
    assert game.collect_count == 1
    assert game.exit_pos == (3, 1)
    assert game.player_position() == (1, 1)
    assert (game.rows, game.cols) == (3, 5)
    assert game.collected == 0
    assert game.move_count == 0


def test_from_grid_rejects_invalid():
    with pytest.raises(MapError):
        Game.from_grid(["111", "1P1", "111"])


def test_from_file(tmp_path):
    path = tmp_path / "map.ber"
    path.write_text("\n".join(SIMPLE) + "\n")
    game = Game.from_file(path)
    assert ["".join(row) for row in game.grid] == SIMPLE


def test_wall_blocks():
    game = Game.from_grid(SIMPLE)
    assert game.handle_key(Key.W) is MoveOutcome.BLOCKED
    assert game.move_count == 0
    assert game.player_position() == (1, 1)


def test_other_keys_do_nothing():
    game = Game.from_grid(SIMPLE)
    assert game.handle_key(42) is MoveOutcome.NONE
    assert game.player_position() == (1, 1)


def test_escape_quits():
    game = Game.from_grid(SIMPLE)
    assert game.handle_key(Key.ESC) is MoveOutcome.QUIT


def test_collect_and_win(capsys):
    game = Game.from_grid(SIMPLE)
    assert game.handle_key(Key.D) is MoveOutcome.MOVED
    assert game.collected == 1
    assert game.move_count == 1
    assert "".join(game.grid[1]) == "10PE1"
    out = capsys.readouterr().out
    assert "Collected an item! (1/1)" in out
    assert "Move count: 1" in out
    assert game.handle_key(Key.D) is MoveOutcome.WON
    assert "GOAL!!" in capsys.readouterr().out
    assert game.move_count == 1


def test_exit_kept_when_items_remain(capsys):
    game = Game.from_grid(EXIT_FIRST)
    assert game.handle_key(Key.D) is MoveOutcome.MOVED
    assert "Items remain!" in capsys.readouterr().out
    assert game.player_position() == (2, 1)
    assert game.handle_key(Key.D) is MoveOutcome.MOVED
    assert "".join(game.grid[1]) == "10EP01"
    assert game.handle_key(Key.A) is MoveOutcome.WON


def test_can_move_outside_map():
    game = Game.from_grid(SIMPLE)
    assert not game.can_move(-1, 0)
    assert not game.can_move(0, 10)
    assert game.can_move(2, 1)


def test_echo_receives_messages():
    game = Game.from_grid(SIMPLE)
    messages = []
    game.echo = messages.append
    assert game.handle_key(Key.D) is MoveOutcome.MOVED
    assert game.player_position() == (2, 1)
    assert any("Move count: 1" in message for message in messages)
    assert any("Collected an item! (1/1)" in message for message in messages)