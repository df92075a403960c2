import pytest

from sollong.game import Game, Key
from sollong.render import ImageSet, Renderer, image_to_surface, load_images, tile_layers
from sollong.xpm import XpmError, XpmImage

GRID = ["111111", "1PEC01", "111111"]


class RecordingSurface:
    def __init__(self):
        self.blits = []

    def blit(self, image, position):
        self.blits.append((image, position))


def make_images(size=1):
    return ImageSet(
        player="player", wall="wall", floor="floor", collect="collect",
        exit="exit", width=size, height=size,
    )


def xpm_text(width):
    return (
        "/* XPM */\nstatic char *img[] = {\n"
        f'"{width} 1 1 1",\n'
        '"a c #FF0000",\n'
        f'"{"a" * width}"\n'
        "};\n"
    )


def test_tile_layers():
    game = Game.from_grid(GRID)
    assert tile_layers(game, 0, 0) == ("floor", "wall")
    assert tile_layers(game, 1, 1) == ("floor", "player")
    assert tile_layers(game, 2, 1) == ("floor", "exit")
    assert tile_layers(game, 3, 1) == ("floor", "collect")
    assert tile_layers(game, 4, 1) == ("floor",)


def test_player_on_exit_draws_both(capsys):
    game = Game.from_grid(GRID)
    game.handle_key(Key.D)
    assert tile_layers(game, 2, 1) == ("floor", "exit", "player")


def test_window_size():
    game = Game.from_grid(GRID)
    renderer = Renderer(make_images(1))
    assert renderer.window_size(game) == (game.cols, game.rows)


def test_draw_blits_every_layer():
    game = Game.from_grid(GRID)
    renderer = Renderer(make_images(10))
    surface = RecordingSurface()
    renderer.draw(surface, game)
    expected = sum(
        len(tile_layers(game, col, row))
        for row in range(game.rows)
        for col in range(game.cols)
    )
    assert len(surface.blits) == expected
    assert surface.blits[0] == ("floor", (0, 0))
    assert ("player", (10, 10)) in surface.blits


def test_image_to_surface_alpha():
    image = XpmImage(2, 1, (0x00FF0000, 0xFF000000))
    surface = image_to_surface(image)
    assert surface.get_size() == (2, 1)
    assert tuple(surface.get_at((0, 0))) == (255, 0, 0, 255)
    assert surface.get_at((1, 0)).a == 0


def test_load_images_uses_last_size(tmp_path):
    for name in ("player", "wall", "floor", "collect"):
        (tmp_path / f"{name}.xpm").write_text(xpm_text(2))
    (tmp_path / "exit.xpm").write_text(xpm_text(3))
    images = load_images(tmp_path)
    assert (images.width, images.height) == (3, 1)
    assert images.player.get_size() == (2, 1)


def test_load_images_missing(tmp_path):
    (tmp_path / "player.xpm").write_text(xpm_text(2))
    with pytest.raises(XpmError, match="Failed to load one or more images"):
        load_images(tmp_path)