"""Drawing the map with tile images."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from sollong.game import Game  # noqa: E402
from sollong.validate import Tile  # noqa: E402
from sollong.xpm import XpmError, XpmImage, load_xpm  # noqa: E402

IMAGE_NAMES = ("player", "wall", "floor", "collect", "exit")

_LAYER_FOR_TILE = {
    Tile.PLAYER.value: "player",
    Tile.WALL.value: "wall",
    Tile.COLLECT.value: "collect",
    Tile.EXIT.value: "exit",
}


@dataclass
class ImageSet:
    """Images for each tile type; every tile has the given size."""

    player: Any
    wall: Any
    floor: Any
    collect: Any
    exit: Any
    width: int
    height: int


def tile_layers(game: Game, col: int, row: int) -> tuple[str, ...]:
    """Names of the images drawn at ``(col, row)``, bottom layer first."""
    tile = game.grid[row][col]
    if tile == Tile.PLAYER.value and game.exit_pos == (col, row):
        return ("floor", "exit", "player")
    layer = _LAYER_FOR_TILE.get(tile)
    return ("floor",) if layer is None else ("floor", layer)


def image_to_surface(image: XpmImage) -> pygame.Surface:
    """Convert a decoded XPM image into a surface with per-pixel alpha."""
    surface = pygame.Surface((image.width, image.height), pygame.SRCALPHA)
    for index, value in enumerate(image.pixels):
        y, x = divmod(index, image.width)
        transparency = (value >> 24) & 0xFF
        red, green, blue = (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF
        surface.set_at((x, y), (red, green, blue, 255 - transparency))
    return surface


def load_images(directory: str | Path = "images") -> ImageSet:
    """Load the five tile images from ``directory``.

    The tile size is that of the last image loaded. Raises XpmError when any
    image cannot be loaded.
    """
    base = Path(directory)
    loaded: dict[str, XpmImage | None] = {}
    for name in IMAGE_NAMES:
        try:
            loaded[name] = load_xpm(base / f"{name}.xpm")
        except XpmError:
            loaded[name] = None
    if any(image is None for image in loaded.values()):
        raise XpmError("Failed to load one or more images")
    last = loaded[IMAGE_NAMES[-1]]
    surfaces = {name: image_to_surface(image) for name, image in loaded.items()}
    return ImageSet(width=last.width, height=last.height, **surfaces)


@dataclass
class Renderer:
    """Draws a game onto any surface that supports ``blit``."""

    images: ImageSet

    def window_size(self, game: Game) -> tuple[int, int]:
        """Pixel size of a window showing the whole map."""
        return self.images.width * game.cols, self.images.height * game.rows

    def draw(self, surface: Any, game: Game) -> None:
        """Blit every tile of the map onto ``surface``."""
        width, height = self.images.width, self.images.height
        for row, line in enumerate(game.grid):
            for col in range(len(line)):
                position = (col * width, row * height)
                for layer in tile_layers(game, col, row):
                    surface.blit(getattr(self.images, layer), position)