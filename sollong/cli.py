"""Command-line entry point that loads a map and plays it in a window."""

from __future__ import annotations

import sys
from typing import Sequence

import pygame

from sollong.game import Game, Key, MoveOutcome
from sollong.mapfile import MapLoadError, format_error
from sollong.render import ImageSet, Renderer, load_images
from sollong.validate import MapError
from sollong.xpm import XpmError

TITLE = "so_long"
USAGE = "Usage: so_long <path to map.ber>"


class UsageError(Exception):
    """Raised when the command line is not as expected."""


def is_ber_file(filename: str | None) -> bool:
    """True when ``filename`` ends in ``.ber``."""
    return bool(filename) and len(filename) >= 4 and filename.endswith(".ber")


def validate_args(argv: Sequence[str]) -> str:
    """Return the map path from the arguments, or raise UsageError."""
    if len(argv) != 1:
        raise UsageError(USAGE)
    if not is_ber_file(argv[0]):
        raise UsageError("Map file must have .ber extension")
    return argv[0]


def _report(message: str) -> None:
    sys.stderr.write(format_error(message))


def _causes(exc: BaseException) -> list[BaseException]:
    chain = []
    current: BaseException | None = exc
    while current is not None:
        chain.append(current)
        current = current.__cause__
    return chain[::-1]


def _pygame_keys() -> dict[int, int]:
    return {
        pygame.K_ESCAPE: Key.ESC,
        pygame.K_w: Key.W,
        pygame.K_a: Key.A,
        pygame.K_s: Key.S,
        pygame.K_d: Key.D,
    }


def run(game: Game, images: ImageSet) -> None:
    """Open a window and play until the player wins, quits or closes it."""
    try:
        pygame.display.init()
    except pygame.error as exc:
        raise RuntimeError("Failed to initialize display") from exc
    renderer = Renderer(images)
    try:
        screen = pygame.display.set_mode(renderer.window_size(game))
    except pygame.error as exc:
        pygame.quit()
        raise RuntimeError("Failed to create window") from exc
    pygame.display.set_caption(TITLE)
    keys = _pygame_keys()

    def redraw() -> None:
        renderer.draw(screen, game)
        pygame.display.flip()

    redraw()
    try:
        while True:
            event = pygame.event.wait()
            if event.type == pygame.QUIT:
                break
            if event.type == pygame.VIDEOEXPOSE:
                redraw()
            elif event.type == pygame.KEYDOWN:
                outcome = game.handle_key(keys.get(event.key, event.key))
                if outcome in (MoveOutcome.QUIT, MoveOutcome.WON):
                    break
                if outcome is MoveOutcome.MOVED:
                    redraw()
        sys.stdout.write("Window closed!\n")
        sys.stdout.flush()
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game on the map file named on the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        path = validate_args(args)
    except UsageError as exc:
        _report(str(exc))
        return 1
    try:
        game = Game.from_file(path)
    except MapLoadError as exc:
        _report(str(exc))
        return 1
    except MapError as exc:
        for cause in _causes(exc):
            _report(str(cause))
        _report("Invalid map")
        return 1
    try:
        images = load_images()
    except XpmError as exc:
        _report(str(exc))
        return 1
    try:
        run(game, images)
    except RuntimeError as exc:
        _report(str(exc))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())