"""Loading of ``.ber`` map files and formatting of error reports."""

from __future__ import annotations

from pathlib import Path

RED = "\033[0;31m"
RESET = "\033[0m"

LOAD_FAILURE = "Failed to load map file or file not found"


class MapLoadError(OSError):
    """Raised when a map file cannot be opened or read."""


def read_map(path: str | Path) -> list[str]:
    """Read a map file and return its lines without their trailing newline.

    A final newline does not start an extra line, so an empty file gives an
    empty list while a file holding only ``"\\n"`` gives one empty line.
    """
    try:
        text = Path(path).read_bytes().decode("latin-1")
    except OSError as exc:
        raise MapLoadError(LOAD_FAILURE) from exc
    lines = text.split("\n")
    if text.endswith("\n") or not text:
        lines.pop()
    return lines


def format_error(message: str) -> str:
    """Return the coloured ``Error`` report for ``message`` as written to stderr."""
    return f"{RED}Error\n{message}\n{RESET}"