"""Reader for XPM images: text files or in-memory line arrays.

Pixels are stored as 32-bit ``0xAARRGGBB`` values with four bytes per pixel.
Transparent pixels (colour ``None``) get ``0xFF000000``, which marks full
transparency in this image model.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from sollong.colors import TRANSPARENT, color_from_text

BYTES_PER_PIXEL = 4
TRANSPARENT_PIXEL = 0xFF000000

_WORD_SEPARATORS = re.compile(r"[ \t]+")
_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read or parsed."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded XPM image, pixels in row-major order."""

    width: int
    height: int
    pixels: tuple[int, ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the 32-bit pixel value at column ``x``, row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return self.pixels[y * self.width + x]


def split_words(text: str) -> list[str]:
    """Split ``text`` into words separated by spaces and tabs only."""
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def _find_unquoted(text: str, token: str) -> int:
    """Position of the first ``token`` outside double-quoted strings, or -1."""
    quoted = False
    last_start = len(text) - len(token)
    for pos, char in enumerate(text):
        if pos > last_start:
            break
        if char == '"':
            quoted = not quoted
        if not quoted and text.startswith(token, pos):
            return pos
    return -1


def _blank(text: str, start: int, end: int) -> str:
    return text[:start] + " " * (end - start) + text[end:]


def strip_comments(text: str) -> str:
    """Replace C and C++ comments outside quoted strings with spaces.

    A ``//`` comment is blanked together with the newline that ends it. The
    length of the text is preserved.
    """
    while (begin := _find_unquoted(text, "/*")) != -1:
        close = text.find("*/", begin + 2)
        end = len(text) if close == -1 else close + 2
        text = _blank(text, begin, end)
    while (begin := _find_unquoted(text, "//")) != -1:
        newline = text.find("\n", begin + 2)
        end = len(text) if newline == -1 else newline + 1
        text = _blank(text, begin, end)
    return text


def quoted_strings(text: str) -> Iterator[str]:
    """Yield the contents of successive double-quoted strings in ``text``."""
    pos = 0
    while True:
        opening = text.find('"', pos)
        if opening == -1:
            return
        closing = text.find('"', opening + 1)
        if closing == -1:
            return
        yield text[opening + 1:closing]
        pos = closing + 1


def _atoi(word: str) -> int:
    match = _ATOI.match(word)
    return int(match.group(1)) if match else 0


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError(f"unexpected end of data while reading {what}") from None


def _parse_header(line: str) -> tuple[int, int, int, int]:
    words = split_words(line)
    if len(words) < 4:
        raise XpmError(f"malformed XPM header: {line!r}")
    values = tuple(_atoi(word) for word in words[:4])
    if any(value <= 0 for value in values):
        raise XpmError(f"invalid XPM header values: {line!r}")
    width, height, ncolors, cpp = values
    return width, height, ncolors, cpp


def _parse_color(line: str, cpp: int) -> tuple[str, int]:
    words = split_words(line[cpp:])
    try:
        index = words.index("c") + 1
    except ValueError:
        raise XpmError(f"colour line without 'c' key: {line!r}") from None
    if index >= len(words):
        raise XpmError(f"colour line without colour value: {line!r}")
    suffix = words[index + 1] if index + 1 < len(words) else None
    return line[:cpp], color_from_text(words[index], suffix)


def parse_xpm_lines(lines: Iterable[str]) -> XpmImage:
    """Decode an XPM image from its sequence of string lines."""
    source = iter(lines)
    width, height, ncolors, cpp = _parse_header(_next_line(source, "header"))

    palette: dict[str, int] = {}
    # Short keys are looked up directly, so a later definition replaces an
    # earlier one; longer keys are searched in order and the first one wins.
    last_wins = cpp <= 2
    for _ in range(ncolors):
        key, value = _parse_color(_next_line(source, "colours"), cpp)
        if last_wins:
            palette[key] = value
        else:
            palette.setdefault(key, value)

    pixels: list[int] = []
    for _ in range(height):
        row = _next_line(source, "pixels")
        for x in range(width):
            color = palette.get(row[cpp * x:cpp * x + cpp], 0)
            if color == TRANSPARENT:
                color = TRANSPARENT_PIXEL
            pixels.append(color & 0xFFFFFFFF)
    return XpmImage(width, height, tuple(pixels))


def parse_xpm_text(text: str) -> XpmImage:
    """Decode an XPM image from the text of an XPM file."""
    return parse_xpm_lines(quoted_strings(strip_comments(text)))


def load_xpm(path: str | Path) -> XpmImage:
    """Read and decode the XPM file at ``path``."""
    try:
        text = Path(path).read_bytes().decode("latin-1")
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return parse_xpm_text(text)