"""Reading XPM images: comments, colour definitions and pixel rows."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from .colors import color_by_name
from .image import Image

TRANSPARENT = 0xFF000000

_WORD_SPLIT = re.compile(r"[ \t]+")
_QUOTED = re.compile(r'"([^"]*)"')
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_HEX_PREFIX = re.compile(r"\s*([+-]?)(?:0[xX])?([0-9a-fA-F]+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read or decoded."""


def split_words(text: str) -> list[str]:
    """Split on spaces and tabs only, dropping empty words."""
    return [word for word in _WORD_SPLIT.split(text) if word]


def find_unquoted(text: str, pattern: str) -> int:
    """Return the index of the first ``pattern`` outside double quotes, or -1."""
    if not pattern:
        return -1
    quoted = False
    for pos, char in enumerate(text[: len(text) - len(pattern) + 1]):
        if char == '"':
            quoted = not quoted
        if not quoted and text.startswith(pattern, pos):
            return pos
    return -1


def strip_comments(text: str) -> str:
    """Blank out C-style comments that lie outside quoted strings.

    The result has the same length as the input; comment characters,
    and the newline ending a ``//`` comment, become spaces.
    """
    while (begin := find_unquoted(text, "/*")) != -1:
        close = text.find("*/", begin + 2)
        end = len(text) if close == -1 else close + 2
        text = text[:begin] + " " * (end - begin) + text[end:]
    while (begin := find_unquoted(text, "//")) != -1:
        newline = text.find("\n", begin + 2)
        end = len(text) if newline == -1 else newline + 1
        text = text[:begin] + " " * (end - begin) + text[end:]
    return text


def _atoi(word: str) -> int:
    match = _INT_PREFIX.match(word)
    return int(match.group(1)) if match else 0


def text_to_rgb(name: str, suffix: str | None) -> int:
    """Turn an XPM colour value into 0xRRGGBB.

    ``#rrggbb`` is read as hexadecimal; otherwise the name (joined with
    ``suffix`` when one follows) is looked up in the colour table.
    ``none`` gives -1 and unknown names give 0.
    """
    if name.startswith("#"):
        match = _HEX_PREFIX.match(name[1:])
        if not match:
            return 0
        value = int(match.group(2), 16)
        return -value if match.group(1) == "-" else value
    if suffix:
        name = f"{name} {suffix}"
    found = color_by_name(name)
    return 0 if found is None else found


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError(f"XPM data ends before the {what}") from None


def _read_colors(lines: Iterator[str], count: int, cpp: int) -> dict[str, int]:
    colors: dict[str, int] = {}
    for _ in range(count):
        line = _next_line(lines, "colour definitions")
        key = line[:cpp]
        words = split_words(line[cpp:])
        try:
            index = words.index("c")
        except ValueError:
            raise XpmError(f"colour definition without a 'c' value: {line!r}") from None
        if index + 1 >= len(words):
            raise XpmError(f"colour definition missing its value: {line!r}")
        suffix = words[index + 2] if index + 2 < len(words) else None
        value = text_to_rgb(words[index + 1], suffix)
        if cpp <= 2:
            colors[key] = value
        else:
            colors.setdefault(key, value)
    return colors


def parse_xpm_lines(lines: Iterable[str]) -> Image:
    """Decode the quoted strings of an XPM file into an Image.

    Pixels whose colour is ``None`` become 0xFF000000.
    """
    it = iter(lines)
    words = split_words(_next_line(it, "header"))
    if len(words) < 4:
        raise XpmError("XPM header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in words[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError(f"invalid XPM header: {' '.join(words)!r}")
    colors = _read_colors(it, ncolors, cpp)

    pixels: list[int] = []
    row_chars = width * cpp
    for _ in range(height):
        line = _next_line(it, "pixel rows")
        if len(line) < row_chars:
            raise XpmError(f"pixel row shorter than {width} pixels: {line!r}")
        for start in range(0, row_chars, cpp):
            value = colors.get(line[start : start + cpp], 0)
            pixels.append(TRANSPARENT if value == -1 else value & 0xFFFFFFFF)
    return Image(width, height, pixels)


def parse_xpm(text: str) -> Image:
    """Decode the text of an XPM file."""
    return parse_xpm_lines(_QUOTED.findall(strip_comments(text)))


def load_xpm(path: str | Path) -> Image:
    """Read and decode an XPM file."""
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return parse_xpm(text)