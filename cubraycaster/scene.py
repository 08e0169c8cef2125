"""Reading ``.cub`` scene descriptions: wall textures, colours and the map grid."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

RGB = tuple[int, int, int]

_TEXTURE_KEYS = {"NO": "north", "SO": "south", "WE": "west", "EA": "east"}
_RGB_CHARS = frozenset("0123456789 \t\n")
_LEADING_DIGITS = re.compile(r"\d+")


class SceneError(ValueError):
    """Raised when a scene file is malformed or describes an unusable map."""


@dataclass
class Textures:
    """Wall texture paths and the floor and ceiling colours of a scene."""

    north: str | None = None
    south: str | None = None
    west: str | None = None
    east: str | None = None
    floor: RGB | None = None
    ceiling: RGB | None = None


@dataclass
class Scene:
    """A parsed scene: its textures and a rectangular grid of map rows."""

    textures: Textures = field(default_factory=Textures)
    grid: list[str] = field(default_factory=list)

    @property
    def width(self) -> int:
        return max((len(row) for row in self.grid), default=0)

    @property
    def height(self) -> int:
        return len(self.grid)


def check_map_name(path: str | Path) -> None:
    """Raise SceneError unless the file name ends in ``.cub``."""
    if not str(path).endswith(".cub"):
        raise SceneError("Error : Name map isn't in .cub")


def parse_rgb(text: str) -> RGB:
    """Parse ``r,g,b`` with each component a decimal number from 0 to 255."""
    parts = [part for part in text.split(",") if part]
    if len(parts) != 3:
        raise SceneError("Error : Invalid RGB format")
    values: list[int] = []
    for part in parts:
        if not set(part) <= _RGB_CHARS:
            raise SceneError("RGB must be positive numbers")
        rest = part.lstrip(" \t")
        if not rest or rest[0] == "\n":
            raise SceneError("RGB value cannot be empty")
        value = int(_LEADING_DIGITS.match(rest).group())
        if value > 255:
            raise SceneError("RGB value out of limits")
        values.append(value)
    return values[0], values[1], values[2]


def _is_blank(content: str) -> bool:
    return not content or content[0] == "\n"


def _handle_texture(textures: Textures, content: str) -> None:
    words = [word for word in content.split(" ") if word]
    if len(words) < 2:
        raise SceneError("Error : Invalid texture")
    if len(words) > 2 and not words[2].startswith("\n"):
        raise SceneError("Error : Too many arguments for texture")
    path = words[1].strip("\t \n")
    if not path.endswith(".xpm"):
        raise SceneError("Error : Texture file must be a .xpm file")
    attribute = _TEXTURE_KEYS.get(words[0])
    if attribute is None or getattr(textures, attribute) is not None:
        raise SceneError("Error : Duplicate or invalid texture")
    setattr(textures, attribute, path)


def _handle_color(textures: Textures, content: str) -> None:
    kind, rest = content[0], content[1:]
    if kind == "F":
        if textures.floor is not None:
            raise SceneError("Error: Duplicate floor color")
        textures.floor = parse_rgb(rest)
    else:
        if textures.ceiling is not None:
            raise SceneError("Error: Duplicate ceiling color")
        textures.ceiling = parse_rgb(rest)


def _read_grid(lines: list[str]) -> list[str]:
    rows: list[str] = []
    tail = lines[len(lines):]
    for index, line in enumerate(lines):
        content = line.lstrip(" \t")
        if not content or content[0] not in "01":
            tail = lines[index:]
            break
        rows.append(line.strip("\n"))
    for line in tail:
        if not _is_blank(line.lstrip(" \t")):
            raise SceneError("Error: Map isn't at the end of fd")
    width = max((len(row) for row in rows), default=0)
    return [row.ljust(width) for row in rows]


def parse_scene_lines(lines: Iterable[str]) -> Scene:
    """Parse the lines of a scene file (newlines kept or not) into a Scene.

    Texture and colour lines come first, in any order and with blank lines
    between them; the map starts at the first line beginning with 0 or 1
    and must be the last thing in the file. Map rows are padded with
    spaces to the width of the longest one.
    """
    lines = list(lines)
    if not lines:
        raise SceneError("Error : Map file is empty!")
    textures = Textures()
    for index, line in enumerate(lines):
        content = line.lstrip(" \t")
        if _is_blank(content):
            continue
        if content[:2] in _TEXTURE_KEYS:
            _handle_texture(textures, content)
        elif content[0] in "FC":
            _handle_color(textures, content)
        elif content[0] in "01":
            return Scene(textures, _read_grid(lines[index:]))
        else:
            raise SceneError("Error: Invalid line")
    return Scene(textures, [])


def load_scene(path: str | Path) -> Scene:
    """Read and parse a scene file."""
    try:
        with open(path, "rb") as handle:
            lines = [raw.decode("utf-8", errors="replace") for raw in handle]
    except OSError as exc:
        raise SceneError("Error : Opening file failed!") from exc
    return parse_scene_lines(lines)