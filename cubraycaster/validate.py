"""Checks that a parsed scene is complete and its map is closed."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .scene import Scene, SceneError

PLAYER_TILES = "NSEW"
_OPEN_TILES = frozenset("0NSEW")
_VALID_TILES = frozenset("01NSEW ")
_NOT_CLOSED = "Error : Map isn't valid!"


@dataclass(frozen=True)
class PlayerStart:
    """Grid cell and facing letter (N, S, E or W) of the player."""

    x: int
    y: int
    direction: str


def find_start(grid: Sequence[str]) -> PlayerStart | None:
    """Return the first player tile, scanning rows top to bottom."""
    for y, row in enumerate(grid):
        for x, tile in enumerate(row):
            if tile in PLAYER_TILES:
                return PlayerStart(x, y, tile)
    return None


def check_textures(scene: Scene) -> None:
    """Raise SceneError if a wall texture or a colour is missing."""
    textures = scene.textures
    if None in (textures.north, textures.south, textures.west, textures.east):
        raise SceneError("Error : Missing texture information")
    if textures.floor is None or textures.ceiling is None:
        raise SceneError("Error : Missing color information")


def flood_fill(grid: list[list[str]], x: int, y: int) -> None:
    """Mark every open cell reachable from (x, y) with ``F``, in place.

    Raises SceneError if the region reaches the edge of the grid or a
    cell that is neither open floor nor wall.
    """
    pending = [(x, y)]
    while pending:
        cx, cy = pending.pop()
        if cx < 0 or cy < 0 or cy >= len(grid) or cx >= len(grid[cy]):
            raise SceneError(_NOT_CLOSED)
        tile = grid[cy][cx]
        if tile in ("1", "F"):
            continue
        if tile not in _OPEN_TILES:
            raise SceneError(_NOT_CLOSED)
        grid[cy][cx] = "F"
        pending.extend(((cx + 1, cy), (cx - 1, cy), (cx, cy + 1), (cx, cy - 1)))


def check_map(scene: Scene) -> PlayerStart:
    """Check the map is closed, has one player and only known tiles."""
    grid = scene.grid
    if len(grid) < 3:
        raise SceneError("Error : Invalid map")
    start = find_start(grid)
    if start is None:
        raise SceneError("Error : No player!")
    if sum(tile in PLAYER_TILES for row in grid for tile in row) > 1:
        raise SceneError("Error : More than one player")
    filled = [list(row) for row in grid]
    flood_fill(filled, start.x, start.y)
    for y, row in enumerate(grid):
        for x, tile in enumerate(row):
            if tile == "0":
                flood_fill(filled, x, y)
    if any(tile not in _VALID_TILES for row in grid for tile in row):
        raise SceneError("Error : Invalid map")
    return start


def validate_scene(scene: Scene) -> PlayerStart:
    """Run every check on a scene and return where the player starts."""
    check_textures(scene)
    return check_map(scene)