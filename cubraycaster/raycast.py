"""Grid ray casting (DDA) and the camera rays that make up one frame."""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum


class WallFace(Enum):
    """Which wall texture a ray hit; values match the scene texture names."""

    NORTH = "north"
    SOUTH = "south"
    WEST = "west"
    EAST = "east"


@dataclass(frozen=True)
class RayHit:
    """Where a ray met a wall.

    ``perp`` is the distance perpendicular to the camera plane, ``x`` and
    ``y`` the exact hit point, ``side`` 0 for a vertical grid line and 1
    for a horizontal one, and ``map_x``/``map_y`` the wall cell.
    """

    perp: float
    x: float
    y: float
    side: int
    face: WallFace
    map_x: int
    map_y: int


def _cell(grid: Sequence[str], x: int, y: int) -> str:
    if y < 0 or y >= len(grid) or x < 0 or x >= len(grid[y]):
        raise ValueError(f"ray left the map at cell ({x}, {y})")
    return grid[y][x]


def _face(side: int, step_x: int, step_y: int) -> WallFace:
    if side == 0:
        return WallFace.WEST if step_x > 0 else WallFace.EAST
    return WallFace.NORTH if step_y > 0 else WallFace.SOUTH


def cast_ray(grid: Sequence[str], px: float, py: float, dir_x: float, dir_y: float) -> RayHit:
    """Walk the grid from (px, py) along (dir_x, dir_y) until a ``1`` cell.

    Raises ValueError for a zero direction or a ray that leaves the map.
    """
    if dir_x == 0 and dir_y == 0:
        raise ValueError("ray direction must not be zero")
    map_x, map_y = int(px), int(py)
    delta_x = abs(1.0 / dir_x) if dir_x else math.inf
    delta_y = abs(1.0 / dir_y) if dir_y else math.inf

    if dir_x < 0:
        step_x = -1
        side_x = (px - map_x) * delta_x if dir_x else math.inf
    else:
        step_x = 1
        side_x = (map_x + 1.0 - px) * delta_x if dir_x else math.inf
    if dir_y < 0:
        step_y = -1
        side_y = (py - map_y) * delta_y if dir_y else math.inf
    else:
        step_y = 1
        side_y = (map_y + 1.0 - py) * delta_y if dir_y else math.inf

    side = 0
    while _cell(grid, map_x, map_y) != "1":
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_y += delta_y
            map_y += step_y
            side = 1

    if side == 0:
        perp = (map_x - px + (1 - step_x) / 2.0) / dir_x
    else:
        perp = (map_y - py + (1 - step_y) / 2.0) / dir_y
    return RayHit(
        perp=perp,
        x=px + perp * dir_x,
        y=py + perp * dir_y,
        side=side,
        face=_face(side, step_x, step_y),
        map_x=map_x,
        map_y=map_y,
    )


def camera_rays(angle: float, width: int, fov: float) -> Iterator[tuple[int, float, float]]:
    """Yield ``(column, dir_x, dir_y)`` for each screen column.

    ``angle`` is the view direction in radians and ``fov`` the horizontal
    field of view in degrees.
    """
    dir_x = math.cos(angle)
    dir_y = math.sin(angle)
    half = math.tan(fov * math.pi / 360.0)
    plane_x = -dir_y * half
    plane_y = dir_x * half
    for column in range(width):
        camera_x = 2.0 * column / width - 1.0
        yield column, dir_x + plane_x * camera_x, dir_y + plane_y * camera_x


def shorten_segment(x0: int, y0: int, x1: int, y1: int) -> tuple[int, int]:
    """Pull the end of an integer segment one unit back towards its start.

    Segments shorter than one unit are left as they are. Returns the new
    end point.
    """
    dx = x1 - x0
    dy = y1 - y0
    length = math.sqrt(dx * dx + dy * dy)
    if length < 1.0:
        return x1, y1
    scale = (length - 1.0) / length
    return int(x0 + dx * scale), int(y0 + dy * scale)