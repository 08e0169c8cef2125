"""Drawing one frame: ceiling, floor, textured walls and the minimap."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from .image import Image
from .player import Player
from .raycast import RayHit, WallFace, camera_rays, cast_ray, shorten_segment
from .scene import Scene

UNKNOWN_TILE_COLOR = 0x888888
_WALL_COLOR = 0x404040
_FLOOR_COLOR = 0xC0C0C0
_PLAYER_COLOR = 0xFF0000
_CONE_COLOR = 0xFFFF00
_MIN_PERP = 0.0001


@dataclass(frozen=True)
class Settings:
    """Window size, field of view, speeds and minimap colours."""

    width: int = 1280
    height: int = 720
    fov: float = 60.0
    move_speed: float = 0.05
    rotation_step: float = 0.04
    wall_color: int = _WALL_COLOR
    floor_color: int = _FLOOR_COLOR
    player_color: int = _PLAYER_COLOR
    cone_color: int = _CONE_COLOR
    title: str = "cubraycaster"

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Error : bad size of window")


@dataclass(frozen=True)
class Minimap:
    """Placement of the minimap in the bottom-right corner of the screen."""

    tile: int
    width_px: int
    height_px: int
    offset_x: int
    offset_y: int
    wall_color: int = _WALL_COLOR
    floor_color: int = _FLOOR_COLOR
    player_color: int = _PLAYER_COLOR
    cone_color: int = _CONE_COLOR


def tile_size(settings: Settings, map_width: int, map_height: int) -> int:
    """Minimap cell size so the map takes at most a third of each dimension."""
    return min(settings.width // (3 * map_width), settings.height // (3 * map_height))


def minimap_layout(settings: Settings, map_width: int, map_height: int) -> Minimap:
    """Place the minimap against the bottom-right corner."""
    tile = tile_size(settings, map_width, map_height)
    width_px = map_width * tile
    height_px = map_height * tile
    return Minimap(
        tile=tile,
        width_px=width_px,
        height_px=height_px,
        offset_x=settings.width - width_px,
        offset_y=settings.height - height_px,
        wall_color=settings.wall_color,
        floor_color=settings.floor_color,
        player_color=settings.player_color,
        cone_color=settings.cone_color,
    )


def wall_span(perp: float, settings: Settings) -> tuple[float, int, int]:
    """Return the wall height and its first and last screen rows."""
    perp = max(perp, _MIN_PERP)
    h = (1.0 / perp) * ((settings.width / 2.0) / math.tan(settings.fov * math.pi / 360.0))
    y0 = max(int((settings.height - h) / 2.0), 0)
    y1 = min(int((settings.height + h) / 2.0), settings.height - 1)
    return h, y0, y1


def _under_minimap(x: int, y: int, minimap: Minimap, settings: Settings) -> bool:
    return (
        y >= settings.height - minimap.height_px + 1
        and x > settings.width - minimap.width_px
    )


def draw_ceiling(image: Image, color: int, settings: Settings) -> None:
    """Fill the top half of the screen."""
    image.fill_rect(0, 0, settings.width, settings.height // 2, color)


def draw_floor(image: Image, color: int, minimap: Minimap, settings: Settings) -> None:
    """Fill the bottom half of the screen, leaving the minimap corner alone."""
    for y in range(settings.height // 2, settings.height):
        for x in range(settings.width):
            if _under_minimap(x, y, minimap, settings):
                break
            image.put_pixel(x, y, color)


def draw_wall_column(
    image: Image,
    column: int,
    hit: RayHit,
    textures: Mapping[WallFace, Image],
    minimap: Minimap,
    settings: Settings,
) -> None:
    """Draw the textured wall slice for one screen column."""
    h, y0, y1 = wall_span(hit.perp, settings)
    texture = textures[hit.face]
    wall_x = hit.x if hit.face in (WallFace.NORTH, WallFace.SOUTH) else hit.y
    wall_x -= math.floor(wall_x)
    tex_x = int(wall_x * texture.width)
    if tex_x < 0:
        tex_x += texture.width
    if hit.face in (WallFace.EAST, WallFace.NORTH):
        tex_x = texture.width - tex_x - 1
    step = texture.height / h
    tex_pos = (y0 - settings.height / 2.0 + h / 2.0) * step
    for y in range(y0, y1):
        tex_y = int(tex_pos)
        if tex_y < 0:
            tex_y += texture.height
        tex_y %= texture.height
        tex_pos += step
        if _under_minimap(column, y, minimap, settings):
            break
        image.put_pixel(column, y, texture.get_pixel(tex_x, tex_y))


def _tile_color(tile: str, minimap: Minimap) -> int:
    if tile == "1":
        return minimap.wall_color
    if tile in "0NSEW":
        return minimap.floor_color
    return UNKNOWN_TILE_COLOR


def draw_minimap(image: Image, grid: Sequence[str], minimap: Minimap) -> None:
    """Draw one square per map cell."""
    for y, row in enumerate(grid):
        for x, tile in enumerate(row):
            image.draw_square(
                minimap.offset_x + x * minimap.tile,
                minimap.offset_y + y * minimap.tile,
                minimap.tile,
                _tile_color(tile, minimap),
            )


def draw_player(image: Image, player: Player, minimap: Minimap) -> None:
    """Draw the player as a disc on the minimap."""
    image.draw_circle(
        int(minimap.offset_x + player.x * minimap.tile),
        int(minimap.offset_y + player.y * minimap.tile),
        minimap.tile // 4,
        minimap.player_color,
    )


def _rgb(color: tuple[int, int, int] | None) -> int:
    if color is None:
        raise ValueError("Error : Missing color information")
    red, green, blue = color
    return (red << 16) | (green << 8) | blue


def render_frame(
    image: Image,
    scene: Scene,
    player: Player,
    textures: Mapping[WallFace, Image],
    settings: Settings,
) -> Minimap:
    """Draw a whole frame into ``image`` and return the minimap layout used."""
    minimap = minimap_layout(settings, scene.width, scene.height)
    draw_minimap(image, scene.grid, minimap)
    draw_player(image, player, minimap)
    draw_ceiling(image, _rgb(scene.textures.ceiling), settings)
    draw_floor(image, _rgb(scene.textures.floor), minimap, settings)
    x0 = int(minimap.offset_x + player.x * minimap.tile)
    y0 = int(minimap.offset_y + player.y * minimap.tile)
    for column, dir_x, dir_y in camera_rays(player.angle, settings.width, settings.fov):
        hit = cast_ray(scene.grid, player.x, player.y, dir_x, dir_y)
        draw_wall_column(image, column, hit, textures, minimap, settings)
        x1 = int(minimap.offset_x + hit.x * minimap.tile)
        y1 = int(minimap.offset_y + hit.y * minimap.tile)
        x1, y1 = shorten_segment(x0, y0, x1, y1)
        image.draw_line(x0, y0, x1, y1, minimap.cone_color)
    return minimap