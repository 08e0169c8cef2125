import math

import pytest

from cubraycaster.game import Game, load_textures, main
from cubraycaster.image import Image
from cubraycaster.player import Key
from cubraycaster.raycast import WallFace
from cubraycaster.render import Settings
from cubraycaster.scene import Scene, SceneError, Textures, parse_scene_lines

FLOOR = (10, 20, 30)
CEILING = (40, 50, 60)

SCENE_LINES = [
    "NO n.xpm\n",
    "SO s.xpm\n",
    "WE w.xpm\n",
    "EA e.xpm\n",
    "F 10,20,30\n",
    "C 40,50,60\n",
    "\n",
    "111111\n",
    "100001\n",
    "10N001\n",
    "100001\n",
    "111111\n",
]

FACE_COLORS = {
    WallFace.NORTH: 0x110000,
    WallFace.SOUTH: 0x002200,
    WallFace.WEST: 0x000033,
    WallFace.EAST: 0x444444,
}

XPM_TEXT = """/* XPM */
static char *t[] = {
"2 2 2 1",
"a c #FF0000",
"b c #00FF00",
"ab",
"ba"
};
"""


def _textures():
    return {face: Image(4, 4, [color] * 16) for face, color in FACE_COLORS.items()}


def _game():
    scene = parse_scene_lines(SCENE_LINES)
    return Game(scene, _textures(), Settings(width=60, height=40))


def _rgb(color):
    r, g, b = color
    return (r << 16) | (g << 8) | b


def test_player_starts_in_centre_of_start_cell_facing_north():
    game = _game()
    assert (game.player.x, game.player.y) == (2.5, 2.5)
    assert game.player.angle == pytest.approx(3 * math.pi / 2)
    assert game.running


def test_escape_stops_the_game():
    game = _game()
    game.handle_key(Key.ESCAPE, True)
    assert game.running is False


def test_forward_key_moves_player_north():
    game = _game()
    game.handle_key(Key.W, True)
    assert game.inputs.w is True
    game.tick()
    assert game.player.y < 2.5
    assert game.player.x == pytest.approx(2.5)


def test_released_key_stops_movement():
    game = _game()
    game.handle_key(Key.W, True)
    game.tick()
    game.handle_key(Key.W, False)
    position = (game.player.x, game.player.y)
    game.tick()
    assert (game.player.x, game.player.y) == position


def test_turn_key_changes_angle():
    game = _game()
    start = game.player.angle
    game.handle_key(Key.RIGHT, True)
    game.tick()
    assert game.player.angle > start


def test_tick_draws_ceiling_floor_and_wall():
    game = _game()
    screen = game.tick()
    assert screen.get_pixel(0, 0) == _rgb(CEILING)
    assert screen.get_pixel(0, 39) == _rgb(FLOOR)
    assert screen.get_pixel(30, 20) == FACE_COLORS[WallFace.SOUTH]


def test_game_rejects_scene_without_player():
    lines = SCENE_LINES[:7] + ["111\n", "101\n", "111\n"]
    scene = parse_scene_lines(lines)
    with pytest.raises(SceneError):
        Game(scene, _textures(), Settings(width=60, height=40))


def test_game_requires_every_texture():
    scene = parse_scene_lines(SCENE_LINES)
    textures = _textures()
    del textures[WallFace.EAST]
    with pytest.raises(ValueError):
        Game(scene, textures, Settings(width=60, height=40))


def test_load_textures_reads_xpm_files(tmp_path):
    path = tmp_path / "wall.xpm"
    path.write_text(XPM_TEXT)
    scene = Scene(Textures(str(path), str(path), str(path), str(path), FLOOR, CEILING), [])
    loaded = load_textures(scene)
    assert set(loaded) == set(WallFace)
    image = loaded[WallFace.NORTH]
    assert (image.width, image.height) == (2, 2)
    assert image.get_pixel(0, 0) == 0xFF0000
    assert image.get_pixel(1, 0) == 0x00FF00


def test_load_textures_missing_file(tmp_path):
    missing = str(tmp_path / "nope.xpm")
    scene = Scene(Textures(missing, missing, missing, missing, FLOOR, CEILING), [])
    with pytest.raises(SceneError):
        load_textures(scene)


def test_main_without_argument_fails(capsys):
    assert main([]) == 1
    assert "Usage" in capsys.readouterr().err


def test_main_rejects_wrong_extension(capsys):
    assert main(["map.txt"]) == 1
    assert ".cub" in capsys.readouterr().err


def test_main_rejects_open_map(tmp_path, capsys):
    path = tmp_path / "open.cub"
    path.write_text("".join(SCENE_LINES[:7]) + "111\n10N\n111\n")
    assert main([str(path)]) == 1
    assert "Error" in capsys.readouterr().err