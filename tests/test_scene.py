import pytest

from cubraycaster.scene import (
    Scene,
    SceneError,
    Textures,
    check_map_name,
    load_scene,
    parse_rgb,
    parse_scene_lines,
)

HEADER = [
    "NO ./textures/north.xpm\n",
    "SO ./textures/south.xpm\n",
    "WE ./textures/west.xpm\n",
    "EA ./textures/east.xpm\n",
    "\n",
    "F 220,100,0\n",
    "C 225,30,0\n",
    "\n",
]
MAP = ["111111\n", "100001\n", "10N01\n", "111111\n"]


def test_check_map_name_accepts_cub():
    assert check_map_name("maps/level.cub") is None


def test_check_map_name_rejects_other_extension():
    with pytest.raises(SceneError, match="Name map isn't in"):
        check_map_name("maps/level.txt")


def test_parse_rgb_plain():
    assert parse_rgb("220,100,0") == (220, 100, 0)


def test_parse_rgb_with_spaces_and_newline():
    assert parse_rgb(" 1, 2 ,3\n") == (1, 2, 3)


def test_parse_rgb_skips_empty_fields():
    assert parse_rgb("1,,2,3") == (1, 2, 3)


def test_parse_rgb_bounds():
    assert parse_rgb("0,0,255") == (0, 0, 255)


@pytest.mark.parametrize(
    "text, message",
    [
        ("1,2", "Invalid RGB format"),
        ("1,2,3,4", "Invalid RGB format"),
        ("\n", "Invalid RGB format"),
        ("1,-2,3", "RGB must be positive numbers"),
        ("1,a,3", "RGB must be positive numbers"),
        ("1, ,3", "RGB value cannot be empty"),
        ("1,256,3", "RGB value out of limits"),
    ],
)
def test_parse_rgb_errors(text, message):
    with pytest.raises(SceneError, match=message):
        parse_rgb(text)


def test_parse_full_scene():
    scene = parse_scene_lines(HEADER + MAP)
    assert scene.textures.north == "./textures/north.xpm"
    assert scene.textures.south == "./textures/south.xpm"
    assert scene.textures.west == "./textures/west.xpm"
    assert scene.textures.east == "./textures/east.xpm"
    assert scene.textures.floor == (220, 100, 0)
    assert scene.textures.ceiling == (225, 30, 0)
    assert scene.height == len(MAP)
    assert scene.width == len("111111")


def test_grid_rows_are_padded_to_same_width():
    scene = parse_scene_lines(HEADER + MAP)
    assert all(len(row) == scene.width for row in scene.grid)
    assert [row.rstrip() for row in scene.grid] == [line.strip("\n") for line in MAP]


def test_map_row_leading_spaces_are_kept():
    scene = parse_scene_lines(HEADER + ["  111\n", "  101\n", "  111"])
    assert scene.grid[0].startswith("  111")
    assert scene.grid[2] == "  111"


def test_indented_keys_and_trailing_blank_lines():
    lines = ["\tNO ./a.xpm\n", "   C 1,2,3\n"] + MAP + ["\n", "   \n"]
    scene = parse_scene_lines(lines)
    assert scene.textures.north == "./a.xpm"
    assert scene.textures.ceiling == (1, 2, 3)
    assert scene.height == len(MAP)


def test_no_map_gives_empty_grid():
    scene = parse_scene_lines(HEADER)
    assert scene.grid == []
    assert scene.width == 0


def test_lines_without_newlines():
    scene = parse_scene_lines([line.rstrip("\n") for line in HEADER + MAP])
    assert scene.textures.floor == (220, 100, 0)
    assert scene.height == len(MAP)


@pytest.mark.parametrize(
    "lines, message",
    [
        ([], "Map file is empty!"),
        (["X something\n"], "Invalid line"),
        (["NO ./a.xpm\n", "NO ./b.xpm\n"], "Duplicate or invalid texture"),
        (["NOX ./a.xpm\n"], "Duplicate or invalid texture"),
        (["NO ./a.png\n"], "Texture file must be a .xpm file"),
        (["NO ./a.xpm extra\n"], "Too many arguments for texture"),
        (["NO\n"], "Invalid texture"),
        (["F 1,2,3\n", "F 4,5,6\n"], "Duplicate floor color"),
        (["C 1,2,3\n", "C 4,5,6\n"], "Duplicate ceiling color"),
        (MAP + ["NO ./a.xpm\n"], "Map isn't at the end of fd"),
        (["111\n", "\n", "111\n"], "Map isn't at the end of fd"),
        (["111\n", " N11\n"], "Map isn't at the end of fd"),
    ],
)
def test_parse_errors(lines, message):
    with pytest.raises(SceneError, match=message):
        parse_scene_lines(lines)


def test_texture_with_trailing_space_before_newline():
    scene = parse_scene_lines(["EA ./east.xpm \n"])
    assert scene.textures.east == "./east.xpm"


def test_load_scene_from_file(tmp_path):
    path = tmp_path / "level.cub"
    path.write_text("".join(HEADER + MAP))
    scene = load_scene(path)
    assert scene == parse_scene_lines(HEADER + MAP)


def test_load_scene_missing_file(tmp_path):
    with pytest.raises(SceneError, match="Opening file failed!"):
        load_scene(tmp_path / "missing.cub")


def test_scene_defaults():
    scene = Scene()
    assert scene.textures == Textures()
    assert scene.height == 0