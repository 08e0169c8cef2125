import pytest

from cubraycaster.scene import Scene, SceneError, Textures, parse_scene_lines
from cubraycaster.validate import (
    PlayerStart,
    check_map,
    check_textures,
    find_start,
    flood_fill,
    validate_scene,
)

CLOSED = ["11111", "10001", "10N01", "11111"]


def full_textures():
    return Textures(
        north="n.xpm", south="s.xpm", west="w.xpm", east="e.xpm",
        floor=(1, 2, 3), ceiling=(4, 5, 6),
    )


def scene_with(grid):
    return Scene(full_textures(), list(grid))


def test_find_start_locates_player():
    start = find_start(CLOSED)
    assert CLOSED[start.y][start.x] == start.direction
    assert start.direction == "N"


def test_find_start_without_player():
    assert find_start(["111", "101", "111"]) is None


def test_find_start_returns_first_in_row_order():
    grid = ["1E1", "1W1"]
    assert find_start(grid) == PlayerStart(1, 0, "E")


def test_validate_closed_map():
    start = validate_scene(scene_with(CLOSED))
    assert start == find_start(CLOSED)


def test_validate_parsed_scene():
    lines = [
        "NO ./n.xpm\n", "SO ./s.xpm\n", "WE ./w.xpm\n", "EA ./e.xpm\n",
        "F 10,20,30\n", "C 40,50,60\n", "\n",
    ] + [row + "\n" for row in CLOSED]
    start = validate_scene(parse_scene_lines(lines))
    assert start.direction == "N"


@pytest.mark.parametrize(
    "field_name", ["north", "south", "west", "east"]
)
def test_missing_texture(field_name):
    textures = full_textures()
    setattr(textures, field_name, None)
    with pytest.raises(SceneError, match="Missing texture information"):
        check_textures(Scene(textures, list(CLOSED)))


@pytest.mark.parametrize("field_name", ["floor", "ceiling"])
def test_missing_color(field_name):
    textures = full_textures()
    setattr(textures, field_name, None)
    with pytest.raises(SceneError, match="Missing color information"):
        check_textures(Scene(textures, list(CLOSED)))


def test_textures_checked_before_map():
    with pytest.raises(SceneError, match="Missing texture information"):
        validate_scene(Scene(Textures(), ["1"]))


def test_map_too_short():
    with pytest.raises(SceneError, match="Invalid map"):
        check_map(scene_with(["111", "1N1"]))


def test_no_player():
    with pytest.raises(SceneError, match="No player!"):
        check_map(scene_with(["111", "101", "111"]))


def test_more_than_one_player():
    with pytest.raises(SceneError, match="More than one player"):
        check_map(scene_with(["11111", "1N0S1", "11111"]))


def test_open_edge():
    with pytest.raises(SceneError, match="Map isn't valid!"):
        check_map(scene_with(["11111", "10000", "10N01", "11111"]))


def test_space_inside_map():
    with pytest.raises(SceneError, match="Map isn't valid!"):
        check_map(scene_with(["11111", "10 01", "10N01", "11111"]))


def test_separate_open_region_is_checked():
    with pytest.raises(SceneError, match="Map isn't valid!"):
        check_map(scene_with(["11111", "1N101", "11110"]))


def test_enclosed_unknown_tile():
    with pytest.raises(SceneError, match="Invalid map"):
        check_map(scene_with(["11111", "1N1X1", "11111"]))


def test_reachable_unknown_tile_fails_flood():
    with pytest.raises(SceneError, match="Map isn't valid!"):
        check_map(scene_with(["11111", "1NX01", "11111"]))


def test_check_map_leaves_grid_untouched():
    scene = scene_with(CLOSED)
    check_map(scene)
    assert scene.grid == CLOSED


def test_flood_fill_marks_reachable_cells():
    grid = [list(row) for row in ["11111", "10101", "11111"]]
    flood_fill(grid, 1, 1)
    assert grid[1][1] == "F"
    assert grid[1][3] == "0"
    assert sum(row.count("F") for row in grid) == 1


def test_flood_fill_on_wall_changes_nothing():
    grid = [list(row) for row in CLOSED]
    flood_fill(grid, 0, 0)
    assert ["".join(row) for row in grid] == CLOSED


def test_flood_fill_out_of_bounds():
    grid = [list(row) for row in CLOSED]
    with pytest.raises(SceneError, match="Map isn't valid!"):
        flood_fill(grid, -1, 0)


def test_flood_fill_large_room():
    size = 200
    rows = ["1" * size] + ["1" + "0" * (size - 2) + "1" for _ in range(size - 2)] + ["1" * size]
    grid = [list(row) for row in rows]
    flood_fill(grid, 1, 1)
    inner = (size - 2) * (size - 2)
    assert sum(row.count("F") for row in grid) == inner
    assert all(tile != "0" for row in grid for tile in row)
    assert validate_scene(scene_with(rows[:1] + ["1N" + rows[1][2:]] + rows[2:])).direction == "N"