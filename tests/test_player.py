import math

import pytest

from cubraycaster.player import InputState, Key, Player, is_walkable, start_angle
from cubraycaster.validate import PlayerStart

BOX = ["11111", "10001", "10001", "10001", "11111"]


@pytest.mark.parametrize(
    ("letter", "angle"),
    [("E", 0.0), ("N", 3 * math.pi / 2), ("W", math.pi), ("S", math.pi / 2), ("?", 0.0)],
)
def test_start_angle(letter, angle):
    assert start_angle(letter) == pytest.approx(angle)


def test_press_and_release():
    inputs = InputState()
    inputs.press(Key.W)
    inputs.press(Key.LEFT)
    assert inputs.w and inputs.left
    assert not inputs.s
    inputs.release(Key.W)
    assert not inputs.w
    assert inputs.left


def test_escape_holds_nothing():
    inputs = InputState()
    inputs.press(Key.ESCAPE)
    assert inputs == InputState()


def test_from_start_centres_player():
    player = Player.from_start(PlayerStart(2, 3, "W"))
    assert (player.x, player.y) == (2.5, 3.5)
    assert player.angle == pytest.approx(math.pi)


def test_rotate_left_and_right():
    player = Player(1.5, 1.5, 1.0)
    player.rotate(InputState(left=True), 0.25)
    assert player.angle == pytest.approx(0.75)
    player.rotate(InputState(right=True), 0.5)
    assert player.angle == pytest.approx(1.25)
    player.rotate(InputState(left=True, right=True), 0.5)
    assert player.angle == pytest.approx(1.25)


def test_movement_forward_and_back_cancel():
    player = Player(1.5, 1.5, 0.3)
    dx, dy = player.movement(InputState(w=True, s=True), 0.1)
    assert dx == pytest.approx(0.0)
    assert dy == pytest.approx(0.0)


def test_movement_forward_follows_angle():
    player = Player(1.5, 1.5, 0.0)
    assert player.movement(InputState(w=True), 0.1) == pytest.approx((0.1, 0.0))


def test_strafe_is_perpendicular():
    player = Player(1.5, 1.5, 0.7)
    fx, fy = player.movement(InputState(w=True), 0.1)
    sx, sy = player.movement(InputState(d=True), 0.1)
    assert fx * sx + fy * sy == pytest.approx(0.0)
    ax, ay = player.movement(InputState(a=True), 0.1)
    assert (ax, ay) == pytest.approx((-sx, -sy))


def test_move_by_blocked_by_wall_slides():
    player = Player(3.5, 2.5, 0.0)
    player.move_by(BOX, 1.0, 0.3)
    assert player.x == 3.5
    assert player.y == pytest.approx(2.8)


def test_update_moves_forward():
    player = Player(1.5, 1.5, 0.0)
    step = player.update(BOX, InputState(w=True), 0.1, 0.05)
    assert step == pytest.approx((0.1, 0.0))
    assert player.x == pytest.approx(1.6)
    assert player.y == pytest.approx(1.5)


def test_update_without_keys_keeps_pose():
    player = Player(1.5, 1.5, 0.4)
    assert player.update(BOX, InputState(), 0.1, 0.05) == (0.0, 0.0)
    assert (player.x, player.y, player.angle) == (1.5, 1.5, 0.4)


def test_is_walkable():
    assert is_walkable(BOX, 1.5, 1.5)
    assert not is_walkable(BOX, 0.5, 1.5)
    assert not is_walkable(BOX, -0.5, 1.5)
    assert not is_walkable(BOX, 1.5, 9.0)