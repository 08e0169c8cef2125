"""The player: starting pose, keyboard state and movement through the map."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .validate import PlayerStart

_START_ANGLES = {
    "E": 0.0,
    "N": 3 * math.pi / 2,
    "W": math.pi,
    "S": math.pi / 2,
}


class Key(Enum):
    """The keys the game reacts to."""

    W = "w"
    S = "s"
    A = "a"
    D = "d"
    LEFT = "left"
    RIGHT = "right"
    ESCAPE = "escape"


_HELD_KEYS = {
    Key.W: "w",
    Key.S: "s",
    Key.A: "a",
    Key.D: "d",
    Key.LEFT: "left",
    Key.RIGHT: "right",
}


@dataclass
class InputState:
    """Which movement and turning keys are currently held."""

    w: bool = False
    s: bool = False
    a: bool = False
    d: bool = False
    left: bool = False
    right: bool = False

    def press(self, key: Key) -> None:
        """Mark a key as held; keys without a held state are ignored."""
        attribute = _HELD_KEYS.get(key)
        if attribute is not None:
            setattr(self, attribute, True)

    def release(self, key: Key) -> None:
        """Mark a key as released."""
        attribute = _HELD_KEYS.get(key)
        if attribute is not None:
            setattr(self, attribute, False)


def start_angle(direction: str) -> float:
    """View angle in radians for a start letter; y grows downwards."""
    return _START_ANGLES.get(direction, 0.0)


def is_walkable(grid: Sequence[str], x: float, y: float) -> bool:
    """True unless the cell containing (x, y) is a wall or off the map."""
    cx, cy = int(x), int(y)
    if x < 0 or y < 0 or cy >= len(grid) or cx >= len(grid[cy]):
        return False
    return grid[cy][cx] != "1"


@dataclass
class Player:
    """Position in map units and view angle in radians."""

    x: float
    y: float
    angle: float

    @classmethod
    def from_start(cls, start: PlayerStart) -> Player:
        """Place the player in the centre of its start cell."""
        return cls(start.x + 0.5, start.y + 0.5, start_angle(start.direction))

    def rotate(self, inputs: InputState, step: float) -> None:
        """Turn by ``step`` radians for each held turning key."""
        if inputs.left:
            self.angle -= step
        if inputs.right:
            self.angle += step

    def movement(self, inputs: InputState, speed: float) -> tuple[float, float]:
        """Return the (dx, dy) the held movement keys ask for."""
        dx = dy = 0.0
        cos_a, sin_a = math.cos(self.angle), math.sin(self.angle)
        if inputs.w:
            dx += cos_a * speed
            dy += sin_a * speed
        if inputs.s:
            dx -= cos_a * speed
            dy -= sin_a * speed
        if inputs.d:
            dx += math.cos(self.angle + math.pi / 2) * speed
            dy += math.sin(self.angle + math.pi / 2) * speed
        if inputs.a:
            dx += math.cos(self.angle - math.pi / 2) * speed
            dy += math.sin(self.angle - math.pi / 2) * speed
        return dx, dy

    def move_by(self, grid: Sequence[str], dx: float, dy: float) -> None:
        """Move along each axis separately, so walls can be slid along."""
        new_x = self.x + dx
        new_y = self.y + dy
        if is_walkable(grid, new_x, self.y):
            self.x = new_x
        if is_walkable(grid, self.x, new_y):
            self.y = new_y

    def update(
        self, grid: Sequence[str], inputs: InputState, speed: float, rotation: float
    ) -> tuple[float, float]:
        """Apply one frame of turning and movement; return the requested step."""
        self.rotate(inputs, rotation)
        dx, dy = self.movement(inputs, speed)
        if dx != 0 or dy != 0:
            self.move_by(grid, dx, dy)
        return dx, dy