# cubraycaster

A small first-person raycaster. It reads a `.cub` scene file that names four
wall textures (XPM images), a floor colour, a ceiling colour and a grid map.
It then opens a window where you can walk around the map. A minimap with the
player and the field of view is drawn in the bottom-right corner.

The window is drawn with pygame.

## Installing

```
pip install .
```

To run the tests, install the `test` extra:

```
pip install ".[test]"
pytest
```

## Running

```
cubraycaster path/to/level.cub
```

The file name must end in `.cub`. If the file cannot be read or breaks a rule
below, an error message goes to standard error and the command exits with
status 1.

| Key            | Action               |
|----------------|----------------------|
| W / S          | forward / back       |
| A / D          | strafe left / right  |
| Left / Right   | turn                 |
| Escape         | quit                 |

Closing the window also quits. The window is 1280x720, the field of view is
60 degrees, and the game runs at up to 60 frames per second.

## The `.cub` format

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm

F 220,100,0
C 225,30,0

111111
100101
101001
1100N1
111111
```

- `NO`, `SO`, `WE` and `EA` each give one texture path. Every path must end in
  `.xpm`, and each key may appear only once.
- `F` and `C` set the floor and ceiling colours. Each takes three
  comma-separated decimal values from 0 to 255, and each may appear only once.
- Texture and colour lines may come in any order, with blank lines between them.
- The map starts at the first line that begins (after spaces or tabs) with `0`
  or `1`. Only blank lines may follow it. Shorter rows are padded with spaces.
- The map has at least three rows. It is made of `0` (floor), `1` (wall),
  spaces, and exactly one of `N`, `S`, `E` or `W`. That letter marks where the
  player starts and the direction the player faces.
- Every floor cell and the start cell must be closed in by walls. No open cell
  may touch the edge of the map or a space.

## Using it as a library

```python
from cubraycaster.scene import load_scene
from cubraycaster.validate import validate_scene
from cubraycaster.raycast import cast_ray

scene = load_scene("level.cub")
start = validate_scene(scene)
hit = cast_ray(scene.grid, start.x + 0.5, start.y + 0.5, 1.0, 0.0)
print(hit.perp, hit.face)
```

The errors are ordinary exceptions. `cubraycaster.scene.SceneError` is raised
for a bad scene file or map, and `cubraycaster.xpm.XpmError` for a bad XPM
image. Both are subclasses of `ValueError`.

Other entry points:

- `cubraycaster.xpm.load_xpm` and `parse_xpm` decode an XPM image into a
  `cubraycaster.image.Image`. Colours are given as `#rrggbb`, as an X11 colour
  name, or as `None`.
- `cubraycaster.colors.color_by_name` looks up an X11 colour name, ignoring case.
- `cubraycaster.render.render_frame` draws a whole frame into an `Image`. It
  uses the sizes and speeds in `cubraycaster.render.Settings`.
- `cubraycaster.game.Game` holds a running game. `handle_key` feeds it key
  presses and releases, `tick` advances and renders one frame without a window,
  and `run` opens the pygame window.

## What it does not do

There is a single static level. There are no sprites, doors, enemies or
weapons, no mouse look and no sound. Walls are textured. The floor and the
ceiling are flat colours.