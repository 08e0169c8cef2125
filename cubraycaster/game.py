"""The game: ties a scene, a player and textures to a window and a frame loop."""

from __future__ import annotations

import sys
from array import array
from collections.abc import Mapping, Sequence
from pathlib import Path

from .image import Image
from .player import InputState, Key, Player
from .raycast import WallFace
from .render import Settings, render_frame
from .scene import Scene, SceneError, check_map_name, load_scene
from .validate import validate_scene
from .xpm import XpmError, load_xpm

_USAGE = "Error : Usage : cubraycaster [map_name].cub"
_FRAMES_PER_SECOND = 60


def load_textures(scene: Scene) -> dict[WallFace, Image]:
    """Load the four wall textures named by a scene."""
    loaded: dict[WallFace, Image] = {}
    for face in WallFace:
        path = getattr(scene.textures, face.value)
        if path is None:
            raise SceneError("Error : Missing texture information")
        try:
            loaded[face] = load_xpm(path)
        except XpmError as exc:
            raise SceneError("Error : Impossible to load texture") from exc
    return loaded


class Game:
    """A running game: the validated scene, the player, held keys and the screen."""

    def __init__(
        self,
        scene: Scene,
        textures: Mapping[WallFace, Image],
        settings: Settings | None = None,
    ) -> None:
        missing = [face.value for face in WallFace if face not in textures]
        if missing:
            raise ValueError(f"missing wall textures: {', '.join(missing)}")
        start = validate_scene(scene)
        self.scene = scene
        self.textures = dict(textures)
        self.settings = settings or Settings()
        self.player = Player.from_start(start)
        self.inputs = InputState()
        self.screen = Image(self.settings.width, self.settings.height)
        self.running = True

    def handle_key(self, key: Key, pressed: bool) -> None:
        """React to a key going down or up; Escape ends the game."""
        if pressed:
            if key is Key.ESCAPE:
                self.running = False
            else:
                self.inputs.press(key)
        else:
            self.inputs.release(key)

    def tick(self) -> Image:
        """Advance one frame and return the freshly drawn screen."""
        self.player.update(
            self.scene.grid,
            self.inputs,
            self.settings.move_speed,
            self.settings.rotation_step,
        )
        render_frame(self.screen, self.scene, self.player, self.textures, self.settings)
        return self.screen

    def _surface_bytes(self) -> bytes:
        words = array("I", (pixel & 0xFFFFFFFF for pixel in self.screen.pixels))
        if sys.byteorder == "little":
            words.byteswap()
        argb = words.tobytes()
        rgb = bytearray(len(self.screen.pixels) * 3)
        rgb[0::3] = argb[1::4]
        rgb[1::3] = argb[2::4]
        rgb[2::3] = argb[3::4]
        return bytes(rgb)

    def run(self) -> None:
        """Open a window and run the frame loop until it is closed."""
        import pygame

        key_map = {
            pygame.K_w: Key.W,
            pygame.K_s: Key.S,
            pygame.K_a: Key.A,
            pygame.K_d: Key.D,
            pygame.K_LEFT: Key.LEFT,
            pygame.K_RIGHT: Key.RIGHT,
            pygame.K_ESCAPE: Key.ESCAPE,
        }
        pygame.init()
        try:
            size = (self.settings.width, self.settings.height)
            window = pygame.display.set_mode(size)
            pygame.display.set_caption(self.settings.title)
            clock = pygame.time.Clock()
            while self.running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
                        key = key_map.get(event.key)
                        if key is not None:
                            self.handle_key(key, event.type == pygame.KEYDOWN)
                if not self.running:
                    break
                self.tick()
                frame = pygame.image.frombuffer(self._surface_bytes(), size, "RGB")
                window.blit(frame, (0, 0))
                pygame.display.flip()
                clock.tick(_FRAMES_PER_SECOND)
        finally:
            pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Start the game on the ``.cub`` file named on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print(_USAGE, file=sys.stderr)
        return 1
    path = Path(args[0])
    try:
        check_map_name(path)
        scene = load_scene(path)
        validate_scene(scene)
        game = Game(scene, load_textures(scene))
    except (SceneError, ValueError) as exc:
        print(exc, file=sys.stderr)
        return 1
    game.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())