"""Grid-based first-person raycaster for .cub scene files with XPM wall textures."""

__version__ = "0.1.0"
__all__ = ["colors", "image", "xpm", "scene", "validate", "raycast", "player", "render", "game"]