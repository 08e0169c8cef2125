"""An in-memory 32-bit pixel buffer with the drawing primitives the renderer uses."""

from __future__ import annotations

from dataclasses import dataclass, field

_MASK = 0xFFFFFFFF


@dataclass
class Image:
    """A width x height grid of 0xAARRGGBB pixels stored row by row."""

    width: int
    height: int
    pixels: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("image dimensions must not be negative")
        size = self.width * self.height
        if not self.pixels:
            self.pixels = [0] * size
        elif len(self.pixels) != size:
            raise ValueError(
                f"expected {size} pixels for a {self.width}x{self.height} image, "
                f"got {len(self.pixels)}"
            )

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set one pixel; points outside the image are ignored."""
        if self._inside(x, y):
            self.pixels[y * self.width + x] = color & _MASK

    def get_pixel(self, x: int, y: int) -> int:
        """Return the pixel at (x, y); raises IndexError outside the image."""
        if not self._inside(x, y):
            raise IndexError(f"pixel ({x}, {y}) is outside a {self.width}x{self.height} image")
        return self.pixels[y * self.width + x]

    def fill_rect(self, x: int, y: int, width: int, height: int, color: int) -> None:
        """Fill the rectangle with its top-left corner at (x, y)."""
        for row in range(y, y + height):
            for col in range(x, x + width):
                self.put_pixel(col, row, color)

    def draw_square(self, x: int, y: int, size: int, color: int) -> None:
        """Fill a size x size square with its top-left corner at (x, y)."""
        self.fill_rect(x, y, size, size, color)

    def draw_circle(self, cx: int, cy: int, radius: int, color: int) -> None:
        """Fill the disc of the given radius centred on (cx, cy)."""
        limit = radius * radius
        for dx in range(-radius, radius + 1):
            for dy in range(-radius, radius + 1):
                if dx * dx + dy * dy <= limit:
                    self.put_pixel(cx + dx, cy + dy, color)

    def draw_line(self, x0: int, y0: int, x1: int, y1: int, color: int) -> None:
        """Draw a Bresenham line from (x0, y0) up to, but not including, (x1, y1)."""
        dx = abs(x1 - x0)
        dy = abs(y1 - y0)
        sx = 1 if x0 < x1 else -1
        sy = 1 if y0 < y1 else -1
        err = dx - dy
        while (x0, y0) != (x1, y1):
            self.put_pixel(x0, y0, color)
            e2 = 2 * err
            if e2 > -dy:
                err -= dy
                x0 += sx
            if e2 < dx:
                err += dx
                y0 += sy