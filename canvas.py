import logging
from typing import Tuple

import numpy as np
from PIL import Image

Color = Tuple[int, int, int, int]

log = logging.getLogger(__name__)


def parse_hex_color(value: str) -> Color:
    """Converts a 6-digit hex string ("#rrggbb" or "rrggbb") to opaque RGBA."""
    digits = value[1:] if value.startswith("#") else value
    if len(digits) != 6:
        raise ValueError(f"expected 6 hex digits, got {value!r}")
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16), 255)


class PixelBuffer:
    """
    Owns the RGBA pixel array the drawing tools operate on.

    Pixels live in a C-contiguous (height, width, 4) uint8 array, so the flat
    byte length is always width * height * 4.
    """
    def __init__(self, width, height, background: Color = (255, 255, 255, 255)):
        if width <= 0 or height <= 0:
            raise ValueError(f"buffer size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = np.empty((height, width, 4), dtype=np.uint8)
        self.fill_all(background)

    def in_bounds(self, x, y) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_pixel(self, x, y) -> Color:
        r, g, b, a = self.pixels[y, x]
        return (int(r), int(g), int(b), int(a))

    def set_pixel(self, x, y, color: Color):
        self.pixels[y, x] = color

    def fill_all(self, color: Color):
        """Paints every pixel with a single colour."""
        self.pixels[:, :] = color

    def copy_pixels(self) -> np.ndarray:
        return self.pixels.copy()

    def restore(self, pixels: np.ndarray):
        """Copies previously captured pixels back into the live array."""
        if pixels.shape != self.pixels.shape:
            raise ValueError(
                f"cannot restore {pixels.shape} pixels into a {self.pixels.shape} buffer"
            )
        self.pixels[...] = pixels

    def stamp(self, x, y, size, color: Color):
        """Paints a filled disc of diameter `size` centred on pixel (x, y)."""
        radius = size / 2.0
        reach = int(radius)
        x0 = max(x - reach, 0)
        x1 = min(x + reach, self.width - 1)
        y0 = max(y - reach, 0)
        y1 = min(y + reach, self.height - 1)
        if x0 > x1 or y0 > y1:
            return
        ys, xs = np.ogrid[y0:y1 + 1, x0:x1 + 1]
        mask = (xs - x) ** 2 + (ys - y) ** 2 <= radius * radius
        self.pixels[y0:y1 + 1, x0:x1 + 1][mask] = color

    def stroke_segment(self, x0, y0, x1, y1, size, color: Color):
        """Stamps discs along the segment so a fast drag leaves no gaps."""
        dx = x1 - x0
        dy = y1 - y0
        steps = max(abs(dx), abs(dy))
        if steps == 0:
            self.stamp(x0, y0, size, color)
            return
        for i in range(steps + 1):
            t = i / steps
            self.stamp(int(round(x0 + t * dx)), int(round(y0 + t * dy)), size, color)

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.pixels)

    def save_png(self, filename="drawing.png"):
        """Saves the buffer to a PNG file."""
        self.to_image().save(filename, format="PNG")
        log.info("saved %dx%d drawing to %s", self.width, self.height, filename)
