"""Bucket fill over a PixelBuffer.

The fill walks the 4-connected region around the seed with an explicit work
stack instead of recursion, so large contiguous areas cannot exhaust the
interpreter's call depth.
"""
import logging

import numpy as np

from canvas import Color, PixelBuffer

log = logging.getLogger(__name__)


def _pack(color: Color) -> int:
    return int(np.array(color, dtype=np.uint8).view(np.uint32)[0])


def flood_fill(buffer: PixelBuffer, seed_x: int, seed_y: int, fill_color: Color) -> bool:
    """
    Recolours the region of pixels matching the seed pixel's RGBA.

    Returns True when any pixel changed. A seed outside the buffer, or a seed
    whose RGB already equals the fill RGB, leaves the buffer untouched.
    The caller is responsible for snapshotting history first.
    """
    if not buffer.in_bounds(seed_x, seed_y):
        log.debug("fill seed (%s, %s) outside %dx%d buffer", seed_x, seed_y, buffer.width, buffer.height)
        return False

    target = buffer.get_pixel(seed_x, seed_y)
    # Alpha is ignored here but not during the walk below.
    if target[:3] == tuple(fill_color[:3]):
        return False

    # One uint32 per pixel, so an exact RGBA match is a single int compare.
    packed = buffer.pixels.view(np.uint32)[:, :, 0]
    rows = packed.tolist()
    target_word = _pack(target)
    paint_word = _pack((fill_color[0], fill_color[1], fill_color[2], 255))
    w = buffer.width
    h = buffer.height

    painted = 0
    stack = [(seed_x, seed_y)]
    while stack:
        x, y = stack.pop()
        if x < 0 or x >= w or y < 0 or y >= h:
            continue
        row = rows[y]
        if row[x] != target_word:
            continue
        row[x] = paint_word
        painted += 1
        stack.extend([(x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)])

    packed[:, :] = np.array(rows, dtype=np.uint32)
    log.debug("filled %d pixels from (%d, %d)", painted, seed_x, seed_y)
    return painted > 0
