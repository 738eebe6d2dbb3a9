"""Tests for the bucket fill."""

from canvas import PixelBuffer
from fill import flood_fill

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)
RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


def _colors(buffer):
    return {
        (x, y): buffer.get_pixel(x, y)
        for y in range(buffer.height)
        for x in range(buffer.width)
    }


def test_fill_uniform_buffer():
    """Filling a single-colour buffer recolours every pixel."""
    buffer = PixelBuffer(4, 4, WHITE)

    assert flood_fill(buffer, 0, 0, RED) is True

    assert set(_colors(buffer).values()) == {RED}


def test_fill_stops_at_different_colour():
    """A lone black pixel is left alone while its white surroundings change."""
    buffer = PixelBuffer(4, 4, WHITE)
    buffer.set_pixel(2, 2, BLACK)

    flood_fill(buffer, 0, 0, BLUE)

    colors = _colors(buffer)
    assert colors.pop((2, 2)) == BLACK
    assert len(colors) == 15
    assert set(colors.values()) == {BLUE}


def test_fill_inside_enclosed_box():
    """Only the interior of a closed border is filled."""
    buffer = PixelBuffer(5, 5, WHITE)
    border = [(x, 1) for x in range(1, 4)] + [(x, 3) for x in range(1, 4)] + [(1, 2), (3, 2)]
    for x, y in border:
        buffer.set_pixel(x, y, BLACK)

    flood_fill(buffer, 2, 2, RED)

    for (x, y), color in _colors(buffer).items():
        if (x, y) == (2, 2):
            assert color == RED
        elif (x, y) in border:
            assert color == BLACK
        else:
            assert color == WHITE


def test_fill_outside_enclosed_box_leaves_interior():
    buffer = PixelBuffer(5, 5, WHITE)
    border = [(x, 1) for x in range(1, 4)] + [(x, 3) for x in range(1, 4)] + [(1, 2), (3, 2)]
    for x, y in border:
        buffer.set_pixel(x, y, BLACK)

    flood_fill(buffer, 0, 0, RED)

    assert buffer.get_pixel(2, 2) == WHITE
    assert buffer.get_pixel(4, 4) == RED
    assert buffer.get_pixel(0, 4) == RED


def test_fill_does_not_cross_diagonals():
    """Regions touching only at a corner are not connected."""
    buffer = PixelBuffer(3, 3, WHITE)
    buffer.set_pixel(1, 0, BLACK)
    buffer.set_pixel(0, 1, BLACK)

    flood_fill(buffer, 2, 2, RED)

    assert buffer.get_pixel(0, 0) == WHITE
    assert buffer.get_pixel(1, 1) == RED


def test_fill_with_same_colour_is_noop():
    """Filling with the colour already present changes nothing, in place."""
    buffer = PixelBuffer(4, 4, RED)
    pixels = buffer.pixels
    before = buffer.copy_pixels()

    assert flood_fill(buffer, 1, 1, RED) is False

    assert buffer.pixels is pixels
    assert (buffer.pixels == before).all()


def test_fill_skips_when_only_alpha_differs():
    """The early exit compares RGB only, so a translucent red area stays translucent."""
    buffer = PixelBuffer(3, 3, (255, 0, 0, 128))

    assert flood_fill(buffer, 0, 0, RED) is False

    assert buffer.get_pixel(0, 0) == (255, 0, 0, 128)


def test_fill_walk_matches_all_four_channels():
    """A pixel with the same RGB but a different alpha blocks the region."""
    buffer = PixelBuffer(3, 3, (0, 0, 0, 0))
    buffer.set_pixel(1, 1, BLACK)

    flood_fill(buffer, 0, 0, RED)

    assert buffer.get_pixel(1, 1) == BLACK
    assert buffer.get_pixel(2, 2) == RED


def test_fill_forces_opaque_alpha():
    buffer = PixelBuffer(2, 2, WHITE)

    flood_fill(buffer, 0, 0, (0, 255, 0, 10))

    assert buffer.get_pixel(1, 1) == (0, 255, 0, 255)


def test_fill_seed_out_of_range_is_noop():
    buffer = PixelBuffer(4, 4, WHITE)

    assert flood_fill(buffer, -1, 0, RED) is False
    assert flood_fill(buffer, 0, 4, RED) is False
    assert flood_fill(buffer, 4, 0, RED) is False

    assert set(_colors(buffer).values()) == {WHITE}


def test_fill_large_region_without_recursion():
    """A region far larger than the default recursion limit fills completely."""
    buffer = PixelBuffer(200, 200, WHITE)

    flood_fill(buffer, 100, 100, BLUE)

    assert (buffer.pixels == BLUE).all()
