"""
Point Filters Module

Per-pixel grayscale and invert transforms, applied in place.
"""

from .luma import luma_plane
from .pixel_buffer import PixelBuffer


def grayscale(buffer: PixelBuffer) -> PixelBuffer:
    """Replace R, G, B with the pixel's luma. Idempotent."""
    plane = luma_plane(buffer)
    buffer.write_gray(plane)
    return buffer


def invert(buffer: PixelBuffer) -> PixelBuffer:
    """channel := 255 - channel for R, G, B. Applying twice restores the input."""
    buffer.validate()
    rgb = buffer.rgb()
    rgb[...] = 255 - rgb
    return buffer
