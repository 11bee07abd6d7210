"""
Luma Module

Single grayscale-extraction primitive shared by every grayscale-dependent filter.
"""

import numpy as np

from config import PipelineConfig
from .pixel_buffer import PixelBuffer


def to_byte(values) -> np.ndarray:
    """Round half-to-even and clamp to [0, 255], as a clamped byte array stores floats."""
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)


def luma_array(r, g, b) -> np.ndarray:
    """Perceptual brightness of R, G, B sample arrays as uint8."""
    wr, wg, wb = PipelineConfig.LUMA_WEIGHTS
    r = np.asarray(r, dtype=np.float64)
    g = np.asarray(g, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    return to_byte(r * wr + g * wg + b * wb)


def luma(r: int, g: int, b: int) -> int:
    """Luma of a single pixel."""
    return int(luma_array(r, g, b))


def luma_plane(buffer: PixelBuffer) -> np.ndarray:
    """Grayscale (H, W) uint8 plane of a pixel buffer."""
    buffer.validate()
    rgb = buffer.rgb()
    return luma_array(rgb[:, :, 0], rgb[:, :, 1], rgb[:, :, 2])
