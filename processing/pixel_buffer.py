"""
Pixel Buffer Module

Interleaved 8-bit RGBA frame shared by every filter.
"""

from dataclasses import dataclass
from typing import Union

import numpy as np

from .errors import InvalidBufferShape

CHANNELS = 4


def _as_samples(data) -> np.ndarray:
    """Wrap raw sample storage as a uint8 array, sharing memory when it is writable."""
    if isinstance(data, np.ndarray):
        samples = data
    elif isinstance(data, (bytes, bytearray, memoryview)):
        samples = np.frombuffer(data, dtype=np.uint8)
    else:
        samples = np.asarray(data, dtype=np.uint8)
    if not samples.flags.writeable:
        # filters write in place
        samples = samples.copy()
    return samples


@dataclass(eq=False)
class PixelBuffer:
    """
    Simple data object: row-major RGBA samples plus the declared frame size.
    Filters write R, G, B in place and never touch alpha.
    """
    width: int
    height: int
    data: Union[np.ndarray, bytearray, bytes]  # Flat uint8, length 4 * width * height

    def __post_init__(self):
        self.data = _as_samples(self.data)
        self.validate()

    @classmethod
    def from_image(cls, pixels: np.ndarray) -> 'PixelBuffer':
        """Build a buffer from an (H, W, 4) RGBA array, sharing its memory if contiguous."""
        if pixels.ndim != 3 or pixels.shape[2] != CHANNELS:
            raise InvalidBufferShape(
                pixels.shape[1] if pixels.ndim > 1 else None,
                pixels.shape[0] if pixels.ndim > 0 else None,
                pixels.size
            )
        height, width = pixels.shape[:2]
        samples = np.ascontiguousarray(pixels, dtype=np.uint8).reshape(-1)
        return cls(width, height, samples)

    @classmethod
    def blank(cls, width: int, height: int, alpha: int = 255) -> 'PixelBuffer':
        """Black frame with constant alpha."""
        buffer = cls(width, height, np.zeros(CHANNELS * width * height, dtype=np.uint8))
        buffer.alpha()[:] = alpha
        return buffer

    def validate(self) -> None:
        """Raise InvalidBufferShape unless data holds exactly width*height RGBA pixels."""
        data = self.data
        ok = (
            isinstance(data, np.ndarray)
            and data.dtype == np.uint8
            and data.ndim == 1
            and isinstance(self.width, (int, np.integer))
            and isinstance(self.height, (int, np.integer))
            and self.width >= 0
            and self.height >= 0
            and data.size == CHANNELS * self.width * self.height
        )
        if not ok:
            length = data.size if isinstance(data, np.ndarray) else len(data)
            raise InvalidBufferShape(self.width, self.height, length)

    @property
    def size(self):
        return self.width, self.height

    @property
    def resolution(self) -> str:
        return f"{self.width}x{self.height}"

    def pixels(self) -> np.ndarray:
        """(H, W, 4) view of the samples."""
        return self.data.reshape(self.height, self.width, CHANNELS)

    def rgb(self) -> np.ndarray:
        """(H, W, 3) view of the color channels."""
        return self.pixels()[:, :, :3]

    def alpha(self) -> np.ndarray:
        """(H, W) view of the alpha channel."""
        return self.pixels()[:, :, 3]

    def write_gray(self, plane: np.ndarray) -> None:
        """Write one (H, W) uint8 plane into R, G and B."""
        rgb = self.rgb()
        for channel in range(3):
            rgb[:, :, channel] = plane

    def copy(self) -> 'PixelBuffer':
        return PixelBuffer(self.width, self.height, self.data.copy())
