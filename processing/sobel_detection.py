"""
Sobel Detection Module

Grayscale gradient magnitude edge map. Border pixels use the valid-only
boundary policy, so their magnitude is attenuated.
"""

from typing import Tuple

import numpy as np

from config import PipelineConfig
from .convolution import BoundaryPolicy, convolve
from .luma import luma_plane, to_byte
from .pixel_buffer import PixelBuffer


class SobelDetector:
    """Renders a gray Sobel edge map into a pixel buffer."""

    def __init__(self):
        self.config = PipelineConfig.SOBEL
        self.kernel_x = self.config['KERNEL_X']
        self.kernel_y = self.config['KERNEL_Y']
        self.max_magnitude = self.config['MAX_MAGNITUDE']

    def gradients(self, gray: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Horizontal and vertical gradient estimates (gx, gy)."""
        gx = convolve(gray, self.kernel_x, BoundaryPolicy.VALID)
        gy = convolve(gray, self.kernel_y, BoundaryPolicy.VALID)
        return gx, gy

    def magnitude(self, gray: np.ndarray) -> np.ndarray:
        """Edge strength min(255, sqrt(gx^2 + gy^2)) as uint8."""
        gx, gy = self.gradients(gray)
        return to_byte(np.minimum(self.max_magnitude, np.sqrt(gx * gx + gy * gy)))

    def apply(self, buffer: PixelBuffer) -> PixelBuffer:
        """
        Replace R, G, B with the edge magnitude.

        Args:
            buffer: RGBA frame, modified in place

        Returns:
            The same buffer
        """
        gray = luma_plane(buffer)
        buffer.write_gray(self.magnitude(gray))
        return buffer
