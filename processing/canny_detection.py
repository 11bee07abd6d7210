"""
Canny Detection Module

Binary edge map from a fixed pipeline:
grayscale -> Gaussian blur -> gradient -> non-maximum suppression
-> double threshold -> hysteresis linking -> render.
"""

import logging
from enum import IntEnum
from typing import NamedTuple

import numpy as np

from config import PipelineConfig
from .convolution import BoundaryPolicy, convolve
from .luma import luma_plane, to_byte
from .pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


class EdgeLabel(IntEnum):
    """Per-pixel classification after double thresholding."""
    NONE = 0
    WEAK = 1
    STRONG = 2


class GradientField(NamedTuple):
    """Per-pixel gradient magnitude and direction (radians); border entries are 0."""
    magnitude: np.ndarray
    direction: np.ndarray


_NEIGHBORS = [(dy, dx) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if dy or dx]


class CannyDetector:
    """Detects thin, linked edges with fixed thresholds."""

    def __init__(self):
        self.config = PipelineConfig.CANNY
        self.low = self.config['LOW_THRESHOLD']
        self.high = self.config['HIGH_THRESHOLD']
        self.edge_value = self.config['EDGE_VALUE']

        self.blur_kernel = PipelineConfig.GAUSSIAN_BLUR['KERNEL']
        self.blur_divisor = PipelineConfig.GAUSSIAN_BLUR['DIVISOR']
        self.kernel_x = PipelineConfig.SOBEL['KERNEL_X']
        self.kernel_y = PipelineConfig.SOBEL['KERNEL_Y']

    def blur(self, gray: np.ndarray) -> np.ndarray:
        """5x5 Gaussian blur with clamp-to-edge sampling, stored as bytes."""
        total = convolve(gray, self.blur_kernel, BoundaryPolicy.CLAMP)
        return to_byte(total / self.blur_divisor)

    def gradient(self, blurred: np.ndarray) -> GradientField:
        """Sobel magnitude and direction for interior pixels; the 1-pixel border stays 0."""
        h, w = blurred.shape
        magnitude = np.zeros((h, w), dtype=np.float64)
        direction = np.zeros((h, w), dtype=np.float64)
        if h < 3 or w < 3:
            return GradientField(magnitude, direction)

        gx = convolve(blurred, self.kernel_x, BoundaryPolicy.VALID)[1:-1, 1:-1]
        gy = convolve(blurred, self.kernel_y, BoundaryPolicy.VALID)[1:-1, 1:-1]
        magnitude[1:-1, 1:-1] = np.sqrt(gx * gx + gy * gy)
        # atan2(0, 0) == 0, which lands in the horizontal bin
        direction[1:-1, 1:-1] = np.arctan2(gy, gx)
        return GradientField(magnitude, direction)

    def suppress_non_maxima(self, field: GradientField) -> np.ndarray:
        """
        Keep magnitudes that are local maxima along the gradient orientation.

        Orientation bins (degrees, each with a 22.5 degree half-window):
            0   -> compare left / right
            45  -> compare up-right / down-left
            90  -> compare up / down
            135 -> compare up-left / down-right

        Returns:
            (H, W) float64 suppressed magnitudes; border pixels are 0
        """
        mag = field.magnitude
        h, w = mag.shape
        suppressed = np.zeros((h, w), dtype=np.float64)
        if h < 3 or w < 3:
            return suppressed

        angle = np.clip(np.degrees(field.direction[1:-1, 1:-1]), -180.0, 180.0)
        center = mag[1:-1, 1:-1]

        bin_0 = (((0 <= angle) & (angle < 22.5)) | ((157.5 <= angle) & (angle <= 180))
                 | ((-22.5 <= angle) & (angle < 0)) | ((-180 <= angle) & (angle < -157.5)))
        bin_45 = ((22.5 <= angle) & (angle < 67.5)) | ((-157.5 <= angle) & (angle < -112.5))
        bin_90 = ((67.5 <= angle) & (angle < 112.5)) | ((-112.5 <= angle) & (angle < -67.5))
        bin_135 = ((112.5 <= angle) & (angle < 157.5)) | ((-67.5 <= angle) & (angle < -22.5))
        bins = [bin_0, bin_45, bin_90, bin_135]

        right, left = mag[1:-1, 2:], mag[1:-1, :-2]
        up, down = mag[:-2, 1:-1], mag[2:, 1:-1]
        up_right, down_left = mag[:-2, 2:], mag[2:, :-2]
        up_left, down_right = mag[:-2, :-2], mag[2:, 2:]

        q = np.select(bins, [right, up_right, up, up_left], default=255.0)
        r = np.select(bins, [left, down_left, down, down_right], default=255.0)

        suppressed[1:-1, 1:-1] = np.where((center >= q) & (center >= r), center, 0.0)
        return suppressed

    def threshold(self, suppressed: np.ndarray) -> np.ndarray:
        """Double threshold into EdgeLabel values."""
        labels = np.full(suppressed.shape, EdgeLabel.NONE, dtype=np.uint8)
        labels[suppressed >= self.low] = EdgeLabel.WEAK
        labels[suppressed >= self.high] = EdgeLabel.STRONG
        return labels

    def link_edges(self, labels: np.ndarray) -> np.ndarray:
        """
        Hysteresis: promote WEAK pixels 8-connected to a STRONG pixel, transitively.

        Uses an explicit worklist instead of recursion so large weak regions
        cannot exhaust the call stack. Unreached WEAK pixels keep their label.

        Args:
            labels: (H, W) uint8 EdgeLabel map

        Returns:
            New (H, W) uint8 label map
        """
        h, w = labels.shape
        if not np.any(labels == EdgeLabel.WEAK):
            return labels.copy()

        flat = bytearray(np.ascontiguousarray(labels, dtype=np.uint8).tobytes())
        weak, strong = int(EdgeLabel.WEAK), int(EdgeLabel.STRONG)

        stack = np.flatnonzero(labels == EdgeLabel.STRONG).tolist()
        seeds = len(stack)
        promoted = 0

        while stack:
            y, x = divmod(stack.pop(), w)
            for dy, dx in _NEIGHBORS:
                ny, nx = y + dy, x + dx
                if 0 <= ny < h and 0 <= nx < w:
                    idx = ny * w + nx
                    if flat[idx] == weak:
                        flat[idx] = strong
                        stack.append(idx)
                        promoted += 1

        logger.debug("Hysteresis: %d strong seeds, %d weak pixels promoted", seeds, promoted)
        return np.frombuffer(flat, dtype=np.uint8).reshape(h, w).copy()

    def render(self, labels: np.ndarray) -> np.ndarray:
        """Binary uint8 plane: edge value for STRONG, 0 otherwise."""
        return np.where(labels == EdgeLabel.STRONG, self.edge_value, 0).astype(np.uint8)

    def detect(self, gray: np.ndarray) -> np.ndarray:
        """
        Run blur through hysteresis on a grayscale plane.

        Args:
            gray: (H, W) uint8 grayscale plane

        Returns:
            (H, W) uint8 final EdgeLabel map
        """
        blurred = self.blur(gray)
        field = self.gradient(blurred)
        suppressed = self.suppress_non_maxima(field)
        labels = self.threshold(suppressed)
        return self.link_edges(labels)

    def apply(self, buffer: PixelBuffer) -> PixelBuffer:
        """Replace R, G, B with the binary edge map; alpha is untouched."""
        gray = luma_plane(buffer)
        buffer.write_gray(self.render(self.detect(gray)))
        return buffer
