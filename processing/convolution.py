"""
Convolution Module

Generic 2D kernel application over a single-channel plane with a selectable
boundary policy. Normalization is left to the caller.
"""

from enum import Enum

import numpy as np


class BoundaryPolicy(Enum):
    """How samples outside the plane are treated."""
    VALID = 'valid'    # skipped, excluded from the weighted sum
    CLAMP = 'clamp'    # clamped to the nearest row/column


def convolve(source: np.ndarray,
             kernel: np.ndarray,
             boundary: BoundaryPolicy = BoundaryPolicy.VALID) -> np.ndarray:
    """
    Apply an odd n x n kernel to a single-channel plane.

    The kernel is applied as written (correlation): tap (ky, kx) weights the
    sample at offset (ky - r, kx - r) from the output pixel.

    Args:
        source: (H, W) input plane
        kernel: (n, n) weights, n odd
        boundary: BoundaryPolicy for out-of-range samples

    Returns:
        (H, W) float64 weighted sums
    """
    kernel = np.asarray(kernel, dtype=np.float64)
    if kernel.ndim != 2 or kernel.shape[0] != kernel.shape[1] or kernel.shape[0] % 2 == 0:
        raise ValueError(f"Kernel must be square with odd size, got shape {kernel.shape}")

    source = np.asarray(source, dtype=np.float64)
    if source.ndim != 2:
        raise ValueError(f"Source must be a 2D plane, got shape {source.shape}")

    h, w = source.shape
    out = np.zeros((h, w), dtype=np.float64)
    if h == 0 or w == 0:
        return out

    radius = kernel.shape[0] // 2
    if boundary is BoundaryPolicy.CLAMP:
        padded = np.pad(source, radius, mode='edge')
    elif boundary is BoundaryPolicy.VALID:
        # Zero padding drops out-of-range taps from the sum
        padded = np.pad(source, radius, mode='constant', constant_values=0)
    else:
        raise ValueError(f"Unsupported boundary policy: {boundary!r}")

    n = kernel.shape[0]
    for ky in range(n):
        for kx in range(n):
            weight = kernel[ky, kx]
            if weight == 0:
                continue
            out += weight * padded[ky:ky + h, kx:kx + w]

    return out
