import numpy as np
import pytest

from processing import PixelBuffer


def make_buffer(rgb: np.ndarray, alpha: int = 255) -> PixelBuffer:
    """Build a buffer from an (H, W, 3) or (H, W) array."""
    rgb = np.asarray(rgb, dtype=np.uint8)
    if rgb.ndim == 2:
        rgb = np.stack([rgb, rgb, rgb], axis=-1)
    h, w = rgb.shape[:2]
    pixels = np.empty((h, w, 4), dtype=np.uint8)
    pixels[:, :, :3] = rgb
    pixels[:, :, 3] = alpha
    return PixelBuffer.from_image(pixels)


@pytest.fixture
def random_buffer() -> PixelBuffer:
    """24x16 frame of random colors with random alpha."""
    rng = np.random.default_rng(1234)
    pixels = rng.integers(0, 256, size=(16, 24, 4), dtype=np.uint8)
    return PixelBuffer.from_image(pixels)


@pytest.fixture
def uniform_buffer() -> PixelBuffer:
    """12x10 frame where every pixel is the same color."""
    rgb = np.zeros((10, 12, 3), dtype=np.uint8)
    rgb[:] = (120, 64, 200)
    return make_buffer(rgb, alpha=200)


@pytest.fixture
def black_buffer() -> PixelBuffer:
    return PixelBuffer.blank(20, 15)


@pytest.fixture
def square_buffer() -> PixelBuffer:
    """32x32 black frame with a white 12x12 square in the middle."""
    gray = np.zeros((32, 32), dtype=np.uint8)
    gray[10:22, 10:22] = 255
    return make_buffer(gray)
