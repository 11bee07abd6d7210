"""
Visualization utilities for the frame effects pipeline.
Helpers for turning buffers and intermediate planes into labeled BGR panels.
"""

import cv2
import numpy as np
from typing import List, Tuple, Optional

from config import PipelineConfig
from .canny_detection import EdgeLabel
from .pixel_buffer import PixelBuffer


def buffer_to_bgr(buffer: PixelBuffer) -> np.ndarray:
    """Copy an RGBA buffer into a BGR image (alpha dropped)."""
    return cv2.cvtColor(buffer.pixels(), cv2.COLOR_RGBA2BGR)


def bgr_to_buffer(image: np.ndarray) -> PixelBuffer:
    """Build an opaque RGBA buffer from a BGR or grayscale image."""
    if image.ndim == 2:
        rgba = cv2.cvtColor(image, cv2.COLOR_GRAY2RGBA)
    elif image.shape[2] == 4:
        rgba = cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)
    else:
        rgba = cv2.cvtColor(image, cv2.COLOR_BGR2RGBA)
    return PixelBuffer.from_image(rgba)


def plane_to_bgr(plane: np.ndarray, normalize: bool = False) -> np.ndarray:
    """
    Convert a single-channel plane to a BGR image.

    Args:
        plane: (H, W) array
        normalize: Stretch values to [0, 255] instead of clipping

    Returns:
        (H, W, 3) uint8 image
    """
    values = plane.astype(np.float64)
    if normalize:
        peak = values.max() if values.size else 0.0
        values = values * (255.0 / peak) if peak > 0 else np.zeros_like(values)
    gray = np.clip(values, 0, 255).astype(np.uint8)
    return cv2.cvtColor(gray, cv2.COLOR_GRAY2BGR)


def labels_to_bgr(labels: np.ndarray) -> np.ndarray:
    """Color an EdgeLabel map: weak and strong pixels on black."""
    vis = np.zeros(labels.shape + (3,), dtype=np.uint8)
    vis[labels == EdgeLabel.WEAK] = PipelineConfig.VIZ_COLORS['WEAK']
    vis[labels == EdgeLabel.STRONG] = PipelineConfig.VIZ_COLORS['STRONG']
    return vis


def add_label_to_image(img: np.ndarray,
                       text: str,
                       color: Tuple[int, int, int] = PipelineConfig.VIZ_COLORS['LABEL_TEXT'],
                       bg_color: Tuple[int, int, int] = PipelineConfig.VIZ_COLORS['LABEL_BG'],
                       position: str = 'top') -> np.ndarray:
    """
    Add a labeled banner to an image.

    Args:
        img: Input image (BGR or grayscale)
        text: Label text
        color: Text color
        bg_color: Background color
        position: 'top' or 'bottom'

    Returns:
        Image with label added
    """
    if img.ndim == 2:
        vis = cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)
    else:
        vis = img.copy()

    h, w = vis.shape[:2]
    font_scale = max(w / 600.0, 0.3)
    thickness = max(1, int(w / 300.0))
    bar_h = max(int(h * 0.08), 12)

    if position == 'top':
        y_start, y_end = 0, bar_h
        text_y = int(bar_h * 0.7)
    else:
        y_start, y_end = h - bar_h, h
        text_y = h - int(bar_h * 0.3)

    cv2.rectangle(vis, (0, y_start), (w, y_end), bg_color, -1)
    cv2.putText(vis, text, (min(20, w // 10), text_y), cv2.FONT_HERSHEY_SIMPLEX,
                font_scale, color, thickness, cv2.LINE_AA)

    return vis


def create_grid_visualization(images: List[np.ndarray],
                              labels: Optional[List[str]] = None,
                              grid_size: Optional[Tuple[int, int]] = None) -> np.ndarray:
    """
    Arrange equally sized images into a grid.

    Args:
        images: List of BGR or grayscale images
        labels: Optional labels for each image
        grid_size: Optional (rows, cols), auto-calculated if None

    Returns:
        Grid visualization
    """
    if not images:
        raise ValueError("No images provided")

    n = len(images)
    if grid_size is None:
        cols = int(np.ceil(np.sqrt(n)))
        rows = int(np.ceil(n / cols))
    else:
        rows, cols = grid_size

    if labels:
        images = [add_label_to_image(img, label) for img, label in zip(images, labels)]
    else:
        images = [cv2.cvtColor(img, cv2.COLOR_GRAY2BGR) if img.ndim == 2 else img
                  for img in images]

    h, w = images[0].shape[:2]
    while len(images) < rows * cols:
        images.append(np.zeros((h, w, 3), dtype=np.uint8))

    image_rows = [np.hstack(images[r * cols:(r + 1) * cols]) for r in range(rows)]
    return np.vstack(image_rows)


def compare_side_by_side(raw: np.ndarray, processed: np.ndarray, effect_name: str) -> np.ndarray:
    """Labeled raw | processed comparison."""
    return create_grid_visualization([raw, processed],
                                     labels=["Raw", f"Processed: {effect_name}"],
                                     grid_size=(1, 2))
