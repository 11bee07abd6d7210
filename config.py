"""
Configuration settings for the frame effects pipeline.
Centralized constants for all processing modules.
"""

import numpy as np


class PipelineConfig:
    """Configuration for the entire frame effects pipeline."""

    # Luma weights (R, G, B)
    LUMA_WEIGHTS = (0.299, 0.587, 0.114)

    # Sobel Detection
    SOBEL = {
        'KERNEL_X': np.array([[-1, 0, 1],
                              [-2, 0, 2],
                              [-1, 0, 1]], dtype=np.float64),
        'KERNEL_Y': np.array([[-1, -2, -1],
                              [0, 0, 0],
                              [1, 2, 1]], dtype=np.float64),
        'MAX_MAGNITUDE': 255
    }

    # Gaussian Blur (Canny stage 2)
    GAUSSIAN_BLUR = {
        'KERNEL': np.array([[2, 4, 5, 4, 2],
                            [4, 9, 12, 9, 4],
                            [5, 12, 15, 12, 5],
                            [4, 9, 12, 9, 4],
                            [2, 4, 5, 4, 2]], dtype=np.float64),
        'DIVISOR': 159
    }

    # Canny Detection
    CANNY = {
        'LOW_THRESHOLD': 20,
        'HIGH_THRESHOLD': 50,
        'EDGE_VALUE': 255
    }

    # Frame stream defaults and presets
    STREAM = {
        'RESOLUTION': '1280x720',
        'FRAME_RATE': 15,
        'RESOLUTIONS': ('1920x1080', '1280x720', '640x480', '320x240'),
        'FRAME_RATES': (30, 24, 15),
        'FPS_WINDOW_MS': 1000.0
    }

    IMAGE_EXTENSIONS = ('.jpg', '.jpeg', '.png', '.bmp')

    # Visualization Colors (BGR)
    VIZ_COLORS = {
        'LABEL_TEXT': (255, 255, 255),
        'LABEL_BG': (0, 0, 0),
        'WEAK': (0, 165, 255),
        'STRONG': (255, 255, 255)
    }
