"""
Frame Processing Modules

This package contains the pixel-processing components of the frame effects pipeline:
- pixel_buffer: Interleaved RGBA frame with shape validation
- luma: Shared grayscale extraction
- point_filters: Grayscale and invert transforms
- convolution: 2D kernel application with boundary policies
- sobel_detection: Sobel gradient edge map
- canny_detection: Full Canny edge detection
- effects: Effect selection and dispatch
- frame_stream: Timing stats, view mode and mock frames for hosts
"""

from .errors import PipelineError, InvalidBufferShape, UnknownEffect
from .pixel_buffer import PixelBuffer
from .luma import luma, luma_plane
from .point_filters import grayscale, invert
from .convolution import BoundaryPolicy, convolve
from .sobel_detection import SobelDetector
from .canny_detection import CannyDetector, EdgeLabel, GradientField
from .effects import Effect, EffectDispatcher, apply_effect
from .frame_stream import (FpsCounter, FrameProcessor, FrameStats, MockFrameSource,
                           StreamSettings, ViewMode)

__all__ = [
    'PipelineError',
    'InvalidBufferShape',
    'UnknownEffect',
    'PixelBuffer',
    'luma',
    'luma_plane',
    'grayscale',
    'invert',
    'BoundaryPolicy',
    'convolve',
    'SobelDetector',
    'CannyDetector',
    'EdgeLabel',
    'GradientField',
    'Effect',
    'EffectDispatcher',
    'apply_effect',
    'FpsCounter',
    'FrameProcessor',
    'FrameStats',
    'MockFrameSource',
    'StreamSettings',
    'ViewMode'
]
