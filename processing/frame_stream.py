"""
Frame Stream Module

Host-side helpers around the effect pipeline: view mode, stream settings,
per-frame timing stats and a synthetic frame source.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Tuple, Union

import numpy as np

from config import PipelineConfig
from .effects import Effect, EffectDispatcher
from .pixel_buffer import CHANNELS, PixelBuffer

logger = logging.getLogger(__name__)


class ViewMode(str, Enum):
    RAW = 'raw'
    PROCESSED = 'processed'


def parse_resolution(resolution: str) -> Tuple[int, int]:
    """Parse 'WxH' into (width, height)."""
    parts = resolution.lower().split('x')
    if len(parts) != 2:
        raise ValueError(f"Resolution must look like WIDTHxHEIGHT, got {resolution!r}")
    try:
        width, height = int(parts[0]), int(parts[1])
    except ValueError:
        raise ValueError(f"Resolution must look like WIDTHxHEIGHT, got {resolution!r}") from None
    if width <= 0 or height <= 0:
        raise ValueError(f"Resolution must be positive, got {resolution!r}")
    return width, height


@dataclass
class StreamSettings:
    """Requested frame size and rate."""
    resolution: str = PipelineConfig.STREAM['RESOLUTION']
    frame_rate: int = PipelineConfig.STREAM['FRAME_RATE']

    def __post_init__(self):
        parse_resolution(self.resolution)
        if self.frame_rate <= 0:
            raise ValueError(f"Frame rate must be positive, got {self.frame_rate}")

    @property
    def size(self) -> Tuple[int, int]:
        return parse_resolution(self.resolution)

    @property
    def frame_interval(self) -> float:
        """Seconds between frames."""
        return 1.0 / self.frame_rate


@dataclass
class FrameStats:
    fps: float
    resolution: str
    processing_time: int  # milliseconds

    def summary(self) -> str:
        return f"{self.resolution} | {self.fps:.1f} fps | {self.processing_time} ms"


class FpsCounter:
    """Frames per second, refreshed once per window."""

    def __init__(self, window_ms: float = PipelineConfig.STREAM['FPS_WINDOW_MS'], clock=time.perf_counter):
        self.window_ms = window_ms
        self.clock = clock
        self.fps = 0.0
        self.frame_count = 0
        self.last_time = self.clock()

    def reset(self) -> None:
        self.fps = 0.0
        self.frame_count = 0
        self.last_time = self.clock()

    def tick(self) -> float:
        """Count one frame and return the current FPS estimate."""
        self.frame_count += 1
        now = self.clock()
        delta_ms = (now - self.last_time) * 1000.0
        if delta_ms >= self.window_ms:
            self.fps = self.frame_count * 1000.0 / delta_ms
            self.frame_count = 0
            self.last_time = now
        return self.fps


@dataclass
class FrameProcessor:
    """
    Applies the selected effect to each incoming frame and reports timing.
    Effect and view mode can be switched between frames.
    """
    effect: Union[Effect, str] = Effect.SOBEL
    view_mode: ViewMode = ViewMode.PROCESSED
    dispatcher: EffectDispatcher = field(default_factory=EffectDispatcher)
    fps_counter: FpsCounter = field(default_factory=FpsCounter)
    clock: object = time.perf_counter

    def __post_init__(self):
        self.effect = Effect.parse(self.effect)
        self.view_mode = ViewMode(self.view_mode)

    def process(self, buffer: PixelBuffer) -> FrameStats:
        """
        Run one frame through the pipeline.

        Args:
            buffer: RGBA frame, modified in place in processed mode

        Returns:
            FrameStats for this frame
        """
        start = self.clock()
        if self.view_mode is ViewMode.PROCESSED:
            self.dispatcher.apply(self.effect, buffer)
        else:
            buffer.validate()
        elapsed_ms = (self.clock() - start) * 1000.0

        stats = FrameStats(
            fps=self.fps_counter.tick(),
            resolution=buffer.resolution,
            processing_time=int(round(elapsed_ms))
        )
        logger.debug("Frame %s", stats.summary())
        return stats


class MockFrameSource:
    """Deterministic synthetic RGBA frames at the configured resolution."""

    def __init__(self, settings: Optional[StreamSettings] = None, seed: int = 0):
        self.settings = settings or StreamSettings()
        self.seed = seed
        self.frame_counter = 0

    def make_frame(self, index: int) -> PixelBuffer:
        """
        Frame `index`: a smooth diagonal gradient with a few solid
        rectangles and light noise, so every effect has edges to find.
        """
        width, height = self.settings.size
        rng = np.random.default_rng((self.seed, index))

        ys, xs = np.mgrid[0:height, 0:width]
        base = (xs * 255.0 / max(width - 1, 1) + ys * 255.0 / max(height - 1, 1)) / 2.0
        pixels = np.empty((height, width, CHANNELS), dtype=np.uint8)
        pixels[:, :, 0] = base.astype(np.uint8)
        pixels[:, :, 1] = (255 - base).astype(np.uint8)
        pixels[:, :, 2] = ((base + index * 16) % 256).astype(np.uint8)
        pixels[:, :, 3] = 255

        for _ in range(3):
            x0 = int(rng.integers(0, width))
            y0 = int(rng.integers(0, height))
            x1 = min(width, x0 + int(rng.integers(1, max(width // 3, 2))))
            y1 = min(height, y0 + int(rng.integers(1, max(height // 3, 2))))
            pixels[y0:y1, x0:x1, :3] = rng.integers(0, 256, size=3, dtype=np.uint8)

        noise = rng.integers(-8, 9, size=(height, width, 3))
        pixels[:, :, :3] = np.clip(pixels[:, :, :3].astype(np.int16) + noise, 0, 255).astype(np.uint8)

        return PixelBuffer.from_image(pixels)

    def __iter__(self) -> Iterator[PixelBuffer]:
        return self

    def __next__(self) -> PixelBuffer:
        self.frame_counter += 1
        return self.make_frame(self.frame_counter)

    def frames(self, count: int) -> Iterator[PixelBuffer]:
        """Yield the next `count` frames."""
        for _ in range(count):
            yield next(self)
