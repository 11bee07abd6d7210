"""
Tests for the host-side frame helpers.
"""

import numpy as np
import pytest

from processing import (Effect, FpsCounter, FrameProcessor, FrameStats, MockFrameSource,
                        StreamSettings, UnknownEffect, ViewMode, invert)
from processing.frame_stream import parse_resolution


class FakeClock:
    """Returns queued timestamps (seconds)."""

    def __init__(self, *times):
        self.times = list(times)

    def __call__(self):
        return self.times.pop(0)


@pytest.mark.parametrize("text, size", [
    ('1280x720', (1280, 720)),
    ('320X240', (320, 240)),
    ('1x1', (1, 1)),
])
def test_parse_resolution(text, size):
    assert parse_resolution(text) == size


@pytest.mark.parametrize("text", ['', 'abc', '640', '640x', 'x480', '0x480', '-5x5', '1x2x3'])
def test_parse_resolution_invalid(text):
    with pytest.raises(ValueError):
        parse_resolution(text)


def test_stream_settings_defaults():
    settings = StreamSettings()
    assert settings.resolution == '1280x720'
    assert settings.frame_rate == 15
    assert settings.size == (1280, 720)
    assert settings.frame_interval == pytest.approx(1 / 15)


def test_stream_settings_validation():
    with pytest.raises(ValueError):
        StreamSettings(resolution='wide')
    with pytest.raises(ValueError):
        StreamSettings(frame_rate=0)


def test_fps_counter_window():
    clock = FakeClock(0.0, 0.4, 0.8, 1.0, 1.5)
    counter = FpsCounter(clock=clock)
    assert counter.tick() == 0.0
    assert counter.tick() == 0.0
    assert counter.tick() == pytest.approx(3.0)
    # value holds until the next full window
    assert counter.tick() == pytest.approx(3.0)


def test_frame_stats_summary():
    stats = FrameStats(fps=14.96, resolution='640x480', processing_time=12)
    assert stats.summary() == '640x480 | 15.0 fps | 12 ms'


def test_processor_processed_mode(random_buffer):
    expected = invert(random_buffer.copy())
    processor = FrameProcessor(effect='invert',
                               clock=FakeClock(10.0, 10.0124),
                               fps_counter=FpsCounter(clock=FakeClock(0.0, 0.5)))
    stats = processor.process(random_buffer)
    assert np.array_equal(random_buffer.data, expected.data)
    assert stats.resolution == '24x16'
    assert stats.processing_time == 12
    assert stats.fps == 0.0


def test_processor_raw_mode_leaves_frame(random_buffer):
    original = random_buffer.data.copy()
    processor = FrameProcessor(effect=Effect.CANNY, view_mode='raw')
    stats = processor.process(random_buffer)
    assert np.array_equal(random_buffer.data, original)
    assert stats.processing_time >= 0


def test_processor_switch_effect(square_buffer):
    processor = FrameProcessor(effect=Effect.GRAYSCALE)
    processor.effect = Effect.SOBEL
    processor.process(square_buffer)
    assert square_buffer.rgb()[16, 16, 0] == 0
    assert square_buffer.rgb()[10, 16, 0] == 255


def test_processor_rejects_unknown_effect():
    with pytest.raises(UnknownEffect):
        FrameProcessor(effect='sepia')
    with pytest.raises(ValueError):
        FrameProcessor(view_mode='both')


def test_view_mode_values():
    assert ViewMode('raw') is ViewMode.RAW
    assert ViewMode('processed') is ViewMode.PROCESSED


def test_mock_frames_shape_and_alpha():
    source = MockFrameSource(StreamSettings(resolution='40x30'))
    frames = list(source.frames(3))
    assert source.frame_counter == 3
    for frame in frames:
        assert frame.size == (40, 30)
        assert (frame.alpha() == 255).all()
    assert not np.array_equal(frames[0].data, frames[1].data)


def test_mock_frames_deterministic():
    settings = StreamSettings(resolution='16x12')
    a = next(MockFrameSource(settings, seed=5))
    b = next(MockFrameSource(settings, seed=5))
    c = next(MockFrameSource(settings, seed=6))
    assert np.array_equal(a.data, b.data)
    assert not np.array_equal(a.data, c.data)
