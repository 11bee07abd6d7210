"""
Tests for the command line pipeline and the visualization helpers.
"""

import cv2
import numpy as np
import pytest

from pipeline import FrameEffectsPipeline, build_parser, find_images, main
from processing import CannyDetector, Effect, EdgeLabel, PixelBuffer
from processing.visualization import (add_label_to_image, bgr_to_buffer, buffer_to_bgr,
                                      compare_side_by_side, create_grid_visualization,
                                      labels_to_bgr, plane_to_bgr)
from visualize.viz_canny_stages import build_stage_panels


@pytest.fixture
def square_image() -> np.ndarray:
    """48x64 BGR image: dark background with a bright colored rectangle."""
    image = np.full((48, 64, 3), 20, dtype=np.uint8)
    image[12:36, 16:48] = (40, 200, 240)
    return image


@pytest.fixture
def image_dir(tmp_path, square_image):
    cv2.imwrite(str(tmp_path / "frame_a.png"), square_image)
    cv2.imwrite(str(tmp_path / "frame_b.PNG"), 255 - square_image)
    (tmp_path / "notes.txt").write_text("not an image")
    return tmp_path


def test_buffer_bgr_round_trip(square_image):
    buffer = bgr_to_buffer(square_image)
    assert buffer.size == (64, 48)
    assert (buffer.alpha() == 255).all()
    assert buffer.pixels()[20, 20, :3].tolist() == [240, 200, 40]
    assert np.array_equal(buffer_to_bgr(buffer), square_image)


def test_bgr_to_buffer_grayscale_input():
    gray = np.full((4, 5), 77, dtype=np.uint8)
    buffer = bgr_to_buffer(gray)
    assert (buffer.rgb() == 77).all()


def test_process_image_grayscale(square_image):
    pipeline = FrameEffectsPipeline(effect='grayscale')
    processed, stats = pipeline.process_image(square_image)
    assert processed.shape == square_image.shape
    assert np.array_equal(processed[:, :, 0], processed[:, :, 1])
    assert np.array_equal(processed[:, :, 1], processed[:, :, 2])
    assert stats.resolution == '64x48'
    # input image is not modified
    assert square_image[20, 20].tolist() == [40, 200, 240]


def test_process_image_raw_view(square_image):
    pipeline = FrameEffectsPipeline(effect=Effect.INVERT, view_mode='raw')
    processed, _ = pipeline.process_image(square_image)
    assert np.array_equal(processed, square_image)


def test_process_buffer_canny():
    buffer = PixelBuffer.blank(10, 10)
    stats = FrameEffectsPipeline(effect=Effect.CANNY).process_buffer(buffer)
    assert stats.resolution == '10x10'
    assert (buffer.rgb() == 0).all()


def test_visualize_results(square_image):
    pipeline = FrameEffectsPipeline(effect=Effect.CANNY)
    processed, _ = pipeline.process_image(square_image)
    vis = pipeline.visualize_results(square_image, processed)
    assert vis.shape == (48, 128, 3)


def test_find_images(image_dir):
    names = [p.name for p in find_images(image_dir)]
    assert names == ['frame_a.png', 'frame_b.PNG']
    assert find_images(image_dir / 'frame_a.png') == [image_dir / 'frame_a.png']


def test_main_directory(image_dir, tmp_path_factory, capsys):
    out_dir = tmp_path_factory.mktemp("out")
    code = main([str(image_dir), '--effect', 'canny-edge-detection', '--output', str(out_dir), '--compare'])
    assert code == 0
    written = sorted(p.name for p in out_dir.iterdir())
    assert written == [
        'frame_a_canny-edge-detection.png',
        'frame_a_compare.png',
        'frame_b_canny-edge-detection.png',
        'frame_b_compare.png',
    ]
    edges = cv2.imread(str(out_dir / 'frame_a_canny-edge-detection.png'))
    assert set(np.unique(edges).tolist()) <= {0, 255}
    assert (edges == 255).any()
    assert "Found 2 image(s)" in capsys.readouterr().out


def test_main_default_output_dir(image_dir):
    assert main([str(image_dir / 'frame_a.png'), '--effect', 'invert']) == 0
    out = cv2.imread(str(image_dir / 'effects_results' / 'frame_a_invert.png'))
    assert out[20, 20].tolist() == [215, 55, 15]


def test_main_missing_input(tmp_path):
    assert main([str(tmp_path / 'missing')]) == 1
    assert main([]) == 1


def test_main_empty_directory(tmp_path):
    assert main([str(tmp_path)]) == 1


def test_main_mock(tmp_path):
    code = main(['--mock', '2', '--resolution', '320x240', '--effect', 'grayscale',
                 '--output', str(tmp_path), '--compare'])
    assert code == 0
    names = sorted(p.name for p in tmp_path.iterdir())
    assert names == ['mock_1_compare.png', 'mock_1_grayscale.png',
                     'mock_2_compare.png', 'mock_2_grayscale.png']
    frame = cv2.imread(str(tmp_path / 'mock_1_grayscale.png'))
    assert frame.shape == (240, 320, 3)


@pytest.mark.parametrize("option, value", [
    ('--resolution', 'big'),
    ('--resolution', '32x24'),
    ('--frame-rate', '7'),
])
def test_main_mock_rejects_unlisted_settings(tmp_path, option, value):
    with pytest.raises(SystemExit):
        main(['--mock', '1', option, value, '--output', str(tmp_path)])
    assert list(tmp_path.iterdir()) == []


def test_parser_stream_presets():
    args = build_parser().parse_args(['--mock', '1', '--resolution', '640x480', '--frame-rate', '30'])
    assert args.resolution == '640x480'
    assert args.frame_rate == 30


def test_parser_rejects_unknown_effect():
    with pytest.raises(SystemExit):
        build_parser().parse_args(['in', '--effect', 'unknown'])


def test_add_label_keeps_size():
    img = np.zeros((40, 60), dtype=np.uint8)
    vis = add_label_to_image(img, "Label")
    assert vis.shape == (40, 60, 3)
    assert (img == 0).all()


def test_grid_visualization_pads():
    images = [np.zeros((10, 12, 3), dtype=np.uint8) for _ in range(3)]
    grid = create_grid_visualization(images, labels=["a", "b", "c"])
    assert grid.shape == (20, 24, 3)
    with pytest.raises(ValueError):
        create_grid_visualization([])


def test_compare_side_by_side():
    raw = np.zeros((10, 12, 3), dtype=np.uint8)
    vis = compare_side_by_side(raw, raw, 'invert')
    assert vis.shape == (10, 24, 3)


def test_plane_to_bgr_normalize():
    plane = np.array([[0.0, 500.0], [250.0, 1000.0]])
    assert plane_to_bgr(plane)[:, :, 0].tolist() == [[0, 255], [250, 255]]
    assert plane_to_bgr(plane, normalize=True)[:, :, 0].tolist() == [[0, 127], [63, 255]]
    assert (plane_to_bgr(np.zeros((2, 2)), normalize=True) == 0).all()


def test_labels_to_bgr():
    labels = np.array([[EdgeLabel.NONE, EdgeLabel.WEAK, EdgeLabel.STRONG]], dtype=np.uint8)
    vis = labels_to_bgr(labels)
    assert vis[0, 0].tolist() == [0, 0, 0]
    assert vis[0, 1].tolist() == [0, 165, 255]
    assert vis[0, 2].tolist() == [255, 255, 255]


def test_canny_stage_panels(square_image):
    panels, names = build_stage_panels(square_image, CannyDetector())
    assert len(panels) == len(names) == 6
    for panel in panels:
        assert panel.shape == square_image.shape
    final = panels[-1]
    assert set(np.unique(final).tolist()) <= {0, 255}
