"""
Frame Effects Pipeline

Main script that runs one effect over image files or synthetic mock frames.
Process: Load -> RGBA buffer -> Effect (grayscale | invert | sobel | canny) -> Save + stats

Usage:
    python pipeline.py <image_or_directory> [--effect <effect>] [--output <output_dir>] [--compare]
    python pipeline.py --mock <frames> [--resolution WxH] [--frame-rate FPS]
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

import cv2
import numpy as np

from config import PipelineConfig
from processing import (Effect, FrameProcessor, FrameStats, MockFrameSource, PixelBuffer,
                        StreamSettings, ViewMode)
from processing.visualization import bgr_to_buffer, buffer_to_bgr, compare_side_by_side


def setup_logger(name: str, verbose: bool = False) -> logging.Logger:
    """Return a configured logger for the command line tool."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(name)s] %(levelname)s: %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger


class FrameEffectsPipeline:
    """Main pipeline: wraps a FrameProcessor for BGR images and raw buffers."""

    def __init__(self, effect=Effect.SOBEL, view_mode=ViewMode.PROCESSED):
        """Initialize the frame processor for one effect."""
        self.processor = FrameProcessor(effect=effect, view_mode=view_mode)

    @property
    def effect(self) -> Effect:
        return self.processor.effect

    def process_buffer(self, buffer: PixelBuffer) -> FrameStats:
        """Process an RGBA buffer in place."""
        return self.processor.process(buffer)

    def process_image(self, image: np.ndarray) -> Tuple[np.ndarray, FrameStats]:
        """
        Run the effect on an image.

        Args:
            image: BGR (or grayscale) input image

        Returns:
            Tuple of (processed BGR image, frame stats)
        """
        buffer = bgr_to_buffer(image)
        stats = self.process_buffer(buffer)
        return buffer_to_bgr(buffer), stats

    def visualize_results(self, raw: np.ndarray, processed: np.ndarray) -> np.ndarray:
        """Side-by-side raw/processed comparison."""
        if raw.ndim == 2:
            raw = cv2.cvtColor(raw, cv2.COLOR_GRAY2BGR)
        return compare_side_by_side(raw, processed, self.effect.value)


def find_images(input_path: Path) -> List[Path]:
    """Image files at a path (a single file or a directory)."""
    if input_path.is_file():
        return [input_path]
    return sorted(p for p in input_path.iterdir()
                  if p.is_file() and p.suffix.lower() in PipelineConfig.IMAGE_EXTENSIONS)


def run_images(pipeline: FrameEffectsPipeline, image_files: List[Path],
               output_dir: Path, compare: bool) -> int:
    """Process image files, returns the number written."""
    written = 0
    for idx, img_path in enumerate(image_files, 1):
        print(f"[{idx}/{len(image_files)}] Processing {img_path.name}...")

        image = cv2.imread(str(img_path))
        if image is None:
            print("  Warning: Could not read image")
            continue

        processed, stats = pipeline.process_image(image)
        print(f"  {stats.summary()}")

        out_path = output_dir / f"{img_path.stem}_{pipeline.effect.value}.png"
        cv2.imwrite(str(out_path), processed)
        print(f"  Saved: {out_path.name}")
        written += 1

        if compare:
            vis = pipeline.visualize_results(image, processed)
            cmp_path = output_dir / f"{img_path.stem}_compare.png"
            cv2.imwrite(str(cmp_path), vis)
            print(f"  Saved: {cmp_path.name}")
    return written


def run_mock(pipeline: FrameEffectsPipeline, settings: StreamSettings, count: int,
             output_dir: Path, compare: bool, realtime: bool = False) -> int:
    """Process synthetic frames, returns the number written."""
    source = MockFrameSource(settings)
    written = 0
    for buffer in source.frames(count):
        raw = buffer_to_bgr(buffer)
        stats = pipeline.process_buffer(buffer)
        print(f"[{source.frame_counter}/{count}] {stats.summary()}")

        processed = buffer_to_bgr(buffer)
        out_path = output_dir / f"mock_{source.frame_counter}_{pipeline.effect.value}.png"
        cv2.imwrite(str(out_path), processed)
        written += 1

        if compare:
            vis = pipeline.visualize_results(raw, processed)
            cv2.imwrite(str(output_dir / f"mock_{source.frame_counter}_compare.png"), vis)

        if realtime:
            time.sleep(max(0.0, settings.frame_interval - stats.processing_time / 1000.0))
    return written


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Frame Effects Pipeline')
    parser.add_argument('input', type=str, nargs='?', help='Image file or directory of images')
    parser.add_argument('--effect', '-e', type=str, default=Effect.SOBEL.value,
                        choices=Effect.names(), help='Effect to apply')
    parser.add_argument('--view', type=str, default=ViewMode.PROCESSED.value,
                        choices=[m.value for m in ViewMode], help='Output raw or processed frames')
    parser.add_argument('--output', '-o', type=str, help='Output directory (default: <input>/effects_results)')
    parser.add_argument('--compare', '-c', action='store_true', help='Also save raw/processed comparisons')
    parser.add_argument('--mock', type=int, metavar='N', help='Process N synthetic frames instead of images')
    parser.add_argument('--resolution', type=str, default=PipelineConfig.STREAM['RESOLUTION'],
                        choices=PipelineConfig.STREAM['RESOLUTIONS'], help='Mock frame resolution')
    parser.add_argument('--frame-rate', type=int, default=PipelineConfig.STREAM['FRAME_RATE'],
                        choices=PipelineConfig.STREAM['FRAME_RATES'], help='Mock frame rate')
    parser.add_argument('--realtime', action='store_true', help='Pace mock frames at the frame rate')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = setup_logger('processing', args.verbose)
    pipeline = FrameEffectsPipeline(effect=args.effect, view_mode=args.view)

    if args.mock is not None:
        settings = StreamSettings(resolution=args.resolution, frame_rate=args.frame_rate)
        output_dir = Path(args.output) if args.output else Path('effects_results')
        output_dir.mkdir(exist_ok=True, parents=True)
        logger.info("Streaming %d mock frame(s) at %s @ %d fps",
                    args.mock, settings.resolution, settings.frame_rate)
        run_mock(pipeline, settings, args.mock, output_dir, args.compare, args.realtime)
        print(f"\nDone! Results saved to: {output_dir}")
        return 0

    if args.input is None:
        parser.print_usage()
        print("Error: an input path is required unless --mock is given")
        return 1

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input path does not exist: {input_path}")
        return 1

    if args.output:
        output_dir = Path(args.output)
    else:
        base = input_path if input_path.is_dir() else input_path.parent
        output_dir = base / "effects_results"
    output_dir.mkdir(exist_ok=True, parents=True)

    image_files = find_images(input_path)
    print(f"Found {len(image_files)} image(s) to process\n")
    if not image_files:
        print("No images found!")
        return 1

    logger.info("Applying %s to %d image(s)", pipeline.effect.value, len(image_files))
    run_images(pipeline, image_files, output_dir, args.compare)

    print(f"\nDone! Results saved to: {output_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
