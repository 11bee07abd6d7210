"""
Visualize Canny Stages

Standalone script to inspect every intermediate stage of the Canny detector.

Usage:
    python viz_canny_stages.py <image_directory>
"""

import cv2
import numpy as np
import sys
from pathlib import Path
from typing import List, Tuple

sys.path.append(str(Path(__file__).parent.parent))

from config import PipelineConfig
from processing import CannyDetector, luma_plane
from processing.visualization import (bgr_to_buffer, create_grid_visualization,
                                      labels_to_bgr, plane_to_bgr)


def build_stage_panels(image: np.ndarray,
                       detector: CannyDetector = None) -> Tuple[List[np.ndarray], List[str]]:
    """
    Run the Canny stages one by one on a BGR image.

    Returns:
        Tuple of (panels, labels), six BGR panels of the input size
    """
    detector = detector or CannyDetector()
    gray = luma_plane(bgr_to_buffer(image))

    blurred = detector.blur(gray)
    field = detector.gradient(blurred)
    suppressed = detector.suppress_non_maxima(field)
    labels = detector.threshold(suppressed)
    linked = detector.link_edges(labels)

    panels = [
        plane_to_bgr(gray),
        plane_to_bgr(blurred),
        plane_to_bgr(field.magnitude, normalize=True),
        plane_to_bgr(suppressed, normalize=True),
        labels_to_bgr(labels),
        plane_to_bgr(detector.render(linked)),
    ]
    names = [
        "1. Grayscale",
        "2. Gaussian Blur",
        "3. Gradient Magnitude",
        "4. Non-Max Suppression",
        f"5. Thresholds ({detector.low}/{detector.high})",
        "6. Hysteresis Edges",
    ]
    return panels, names


def main():
    if len(sys.argv) < 2:
        print("Usage: python viz_canny_stages.py <image_directory>")
        sys.exit(1)

    input_dir = Path(sys.argv[1])
    if not input_dir.exists():
        print(f"Error: Path does not exist: {input_dir}")
        sys.exit(1)

    output_dir = input_dir / "viz_canny_stages"
    output_dir.mkdir(exist_ok=True)

    detector = CannyDetector()

    image_files = sorted(p for p in input_dir.iterdir()
                         if p.is_file() and p.suffix.lower() in PipelineConfig.IMAGE_EXTENSIONS)

    print(f"Found {len(image_files)} images\n")

    for idx, img_path in enumerate(image_files, 1):
        print(f"[{idx}/{len(image_files)}] {img_path.name}")

        image = cv2.imread(str(img_path))
        if image is None:
            continue

        panels, names = build_stage_panels(image, detector)
        vis = create_grid_visualization(panels, names, grid_size=(2, 3))

        out_path = output_dir / f"{img_path.stem}_canny_stages.png"
        cv2.imwrite(str(out_path), vis)
        print(f"  Saved: {out_path.name}")

    print(f"\nResults saved to: {output_dir.absolute()}")


if __name__ == "__main__":
    main()
