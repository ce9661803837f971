"""Generate the default volleyball court background image."""
import logging
from pathlib import Path
from typing import Tuple

import cv2
import numpy as np

from court_diagrams.core.config import BACKGROUND_IMAGE_FILE, CANVAS_HEIGHT, CANVAS_WIDTH

logger = logging.getLogger(__name__)

# Indoor court, in meters
COURT_LENGTH_M = 18.0
COURT_WIDTH_M = 9.0
ATTACK_LINE_M = 3.0  # distance from the net

# BGR colors
FREE_ZONE_COLOR = (120, 160, 70)
COURT_COLOR = (60, 140, 230)
LINE_COLOR = (255, 255, 255)
NET_COLOR = (40, 40, 40)


def render_volleyball_court(
    width: int = CANVAS_WIDTH,
    height: int = CANVAS_HEIGHT,
    margin: float = 0.05
) -> np.ndarray:
    """
    Render a top-down volleyball court, net running vertically through the middle.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        margin: Free zone around the court as a fraction of the image size

    Returns:
        Rendered image as numpy array (BGR)
    """
    img = np.empty((height, width, 3), dtype=np.uint8)
    img[:] = FREE_ZONE_COLOR

    # Pixels per meter, keeping the court 2:1 inside the margins
    scale = min(
        width * (1 - 2 * margin) / COURT_LENGTH_M,
        height * (1 - 2 * margin) / COURT_WIDTH_M
    )
    court_w = COURT_LENGTH_M * scale
    court_h = COURT_WIDTH_M * scale
    left = (width - court_w) / 2
    top = (height - court_h) / 2

    def court_to_img(x: float, y: float) -> Tuple[int, int]:
        """Convert court meters to image pixel coordinates."""
        return (int(round(left + x * scale)), int(round(top + y * scale)))

    cv2.rectangle(img, court_to_img(0, 0), court_to_img(COURT_LENGTH_M, COURT_WIDTH_M), COURT_COLOR, -1)

    line_thickness = max(1, int(round(0.05 * scale)))

    # Boundary
    cv2.rectangle(img, court_to_img(0, 0), court_to_img(COURT_LENGTH_M, COURT_WIDTH_M),
                  LINE_COLOR, line_thickness)

    # Center line and attack lines
    mid = COURT_LENGTH_M / 2
    for x in (mid, mid - ATTACK_LINE_M, mid + ATTACK_LINE_M):
        cv2.line(img, court_to_img(x, 0), court_to_img(x, COURT_WIDTH_M), LINE_COLOR, line_thickness)

    # Net, extending past the sidelines to the posts
    post_offset = 1.0
    cv2.line(img, court_to_img(mid, -post_offset), court_to_img(mid, COURT_WIDTH_M + post_offset),
             NET_COLOR, line_thickness * 2)
    for y in (-post_offset, COURT_WIDTH_M + post_offset):
        cv2.circle(img, court_to_img(mid, y), line_thickness * 2, NET_COLOR, -1)

    return img


def generate_court_image(
    output_path: Path = BACKGROUND_IMAGE_FILE,
    width: int = CANVAS_WIDTH,
    height: int = CANVAS_HEIGHT
) -> Path:
    """
    Render the court and save it as the background image.

    Args:
        output_path: Path to save the image
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        Path to the generated image
    """
    img = render_volleyball_court(width, height)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(output_path), img):
        raise OSError(f"Failed to write court image: {output_path}")

    logger.info(f"Court image written to {output_path} ({width} x {height})")
    return output_path


def ensure_court_image(output_path: Path = BACKGROUND_IMAGE_FILE) -> Path:
    """Generate the background image if it doesn't exist yet."""
    if not output_path.exists():
        generate_court_image(output_path)
    return output_path
