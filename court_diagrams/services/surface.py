"""
Raster drawing surface backed by a numpy BGR image.

Coordinates passed to the drawing methods are logical units; the surface
multiplies them by `scale` to get physical pixels. Style state (stroke color,
fill color, line width) is set once and used by the following primitives,
like a browser canvas context.
"""
from functools import lru_cache
from typing import Iterable, Optional, Sequence, Tuple

import cv2
import numpy as np
from PIL import ImageColor

from court_diagrams.core import config
from court_diagrams.core.errors import SurfaceError
from court_diagrams.models.diagram import Point

# Fractional bits for sub-pixel coordinates in cv2 drawing calls
SHIFT_BITS = 4
_FIXED_ONE = 1 << SHIFT_BITS

# Coordinates are clamped to this many pixels either side of the origin
MAX_PIXEL_OFFSET = 1 << 22

LABEL_FONT = cv2.FONT_HERSHEY_DUPLEX


@lru_cache(maxsize=256)
def parse_color(color: str) -> Tuple[int, int, int]:
    """
    Convert a CSS color string to a BGR tuple.

    Args:
        color: Any color accepted by a browser canvas ("#3B82F6", "red", "rgb(0, 0, 255)", ...)

    Returns:
        BGR color tuple (alpha, if any, is dropped)

    Raises:
        SurfaceError: If the color cannot be parsed
    """
    try:
        rgb = ImageColor.getrgb(color.strip())
    except (AttributeError, ValueError) as e:
        raise SurfaceError(f"Invalid color: {color!r}") from e
    r, g, b = rgb[:3]
    return (b, g, r)


class RasterSurface:
    """Pixel surface with a fixed logical size."""

    def __init__(
        self,
        width: int = config.CANVAS_WIDTH,
        height: int = config.CANVAS_HEIGHT,
        scale: float = 1.0,
        image: Optional[np.ndarray] = None
    ):
        """
        Initialize surface.

        Args:
            width: Logical width
            height: Logical height
            scale: Physical pixels per logical unit
            image: Optional existing BGR image to draw into; must match the physical size
        """
        self.width = width
        self.height = height
        self.scale = scale

        pixel_size = (int(round(height * scale)), int(round(width * scale)))
        if image is None:
            image = np.zeros((*pixel_size, 3), dtype=np.uint8)
        elif image.shape[:2] != pixel_size:
            raise SurfaceError(f"Image size {image.shape[1]}x{image.shape[0]} does not match "
                               f"surface size {pixel_size[1]}x{pixel_size[0]}")
        self.image = image

        self.stroke_color: Tuple[int, int, int] = (0, 0, 0)
        self.fill_color: Tuple[int, int, int] = (0, 0, 0)
        self.line_width: float = 1.0

    @property
    def pixel_width(self) -> int:
        return self.image.shape[1]

    @property
    def pixel_height(self) -> int:
        return self.image.shape[0]

    # ── Style state ──────────────────────────────────────────

    def set_stroke_style(self, color: str):
        self.stroke_color = parse_color(color)

    def set_fill_style(self, color: str):
        self.fill_color = parse_color(color)

    def set_line_width(self, width: float):
        self.line_width = width

    # ── Primitives ───────────────────────────────────────────

    def draw_image(self, image: np.ndarray):
        """
        Paint an image over the whole surface, stretched to fit.

        Args:
            image: Grayscale, BGR or BGRA image of any size
        """
        if image is None or image.size == 0:
            raise SurfaceError("Cannot draw an empty image")

        if image.ndim == 2:
            image = cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
        elif image.shape[2] == 4:
            image = cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)

        resized = cv2.resize(image, (self.pixel_width, self.pixel_height), interpolation=cv2.INTER_AREA)
        self.image[:] = resized

    def fill_background(self, color: str):
        """Fill the whole surface with a solid color."""
        self.image[:] = parse_color(color)

    def stroke_polyline(self, points: Sequence[Point]):
        """Stroke an open path through the points."""
        pts = np.array([self._fixed(p) for p in points], dtype=np.int32)
        cv2.polylines(
            self.image,
            [pts],
            isClosed=False,
            color=self.stroke_color,
            thickness=self._thickness(),
            lineType=cv2.LINE_AA,
            shift=SHIFT_BITS
        )

    def stroke_segments(self, segments: Iterable[Tuple[Point, Point]]):
        """Stroke independent straight segments."""
        thickness = self._thickness()
        for start, end in segments:
            cv2.line(
                self.image,
                self._fixed(start),
                self._fixed(end),
                self.stroke_color,
                thickness,
                cv2.LINE_AA,
                SHIFT_BITS
            )

    def stroke_circle(self, center: Point, radius: float):
        """Stroke a full circle outline."""
        cv2.circle(
            self.image,
            self._fixed(center),
            self._fixed_length(radius),
            self.stroke_color,
            self._thickness(),
            cv2.LINE_AA,
            SHIFT_BITS
        )

    def fill_circle(self, center: Point, radius: float):
        """Fill a solid disc."""
        cv2.circle(
            self.image,
            self._fixed(center),
            self._fixed_length(radius),
            self.fill_color,
            -1,  # Filled
            cv2.LINE_AA,
            SHIFT_BITS
        )

    def fill_text_centered(
        self,
        text: str,
        center: Point,
        color: str,
        font_scale: float,
        thickness: int
    ):
        """
        Draw text centered both horizontally and vertically on a point.

        Args:
            text: Text to draw
            center: Center of the text box (logical units)
            color: Text color
            font_scale: cv2 font scale at scale 1.0
            thickness: Stroke thickness of the glyphs at scale 1.0
        """
        text_color = parse_color(color)
        scaled_font = font_scale * self.scale
        scaled_thickness = max(1, int(round(thickness * self.scale)))

        (text_width, text_height), _ = cv2.getTextSize(text, LABEL_FONT, scaled_font, scaled_thickness)

        # putText anchors at the bottom-left of the baseline
        origin_x = int(round(_clamp_pixel(center.x * self.scale - text_width / 2)))
        origin_y = int(round(_clamp_pixel(center.y * self.scale + text_height / 2)))

        cv2.putText(
            self.image,
            text,
            (origin_x, origin_y),
            LABEL_FONT,
            scaled_font,
            text_color,
            scaled_thickness,
            cv2.LINE_AA
        )

    # ── Buffers ──────────────────────────────────────────────

    def copy(self) -> "RasterSurface":
        """Scratch surface with a copy of the pixels and the current style."""
        clone = RasterSurface(self.width, self.height, self.scale, image=self.image.copy())
        clone.stroke_color = self.stroke_color
        clone.fill_color = self.fill_color
        clone.line_width = self.line_width
        return clone

    def commit(self, scratch: "RasterSurface"):
        """Replace this surface's pixels with those of a scratch copy."""
        if scratch.image.shape != self.image.shape:
            raise SurfaceError("Scratch surface size does not match")
        self.image[:] = scratch.image

    def color_at(self, x: float, y: float) -> Tuple[int, int, int]:
        """BGR color of the pixel under a logical coordinate."""
        px = min(int(x * self.scale), self.pixel_width - 1)
        py = min(int(y * self.scale), self.pixel_height - 1)
        b, g, r = self.image[py, px]
        return (int(b), int(g), int(r))

    def to_png(self) -> bytes:
        """Encode the surface as PNG."""
        ok, buffer = cv2.imencode(".png", self.image)
        if not ok:
            raise SurfaceError("Failed to encode surface as PNG")
        return buffer.tobytes()

    # ── Helpers ──────────────────────────────────────────────

    def _fixed(self, point: Point) -> Tuple[int, int]:
        """Logical point -> fixed-point pixel coordinates for cv2 with SHIFT_BITS."""
        return (
            int(round(_clamp_pixel(point.x * self.scale) * _FIXED_ONE)),
            int(round(_clamp_pixel(point.y * self.scale) * _FIXED_ONE)),
        )

    def _fixed_length(self, length: float) -> int:
        return int(round(_clamp_pixel(length * self.scale) * _FIXED_ONE))

    def _thickness(self) -> int:
        return max(1, int(round(self.line_width * self.scale)))


def _clamp_pixel(value: float) -> float:
    # cv2 takes int32 coordinates
    return min(max(value, -MAX_PIXEL_OFFSET), MAX_PIXEL_OFFSET)
