"""
Paint a decoded diagram over the court background.
"""
import logging
from dataclasses import dataclass, asdict
from typing import Dict, Optional

import numpy as np

from court_diagrams.core import config
from court_diagrams.models.diagram import (
    ArrowElement,
    CircleElement,
    Diagram,
    DrawingElement,
    LineElement,
    PlayerElement,
)
from court_diagrams.services import geometry
from court_diagrams.services.surface import RasterSurface

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderStyle:
    """Fixed drawing constants shared by every element."""
    stroke_width: float = config.STROKE_WIDTH
    arrow_head_length: float = config.ARROW_HEAD_LENGTH
    arrow_head_angle: float = config.ARROW_HEAD_ANGLE
    player_radius: float = config.PLAYER_RADIUS
    label_color: str = config.LABEL_COLOR
    label_font_scale: float = config.LABEL_FONT_SCALE
    label_font_thickness: int = config.LABEL_FONT_THICKNESS


@dataclass
class RenderStats:
    """Result of painting one diagram."""
    success: bool
    elements_drawn: int = 0
    error_message: Optional[str] = None

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


def render(
    surface: RasterSurface,
    background: Optional[np.ndarray],
    diagram: Diagram,
    style: Optional[RenderStyle] = None
) -> RenderStats:
    """
    Paint the background and then every element of the diagram in order.

    Args:
        surface: Caller-owned surface to paint into
        background: Background image, stretched over the surface; None keeps
            the surface's current pixels as background
        diagram: Elements to draw
        style: Drawing constants (defaults from config)

    Returns:
        RenderStats; on failure the surface shows only the background
    """
    if background is not None:
        surface.draw_image(background)

    return draw_diagram(surface, diagram, style)


def draw_diagram(
    surface: RasterSurface,
    diagram: Diagram,
    style: Optional[RenderStyle] = None
) -> RenderStats:
    """
    Draw all elements onto a scratch copy and commit it only if every element drew.

    Args:
        surface: Surface to draw on
        diagram: Elements to draw
        style: Drawing constants (defaults from config)

    Returns:
        RenderStats
    """
    style = style or RenderStyle()
    scratch = surface.copy()

    try:
        for element in diagram:
            draw_element(scratch, element, style)
    except Exception as e:
        logger.error(f"Failed to render diagram: {e}")
        return RenderStats(success=False, elements_drawn=0, error_message=str(e))

    surface.commit(scratch)
    return RenderStats(success=True, elements_drawn=len(diagram))


def draw_element(surface: RasterSurface, element: DrawingElement, style: RenderStyle):
    """Draw a single element with its own color."""
    surface.set_stroke_style(element.color)
    surface.set_fill_style(element.color)
    surface.set_line_width(style.stroke_width)

    if isinstance(element, LineElement):
        _draw_line(surface, element)
    elif isinstance(element, ArrowElement):
        _draw_arrow(surface, element, style)
    elif isinstance(element, CircleElement):
        _draw_circle(surface, element)
    elif isinstance(element, PlayerElement):
        _draw_player(surface, element, style)
    else:
        raise TypeError(f"Unhandled element type: {type(element).__name__}")


def _draw_line(surface: RasterSurface, element: LineElement):
    surface.stroke_polyline(element.points)


def _draw_arrow(surface: RasterSurface, element: ArrowElement, style: RenderStyle):
    start, end = element.start, element.end
    surface.stroke_polyline([start, end])

    left, right = geometry.arrowhead_points(start, end, style.arrow_head_length, style.arrow_head_angle)
    surface.stroke_segments([(end, left), (end, right)])


def _draw_circle(surface: RasterSurface, element: CircleElement):
    radius = geometry.distance(element.center, element.edge)
    surface.stroke_circle(element.center, radius)


def _draw_player(surface: RasterSurface, element: PlayerElement, style: RenderStyle):
    surface.fill_circle(element.position, style.player_radius)

    if element.label:
        surface.fill_text_centered(
            element.label,
            element.position,
            style.label_color,
            style.label_font_scale,
            style.label_font_thickness
        )
