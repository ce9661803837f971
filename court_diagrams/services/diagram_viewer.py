"""
Diagram viewer: load the background, decode the diagram, paint both.

The background load is the only await in a pass. Every pass is numbered;
when a newer pass has started by the time a load completes, the older pass
drops its result and leaves the surface alone.
"""
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, List, Optional

import numpy as np

from court_diagrams.core.errors import BackgroundLoadError
from court_diagrams.core.viewer_config import ViewerConfig
from court_diagrams.models.diagram import ElementIssue
from court_diagrams.services import diagram_codec
from court_diagrams.services.background_loader import load_background
from court_diagrams.services.diagram_renderer import RenderStyle, draw_diagram, render
from court_diagrams.services.surface import RasterSurface

logger = logging.getLogger(__name__)

BackgroundLoader = Callable[[str, float], Awaitable[np.ndarray]]

# Outcome statuses
COMPLETE = "complete"
BACKGROUND_ONLY = "background_only"
BACKGROUND_FAILED = "background_failed"
SUPERSEDED = "superseded"


@dataclass
class RenderOutcome:
    """What a render pass left on the surface."""
    status: str
    elements_drawn: int = 0
    issues: List[ElementIssue] = field(default_factory=list)
    message: Optional[str] = None

    @property
    def skipped(self) -> int:
        return len(self.issues)

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "status": self.status,
            "elements_drawn": self.elements_drawn,
            "skipped": self.skipped,
            "issues": [issue.to_dict() for issue in self.issues],
            "message": self.message,
        }


class DiagramViewer:
    """Renders serialized diagrams over a background onto one surface."""

    def __init__(
        self,
        surface: Optional[RasterSurface] = None,
        config: Optional[ViewerConfig] = None,
        loader: Optional[BackgroundLoader] = None
    ):
        """
        Initialize viewer.

        Args:
            surface: Surface to paint into; a new one of the configured size if None
            config: Viewer configuration
            loader: Coroutine function (reference, timeout) -> image
        """
        self.config = config or ViewerConfig()
        is_valid, error_msg = self.config.validate()
        if not is_valid:
            raise ValueError(f"Invalid viewer configuration: {error_msg}")

        self.surface = surface or RasterSurface(self.config.width, self.config.height, self.config.scale)
        self.style = RenderStyle(
            stroke_width=self.config.stroke_width,
            arrow_head_length=self.config.arrow_head_length,
            arrow_head_angle=self.config.arrow_head_angle,
            player_radius=self.config.player_radius,
            label_color=self.config.label_color,
            label_font_scale=self.config.label_font_scale,
            label_font_thickness=self.config.label_font_thickness,
        )
        self._loader = loader or load_background
        self._generation = 0

    async def show(self, serialized: str, background: Optional[str] = None) -> RenderOutcome:
        """
        Run one render pass. Never raises for bad input or a missing background.

        Args:
            serialized: Diagram JSON
            background: Background reference; the configured one if None

        Returns:
            RenderOutcome describing what was drawn
        """
        self._generation += 1
        generation = self._generation
        reference = background or self.config.background

        image = None
        load_error = None
        try:
            image = await self._loader(reference, self.config.fetch_timeout)
        except BackgroundLoadError as e:
            load_error = e

        if generation != self._generation:
            logger.debug(f"Render pass {generation} superseded by pass {self._generation}")
            return RenderOutcome(status=SUPERSEDED, message="A newer render pass has started")

        decoded, decode_error = diagram_codec.decode_or_empty(serialized)
        issues = list(decoded.issues)

        if load_error is not None:
            logger.warning(str(load_error))
            if self.config.on_background_failure == "skip":
                return RenderOutcome(status=BACKGROUND_FAILED, issues=issues, message=str(load_error))

            self.surface.fill_background(self.config.fallback_color)
            stats = draw_diagram(self.surface, decoded.diagram, self.style)
            return RenderOutcome(
                status=BACKGROUND_FAILED,
                elements_drawn=stats.elements_drawn,
                issues=issues,
                message=str(load_error) if stats.success else stats.error_message,
            )

        stats = render(self.surface, image, decoded.diagram, self.style)

        if decode_error is not None:
            return RenderOutcome(status=BACKGROUND_ONLY, message=decode_error)
        if not stats.success:
            return RenderOutcome(status=BACKGROUND_ONLY, issues=issues, message=stats.error_message)

        logger.info(f"Rendered {stats.elements_drawn} elements ({len(issues)} skipped)")
        return RenderOutcome(status=COMPLETE, elements_drawn=stats.elements_drawn, issues=issues)
