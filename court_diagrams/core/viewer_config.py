"""
Configuration for the diagram viewer.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from court_diagrams.core import config

BACKGROUND_FAILURE_POLICIES = ("skip", "blank")


@dataclass
class ViewerConfig:
    """Configuration for loading a background and painting diagrams over it."""

    # Background
    background: str = str(config.BACKGROUND_IMAGE_FILE)
    fetch_timeout: float = config.BACKGROUND_FETCH_TIMEOUT

    # "skip": leave the surface untouched and draw nothing
    # "blank": fill with the fallback color and draw the diagram anyway
    on_background_failure: str = "skip"
    fallback_color: str = config.FALLBACK_BACKGROUND_COLOR

    # Logical canvas
    width: int = config.CANVAS_WIDTH
    height: int = config.CANVAS_HEIGHT
    scale: float = 1.0  # physical pixels per logical unit

    # Drawing
    stroke_width: float = config.STROKE_WIDTH
    arrow_head_length: float = config.ARROW_HEAD_LENGTH
    arrow_head_angle: float = config.ARROW_HEAD_ANGLE
    player_radius: float = config.PLAYER_RADIUS
    label_color: str = config.LABEL_COLOR
    label_font_scale: float = config.LABEL_FONT_SCALE
    label_font_thickness: int = config.LABEL_FONT_THICKNESS

    def validate(self) -> Tuple[bool, Optional[str]]:
        """
        Validate configuration.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not self.background:
            return False, "background reference must not be empty"

        if self.on_background_failure not in BACKGROUND_FAILURE_POLICIES:
            return False, f"on_background_failure must be one of: {list(BACKGROUND_FAILURE_POLICIES)}"

        if self.width <= 0 or self.height <= 0:
            return False, "width and height must be positive"

        if self.scale <= 0:
            return False, "scale must be positive"

        if self.fetch_timeout <= 0:
            return False, "fetch_timeout must be positive"

        for name in ("stroke_width", "arrow_head_length", "player_radius"):
            if getattr(self, name) <= 0:
                return False, f"{name} must be positive"

        return True, None
