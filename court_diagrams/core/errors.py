"""Exceptions raised while decoding and rendering diagrams."""


class DiagramError(Exception):
    """Base class for diagram errors."""


class DecodeError(DiagramError):
    """Serialized diagram is not well-formed."""


class ElementGeometryError(DiagramError):
    """A well-formed element cannot be drawn (too few points or unknown kind)."""

    def __init__(self, message: str, kind: str = ""):
        super().__init__(message)
        self.kind = kind


class BackgroundLoadError(DiagramError):
    """Background image could not be loaded."""

    def __init__(self, reference: str, reason: str):
        super().__init__(f"Failed to load background '{reference}': {reason}")
        self.reference = reference
        self.reason = reason


class SurfaceError(DiagramError):
    """The raster surface rejected a drawing request (e.g. an invalid color)."""
