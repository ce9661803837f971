"""Pydantic models for API request/response validation."""
from typing import List, Optional

from pydantic import BaseModel, Field


class RenderRequest(BaseModel):
    """Diagram to render over the court background."""
    diagram: str  # Serialized diagram JSON
    scale: float = Field(default=1.0, gt=0, le=4)  # Physical pixels per logical unit


class ValidateRequest(BaseModel):
    """Diagram to check without rendering."""
    diagram: str


class ElementIssueModel(BaseModel):
    """Element the decoder skipped."""
    index: int
    kind: str
    reason: str


class ValidationReport(BaseModel):
    """Decode result for a serialized diagram."""
    valid: bool  # False if the diagram as a whole could not be decoded
    elements: int  # Drawable elements
    skipped: int
    issues: List[ElementIssueModel]
    error: Optional[str] = None
