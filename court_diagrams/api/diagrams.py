"""API endpoints for rendering and validating diagrams."""
from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from court_diagrams.core.errors import DecodeError, SurfaceError
from court_diagrams.core.models import ElementIssueModel, RenderRequest, ValidateRequest, ValidationReport
from court_diagrams.core.viewer_config import ViewerConfig
from court_diagrams.services import court_image, diagram_codec
from court_diagrams.services.diagram_viewer import DiagramViewer

router = APIRouter()


@router.post("/render")
async def render_diagram(request: RenderRequest):
    """
    Render a diagram over the court background and return it as PNG.

    The outcome of the render pass is reported in the X-Render-* headers.
    """
    background = court_image.ensure_court_image()
    viewer = DiagramViewer(config=ViewerConfig(background=str(background), scale=request.scale))

    outcome = await viewer.show(request.diagram)

    try:
        png = viewer.surface.to_png()
    except SurfaceError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return Response(
        content=png,
        media_type="image/png",
        headers={
            "X-Render-Status": outcome.status,
            "X-Render-Elements": str(outcome.elements_drawn),
            "X-Render-Skipped": str(outcome.skipped),
        }
    )


@router.post("/validate", response_model=ValidationReport)
async def validate_diagram(request: ValidateRequest):
    """
    Decode a diagram and report which elements would be drawn.

    Args:
        request: Serialized diagram
    """
    try:
        result = diagram_codec.decode(request.diagram)
    except DecodeError as e:
        return ValidationReport(valid=False, elements=0, skipped=0, issues=[], error=str(e))

    return ValidationReport(
        valid=True,
        elements=len(result.diagram),
        skipped=result.skipped,
        issues=[ElementIssueModel(**issue.to_dict()) for issue in result.issues]
    )
