"""API endpoints for the court background."""
from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from court_diagrams.core.config import (
    BACKGROUND_IMAGE_FILE,
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    MAX_COURT_IMAGE_SIZE,
)
from court_diagrams.services import court_image

router = APIRouter()


@router.get("/image")
async def get_court_image():
    """Serve the background image diagrams are drawn on."""
    # Generate image if it doesn't exist
    court_image.ensure_court_image(BACKGROUND_IMAGE_FILE)

    return FileResponse(
        BACKGROUND_IMAGE_FILE,
        media_type="image/jpeg",
        filename=BACKGROUND_IMAGE_FILE.name
    )


@router.post("/regenerate-image")
async def regenerate_court_image(width: int = CANVAS_WIDTH, height: int = CANVAS_HEIGHT):
    """
    Regenerate the default court image.

    Args:
        width: Image width in pixels (default: canvas width)
        height: Image height in pixels (default: canvas height)
    """
    if width <= 0 or height <= 0:
        raise HTTPException(status_code=400, detail="width and height must be positive")
    if width > MAX_COURT_IMAGE_SIZE or height > MAX_COURT_IMAGE_SIZE:
        raise HTTPException(
            status_code=400,
            detail=f"width and height must be at most {MAX_COURT_IMAGE_SIZE}"
        )

    img_path = court_image.generate_court_image(BACKGROUND_IMAGE_FILE, width, height)

    return {
        "status": "success",
        "image_path": str(img_path),
        "message": f"Court image regenerated at {width} x {height}"
    }
