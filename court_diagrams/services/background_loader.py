"""Load the background image a diagram is painted over."""
import asyncio
import logging
from pathlib import Path
from typing import Union

import cv2
import httpx
import numpy as np

from court_diagrams.core.config import BACKGROUND_FETCH_TIMEOUT
from court_diagrams.core.errors import BackgroundLoadError

logger = logging.getLogger(__name__)


async def load_background(
    reference: Union[str, Path],
    timeout: float = BACKGROUND_FETCH_TIMEOUT
) -> np.ndarray:
    """
    Load a background image from a file path or an http(s) URL.

    Args:
        reference: Path to an image file, or a URL
        timeout: Download timeout in seconds (URLs only)

    Returns:
        BGR image as numpy array

    Raises:
        BackgroundLoadError: If the image cannot be read or decoded
    """
    ref = str(reference)
    if ref.startswith(("http://", "https://")):
        image = await _fetch_image(ref, timeout)
    else:
        image = await asyncio.to_thread(_read_image, Path(ref))

    logger.debug(f"Loaded background {ref} ({image.shape[1]} x {image.shape[0]})")
    return image


def _read_image(path: Path) -> np.ndarray:
    if not path.exists():
        raise BackgroundLoadError(str(path), "file not found")

    image = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if image is None:
        raise BackgroundLoadError(str(path), "not a readable image")
    return image


async def _fetch_image(url: str, timeout: float) -> np.ndarray:
    try:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
            resp = await client.get(url)
            resp.raise_for_status()
    except httpx.HTTPError as e:
        raise BackgroundLoadError(url, str(e)) from e

    return decode_image(url, resp.content)


def decode_image(reference: str, data: bytes) -> np.ndarray:
    """
    Decode encoded image bytes (PNG, JPEG, ...).

    Args:
        reference: Name used in error messages
        data: Encoded image

    Returns:
        BGR image as numpy array
    """
    buffer = np.frombuffer(data, dtype=np.uint8)
    image = cv2.imdecode(buffer, cv2.IMREAD_COLOR) if buffer.size else None
    if image is None:
        raise BackgroundLoadError(reference, "response is not a decodable image")
    return image
