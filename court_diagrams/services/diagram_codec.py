"""
Encode and decode the JSON diagram format.

A serialized diagram is a JSON array of elements:

    [{"type": "player", "points": [{"x": 120, "y": 200}], "color": "#3B82F6", "label": "1"},
     {"type": "arrow", "points": [{"x": 120, "y": 200}, {"x": 300, "y": 150}], "color": "#EF4444"}]

Decoding is best-effort. Structural damage (invalid JSON, a point without
numeric coordinates, ...) rejects the whole diagram with a DecodeError.
Elements that are well-formed but undrawable (unknown kind, too few points,
no color string) are skipped and reported in DecodeResult.issues.
"""
import json
import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from court_diagrams.core.errors import DecodeError, ElementGeometryError
from court_diagrams.models.diagram import (
    ELEMENT_TYPES,
    DecodeResult,
    Diagram,
    DrawingElement,
    ElementIssue,
    PlayerElement,
    Point,
)

logger = logging.getLogger(__name__)


def decode(serialized: str) -> DecodeResult:
    """
    Decode a serialized diagram.

    Args:
        serialized: JSON text produced by the diagram editor

    Returns:
        DecodeResult with the drawable elements and the skipped ones

    Raises:
        DecodeError: If the text is not a well-formed diagram
    """
    if serialized is None or not serialized.strip():
        return DecodeResult(diagram=Diagram())

    try:
        raw_elements = json.loads(serialized)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Diagram is not valid JSON: {e}") from e
    except RecursionError as e:
        raise DecodeError("Diagram is nested too deeply") from e

    if not isinstance(raw_elements, list):
        raise DecodeError(f"Diagram must be a JSON array, got {type(raw_elements).__name__}")

    elements: List[DrawingElement] = []
    issues: List[ElementIssue] = []

    for index, raw in enumerate(raw_elements):
        if not isinstance(raw, dict):
            raise DecodeError(f"Element {index} must be an object, got {type(raw).__name__}")

        try:
            elements.append(_parse_element(index, raw))
        except ElementGeometryError as e:
            logger.warning(f"Skipping element {index}: {e}")
            issues.append(ElementIssue(index=index, kind=e.kind, reason=str(e)))

    logger.debug(f"Decoded {len(elements)} elements ({len(issues)} skipped)")
    return DecodeResult(diagram=Diagram(tuple(elements)), issues=tuple(issues))


def decode_or_empty(serialized: str) -> Tuple[DecodeResult, Optional[str]]:
    """
    Decode a serialized diagram, falling back to an empty diagram.

    Args:
        serialized: JSON text produced by the diagram editor

    Returns:
        Tuple of (DecodeResult, error message). The result is empty and the
        message set if the text could not be decoded.
    """
    try:
        return decode(serialized), None
    except DecodeError as e:
        logger.error(f"Failed to decode diagram: {e}")
        return DecodeResult(diagram=Diagram()), str(e)


def encode(diagram: Diagram) -> str:
    """
    Serialize a diagram to the JSON format read by decode().

    Args:
        diagram: Diagram to serialize

    Returns:
        JSON text
    """
    return json.dumps([_element_to_dict(element) for element in diagram])


def _element_to_dict(element: DrawingElement) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "type": element.kind,
        "points": [point.to_dict() for point in element.points],
        "color": element.color,
    }
    if isinstance(element, PlayerElement) and element.label is not None:
        data["label"] = element.label
    return data


def _parse_element(index: int, raw: Dict[str, Any]) -> DrawingElement:
    kind = raw.get("type")
    element_type = ELEMENT_TYPES.get(kind) if isinstance(kind, str) else None
    if element_type is None:
        raise ElementGeometryError(f"unknown kind {kind!r}", kind=str(kind))

    points = _parse_points(index, raw.get("points"))
    if len(points) < element_type.min_points:
        raise ElementGeometryError(
            f"{kind} needs at least {element_type.min_points} point(s), got {len(points)}",
            kind=kind,
        )

    color = raw.get("color")
    if not isinstance(color, str):
        raise ElementGeometryError(f"{kind} has no color string", kind=kind)

    if element_type is PlayerElement:
        label = raw.get("label")
        if label is not None and not isinstance(label, str):
            raise ElementGeometryError(f"{kind} label must be a string", kind=kind)
        return PlayerElement(points=points, color=color, label=label)

    return element_type(points=points, color=color)


def _parse_points(index: int, raw_points: Any) -> Tuple[Point, ...]:
    if not isinstance(raw_points, list):
        raise DecodeError(f"Element {index} points must be an array")

    points = []
    for raw in raw_points:
        if not isinstance(raw, dict):
            raise DecodeError(f"Element {index} has a point that is not an object: {raw!r}")
        points.append(Point(x=_coordinate(index, raw.get("x")), y=_coordinate(index, raw.get("y"))))
    return tuple(points)


def _coordinate(index: int, value: Any) -> float:
    # bool is an int subclass; reject it along with strings and nulls
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"Element {index} has a non-numeric coordinate: {value!r}")
    try:
        number = float(value)
    except OverflowError as e:
        raise DecodeError(f"Element {index} has an out-of-range coordinate") from e
    if not math.isfinite(number):
        raise DecodeError(f"Element {index} has a non-finite coordinate: {value!r}")
    return number
