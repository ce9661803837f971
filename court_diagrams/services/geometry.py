"""Coordinate math used by the draw routines."""
import math
from typing import Tuple

from court_diagrams.models.diagram import Point


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b.x - a.x, b.y - a.y)


def shaft_angle(start: Point, end: Point) -> float:
    """Direction of the segment start -> end, in radians (canvas y-down)."""
    return math.atan2(end.y - start.y, end.x - start.x)


def arrowhead_points(
    start: Point,
    end: Point,
    length: float,
    spread: float
) -> Tuple[Point, Point]:
    """
    Compute the two free ends of a V-shaped arrowhead.

    Both head segments start at `end` and run back along the shaft, rotated
    by -spread and +spread respectively.

    Args:
        start: Shaft start
        end: Shaft end (arrow tip)
        length: Length of each head segment
        spread: Angle between the reversed shaft and each head segment (radians)

    Returns:
        Tuple of (first_head_end, second_head_end)
    """
    angle = shaft_angle(start, end)
    left = Point(
        x=end.x - length * math.cos(angle - spread),
        y=end.y - length * math.sin(angle - spread),
    )
    right = Point(
        x=end.x - length * math.cos(angle + spread),
        y=end.y - length * math.sin(angle + spread),
    )
    return left, right
