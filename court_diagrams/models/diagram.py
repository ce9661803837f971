"""
Data models for tactical diagrams drawn over the court background.
"""
from dataclasses import dataclass, field
from typing import ClassVar, Dict, Iterator, Optional, Tuple, Union


@dataclass(frozen=True)
class Point:
    """A position in logical canvas space."""
    x: float
    y: float

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class LineElement:
    """Polyline through every point, in order."""
    kind: ClassVar[str] = "line"
    min_points: ClassVar[int] = 2

    points: Tuple[Point, ...]
    color: str


@dataclass(frozen=True)
class ArrowElement:
    """Straight shaft from the first to the last point, with a V head at the end."""
    kind: ClassVar[str] = "arrow"
    min_points: ClassVar[int] = 2

    points: Tuple[Point, ...]
    color: str

    @property
    def start(self) -> Point:
        return self.points[0]

    @property
    def end(self) -> Point:
        return self.points[-1]


@dataclass(frozen=True)
class CircleElement:
    """Outline centered on the first point, passing through the last point."""
    kind: ClassVar[str] = "circle"
    min_points: ClassVar[int] = 2

    points: Tuple[Point, ...]
    color: str

    @property
    def center(self) -> Point:
        return self.points[0]

    @property
    def edge(self) -> Point:
        return self.points[-1]


@dataclass(frozen=True)
class PlayerElement:
    """Filled marker at the first point with an optional label."""
    kind: ClassVar[str] = "player"
    min_points: ClassVar[int] = 1

    points: Tuple[Point, ...]
    color: str
    label: Optional[str] = None

    @property
    def position(self) -> Point:
        return self.points[0]


DrawingElement = Union[LineElement, ArrowElement, CircleElement, PlayerElement]

# Closed set of drawable kinds
ELEMENT_TYPES: Dict[str, type] = {
    cls.kind: cls for cls in (LineElement, ArrowElement, CircleElement, PlayerElement)
}


@dataclass(frozen=True)
class Diagram:
    """Ordered sequence of elements; later elements are painted over earlier ones."""
    elements: Tuple[DrawingElement, ...] = ()

    def __iter__(self) -> Iterator[DrawingElement]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)


@dataclass(frozen=True)
class ElementIssue:
    """An element the decoder skipped, and why."""
    index: int
    kind: str
    reason: str

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {"index": self.index, "kind": self.kind, "reason": self.reason}


@dataclass(frozen=True)
class DecodeResult:
    """Decoded diagram together with the elements that were dropped."""
    diagram: Diagram
    issues: Tuple[ElementIssue, ...] = field(default_factory=tuple)

    @property
    def skipped(self) -> int:
        return len(self.issues)
