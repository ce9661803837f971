"""Tests for the diagram JSON format."""
import json

import pytest

from court_diagrams.core.errors import DecodeError
from court_diagrams.models.diagram import (
    ArrowElement,
    CircleElement,
    Diagram,
    LineElement,
    PlayerElement,
    Point,
)
from court_diagrams.services import diagram_codec
from conftest import element


def test_decode_sample(sample_diagram):
    result = diagram_codec.decode(sample_diagram)

    kinds = [e.kind for e in result.diagram]
    assert kinds == ["line", "arrow", "circle", "player", "player"]
    assert result.skipped == 0

    arrow = result.diagram.elements[1]
    assert isinstance(arrow, ArrowElement)
    # Intermediate points are kept by the format, only start/end are drawn
    assert len(arrow.points) == 3
    assert arrow.start == Point(100, 300)
    assert arrow.end == Point(400, 200)

    player = result.diagram.elements[3]
    assert isinstance(player, PlayerElement)
    assert player.label == "1"
    assert player.position == Point(300, 150)


def test_round_trip():
    diagram = Diagram((
        LineElement(points=(Point(0, 0), Point(10.5, 20), Point(30, 5)), color="red"),
        ArrowElement(points=(Point(1, 2), Point(3, 4)), color="#00FF00"),
        CircleElement(points=(Point(100, 100), Point(120, 100)), color="rgb(0, 0, 255)"),
        PlayerElement(points=(Point(400, 200),), color="#3B82F6", label="7"),
        PlayerElement(points=(Point(420, 220),), color="#3B82F6"),
    ))

    result = diagram_codec.decode(diagram_codec.encode(diagram))

    assert result.diagram == diagram
    assert result.skipped == 0


def test_encode_matches_editor_format():
    diagram = Diagram((PlayerElement(points=(Point(1, 2),), color="#111111", label="3"),))

    data = json.loads(diagram_codec.encode(diagram))

    assert data == [{"type": "player", "points": [{"x": 1, "y": 2}], "color": "#111111", "label": "3"}]


def test_line_with_one_point_is_skipped():
    serialized = json.dumps([
        element("line", [(10, 10)]),
        element("player", [(200, 200)], label="1"),
    ])

    result = diagram_codec.decode(serialized)

    assert [e.kind for e in result.diagram] == ["player"]
    assert result.skipped == 1
    issue = result.issues[0]
    assert issue.index == 0
    assert issue.kind == "line"


@pytest.mark.parametrize("kind,points", [
    ("arrow", [(1, 1)]),
    ("circle", [(1, 1)]),
    ("player", []),
])
def test_too_few_points_skipped(kind, points):
    result = diagram_codec.decode(json.dumps([element(kind, points)]))

    assert len(result.diagram) == 0
    assert result.issues[0].kind == kind


def test_unknown_kind_is_ignored():
    serialized = json.dumps([
        element("volleyball", [(10, 10)]),
        element("circle", [(100, 100), (110, 100)]),
        {"points": [], "color": "red"},
    ])

    result = diagram_codec.decode(serialized)

    assert [e.kind for e in result.diagram] == ["circle"]
    assert [issue.index for issue in result.issues] == [0, 2]
    assert result.issues[0].kind == "volleyball"


def test_label_ignored_for_non_player():
    result = diagram_codec.decode(json.dumps([element("line", [(0, 0), (5, 5)], label="x")]))

    assert result.diagram.elements[0] == LineElement(points=(Point(0, 0), Point(5, 5)), color="#3B82F6")


@pytest.mark.parametrize("serialized", ["", "   ", None])
def test_empty_input_is_empty_diagram(serialized):
    result = diagram_codec.decode(serialized)

    assert len(result.diagram) == 0
    assert result.skipped == 0


@pytest.mark.parametrize("serialized", [
    "not json",
    "[{\"type\": \"line\"",
    "{\"type\": \"line\"}",
    "[1, 2]",
])
def test_malformed_structure_raises(serialized):
    with pytest.raises(DecodeError):
        diagram_codec.decode(serialized)


@pytest.mark.parametrize("bad_element", [
    {"type": "line", "points": [{"x": "a", "y": 1}, {"x": 2, "y": 2}], "color": "red"},
    {"type": "line", "points": [{"x": 1}, {"x": 2, "y": 2}], "color": "red"},
    {"type": "player", "points": [[1, 2]], "color": "red"},
    {"type": "player", "points": "1,2", "color": "red"},
    {"type": "player", "points": [{"x": True, "y": 2}], "color": "red"},
])
def test_malformed_element_rejects_whole_diagram(bad_element):
    serialized = json.dumps([element("player", [(1, 1)]), bad_element])

    with pytest.raises(DecodeError):
        diagram_codec.decode(serialized)


@pytest.mark.parametrize("bad_element", [
    {"type": "player", "points": [{"x": 1, "y": 2}]},
    {"type": "line", "points": [{"x": 1, "y": 2}, {"x": 3, "y": 4}], "color": None},
    {"type": "arrow", "points": [{"x": 1, "y": 2}, {"x": 3, "y": 4}], "color": 255},
    {"type": "player", "points": [{"x": 1, "y": 2}], "color": "red", "label": 5},
])
def test_element_without_usable_style_is_skipped(bad_element):
    serialized = json.dumps([
        element("player", [(1, 1)], label="1"),
        bad_element,
        element("circle", [(100, 100), (110, 100)]),
    ])

    result = diagram_codec.decode(serialized)

    assert [e.kind for e in result.diagram] == ["player", "circle"]
    assert result.skipped == 1
    assert result.issues[0].index == 1
    assert result.issues[0].kind == bad_element["type"]


def test_non_finite_coordinate_raises():
    serialized = '[{"type": "player", "points": [{"x": NaN, "y": 1}], "color": "red"}]'

    with pytest.raises(DecodeError):
        diagram_codec.decode(serialized)


def test_out_of_range_coordinate_raises():
    # Valid JSON integer that does not fit in a float
    huge = "1" + "0" * 400
    serialized = '[{"type": "player", "points": [{"x": ' + huge + ', "y": 1}], "color": "red"}]'

    with pytest.raises(DecodeError):
        diagram_codec.decode(serialized)


def test_deeply_nested_input_raises_decode_error():
    with pytest.raises(DecodeError):
        diagram_codec.decode("[" * 100000)


def test_decode_or_empty():
    result, error = diagram_codec.decode_or_empty("{oops")
    assert len(result.diagram) == 0
    assert error

    result, error = diagram_codec.decode_or_empty(json.dumps([element("player", [(1, 1)])]))
    assert len(result.diagram) == 1
    assert error is None
