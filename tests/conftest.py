import json

import numpy as np
import pytest

BACKGROUND_BGR = (90, 90, 90)


class RecordingSurface:
    """Surface double that records draw calls instead of painting pixels."""

    def __init__(self, width=800, height=400):
        self.width = width
        self.height = height
        self.calls = []
        self.stroke_color = None
        self.fill_color = None
        self.line_width = None

    def set_stroke_style(self, color):
        self.stroke_color = color

    def set_fill_style(self, color):
        self.fill_color = color

    def set_line_width(self, width):
        self.line_width = width

    def draw_image(self, image):
        self.calls.append(("draw_image", image.shape))

    def fill_background(self, color):
        self.calls.append(("fill_background", color))

    def stroke_polyline(self, points):
        self.calls.append(("stroke_polyline", tuple(points), self.stroke_color, self.line_width))

    def stroke_segments(self, segments):
        self.calls.append(("stroke_segments", tuple(segments), self.stroke_color, self.line_width))

    def stroke_circle(self, center, radius):
        self.calls.append(("stroke_circle", center, radius, self.stroke_color, self.line_width))

    def fill_circle(self, center, radius):
        self.calls.append(("fill_circle", center, radius, self.fill_color))

    def fill_text_centered(self, text, center, color, font_scale, thickness):
        self.calls.append(("fill_text", text, center, color))

    def copy(self):
        clone = RecordingSurface(self.width, self.height)
        clone.calls = list(self.calls)
        return clone

    def commit(self, scratch):
        self.calls = list(scratch.calls)

    def names(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def recording_surface():
    return RecordingSurface()


@pytest.fixture
def background():
    # Deliberately not 800x400: the renderer must stretch it
    return np.full((200, 300, 3), BACKGROUND_BGR, dtype=np.uint8)


def element(kind, points, color="#3B82F6", label=None):
    data = {"type": kind, "points": [{"x": x, "y": y} for x, y in points], "color": color}
    if label is not None:
        data["label"] = label
    return data


@pytest.fixture
def sample_diagram():
    return json.dumps([
        element("line", [(50, 50), (120, 80), (200, 60)], "#10B981"),
        element("arrow", [(100, 300), (150, 280), (400, 200)], "#EF4444"),
        element("circle", [(600, 200), (640, 200)], "#F59E0B"),
        element("player", [(300, 150)], "#3B82F6", "1"),
        element("player", [(500, 250)], "#3B82F6", "2"),
    ])
