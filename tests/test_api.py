"""Tests for the HTTP endpoints."""
import json

import cv2
import numpy as np
import pytest
from fastapi.testclient import TestClient

from court_diagrams.api import court as court_api
from court_diagrams.core.config import MAX_COURT_IMAGE_SIZE
from court_diagrams.main import app
from court_diagrams.services import court_image
from conftest import element


@pytest.fixture
def client(tmp_path, monkeypatch):
    background = tmp_path / "volleyball-court.jpg"
    court_image.generate_court_image(background)

    monkeypatch.setattr(court_image, "ensure_court_image", lambda output_path=background: output_path)
    monkeypatch.setattr(court_api, "BACKGROUND_IMAGE_FILE", background)
    return TestClient(app)


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_render_returns_png(client, sample_diagram):
    response = client.post("/api/diagrams/render", json={"diagram": sample_diagram})

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert response.headers["x-render-status"] == "complete"
    assert response.headers["x-render-elements"] == "5"

    image = cv2.imdecode(np.frombuffer(response.content, dtype=np.uint8), cv2.IMREAD_COLOR)
    assert image.shape == (400, 800, 3)


def test_render_scaled(client):
    response = client.post("/api/diagrams/render", json={"diagram": "[]", "scale": 2})

    image = cv2.imdecode(np.frombuffer(response.content, dtype=np.uint8), cv2.IMREAD_COLOR)
    assert image.shape == (800, 1600, 3)


def test_render_bad_diagram_still_returns_background(client):
    response = client.post("/api/diagrams/render", json={"diagram": "{broken"})

    assert response.status_code == 200
    assert response.headers["x-render-status"] == "background_only"


def test_render_rejects_bad_scale(client):
    response = client.post("/api/diagrams/render", json={"diagram": "[]", "scale": 0})

    assert response.status_code == 422


def test_validate(client):
    diagram = json.dumps([element("line", [(1, 1)]), element("player", [(5, 5)], label="1")])

    response = client.post("/api/diagrams/validate", json={"diagram": diagram})

    assert response.status_code == 200
    report = response.json()
    assert report["valid"] is True
    assert report["elements"] == 1
    assert report["skipped"] == 1
    assert report["issues"][0]["index"] == 0


def test_validate_malformed(client):
    response = client.post("/api/diagrams/validate", json={"diagram": "nope"})

    report = response.json()
    assert report["valid"] is False
    assert report["error"]


def test_validate_deeply_nested(client):
    response = client.post("/api/diagrams/validate", json={"diagram": "[" * 100000})

    assert response.status_code == 200
    assert response.json()["valid"] is False


def test_court_image(client):
    response = client.get("/api/court/image")

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/jpeg"


def test_regenerate_court_image(client):
    response = client.post("/api/court/regenerate-image", params={"width": 400, "height": 200})

    assert response.status_code == 200
    assert response.json()["status"] == "success"

    bad = client.post("/api/court/regenerate-image", params={"width": 0})
    assert bad.status_code == 400


def test_regenerate_court_image_rejects_oversized(client):
    too_wide = client.post("/api/court/regenerate-image", params={"width": 100000, "height": 200})
    too_tall = client.post("/api/court/regenerate-image", params={"width": 400, "height": MAX_COURT_IMAGE_SIZE + 1})

    assert too_wide.status_code == 400
    assert too_tall.status_code == 400
    assert str(MAX_COURT_IMAGE_SIZE) in too_wide.json()["detail"]
