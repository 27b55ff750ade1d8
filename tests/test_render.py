"""
Tests for the marker layout preview renderer.

Run with: python -m pytest tests/test_render.py
"""

import io

import pytest
from PIL import Image

from logic.collision import resolve_marker_placement
from logic.markers import convert_to_markers
from logic.render import hex_to_rgb, project, render_markers_to_image


def test_hex_to_rgb():
    assert hex_to_rgb("#dc2626") == (220, 38, 38)
    assert hex_to_rgb("059669") == (5, 150, 105)


def test_project_origin():
    assert project(0, 0, 0) == pytest.approx((128, 128))
    assert project(0, 180, 1) == pytest.approx((512, 256))


def test_project_north_is_up():
    _, y_north = project(42.0, 29.0, 10)
    _, y_south = project(41.0, 29.0, 10)
    assert y_north < y_south


def test_render_layout():
    markers = convert_to_markers([
        {"venue": {"id": "a", "coordinates": {"lat": 41.0, "lng": 29.0}}, "event_count": 12},
        {"venue": {"id": "b", "coordinates": {"lat": 41.0, "lng": 29.0}}, "event_count": 3},
        {"venue": {"id": "c", "coordinates": {"lat": 41.01, "lng": 29.02}}, "event_count": 1},
    ])
    positioned = resolve_marker_placement(markers, 12)

    png = render_markers_to_image(positioned, 12, width=320, height=240)

    image = Image.open(io.BytesIO(png))
    assert image.format == "PNG"
    assert image.size == (320, 240)


def test_render_empty():
    png = render_markers_to_image([], 10, width=64, height=48)

    assert Image.open(io.BytesIO(png)).size == (64, 48)
