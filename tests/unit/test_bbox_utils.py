# ============================================================================
# tests/unit/test_bbox_utils.py
# ============================================================================
"""
Tests for bounding box conversion
"""

import pytest

from prescription_assistant.core.bbox_utils import (
    normalized_to_pixel_rect,
    union_rects,
    vertices_to_rect,
)
from prescription_assistant.core.models import Rect


def test_normalized_bottom_left_to_top_left_pixels():
    rect = normalized_to_pixel_rect(0.1, 0.2, 0.3, 0.1, 1000, 1000)

    assert rect.x == pytest.approx(100)
    assert rect.y == pytest.approx(700)
    assert rect.width == pytest.approx(300)
    assert rect.height == pytest.approx(100)


def test_normalized_non_square_image():
    rect = normalized_to_pixel_rect(0.0, 0.0, 1.0, 0.5, 400, 200)

    assert rect.y == pytest.approx(100)
    assert rect.width == pytest.approx(400)
    assert rect.height == pytest.approx(100)


def test_vertices_to_rect():
    rect = vertices_to_rect([
        {"x": 10, "y": 20},
        {"x": 110, "y": 20},
        {"x": 110, "y": 60},
        {"x": 10, "y": 60},
    ])

    assert rect == Rect(10, 20, 100, 40)


def test_vertices_missing_coordinates_are_zero():
    rect = vertices_to_rect([{"y": 5}, {"x": 50, "y": 5}, {"x": 50, "y": 25}, {}])

    assert rect == Rect(0, 0, 50, 25)


def test_vertices_empty():
    assert vertices_to_rect([]) == Rect(0, 0, 0, 0)


def test_union_rects():
    rect = union_rects([Rect(10, 10, 20, 10), Rect(40, 5, 10, 30)])

    assert rect == Rect(10, 5, 40, 30)
    assert union_rects([]) == Rect(0, 0, 0, 0)
