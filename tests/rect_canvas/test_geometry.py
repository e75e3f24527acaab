# tests/rect_canvas/test_geometry.py

from __future__ import annotations

import pytest

from nicecanvas.rect_canvas.geometry import Edge, Rect


def test_normalized_flips_negative_size():
    r = Rect(100, 80, -30, -20).normalized()
    assert r == Rect(70, 60, 30, 20)
    assert Rect(1, 2, 3, 4).normalized() == Rect(1, 2, 3, 4)


def test_right_and_bottom_edges_only_change_size():
    r = Rect(10, 20, 30, 40)
    right = r.with_edge_at(Edge.RIGHT, 55.5, 999)
    assert (right.x, right.y, right.height) == (10, 20, 40)
    assert right.width == pytest.approx(45.5)

    bottom = r.with_edge_at(Edge.BOTTOM, 999, 70)
    assert (bottom.x, bottom.y, bottom.width) == (10, 20, 30)
    assert bottom.height == pytest.approx(50)


@pytest.mark.parametrize("px", [-5.0, 0.0, 12.3, 39.9, 41.0, 100.0])
def test_left_edge_keeps_right_edge_fixed(px: float):
    r = Rect(10, 20, 30, 40)
    moved = r.with_edge_at(Edge.LEFT, px, 0)
    assert moved.x == px
    assert moved.x + moved.width == pytest.approx(40)
    assert (moved.y, moved.height) == (20, 40)


@pytest.mark.parametrize("py", [-5.0, 20.0, 59.0, 61.0])
def test_top_edge_keeps_bottom_edge_fixed(py: float):
    r = Rect(10, 20, 30, 40)
    moved = r.with_edge_at(Edge.TOP, 0, py)
    assert moved.y == py
    assert moved.y + moved.height == pytest.approx(60)


def test_edges_of_negative_size_rect_use_normalized_bounds():
    # left=10, right=40, top=20, bottom=60
    r = Rect(40, 60, -30, -40)

    left = r.with_edge_at(Edge.LEFT, 0, 0)
    assert (left.left, left.right) == (0, 40)
    right = r.with_edge_at(Edge.RIGHT, 55, 0)
    assert (right.left, right.right) == (10, 55)
    top = r.with_edge_at(Edge.TOP, 0, 5)
    assert (top.top, top.bottom) == (5, 60)
    bottom = r.with_edge_at(Edge.BOTTOM, 0, 70)
    assert (bottom.top, bottom.bottom) == (20, 70)


def test_with_edge_none_raises():
    with pytest.raises(ValueError):
        Rect(0, 0, 1, 1).with_edge_at(Edge.NONE, 0, 0)


def test_translated():
    assert Rect(1, 2, 3, 4).translated(10, -2) == Rect(11, 0, 3, 4)
