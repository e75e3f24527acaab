# tests/rect_canvas/test_camera.py

from __future__ import annotations

import math

import pytest

from nicecanvas.rect_canvas.camera import Camera
from nicecanvas.rect_canvas.geometry import Rect


def test_to_world_inverts_to_screen():
    cam = Camera(scale=2.5, offset_x=-40.0, offset_y=13.0)
    for wx, wy in [(0.0, 0.0), (100.0, 50.0), (-7.5, 333.25)]:
        sx, sy = cam.to_screen(wx, wy)
        x2, y2 = cam.to_world(sx, sy)
        assert x2 == pytest.approx(wx)
        assert y2 == pytest.approx(wy)


def test_zoom_keeps_world_point_under_cursor():
    """The world point under the cursor is the same before and after zoom_at."""
    cam = Camera()
    cursors = [(0.0, 0.0), (120.0, 110.0), (1599.0, 799.0), (803.3, 12.7)]
    deltas = [0.5, 1.0, -0.25, 2.0, -3.0, 0.01]

    for sx, sy in cursors:
        for delta in deltas:
            before = cam.to_world(sx, sy)
            cam.zoom_at(sx, sy, delta)
            after = cam.to_world(sx, sy)
            assert after[0] == pytest.approx(before[0], abs=1e-9)
            assert after[1] == pytest.approx(before[1], abs=1e-9)


def test_scale_stays_clamped_under_extreme_deltas():
    cam = Camera()
    for delta in [1e6, -1e6, 3.9, 3.9, -0.1, -50.0, 50.0]:
        cam.zoom_at(400.0, 300.0, delta)
        assert 1.0 <= cam.scale <= 4.0

    cam.zoom_at(0.0, 0.0, 1e9)
    assert cam.scale == 4.0
    cam.zoom_at(0.0, 0.0, -1e9)
    assert cam.scale == 1.0


def test_zoom_ignores_non_finite_input():
    cam = Camera(scale=2.0, offset_x=5.0, offset_y=6.0)
    assert cam.zoom_at(10.0, 10.0, math.nan) is False
    assert cam.zoom_at(10.0, 10.0, math.inf) is False
    assert cam.zoom_at(math.nan, 10.0, 0.5) is False
    assert (cam.scale, cam.offset_x, cam.offset_y) == (2.0, 5.0, 6.0)


def test_zoom_at_clamp_boundary_is_a_no_op():
    cam = Camera()
    assert cam.zoom_at(50.0, 50.0, -1.0) is False
    assert (cam.scale, cam.offset_x, cam.offset_y) == (1.0, 0.0, 0.0)


def test_pan_by_adds_screen_delta():
    cam = Camera(scale=3.0, offset_x=1.0, offset_y=2.0)
    assert cam.pan_by(10.0, -4.0) is True
    assert cam.offset_x == 11.0
    assert cam.offset_y == -2.0
    assert cam.scale == 3.0

    assert cam.pan_by(0.0, 0.0) is False
    assert cam.pan_by(math.nan, 1.0) is False
    assert cam.offset_x == 11.0


def test_reset_and_dict_roundtrip():
    cam = Camera(scale=3.0, offset_x=-100.0, offset_y=40.0)
    restored = Camera.from_dict(cam.to_dict())
    assert restored == cam

    cam.reset()
    assert (cam.scale, cam.offset_x, cam.offset_y) == (1.0, 0.0, 0.0)


def test_from_dict_clamps_scale():
    cam = Camera.from_dict({"scale": 10.0, "offset_x": 0.0, "offset_y": 0.0})
    assert cam.scale == 4.0


def test_rect_to_screen_normalizes():
    cam = Camera(scale=2.0, offset_x=10.0, offset_y=20.0)
    r = cam.rect_to_screen(Rect(50.0, 50.0, -10.0, -20.0))
    assert r == Rect(90.0, 80.0, 20.0, 40.0)
