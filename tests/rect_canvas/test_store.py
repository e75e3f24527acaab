# tests/rect_canvas/test_store.py

from __future__ import annotations

import pytest

from nicecanvas.rect_canvas.geometry import Edge, Rect
from nicecanvas.rect_canvas.store import AnnotationStore, IndexOutOfRangeError


def test_append_returns_new_index():
    store = AnnotationStore()
    assert store.append(Rect(0, 0, 10, 10)) == 0
    assert store.append(Rect(5, 5, 0, 0)) == 1
    assert len(store) == 2
    assert store.rects == (Rect(0, 0, 10, 10), Rect(5, 5, 0, 0))


def test_replace_out_of_range_raises():
    store = AnnotationStore([Rect(0, 0, 10, 10)])
    store.replace(0, Rect(1, 1, 2, 2))
    assert store.get(0) == Rect(1, 1, 2, 2)

    for bad in (1, -1, 99):
        with pytest.raises(IndexOutOfRangeError):
            store.replace(bad, Rect(0, 0, 1, 1))

    # Usable wherever an IndexError is expected
    with pytest.raises(IndexError):
        store.get(5)


def test_hit_test_returns_lowest_index_on_overlap():
    store = AnnotationStore(
        [
            Rect(0, 0, 100, 100),
            Rect(50, 50, 100, 100),
            Rect(60, 60, 10, 10),
        ]
    )
    assert store.hit_test(65, 65) == 0
    assert store.hit_test(120, 120) == 1
    assert store.hit_test(500, 500) is None


def test_hit_test_distinguishes_index_zero_from_no_hit():
    store = AnnotationStore([Rect(10, 10, 5, 5)])
    hit = store.hit_test(12, 12)
    assert hit is not None
    assert hit == 0
    assert store.hit_test(0, 0) is None


def test_hit_test_is_inclusive_and_uses_normalized_bounds():
    store = AnnotationStore([Rect(100, 100, -50, -30)])
    assert store.hit_test(50, 70) == 0
    assert store.hit_test(100, 100) == 0
    assert store.hit_test(75, 85) == 0
    assert store.hit_test(101, 85) is None

    # Zero-area rectangle still contains its own point
    store.append(Rect(300, 300, 0, 0))
    assert store.hit_test(300, 300) == 1


def test_edge_near_check_order_and_corners():
    store = AnnotationStore([Rect(100, 100, 50, 30)])
    assert store.edge_near(102, 115, 0) is Edge.LEFT
    assert store.edge_near(148, 115, 0) is Edge.RIGHT
    assert store.edge_near(125, 103, 0) is Edge.TOP
    assert store.edge_near(125, 128, 0) is Edge.BOTTOM
    assert store.edge_near(125, 115, 0) is Edge.NONE

    # Corners report a single edge: left/right win over top/bottom
    assert store.edge_near(101, 101, 0) is Edge.LEFT
    assert store.edge_near(149, 101, 0) is Edge.RIGHT
    assert store.edge_near(101, 129, 0) is Edge.LEFT


def test_edge_near_threshold_is_strict_and_bounded_to_segment():
    store = AnnotationStore([Rect(100, 100, 50, 30)])
    assert store.edge_near(90, 115, 0, threshold=10) is Edge.NONE
    assert store.edge_near(91, 115, 0, threshold=10) is Edge.LEFT

    # In line with the left edge but far below it
    assert store.edge_near(100, 400, 0) is Edge.NONE


def test_edge_near_bad_index_raises():
    store = AnnotationStore([Rect(0, 0, 10, 10)])
    with pytest.raises(IndexOutOfRangeError):
        store.edge_near(0, 0, 3)


def test_select_validates_and_reports_change():
    store = AnnotationStore([Rect(0, 0, 10, 10), Rect(20, 20, 5, 5)])
    assert store.selected is None
    assert store.select(0) is True
    assert store.selected == 0
    assert store.selected_rect == Rect(0, 0, 10, 10)
    assert store.select(0) is False

    with pytest.raises(IndexOutOfRangeError):
        store.select(2)
    assert store.selected == 0

    assert store.select(None) is True
    assert store.selected_rect is None


def test_set_rects_and_clear_reset_selection():
    store = AnnotationStore([Rect(0, 0, 10, 10), Rect(20, 20, 5, 5)])
    store.select(1)
    store.set_rects([Rect(1, 1, 1, 1)])
    assert store.selected is None
    assert len(store) == 1

    store.select(0)
    store.clear()
    assert store.selected is None
    assert len(store) == 0
