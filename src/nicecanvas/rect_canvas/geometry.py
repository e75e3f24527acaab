# nicecanvas/src/nicecanvas/rect_canvas/geometry.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Edge(Enum):
    """Rectangle edge reported by edge-proximity tests."""
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"
    NONE = "none"


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in world coordinates (floats).

    width/height may be negative while a drag crosses its anchor point;
    use `normalized()` or the `left/right/top/bottom` properties whenever
    real bounds are needed.
    """

    x: float
    y: float
    width: float = 0.0
    height: float = 0.0

    @property
    def left(self) -> float:
        return min(self.x, self.x + self.width)

    @property
    def right(self) -> float:
        return max(self.x, self.x + self.width)

    @property
    def top(self) -> float:
        return min(self.y, self.y + self.height)

    @property
    def bottom(self) -> float:
        return max(self.y, self.y + self.height)

    def normalized(self) -> "Rect":
        """Return an equivalent rectangle with non-negative width and height."""
        return Rect(
            x=self.left,
            y=self.top,
            width=self.right - self.left,
            height=self.bottom - self.top,
        )

    def translated(self, dx: float, dy: float) -> "Rect":
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    def contains(self, px: float, py: float) -> bool:
        """Inclusive point containment using normalized bounds."""
        return self.left <= px <= self.right and self.top <= py <= self.bottom

    def edge_near(self, px: float, py: float, threshold: float) -> Edge:
        """Return the first edge (left, right, top, bottom) within `threshold`.

        Distance is measured to the edge segment: the point must be closer
        than `threshold` to the edge line and lie within the edge's extent
        widened by `threshold`. A corner reports only one edge, left/right
        before top/bottom.
        """
        left, right, top, bottom = self.left, self.right, self.top, self.bottom
        in_vertical_span = top - threshold < py < bottom + threshold
        in_horizontal_span = left - threshold < px < right + threshold

        if in_vertical_span and abs(px - left) < threshold:
            return Edge.LEFT
        if in_vertical_span and abs(px - right) < threshold:
            return Edge.RIGHT
        if in_horizontal_span and abs(py - top) < threshold:
            return Edge.TOP
        if in_horizontal_span and abs(py - bottom) < threshold:
            return Edge.BOTTOM
        return Edge.NONE

    def with_edge_at(self, edge: Edge, px: float, py: float) -> "Rect":
        """Move one edge to the given world point, keeping the opposite edge fixed.

        LEFT/TOP shift the anchor corner and shrink/grow the size inversely;
        RIGHT/BOTTOM only change width/height. Edges are those of the
        normalized bounds, matching `edge_near`. The result may have negative
        size if the edge is dragged past its opposite.
        """
        r = self.normalized()
        if edge is Edge.LEFT:
            return Rect(px, r.y, r.width + (r.x - px), r.height)
        if edge is Edge.RIGHT:
            return Rect(r.x, r.y, px - r.x, r.height)
        if edge is Edge.TOP:
            return Rect(r.x, py, r.width, r.height + (r.y - py))
        if edge is Edge.BOTTOM:
            return Rect(r.x, r.y, r.width, py - r.y)
        raise ValueError(f"Cannot resize along edge {edge!r}")
