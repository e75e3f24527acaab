# nicecanvas/src/nicecanvas/rect_canvas/camera.py

from __future__ import annotations

import math
from dataclasses import dataclass, asdict
from typing import Any, Tuple

from .geometry import Rect


@dataclass
class Camera:
    """Scale + offset transform between world (image) space and screen space.

    screen = world * scale + offset
    world  = (screen - offset) / scale

    Scale is clamped to [min_scale, max_scale] on every update.
    """

    scale: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    min_scale: float = 1.0
    max_scale: float = 4.0

    def __post_init__(self) -> None:
        self.scale = self._clamp_scale(self.scale)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Camera":
        return cls(**data)

    # ------------------ transforms ------------------

    def to_world(self, sx: float, sy: float) -> Tuple[float, float]:
        """Screen coords -> world coords."""
        return (sx - self.offset_x) / self.scale, (sy - self.offset_y) / self.scale

    def to_screen(self, wx: float, wy: float) -> Tuple[float, float]:
        """World coords -> screen coords."""
        return wx * self.scale + self.offset_x, wy * self.scale + self.offset_y

    def rect_to_screen(self, rect: Rect) -> Rect:
        """Normalized screen-space bounds of a world rectangle."""
        r = rect.normalized()
        sx, sy = self.to_screen(r.x, r.y)
        return Rect(sx, sy, r.width * self.scale, r.height * self.scale)

    # ------------------ core operations ------------------

    def reset(self) -> None:
        """Unzoomed, unpanned view."""
        self.scale = self._clamp_scale(1.0)
        self.offset_x = 0.0
        self.offset_y = 0.0

    def zoom_at(self, sx: float, sy: float, delta_scale: float) -> bool:
        """Change scale by `delta_scale`, keeping the world point under (sx, sy) fixed.

        Returns True if the camera changed. Non-finite input is ignored.
        """
        if not all(math.isfinite(v) for v in (sx, sy, delta_scale)):
            return False

        wx, wy = self.to_world(sx, sy)
        new_scale = self._clamp_scale(self.scale + delta_scale)
        if new_scale == self.scale:
            return False

        self.scale = new_scale
        self.offset_x = sx - wx * new_scale
        self.offset_y = sy - wy * new_scale
        return True

    def pan_by(self, dx: float, dy: float) -> bool:
        """Shift the view by a screen-space delta. Returns True if the camera changed."""
        if not (math.isfinite(dx) and math.isfinite(dy)):
            return False
        if dx == 0 and dy == 0:
            return False
        self.offset_x += dx
        self.offset_y += dy
        return True

    # ------------------ internal helpers ------------------

    def _clamp_scale(self, scale: float) -> float:
        if not math.isfinite(scale):
            return self.min_scale
        return max(self.min_scale, min(self.max_scale, scale))
