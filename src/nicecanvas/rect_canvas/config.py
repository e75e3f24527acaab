# nicecanvas/src/nicecanvas/rect_canvas/config.py

from __future__ import annotations

import math
from dataclasses import dataclass, asdict
from typing import Any


@dataclass
class RectCanvasConfig:
    # Drawing surface (logical pixels, fixed)
    surface_width: int = 1600
    surface_height: int = 800
    background_color: str = "white"

    # Camera / zoom behavior
    min_scale: float = 1.0
    max_scale: float = 4.0
    wheel_zoom_speed: float = 0.01          # scale change per wheel deltaY unit

    # Resize grab zone around edges (screen px, divided by scale for world)
    edge_threshold_px: float = 10.0

    # Rectangle appearance
    rect_color: str = "black"
    rect_selected_color: str = "red"
    rect_draft_color: str = "dodgerblue"
    rect_line_width: float = 1.0
    rect_fill_opacity: float = 0.0

    # Host surface
    suppress_context_menu: bool = True

    def __post_init__(self) -> None:
        if self.surface_width <= 0 or self.surface_height <= 0:
            raise ValueError(
                f"surface size must be positive, got {self.surface_width}x{self.surface_height}"
            )
        if not (math.isfinite(self.min_scale) and math.isfinite(self.max_scale)):
            raise ValueError("min_scale and max_scale must be finite")
        if self.min_scale <= 0:
            raise ValueError(f"min_scale must be > 0, got {self.min_scale}")
        if self.min_scale > self.max_scale:
            raise ValueError(
                f"min_scale ({self.min_scale}) must not exceed max_scale ({self.max_scale})"
            )
        if self.edge_threshold_px < 0:
            raise ValueError(f"edge_threshold_px must be >= 0, got {self.edge_threshold_px}")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RectCanvasConfig":
        """Build a config from a dict, ignoring unknown keys."""
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)
