"""Canvas state shared by the interaction controller and the render loop.

All mutable editor state lives in one `CanvasState` bundle. Camera and store
invariants (scale clamp, index validity) are enforced by their own methods;
the controller is the only writer of the gesture fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .camera import Camera
from .geometry import Edge, Rect
from .image_source import ImageSource
from .store import AnnotationStore


class InteractionMode(Enum):
    """Exactly one gesture is active at a time."""
    IDLE = "idle"
    DRAWING = "drawing"
    PANNING = "panning"
    RESIZING = "resizing"
    MOVING = "moving"


@dataclass
class CanvasState:
    camera: Camera = field(default_factory=Camera)
    store: AnnotationStore = field(default_factory=AnnotationStore)
    image: Optional[ImageSource] = None

    mode: InteractionMode = InteractionMode.IDLE
    draft: Optional[Rect] = None                       # only while DRAWING

    # Gesture bookkeeping, reset when the gesture ends
    anchor_world: Optional[Tuple[float, float]] = None  # press point (world)
    last_screen: Optional[Tuple[float, float]] = None   # last pan sample (screen)
    resize_edge: Edge = Edge.NONE
    drag_index: Optional[int] = None
    drag_orig: Optional[Rect] = None                    # rect at gesture start

    def end_gesture(self) -> None:
        self.mode = InteractionMode.IDLE
        self.draft = None
        self.anchor_world = None
        self.last_screen = None
        self.resize_edge = Edge.NONE
        self.drag_index = None
        self.drag_orig = None
