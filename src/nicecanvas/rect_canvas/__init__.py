"""Rect Canvas - pannable, zoomable image canvas with rectangle annotations."""

from .camera import Camera
from .config import RectCanvasConfig
from .geometry import Edge, Rect
from .image_source import ImageSource
from .interaction import (
    InteractionController,
    ListenerBinding,
    MouseButton,
    PointerEvent,
    PointerKind,
    WheelEvent,
)
from .render import RecordingSink, RenderStyle, StrokeStyle, render_scene, replay
from .state import CanvasState, InteractionMode
from .store import AnnotationStore, IndexOutOfRangeError
from .rect_canvas_widget import RectCanvasWidget

__all__ = [
    "AnnotationStore",
    "Camera",
    "CanvasState",
    "Edge",
    "ImageSource",
    "IndexOutOfRangeError",
    "InteractionController",
    "InteractionMode",
    "ListenerBinding",
    "MouseButton",
    "PointerEvent",
    "PointerKind",
    "RecordingSink",
    "Rect",
    "RectCanvasConfig",
    "RectCanvasWidget",
    "RenderStyle",
    "StrokeStyle",
    "WheelEvent",
    "render_scene",
    "replay",
]
