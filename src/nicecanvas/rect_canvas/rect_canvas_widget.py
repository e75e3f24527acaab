# nicecanvas/src/nicecanvas/rect_canvas/rect_canvas_widget.py

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Tuple, Union

import numpy as np
from nicegui import ui, events
from PIL import Image

from nicecanvas.utils.logging import get_logger
from .camera import Camera
from .config import RectCanvasConfig
from .geometry import Rect
from .image_source import ImageSource
from .interaction import (
    InteractionController,
    ListenerBinding,
    PointerEvent,
    PointerKind,
    WheelEvent,
)
from .render import RenderStyle, StrokeStyle, render_scene, replay
from .state import CanvasState
from .store import AnnotationStore

logger = get_logger(__name__)

ImageLike = Union[ImageSource, Image.Image, np.ndarray, str, Path]

_POINTER_KINDS = {
    "mousedown": PointerKind.DOWN,
    "mousemove": PointerKind.MOVE,
    "mouseup": PointerKind.UP,
}


def _coerce_image(image: ImageLike | None) -> ImageSource:
    if image is None:
        return ImageSource()
    if isinstance(image, ImageSource):
        return image
    if isinstance(image, Image.Image):
        return ImageSource.from_pil(image)
    if isinstance(image, np.ndarray):
        return ImageSource.from_array(image)
    return ImageSource.from_path(image)


class NiceGuiSink:
    """DrawSink backed by a `ui.interactive_image`.

    The image layer is composed with Pillow into a fixed-size frame; rectangles
    become an SVG overlay in the same (surface) coordinates. The frame is only
    re-encoded when the image placement changes.
    """

    def __init__(self, width: int, height: int, background: str = "white") -> None:
        self.width = width
        self.height = height
        self.background = background
        self._frame = Image.new("RGB", (width, height), background)
        self._frame_key: Optional[Tuple[Any, ...]] = None
        self._pushed_key: Optional[Tuple[Any, ...]] = ()
        self._svg_parts: List[str] = []

    @property
    def frame(self) -> Image.Image:
        return self._frame

    @property
    def svg(self) -> str:
        return "".join(self._svg_parts)

    def clear(self) -> None:
        self._svg_parts = []
        self._frame_key = None

    def draw_image(self, image: Image.Image, x: float, y: float, width: float, height: float) -> None:
        self._frame_key = (id(image), x, y, width, height)
        if self._frame_key == self._pushed_key:
            return

        frame = Image.new("RGB", (self.width, self.height), self.background)

        # Only resample the part of the source that lands on the surface
        dx0, dy0 = max(0.0, x), max(0.0, y)
        dx1, dy1 = min(float(self.width), x + width), min(float(self.height), y + height)
        if dx1 > dx0 and dy1 > dy0 and width > 0 and height > 0:
            sx = image.width / width
            sy = image.height / height
            box = ((dx0 - x) * sx, (dy0 - y) * sy, (dx1 - x) * sx, (dy1 - y) * sy)
            size = (max(1, int(round(dx1 - dx0))), max(1, int(round(dy1 - dy0))))
            part = image.resize(size, Image.BILINEAR, box=box)
            frame.paste(part, (int(round(dx0)), int(round(dy0))))

        self._frame = frame

    def stroke_rect(self, x: float, y: float, width: float, height: float, style: StrokeStyle) -> None:
        self._svg_parts.append(
            f'<rect x="{x}" y="{y}" width="{width}" height="{height}" '
            f'stroke="{style.color}" stroke-width="{style.line_width}" '
            f'fill="{style.color}" fill-opacity="{style.fill_opacity}" />'
        )

    def flush(self, interactive: Any) -> None:
        """Push the composed frame (if it changed) and the overlay to the element."""
        if self._frame_key != self._pushed_key:
            if self._frame_key is None:
                self._frame = Image.new("RGB", (self.width, self.height), self.background)
            interactive.set_source(self._frame)
            self._pushed_key = self._frame_key
        interactive.content = self.svg
        interactive.update()


class RectCanvasWidget:
    """NiceGUI canvas for drawing, selecting, moving and resizing rectangles.

    - Left drag on empty space draws a rectangle.
    - Left press on a rectangle selects it; dragging moves it.
    - Left drag on an edge of the selected rectangle resizes it.
    - Right drag pans; the wheel zooms about the cursor.
    - Escape cancels the current gesture, Enter resets the view.

    Events (via callback registration):
        on_rect_created(handler): handler(index, rect)
        on_rect_updated(handler): handler(index, rect)
        on_selection_changed(handler): handler(index or None)
    """

    def __init__(
        self,
        image: ImageLike | None = None,
        *,
        rects: Iterable[Rect] | None = None,
        parent=None,
        config: RectCanvasConfig | None = None,
    ) -> None:
        self.config = config if config is not None else RectCanvasConfig()
        self.DISPLAY_W = int(self.config.surface_width)
        self.DISPLAY_H = int(self.config.surface_height)

        self.state = CanvasState(
            camera=Camera(min_scale=self.config.min_scale, max_scale=self.config.max_scale),
            store=AnnotationStore(rects),
            image=_coerce_image(image),
        )
        self.controller = InteractionController(self.state, self.config)
        self.binding = ListenerBinding(self.controller)
        self._style = RenderStyle.from_config(self.config)
        self._sink = NiceGuiSink(self.DISPLAY_W, self.DISPLAY_H, self.config.background_color)

        # Last pointer position in surface coords, used as the wheel zoom anchor
        self._last_pointer: Optional[Tuple[float, float]] = None

        container = parent if parent is not None else ui.element("div").classes("w-full")

        with container:
            self.interactive = (
                ui.interactive_image(
                    self._sink.frame,
                    cross=False,
                    events=["mousedown", "mousemove", "mouseup"],
                )
                .classes("w-full")
                .style(
                    f"aspect-ratio: {self.DISPLAY_W} / {self.DISPLAY_H}; "
                    "object-fit: contain; border: 1px solid #666;"
                )
            )
            self.interactive.on_mouse(self._on_mouse)
            self.interactive.on("wheel.prevent", self._on_wheel)
            if self.config.suppress_context_menu:
                self.interactive.on("contextmenu.prevent", lambda _: None)

            ui.on("keydown", self._on_key)

        self.controller.on_change(self.redraw)
        self.binding.attach()
        self.state.image.on_ready(lambda _src: self.redraw())
        self.redraw()

        logger.info(
            f"RectCanvasWidget initialized: surface={self.DISPLAY_W}x{self.DISPLAY_H}, "
            f"image={self.state.image.width}x{self.state.image.height}, "
            f"rects={len(self.state.store)}"
        )

    # ------------- public rect API -------------

    def get_rects(self) -> List[Rect]:
        return list(self.state.store)

    def set_rects(self, rects: Iterable[Rect]) -> None:
        """Overwrite all rectangles. Cancels any gesture and clears the selection."""
        self.controller.cancel()
        self.state.store.set_rects(rects)
        self.redraw()

    @property
    def selected_index(self) -> Optional[int]:
        return self.state.store.selected

    def select(self, index: Optional[int]) -> None:
        """Select a rectangle by index (or None to clear selection)."""
        self.controller.select(index)

    # ------------- public event registration API -------------

    def on_rect_created(self, handler: Callable[[int, Rect], None]) -> None:
        self.controller.on_rect_created(handler)

    def on_rect_updated(self, handler: Callable[[int, Rect], None]) -> None:
        self.controller.on_rect_updated(handler)

    def on_selection_changed(self, handler: Callable[[Optional[int]], None]) -> None:
        self.controller.on_selection_changed(handler)

    # ------------- public camera / image API -------------

    def reset_view(self) -> None:
        self.controller.reset_view()

    def get_camera(self) -> dict:
        return self.state.camera.to_dict()

    def set_camera(self, camera_dict: dict) -> None:
        """Set the camera from a dict (as returned by get_camera) and redraw."""
        data = {"min_scale": self.config.min_scale, "max_scale": self.config.max_scale}
        data.update(camera_dict)
        self.state.camera = Camera.from_dict(data)
        self.redraw()

    def set_image(self, image: ImageLike) -> None:
        """Swap the background image; draws once it is ready."""
        self.state.image = _coerce_image(image)
        self.state.image.on_ready(lambda _src: self.redraw())

    def detach(self) -> None:
        """Stop handling input for this canvas."""
        self.binding.detach()

    # ------------- internals: rendering -------------

    def redraw(self) -> None:
        replay(render_scene(self.state, self._style), self._sink)
        self._sink.flush(self.interactive)

    # ------------- internals: events -------------

    def _on_mouse(self, e: events.MouseEventArguments) -> None:
        kind = _POINTER_KINDS.get(e.type)
        if kind is None:
            return

        sx = max(0.0, min(float(self.DISPLAY_W - 1), e.image_x))
        sy = max(0.0, min(float(self.DISPLAY_H - 1), e.image_y))
        self._last_pointer = (sx, sy)

        self.binding.dispatch_pointer(
            PointerEvent(kind, sx, sy, button=e.button, buttons=getattr(e, "buttons", None))
        )

    def _on_wheel(self, e: events.GenericEventArguments) -> None:
        args = e.args or {}
        dy = args.get("deltaY", 0)
        if not isinstance(dy, (int, float)) or dy == 0:
            return

        if self._last_pointer is not None:
            sx, sy = self._last_pointer
        else:
            sx, sy = 0.5 * self.DISPLAY_W, 0.5 * self.DISPLAY_H

        self.binding.dispatch_wheel(WheelEvent(sx, sy, float(dy)))

    def _on_key(self, e: events.GenericEventArguments) -> None:
        args = e.args or {}
        self.binding.dispatch_key(args.get("key", ""))
