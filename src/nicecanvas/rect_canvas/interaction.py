# nicecanvas/src/nicecanvas/rect_canvas/interaction.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Callable, List, Optional

from nicecanvas.utils.logging import get_logger
from .config import RectCanvasConfig
from .geometry import Edge, Rect
from .state import CanvasState, InteractionMode

logger = get_logger(__name__)


class MouseButton(IntEnum):
    """DOM `MouseEvent.button` values."""
    PRIMARY = 0
    SECONDARY = 2


# DOM `MouseEvent.buttons` bitmask for the button that owns each gesture
_HELD_BIT = {
    InteractionMode.DRAWING: 1,
    InteractionMode.RESIZING: 1,
    InteractionMode.MOVING: 1,
    InteractionMode.PANNING: 2,
}


class PointerKind(Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"


@dataclass(frozen=True)
class PointerEvent:
    """Pointer input in screen (surface) coordinates.

    `buttons` is the DOM bitmask of held buttons, if the host reports it.
    """

    kind: PointerKind
    x: float
    y: float
    button: int = MouseButton.PRIMARY
    buttons: Optional[int] = None


@dataclass(frozen=True)
class WheelEvent:
    """Wheel input: cursor position in screen coordinates and vertical delta."""

    x: float
    y: float
    delta_y: float


class InteractionController:
    """Turns pointer/wheel input into camera and store mutations.

    A primary press picks one gesture, in priority order:
        1. resize, if the press is near an edge of the selected rectangle
        2. select + move, if the press hits a rectangle
        3. draw a new rectangle, clearing the selection
    A secondary press pans. The wheel zooms about the cursor in any mode.

    Events (via callback registration):
        on_change(handler): handler() after any event that changed what is drawn
        on_rect_created(handler): handler(index, rect)
        on_rect_updated(handler): handler(index, rect)
        on_selection_changed(handler): handler(index or None)
    """

    def __init__(
        self,
        state: CanvasState,
        config: RectCanvasConfig | None = None,
    ) -> None:
        self.state = state
        self.config = config if config is not None else RectCanvasConfig()

        self._change_handlers: List[Callable[[], None]] = []
        self._rect_created_handlers: List[Callable[[int, Rect], None]] = []
        self._rect_updated_handlers: List[Callable[[int, Rect], None]] = []
        self._selection_handlers: List[Callable[[Optional[int]], None]] = []

    @property
    def mode(self) -> InteractionMode:
        return self.state.mode

    # ------------- public event registration API -------------

    def on_change(self, handler: Callable[[], None]) -> None:
        self._change_handlers.append(handler)

    def on_rect_created(self, handler: Callable[[int, Rect], None]) -> None:
        self._rect_created_handlers.append(handler)

    def on_rect_updated(self, handler: Callable[[int, Rect], None]) -> None:
        self._rect_updated_handlers.append(handler)

    def on_selection_changed(self, handler: Callable[[Optional[int]], None]) -> None:
        self._selection_handlers.append(handler)

    # ------------- public input API -------------

    def handle_pointer(self, event: PointerEvent) -> bool:
        """Apply one pointer event. Returns True if the scene changed."""
        if event.kind is PointerKind.DOWN:
            changed = self._on_down(event)
        elif event.kind is PointerKind.MOVE:
            changed = self._on_move(event)
        else:
            changed = self._on_up(event)

        if changed:
            self._emit_change()
        return changed

    def handle_wheel(self, event: WheelEvent) -> bool:
        """Zoom about the cursor. Does not change the interaction mode."""
        delta_scale = -event.delta_y * self.config.wheel_zoom_speed
        changed = self.state.camera.zoom_at(event.x, event.y, delta_scale)
        if changed:
            cam = self.state.camera
            logger.debug(
                f"Zoom: scale={cam.scale:.3f} at ({event.x:.1f}, {event.y:.1f}), "
                f"offset=({cam.offset_x:.1f}, {cam.offset_y:.1f})"
            )
            self._emit_change()
        return changed

    def cancel(self) -> bool:
        """Abort the active gesture: drop a draft, restore a moved/resized rect."""
        state = self.state
        mode = state.mode
        changed = False

        if mode is InteractionMode.DRAWING:
            changed = True
        elif mode in (InteractionMode.RESIZING, InteractionMode.MOVING):
            if state.drag_index is not None and state.drag_orig is not None:
                state.store.replace(state.drag_index, state.drag_orig)
                self._notify_rect_updated(state.drag_index, state.drag_orig)
                changed = True

        state.end_gesture()
        if mode is not InteractionMode.IDLE:
            logger.info(f"Cancelled {mode.value} gesture")
        if changed:
            self._emit_change()
        return changed

    def select(self, index: Optional[int]) -> bool:
        """Select a rectangle by index (or None to clear selection)."""
        changed = self._select(index)
        if changed:
            self._emit_change()
        return changed

    def reset_view(self) -> None:
        self.state.camera.reset()
        logger.debug("reset_view: camera reset")
        self._emit_change()

    # ------------- internals: gestures -------------

    def _on_down(self, e: PointerEvent) -> bool:
        state = self.state
        if state.mode is not InteractionMode.IDLE:
            logger.debug(f"Ignoring button {e.button} press during {state.mode.value}")
            return False

        if e.button == MouseButton.SECONDARY:
            state.mode = InteractionMode.PANNING
            state.last_screen = (e.x, e.y)
            return False

        if e.button != MouseButton.PRIMARY:
            return False

        store = state.store
        wx, wy = state.camera.to_world(e.x, e.y)

        # 1. Resize the selected rect if the press is on one of its edges
        selected = store.selected
        if selected is not None:
            threshold = self.config.edge_threshold_px / state.camera.scale
            edge = store.edge_near(wx, wy, selected, threshold)
            if edge is not Edge.NONE:
                state.mode = InteractionMode.RESIZING
                state.resize_edge = edge
                state.drag_index = selected
                state.drag_orig = store.get(selected)
                state.anchor_world = (wx, wy)
                logger.info(f"Start resizing rect {selected} by {edge.value} edge")
                return False

        # 2. Select (and start moving) a hit rect
        hit = store.hit_test(wx, wy)
        if hit is not None:
            changed = self._select(hit)
            state.mode = InteractionMode.MOVING
            state.drag_index = hit
            state.drag_orig = store.get(hit)
            state.anchor_world = (wx, wy)
            return changed

        # 3. Empty space: clear selection and start a new draft
        self._select(None)
        state.mode = InteractionMode.DRAWING
        state.anchor_world = (wx, wy)
        state.draft = Rect(wx, wy, 0.0, 0.0)
        logger.info(f"Started drawing rect at ({wx:.1f}, {wy:.1f})")
        return True

    def _on_move(self, e: PointerEvent) -> bool:
        state = self.state
        mode = state.mode
        if mode is InteractionMode.IDLE:
            return False

        # Button released outside the surface: finish the gesture now
        if e.buttons is not None and not (e.buttons & _HELD_BIT[mode]):
            button = MouseButton.SECONDARY if mode is InteractionMode.PANNING else MouseButton.PRIMARY
            return self._on_up(PointerEvent(PointerKind.UP, e.x, e.y, button=button))

        if mode is InteractionMode.PANNING:
            if state.last_screen is None:
                return False
            lx, ly = state.last_screen
            state.last_screen = (e.x, e.y)
            return state.camera.pan_by(e.x - lx, e.y - ly)

        wx, wy = state.camera.to_world(e.x, e.y)

        if mode is InteractionMode.DRAWING:
            if state.anchor_world is None:
                return False
            ax, ay = state.anchor_world
            state.draft = Rect(ax, ay, wx - ax, wy - ay)
            return True

        if state.drag_index is None or state.drag_orig is None:
            return False

        if mode is InteractionMode.RESIZING:
            rect = state.drag_orig.with_edge_at(state.resize_edge, wx, wy)
        else:
            if state.anchor_world is None:
                return False
            ax, ay = state.anchor_world
            rect = state.drag_orig.translated(wx - ax, wy - ay)

        if rect == state.store.get(state.drag_index):
            return False
        state.store.replace(state.drag_index, rect)
        self._notify_rect_updated(state.drag_index, rect)
        return True

    def _on_up(self, e: PointerEvent) -> bool:
        state = self.state
        mode = state.mode

        if mode is InteractionMode.PANNING:
            if e.button == MouseButton.SECONDARY:
                state.end_gesture()
            return False

        if mode is InteractionMode.IDLE or e.button != MouseButton.PRIMARY:
            return False

        changed = False
        if mode is InteractionMode.DRAWING and state.draft is not None:
            rect = state.draft.normalized()
            index = state.store.append(rect)
            logger.info(
                f"Completed rect {index}: x={rect.x:.1f}, y={rect.y:.1f}, "
                f"w={rect.width:.1f}, h={rect.height:.1f}"
            )
            self._notify(self._rect_created_handlers, "rect_created", index, rect)
            # Zero-area rects stay unselected so their edges do not capture the next press
            if rect.width > 0 and rect.height > 0:
                self._select(index)
            changed = True

        elif mode is InteractionMode.RESIZING and state.drag_index is not None:
            rect = state.store.get(state.drag_index)
            normalized = rect.normalized()
            if normalized != rect:
                state.store.replace(state.drag_index, normalized)
                self._notify_rect_updated(state.drag_index, normalized)
                changed = True
            logger.info(f"Finished resizing rect {state.drag_index}")

        state.end_gesture()
        return changed

    # ------------- internals: notifications -------------

    def _select(self, index: Optional[int]) -> bool:
        changed = self.state.store.select(index)
        if changed:
            self._notify(self._selection_handlers, "selection_changed", index)
        return changed

    def _notify_rect_updated(self, index: int, rect: Rect) -> None:
        self._notify(self._rect_updated_handlers, "rect_updated", index, rect)

    def _emit_change(self) -> None:
        self._notify(self._change_handlers, "change")

    def _notify(self, handlers: List[Callable[..., None]], name: str, *args: Any) -> None:
        for handler in list(handlers):
            try:
                handler(*args)
            except Exception:
                logger.exception(f"Error in {name} handler")


class ListenerBinding:
    """One active set of input listeners for a canvas session.

    The host binds its UI element events once and routes them through
    `dispatch_*`. Events only reach the controller between `attach()` and
    `detach()`; attaching twice does not register a second set.
    """

    def __init__(self, controller: InteractionController) -> None:
        self.controller = controller
        self._attached = False

    @property
    def attached(self) -> bool:
        return self._attached

    def attach(self) -> None:
        if self._attached:
            logger.debug("ListenerBinding already attached")
            return
        self._attached = True

    def detach(self) -> None:
        """Stop routing events. Any gesture in progress is cancelled."""
        if not self._attached:
            return
        self.controller.cancel()
        self._attached = False

    def __enter__(self) -> "ListenerBinding":
        self.attach()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.detach()

    def dispatch_pointer(self, event: PointerEvent) -> bool:
        if not self._attached:
            return False
        return self.controller.handle_pointer(event)

    def dispatch_wheel(self, event: WheelEvent) -> bool:
        if not self._attached:
            return False
        return self.controller.handle_wheel(event)

    def dispatch_key(self, key: str) -> None:
        """Escape cancels the active gesture, Enter resets the view."""
        if not self._attached:
            return
        if key == "Escape":
            self.controller.cancel()
        elif key == "Enter":
            self.controller.reset_view()
