"""Render loop: a pure projection of canvas state to draw commands.

`render_scene` never touches a backend. It returns a list of commands that
`replay` feeds into any object implementing the `DrawSink` protocol, e.g.
`RecordingSink` in tests or the NiceGUI sink used by `RectCanvasWidget`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Protocol, Union

from .config import RectCanvasConfig
from .state import CanvasState


@dataclass(frozen=True)
class StrokeStyle:
    color: str
    line_width: float = 1.0
    fill_opacity: float = 0.0


@dataclass(frozen=True)
class RenderStyle:
    normal: StrokeStyle
    selected: StrokeStyle
    draft: StrokeStyle

    @classmethod
    def from_config(cls, config: RectCanvasConfig) -> "RenderStyle":
        def _style(color: str) -> StrokeStyle:
            return StrokeStyle(
                color=color,
                line_width=config.rect_line_width,
                fill_opacity=config.rect_fill_opacity,
            )

        return cls(
            normal=_style(config.rect_color),
            selected=_style(config.rect_selected_color),
            draft=_style(config.rect_draft_color),
        )


@dataclass(frozen=True)
class Clear:
    pass


@dataclass(frozen=True)
class DrawImage:
    image: Any
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class StrokeRect:
    x: float
    y: float
    width: float
    height: float
    style: StrokeStyle


DrawCommand = Union[Clear, DrawImage, StrokeRect]


class DrawSink(Protocol):
    def clear(self) -> None: ...

    def draw_image(self, image: Any, x: float, y: float, width: float, height: float) -> None: ...

    def stroke_rect(self, x: float, y: float, width: float, height: float, style: StrokeStyle) -> None: ...


def render_scene(state: CanvasState, style: RenderStyle) -> List[DrawCommand]:
    """Draw commands for the current image, rectangles, selection and draft."""
    cam = state.camera
    commands: List[DrawCommand] = [Clear()]

    if state.image is not None and state.image.ready:
        commands.append(
            DrawImage(
                image=state.image.image,
                x=cam.offset_x,
                y=cam.offset_y,
                width=state.image.width * cam.scale,
                height=state.image.height * cam.scale,
            )
        )

    selected = state.store.selected
    for index, rect in enumerate(state.store):
        r = cam.rect_to_screen(rect)
        stroke = style.selected if index == selected else style.normal
        commands.append(StrokeRect(r.x, r.y, r.width, r.height, stroke))

    if state.draft is not None:
        r = cam.rect_to_screen(state.draft)
        commands.append(StrokeRect(r.x, r.y, r.width, r.height, style.draft))

    return commands


def replay(commands: List[DrawCommand], sink: DrawSink) -> None:
    """Send draw commands to a backend sink, in order."""
    for cmd in commands:
        if isinstance(cmd, Clear):
            sink.clear()
        elif isinstance(cmd, DrawImage):
            sink.draw_image(cmd.image, cmd.x, cmd.y, cmd.width, cmd.height)
        elif isinstance(cmd, StrokeRect):
            sink.stroke_rect(cmd.x, cmd.y, cmd.width, cmd.height, cmd.style)
        else:
            raise TypeError(f"Unknown draw command: {cmd!r}")


class RecordingSink:
    """DrawSink that keeps the calls it receives. Useful headless and in tests."""

    def __init__(self) -> None:
        self.calls: List[tuple] = []

    def clear(self) -> None:
        self.calls.clear()
        self.calls.append(("clear",))

    def draw_image(self, image: Any, x: float, y: float, width: float, height: float) -> None:
        self.calls.append(("draw_image", image, x, y, width, height))

    def stroke_rect(self, x: float, y: float, width: float, height: float, style: StrokeStyle) -> None:
        self.calls.append(("stroke_rect", x, y, width, height, style))
