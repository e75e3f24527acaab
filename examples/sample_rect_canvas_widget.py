from __future__ import annotations

import sys

import numpy as np
from nicegui import ui

from nicecanvas.rect_canvas import ImageSource, Rect, RectCanvasWidget
from nicecanvas.utils.logging import configure_logging


def create_demo_image(height: int = 667, width: int = 1000) -> np.ndarray:
    """Simple demo image: sine waves + noise."""
    x = np.linspace(0, 8 * np.pi, width)
    img = np.zeros((height, width), dtype=float)
    for y in range(height):
        phase = 2 * np.pi * (y / height)
        img[y, :] = 0.5 + 0.5 * np.sin(x + phase)
    img += 0.05 * np.random.randn(height, width)
    return np.clip(img, 0.0, 1.0)


if __name__ in {"__main__", "__mp_main__"}:
    configure_logging(level="DEBUG")

    # Optional: python sample_rect_canvas_widget.py path/to/image.jpg
    if len(sys.argv) > 1:
        source = ImageSource.from_path(sys.argv[1])
    else:
        source = ImageSource.from_array(create_demo_image(), cmap="viridis")

    ui.label("RectCanvasWidget demo").classes("text-lg font-bold")
    ui.label("Left drag: draw / move / resize. Right drag: pan. Wheel: zoom. Esc: cancel. Enter: reset view.")

    status = ui.label("No selection")

    widget = RectCanvasWidget(
        source,
        rects=[Rect(x=100, y=100, width=50, height=30)],
    )

    def on_created(index: int, rect: Rect) -> None:
        ui.notify(f"Rect {index} created: {rect.width:.0f}x{rect.height:.0f}", timeout=1.0)

    def on_selected(index: int | None) -> None:
        status.text = "No selection" if index is None else f"Selected rect {index}"

    widget.on_rect_created(on_created)
    widget.on_selection_changed(on_selected)

    ui.button("Reset view", on_click=widget.reset_view)

    ui.run()
