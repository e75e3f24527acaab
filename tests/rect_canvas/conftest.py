"""Fixtures for rect canvas tests."""

from __future__ import annotations

import pytest

from nicecanvas.rect_canvas.camera import Camera
from nicecanvas.rect_canvas.config import RectCanvasConfig
from nicecanvas.rect_canvas.interaction import InteractionController
from nicecanvas.rect_canvas.state import CanvasState
from nicecanvas.rect_canvas.store import AnnotationStore


@pytest.fixture
def state() -> CanvasState:
    """Unzoomed, unpanned state with an empty store."""
    return CanvasState(camera=Camera(), store=AnnotationStore())


@pytest.fixture
def controller(state: CanvasState) -> InteractionController:
    return InteractionController(state, RectCanvasConfig())
