"""
nicecanvas: NiceGUI image canvas with rectangle annotations.

This package provides:
- RectCanvasWidget: image viewer with pan, zoom and rectangle draw/select/move/resize
- A GUI-agnostic core (Camera, AnnotationStore, InteractionController, render_scene)
- Logging utilities for library and application use

For logging configuration in standalone scripts/demos:
    ```python
    from nicecanvas.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

import logging

from nicecanvas.utils.logging import configure_logging, get_logger

# NullHandler so library logs stay silent until an application configures logging.
_logger = logging.getLogger("nicecanvas")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "configure_logging",
    "get_logger",
]

__version__ = "0.1.0"
