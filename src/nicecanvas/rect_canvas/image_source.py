# nicecanvas/src/nicecanvas/rect_canvas/image_source.py

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Union

import matplotlib
import numpy as np
from PIL import Image

from nicecanvas.utils.logging import get_logger

logger = get_logger(__name__)


def array_to_pil(
    arr: np.ndarray,
    vmin: float | None = None,
    vmax: float | None = None,
    cmap: str = "gray",
) -> Image.Image:
    """Map a 2D NumPy array to an 8-bit RGB PIL image with a colormap."""
    arr = np.asarray(arr, dtype=float)

    if vmin is None:
        vmin = float(np.nanmin(arr))
    if vmax is None:
        vmax = float(np.nanmax(arr))

    if vmax <= vmin:
        vmax = vmin + 1e-6

    norm = (arr - vmin) / (vmax - vmin)
    norm = np.clip(norm, 0.0, 1.0)

    cmap_fn = matplotlib.colormaps[cmap]
    rgba = cmap_fn(norm)
    rgb = (rgba[..., :3] * 255).astype(np.uint8)
    return Image.fromarray(rgb)


class ImageSource:
    """Decoded raster with known pixel size and a "ready" signal.

    The canvas only draws the image once `ready` is True. Handlers registered
    with `on_ready` run once when the image arrives, or immediately if it is
    already there.
    """

    def __init__(self, image: Optional[Image.Image] = None) -> None:
        self._image: Optional[Image.Image] = None
        self._ready_handlers: List[Callable[["ImageSource"], None]] = []
        if image is not None:
            self.set_image(image)

    # ------------- constructors -------------

    @classmethod
    def from_pil(cls, image: Image.Image) -> "ImageSource":
        return cls(image)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "ImageSource":
        """Decode an image file (any format Pillow reads) into RGB."""
        with Image.open(path) as img:
            decoded = img.convert("RGB")
        logger.info(f"Loaded image {path}: {decoded.width}x{decoded.height}")
        return cls(decoded)

    @classmethod
    def from_array(
        cls,
        arr: np.ndarray,
        *,
        vmin: float | None = None,
        vmax: float | None = None,
        cmap: str = "gray",
    ) -> "ImageSource":
        """Build from a 2D intensity array (colormapped) or an HxWx3/4 uint8 array."""
        arr = np.asarray(arr)
        if arr.ndim == 2:
            return cls(array_to_pil(arr, vmin=vmin, vmax=vmax, cmap=cmap))
        if arr.ndim == 3 and arr.shape[2] in (3, 4):
            return cls(Image.fromarray(arr.astype(np.uint8)).convert("RGB"))
        raise ValueError(f"ImageSource expects a 2D or HxWx3/4 array, got shape {arr.shape}")

    # ------------- state -------------

    @property
    def ready(self) -> bool:
        return self._image is not None

    @property
    def image(self) -> Optional[Image.Image]:
        return self._image

    @property
    def width(self) -> int:
        return self._image.width if self._image is not None else 0

    @property
    def height(self) -> int:
        return self._image.height if self._image is not None else 0

    def set_image(self, image: Image.Image) -> None:
        """Supply the decoded raster and fire ready handlers."""
        self._image = image
        handlers, self._ready_handlers = self._ready_handlers, []
        for handler in handlers:
            try:
                handler(self)
            except Exception:
                logger.exception("Error in image ready handler")

    def on_ready(self, handler: Callable[["ImageSource"], None]) -> None:
        """Register a one-shot callback for when the image becomes available."""
        if self.ready:
            handler(self)
            return
        self._ready_handlers.append(handler)
