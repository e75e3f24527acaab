# nicecanvas/src/nicecanvas/rect_canvas/store.py

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Tuple

from nicecanvas.utils.logging import get_logger
from .geometry import Edge, Rect

logger = get_logger(__name__)


class IndexOutOfRangeError(IndexError):
    """Raised when a store index does not refer to an existing rectangle."""


class AnnotationStore:
    """Ordered collection of rectangles plus the current selection.

    Insertion order is z-order: `hit_test` returns the lowest matching index
    and rendering draws later rectangles on top.

    The selection is an index into the store, with None meaning "nothing
    selected" (always compare with `is None`; index 0 is a valid selection).
    """

    def __init__(self, rects: Iterable[Rect] | None = None) -> None:
        self._rects: List[Rect] = list(rects) if rects is not None else []
        self._selected: Optional[int] = None

    def __len__(self) -> int:
        return len(self._rects)

    def __iter__(self) -> Iterator[Rect]:
        return iter(tuple(self._rects))

    @property
    def rects(self) -> Tuple[Rect, ...]:
        return tuple(self._rects)

    # ------------- mutation -------------

    def append(self, rect: Rect) -> int:
        """Add a rectangle at the end and return its index."""
        self._rects.append(rect)
        return len(self._rects) - 1

    def replace(self, index: int, rect: Rect) -> None:
        self._check_index(index)
        self._rects[index] = rect

    def get(self, index: int) -> Rect:
        self._check_index(index)
        return self._rects[index]

    def set_rects(self, rects: Iterable[Rect]) -> None:
        """Overwrite all rectangles. Clears the selection."""
        self._rects = list(rects)
        self._selected = None
        logger.debug(f"set_rects: loaded {len(self._rects)} rects")

    def clear(self) -> None:
        self.set_rects([])

    # ------------- selection -------------

    @property
    def selected(self) -> Optional[int]:
        return self._selected

    @property
    def selected_rect(self) -> Optional[Rect]:
        if self._selected is None:
            return None
        return self._rects[self._selected]

    def select(self, index: Optional[int]) -> bool:
        """Select `index` (or None to clear). Returns True if the selection changed."""
        if index is not None:
            self._check_index(index)
        if index == self._selected:
            return False
        self._selected = index
        return True

    # ------------- geometric queries -------------

    def hit_test(self, wx: float, wy: float) -> Optional[int]:
        """Index of the first rectangle containing (wx, wy), or None."""
        for index, rect in enumerate(self._rects):
            if rect.contains(wx, wy):
                return index
        return None

    def edge_near(
        self,
        wx: float,
        wy: float,
        index: int,
        threshold: float = 10.0,
    ) -> Edge:
        """Edge of rectangle `index` within `threshold` world units of the point."""
        self._check_index(index)
        return self._rects[index].edge_near(wx, wy, threshold)

    # ------------- internals -------------

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._rects):
            raise IndexOutOfRangeError(
                f"index {index} out of range for store of {len(self._rects)} rects"
            )
