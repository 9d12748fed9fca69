"""
GlyphEngine - display/backend.py
Backend contract between the engine core and a physical display surface.
========================================================================
Version:     0.1
Stack:       Python 3.12 | numpy
Status:      Contract + in-memory implementation.

Every platform-specific call lives behind Backend. The backend object is its
own handle: open() prepares it, the Canvas keeps a reference for resize(),
and the engine calls sample_keys() / flush() once per frame.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Protocol, Tuple

import numpy as np

from engine.errors import PlatformError
from engine.keys import KEY_COUNT

logger = logging.getLogger(__name__)


class Backend(Protocol):
    def open(self, width: int, height: int, cell_width: int, cell_height: int) -> None:
        """Create the surface; raises PlatformError on any failure."""
        ...

    def resize(self, width: int, height: int, cell_width: int, cell_height: int) -> None:
        """Resize the surface; raises PlatformError on any failure."""
        ...

    def flush(self, glyphs: np.ndarray, attrs: np.ndarray) -> None:
        """Write a full (height, width) grid; raises PlatformError on failure."""
        ...

    def sample_keys(self) -> np.ndarray:
        """Bool array of shape (256,): which keys are down right now."""
        ...

    def set_title(self, text: str) -> None:
        ...


class HeadlessBackend:
    """
    In-memory surface for tests and windowless runs.
    Keys are driven by press()/release(); the last flushed frame is kept as
    copies so it can be inspected after the canvas moves on.
    """

    def __init__(self, *, fail_on: Optional[str] = None):
        self.size: Optional[Tuple[int, int]] = None
        self.cell_size: Optional[Tuple[int, int]] = None
        self.is_open = False
        self.resizes: List[Tuple[int, int, int, int]] = []
        self.titles: List[str] = []
        self.frames_flushed = 0
        self.last_glyphs: Optional[np.ndarray] = None
        self.last_attrs: Optional[np.ndarray] = None
        self._keys = np.zeros(KEY_COUNT, dtype=bool)
        # Name of a contract method that should raise PlatformError.
        self._fail_on = fail_on

    def _maybe_fail(self, operation: str) -> None:
        if self._fail_on == operation:
            raise PlatformError(f"Headless backend refused {operation}", code=-1)

    def open(self, width: int, height: int, cell_width: int, cell_height: int) -> None:
        self._maybe_fail("open")
        self.size = (width, height)
        self.cell_size = (cell_width, cell_height)
        self.is_open = True
        logger.info("Headless surface opened: %dx%d cells", width, height)

    def resize(self, width: int, height: int, cell_width: int, cell_height: int) -> None:
        self._maybe_fail("resize")
        self.size = (width, height)
        self.cell_size = (cell_width, cell_height)
        self.resizes.append((width, height, cell_width, cell_height))
        logger.info("Headless surface resized: %dx%d cells", width, height)

    def flush(self, glyphs: np.ndarray, attrs: np.ndarray) -> None:
        self._maybe_fail("flush")
        if not self.is_open:
            raise PlatformError("Flush before open")
        self.last_glyphs = np.array(glyphs, copy=True)
        self.last_attrs = np.array(attrs, copy=True)
        self.frames_flushed += 1

    def sample_keys(self) -> np.ndarray:
        return self._keys.copy()

    def set_title(self, text: str) -> None:
        self._maybe_fail("set_title")
        self.titles.append(text)

    def press(self, code: int) -> None:
        self._keys[code] = True

    def release(self, code: int) -> None:
        self._keys[code] = False

    def frame_text(self) -> List[str]:
        """The last flushed frame, one string per row."""
        if self.last_glyphs is None:
            return []
        return ["".join(chr(code) for code in row) for row in self.last_glyphs]


def make_backend(name: str, **options: Any) -> Backend:
    """Build a backend by its configuration name ("tcod" or "headless")."""
    if name == "headless":
        return HeadlessBackend()
    if name == "tcod":
        from display.renderer import TcodRenderer

        return TcodRenderer(**options)
    raise ValueError(f"Unknown display backend: {name!r}")
