"""
GlyphEngine - display/renderer.py
TCOD Renderer: the Backend that puts the cell grid in a python-tcod window.
==========================================================================
Version:     0.1
Stack:       Python 3.12 | tcod | numpy
Status:      Default windowed backend.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
import tcod

from display.keyboard import KeyboardSampler
from engine.colors import PALETTE
from engine.errors import PlatformError

logger = logging.getLogger(__name__)


def paint_console(console: tcod.console.Console, glyphs: np.ndarray, attrs: np.ndarray) -> None:
    """Copy a (height, width) cell grid into a C-ordered tcod console."""
    if glyphs.shape != console.ch.shape or attrs.shape != console.ch.shape:
        raise PlatformError(
            f"Frame of shape {glyphs.shape} does not fit a {console.width}x{console.height} console"
        )
    console.ch[...] = glyphs
    console.fg[...] = PALETTE[attrs & 0x0F]
    console.bg[...] = PALETTE[(attrs >> 4) & 0x0F]


class TcodRenderer:
    """
    Manages the tcod root console and window context.
    The window's pixel size is columns * cell width by rows * cell height.
    """

    def __init__(
        self,
        title: str = "GlyphEngine",
        tileset: Optional[Union[str, Path]] = None,
        vsync: bool = True,
    ):
        self.title = title
        self.tileset_path = Path(tileset) if tileset else None
        self.vsync = vsync
        self.width = 0
        self.height = 0
        self.root_console: Optional[tcod.console.Console] = None
        self.context: Optional[tcod.context.Context] = None
        self.keyboard = KeyboardSampler()

    def _load_tileset(self) -> Optional[tcod.tileset.Tileset]:
        if self.tileset_path is None:
            return None
        return tcod.tileset.load_tilesheet(self.tileset_path, 16, 16, tcod.tileset.CHARMAP_CP437)

    def open(self, width: int, height: int, cell_width: int, cell_height: int) -> None:
        try:
            self.context = tcod.context.new(
                columns=width,
                rows=height,
                width=width * cell_width,
                height=height * cell_height,
                tileset=self._load_tileset(),
                title=self.title,
                vsync=self.vsync,
            )
        except (RuntimeError, OSError) as exc:
            raise PlatformError(
                f"Could not open a {width}x{height} tcod window: {exc}",
                code=getattr(exc, "errno", None),
            ) from exc

        self.width = width
        self.height = height
        self.root_console = tcod.console.Console(width, height, order="C")
        # Drop anything queued before the first frame.
        for _ in tcod.event.get():
            pass
        logger.info("tcod window opened: %dx%d cells of %dx%d px", width, height, cell_width, cell_height)

    def resize(self, width: int, height: int, cell_width: int, cell_height: int) -> None:
        if self.context is None:
            raise PlatformError("Resize before open")
        window = self.context.sdl_window
        if window is not None:
            try:
                window.size = (width * cell_width, height * cell_height)
            except (RuntimeError, OSError) as exc:
                raise PlatformError(f"Could not resize the tcod window: {exc}") from exc

        self.width = width
        self.height = height
        self.root_console = tcod.console.Console(width, height, order="C")
        logger.info("tcod window resized: %dx%d cells of %dx%d px", width, height, cell_width, cell_height)

    def flush(self, glyphs: np.ndarray, attrs: np.ndarray) -> None:
        if self.context is None or self.root_console is None:
            raise PlatformError("Flush before open")
        paint_console(self.root_console, glyphs, attrs)
        try:
            self.context.present(self.root_console)
        except RuntimeError as exc:
            raise PlatformError(f"Could not present the frame: {exc}") from exc

    def sample_keys(self) -> np.ndarray:
        for event in tcod.event.get():
            self.keyboard.dispatch(event)
        return self.keyboard.sample()

    def set_title(self, text: str) -> None:
        window = self.context.sdl_window if self.context is not None else None
        if window is None:
            return
        try:
            window.title = text
        except RuntimeError as exc:
            raise PlatformError(f"Could not set the window title: {exc}") from exc
