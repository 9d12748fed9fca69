"""
GlyphEngine - engine/canvas.py
Canvas: the frame buffer of (glyph, attribute) cells plus drawing primitives.
============================================================================
Version:     0.1
Stack:       Python 3.12 | numpy
Status:      Core rasterizer.

Architecture notes
------------------
- Cells live in two row-major numpy arrays of shape (height, width): glyph
  code points (uint32) and attributes (uint16).
- draw() is the only writer of those arrays. Every primitive goes through it,
  so off-canvas geometry is clipped cell by cell and never raises.
- resize() asks the backend first; a PlatformError from the backend is left
  to propagate because there is no way back from a half-resized surface.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Iterator, NamedTuple, Optional, Tuple

import numpy as np

from engine.colors import BLANK_GLYPH
from engine.input import InputTracker, KeyState

if TYPE_CHECKING:
    from display.backend import Backend
    from engine.sprite import Sprite

logger = logging.getLogger(__name__)

_BLANK_CODE: int = ord(BLANK_GLYPH)

Extents = Dict[int, Tuple[int, int]]


class Cell(NamedTuple):
    glyph: str
    attr: int


BLANK_CELL = Cell(BLANK_GLYPH, 0)


def _line_points(x1: int, y1: int, x2: int, y2: int) -> Iterator[Tuple[int, int]]:
    """
    Bresenham walk from one endpoint to the other, both included.
    The walk always starts at the endpoint with the smaller major-axis
    coordinate, so swapping the endpoints yields the same cells.
    """
    dx = x2 - x1
    dy = y2 - y1
    adx = abs(dx)
    ady = abs(dy)
    minor_step = 1 if dx * dy > 0 else -1

    if ady <= adx:
        x, y, x_end = (x1, y1, x2) if dx >= 0 else (x2, y2, x1)
        err = 2 * ady - adx
        yield x, y
        while x < x_end:
            x += 1
            if err < 0:
                err += 2 * ady
            else:
                y += minor_step
                err += 2 * (ady - adx)
            yield x, y
    else:
        x, y, y_end = (x1, y1, y2) if dy >= 0 else (x2, y2, y1)
        err = 2 * adx - ady
        yield x, y
        while y < y_end:
            y += 1
            if err <= 0:
                err += 2 * adx
            else:
                x += minor_step
                err += 2 * (adx - ady)
            yield x, y


def _edge_extents(x1: int, y1: int, x2: int, y2: int, extents: Optional[Extents] = None) -> Extents:
    """Leftmost and rightmost x the edge's Bresenham line visits on each row."""
    if extents is None:
        extents = {}
    for x, y in _line_points(x1, y1, x2, y2):
        lo, hi = extents.get(y, (x, x))
        extents[y] = (min(lo, x), max(hi, x))
    return extents


class Canvas:
    """
    Resizable character grid. Coordinates outside [0, width) x [0, height)
    are silently ignored by every primitive.
    """

    def __init__(
        self,
        width: int,
        height: int,
        font_width: int = 8,
        font_height: int = 8,
        backend: Optional["Backend"] = None,
    ):
        self._check_size(width, height)
        self._width = width
        self._height = height
        self._font_width = font_width
        self._font_height = font_height
        self._backend = backend
        self._input: Optional[InputTracker] = None
        self._glyphs, self._attrs = self._allocate(width, height)

    @staticmethod
    def _check_size(width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")

    @staticmethod
    def _allocate(width: int, height: int) -> Tuple[np.ndarray, np.ndarray]:
        glyphs = np.full((height, width), _BLANK_CODE, dtype=np.uint32)
        attrs = np.zeros((height, width), dtype=np.uint16)
        return glyphs, attrs

    # ------------------------------------------------------------------
    # Geometry & state
    # ------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def font_width(self) -> int:
        return self._font_width

    @property
    def font_height(self) -> int:
        return self._font_height

    @property
    def glyphs(self) -> np.ndarray:
        """Read-only (height, width) view of the glyph code points."""
        view = self._glyphs.view()
        view.flags.writeable = False
        return view

    @property
    def attrs(self) -> np.ndarray:
        """Read-only (height, width) view of the attributes."""
        view = self._attrs.view()
        view.flags.writeable = False
        return view

    def attach_input(self, tracker: InputTracker) -> None:
        self._input = tracker

    def key(self, code: int) -> KeyState:
        """Edge state of a key for the current frame."""
        if self._input is None:
            return KeyState()
        return self._input.key(code)

    def get(self, x: int, y: int) -> Cell:
        if 0 <= x < self._width and 0 <= y < self._height:
            return Cell(chr(self._glyphs[y, x]), int(self._attrs[y, x]))
        return BLANK_CELL

    def resize(self, width: int, height: int, font_width: int, font_height: int) -> None:
        """
        Reallocate a blank width x height grid. Every previously computed
        coordinate is meaningless afterwards; re-read width/height.
        """
        self._check_size(width, height)
        if self._backend is not None:
            self._backend.resize(width, height, font_width, font_height)

        self._width = width
        self._height = height
        self._font_width = font_width
        self._font_height = font_height
        self._glyphs, self._attrs = self._allocate(width, height)
        logger.debug("Canvas resized to %dx%d (font %dx%d)", width, height, font_width, font_height)

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def clear(self) -> None:
        self._glyphs.fill(_BLANK_CODE)
        self._attrs.fill(0)

    def draw(self, x: int, y: int, glyph: str, attr: int) -> None:
        """Write one cell; off-canvas writes are ignored and attr keeps its low 16 bits."""
        if 0 <= x < self._width and 0 <= y < self._height:
            self._glyphs[y, x] = ord(glyph)
            self._attrs[y, x] = attr & 0xFFFF

    def fill(self, x1: int, y1: int, x2: int, y2: int, glyph: str, attr: int) -> None:
        """Fill the half-open rectangle [x1, x2) x [y1, y2)."""
        for y in range(y1, y2):
            for x in range(x1, x2):
                self.draw(x, y, glyph, attr)

    def draw_string(self, x: int, y: int, text: str, attr: int) -> None:
        for offset, glyph in enumerate(text):
            self.draw(x + offset, y, glyph, attr)

    def draw_string_alpha(self, x: int, y: int, text: str, attr: int) -> None:
        """Like draw_string, but spaces leave the cell underneath alone."""
        for offset, glyph in enumerate(text):
            if glyph != BLANK_GLYPH:
                self.draw(x + offset, y, glyph, attr)

    def draw_line(self, x1: int, y1: int, x2: int, y2: int, glyph: str, attr: int) -> None:
        for x, y in _line_points(x1, y1, x2, y2):
            self.draw(x, y, glyph, attr)

    def draw_triangle(
        self, x1: int, y1: int, x2: int, y2: int, x3: int, y3: int, glyph: str, attr: int
    ) -> None:
        self.draw_line(x1, y1, x2, y2, glyph, attr)
        self.draw_line(x2, y2, x3, y3, glyph, attr)
        self.draw_line(x3, y3, x1, y1, glyph, attr)

    def fill_triangle(
        self, x1: int, y1: int, x2: int, y2: int, x3: int, y3: int, glyph: str, attr: int
    ) -> None:
        """
        Scanline fill. With the vertices sorted by y, the long edge (top to
        bottom vertex) and the two short edges each report their x extent per
        row, and every row from top to bottom gets exactly one span. Flat
        tops, flat bottoms and collinear vertices go through the same loop.
        """
        (x1, y1), (x2, y2), (x3, y3) = sorted(((x1, y1), (x2, y2), (x3, y3)), key=lambda p: p[1])

        long_edge = self._walk_long_edge(x1, y1, x3, y3)
        short_edges = self._walk_short_edges(x1, y1, x2, y2, x3, y3)

        for y in range(y1, y3 + 1):
            long_lo, long_hi = long_edge[y]
            short_lo, short_hi = short_edges[y]
            self._draw_span(y, min(long_lo, short_lo), max(long_hi, short_hi), glyph, attr)

    @staticmethod
    def _walk_long_edge(x1: int, y1: int, x3: int, y3: int) -> Extents:
        return _edge_extents(x1, y1, x3, y3)

    @staticmethod
    def _walk_short_edges(x1: int, y1: int, x2: int, y2: int, x3: int, y3: int) -> Extents:
        # Both short edges touch row y2; their extents merge there.
        extents = _edge_extents(x1, y1, x2, y2)
        return _edge_extents(x2, y2, x3, y3, extents)

    def _draw_span(self, y: int, x_from: int, x_to: int, glyph: str, attr: int) -> None:
        """Draw the inclusive run x_from..x_to on row y."""
        for x in range(x_from, x_to + 1):
            self.draw(x, y, glyph, attr)

    def draw_circle(self, xc: int, yc: int, r: int, glyph: str, attr: int) -> None:
        for x, y in self._circle_octant(r):
            self.draw(xc - x, yc - y, glyph, attr)
            self.draw(xc - y, yc - x, glyph, attr)
            self.draw(xc + y, yc - x, glyph, attr)
            self.draw(xc + x, yc - y, glyph, attr)
            self.draw(xc - x, yc + y, glyph, attr)
            self.draw(xc - y, yc + x, glyph, attr)
            self.draw(xc + y, yc + x, glyph, attr)
            self.draw(xc + x, yc + y, glyph, attr)

    def fill_circle(self, xc: int, yc: int, r: int, glyph: str, attr: int) -> None:
        for x, y in self._circle_octant(r):
            self._draw_span(yc - y, xc - x, xc + x, glyph, attr)
            self._draw_span(yc - x, xc - y, xc + y, glyph, attr)
            self._draw_span(yc + y, xc - x, xc + x, glyph, attr)
            self._draw_span(yc + x, xc - y, xc + y, glyph, attr)

    @staticmethod
    def _circle_octant(r: int) -> Iterator[Tuple[int, int]]:
        """Midpoint circle points for one octant; radius 0 or less yields nothing."""
        if r <= 0:
            return
        x, y = 0, r
        p = 3 - 2 * r
        while y >= x:
            yield x, y
            if p < 0:
                p += 4 * x + 6
            else:
                p += 4 * (x - y) + 10
                y -= 1
            x += 1

    def draw_sprite(self, x: int, y: int, sprite: "Sprite") -> None:
        """Blit a sprite with its top-left at (x, y); blank glyphs are transparent."""
        for sy in range(sprite.height):
            for sx in range(sprite.width):
                glyph = sprite.get_glyph(sx, sy)
                if glyph != BLANK_GLYPH:
                    self.draw(x + sx, y + sy, glyph, sprite.get_color(sx, sy))
