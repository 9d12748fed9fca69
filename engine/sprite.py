"""
GlyphEngine - engine/sprite.py
Sprite: a fixed-size grid of (glyph, color) cells used as a drawable asset.
==========================================================================
Version:     0.1
Stack:       Python 3.12 | numpy
Status:      Core asset type.

Binary layout (little-endian)
-----------------------------
  u32 width
  u32 height
  u16 color[width * height]     row-major
  u16 glyph[width * height]     row-major, code points

A blob shorter than 8 + 4 * width * height bytes is rejected with DecodeError.
Bytes past the glyph block are ignored.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np

from engine.colors import BLANK_GLYPH, FG_BLACK
from engine.errors import DecodeError

logger = logging.getLogger(__name__)

HEADER_SIZE: int = 8
_BLANK_CODE: int = ord(BLANK_GLYPH)


class Sprite:
    """
    Width and height are fixed at construction. Cells change only through
    set_glyph / set_color; out-of-range reads return a blank black cell and
    out-of-range writes do nothing.
    """

    def __init__(self, width: int, height: int):
        if width < 0 or height < 0:
            raise ValueError(f"Sprite size must not be negative, got {width}x{height}")
        self._width = width
        self._height = height
        self._glyphs = np.full((height, width), _BLANK_CODE, dtype=np.uint32)
        self._colors = np.full((height, width), FG_BLACK, dtype=np.uint16)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def set_glyph(self, x: int, y: int, glyph: str) -> None:
        if self._in_bounds(x, y):
            self._glyphs[y, x] = ord(glyph)

    def set_color(self, x: int, y: int, color: int) -> None:
        if self._in_bounds(x, y):
            self._colors[y, x] = color & 0xFFFF

    def get_glyph(self, x: int, y: int) -> str:
        if self._in_bounds(x, y):
            return chr(self._glyphs[y, x])
        return BLANK_GLYPH

    def get_color(self, x: int, y: int) -> int:
        if self._in_bounds(x, y):
            return int(self._colors[y, x])
        return FG_BLACK

    def _sample_cell(self, u: float, v: float) -> Optional[Tuple[int, int]]:
        """Cell under (u, v), or None when the scaled coordinates are NaN or infinite."""
        fx = u * self._width
        fy = v * self._height
        if not (math.isfinite(fx) and math.isfinite(fy)):
            return None
        return int(fx), int(fy)

    def sample_glyph(self, u: float, v: float) -> str:
        """Point-sample with normalized coordinates in [0, 1)."""
        cell = self._sample_cell(u, v)
        return BLANK_GLYPH if cell is None else self.get_glyph(*cell)

    def sample_color(self, u: float, v: float) -> int:
        cell = self._sample_cell(u, v)
        return FG_BLACK if cell is None else self.get_color(*cell)

    # ------------------------------------------------------------------
    # Binary codec
    # ------------------------------------------------------------------

    @classmethod
    def from_bytes(cls, blob: bytes) -> "Sprite":
        if len(blob) < HEADER_SIZE:
            raise DecodeError(f"Sprite blob is {len(blob)} bytes, shorter than its header")

        width, height = (int(v) for v in np.frombuffer(blob, dtype="<u4", count=2))
        cells = width * height
        expected = HEADER_SIZE + 4 * cells
        if len(blob) < expected:
            raise DecodeError(
                f"Sprite declares {width}x{height} cells ({expected} bytes) "
                f"but blob has {len(blob)} bytes"
            )

        sprite = cls(width, height)
        if cells == 0:
            return sprite

        colors = np.frombuffer(blob, dtype="<u2", count=cells, offset=HEADER_SIZE)
        glyphs = np.frombuffer(blob, dtype="<u2", count=cells, offset=HEADER_SIZE + 2 * cells)
        sprite._colors[...] = colors.reshape(height, width)
        sprite._glyphs[...] = glyphs.reshape(height, width)
        return sprite

    def to_bytes(self) -> bytes:
        if np.any(self._glyphs > 0xFFFF):
            raise ValueError("Sprite glyphs must be code points below U+10000 to encode")
        header = np.array([self._width, self._height], dtype="<u4").tobytes()
        colors = self._colors.astype("<u2").tobytes()
        glyphs = self._glyphs.astype("<u2").tobytes()
        return header + colors + glyphs

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Sprite":
        path = Path(path)
        sprite = cls.from_bytes(path.read_bytes())
        logger.debug("Loaded %dx%d sprite from %s", sprite.width, sprite.height, path)
        return sprite

    def save(self, path: Union[str, Path]) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.to_bytes())
