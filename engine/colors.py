"""
GlyphEngine - engine/colors.py
Color attributes and shade glyphs for the cell grid.
====================================================
Version:     0.1
Stack:       Python 3.12 | numpy
Status:      Core constants.

An attribute packs a 4-bit foreground palette index (bits 0-3) and a 4-bit
background index (bits 4-7). Attributes are stored as uint16 so higher bits
stay available.
"""

from __future__ import annotations

import numpy as np

# ============================================================
# FOREGROUND
# ============================================================

FG_BLACK: int = 0x0000
FG_DARK_BLUE: int = 0x0001
FG_DARK_GREEN: int = 0x0002
FG_DARK_CYAN: int = 0x0003
FG_DARK_RED: int = 0x0004
FG_DARK_MAGENTA: int = 0x0005
FG_DARK_YELLOW: int = 0x0006
FG_GREY: int = 0x0007
FG_DARK_GREY: int = 0x0008
FG_BLUE: int = 0x0009
FG_GREEN: int = 0x000A
FG_CYAN: int = 0x000B
FG_RED: int = 0x000C
FG_MAGENTA: int = 0x000D
FG_YELLOW: int = 0x000E
FG_WHITE: int = 0x000F

# ============================================================
# BACKGROUND
# ============================================================

BG_BLACK: int = 0x0000
BG_DARK_BLUE: int = 0x0010
BG_DARK_GREEN: int = 0x0020
BG_DARK_CYAN: int = 0x0030
BG_DARK_RED: int = 0x0040
BG_DARK_MAGENTA: int = 0x0050
BG_DARK_YELLOW: int = 0x0060
BG_GREY: int = 0x0070
BG_DARK_GREY: int = 0x0080
BG_BLUE: int = 0x0090
BG_GREEN: int = 0x00A0
BG_CYAN: int = 0x00B0
BG_RED: int = 0x00C0
BG_MAGENTA: int = 0x00D0
BG_YELLOW: int = 0x00E0
BG_WHITE: int = 0x00F0

# ============================================================
# GLYPHS
# ============================================================

BLANK_GLYPH: str = " "
PIXEL_SOLID: str = "█"
PIXEL_THREEQUARTER: str = "▓"
PIXEL_HALF: str = "▒"
PIXEL_QUARTER: str = "░"

# RGB for each of the 16 palette indices (classic console colors).
PALETTE = np.array(
    [
        (0, 0, 0),
        (0, 0, 128),
        (0, 128, 0),
        (0, 128, 128),
        (128, 0, 0),
        (128, 0, 128),
        (128, 128, 0),
        (192, 192, 192),
        (128, 128, 128),
        (0, 0, 255),
        (0, 255, 0),
        (0, 255, 255),
        (255, 0, 0),
        (255, 0, 255),
        (255, 255, 0),
        (255, 255, 255),
    ],
    dtype=np.uint8,
)


def attr(fg: int, bg: int = 0) -> int:
    """Pack two palette indices (0-15) into one attribute."""
    return (fg & 0x0F) | ((bg & 0x0F) << 4)


def fg_of(attribute: int) -> int:
    return attribute & 0x0F


def bg_of(attribute: int) -> int:
    return (attribute >> 4) & 0x0F
