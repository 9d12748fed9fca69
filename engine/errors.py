"""
GlyphEngine - engine/errors.py
Error taxonomy shared by the core and the display backends.

PlatformError is fatal: nothing in the engine catches it on the open, resize
or flush paths. DecodeError belongs to asset loading and is handed back to
the caller. Canvas bounds violations are never errors.
"""

from __future__ import annotations

from typing import Optional


class GlyphEngineError(Exception):
    """Base class for every error raised by GlyphEngine."""


class PlatformError(GlyphEngineError):
    """A display backend could not open, resize or write its surface."""

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.code = code

    def __str__(self) -> str:
        message = super().__str__()
        if self.code is None:
            return message
        return f"{message} (error code {self.code})"


class DecodeError(GlyphEngineError, ValueError):
    """A sprite blob is truncated or disagrees with its declared size."""
