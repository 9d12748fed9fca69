"""
GlyphEngine - engine/input.py
InputTracker: raw per-key "is down" samples -> pressed / held / released edges.
==============================================================================
Version:     0.1
Stack:       Python 3.12 | numpy
Status:      Core input state machine.

Per key, once per frame:
  changed & now down  -> pressed = not held, held = True
  changed & now up    -> released = True, held = False
  unchanged           -> pressed = released = False, held unchanged
then the current raw buffer becomes the previous one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np

from engine.keys import KEY_COUNT


@dataclass(frozen=True, slots=True)
class KeyState:
    pressed: bool = False
    held: bool = False
    released: bool = False


class InputTracker:
    """
    Double-buffered key edge detector for key codes 0-255.
    refresh() runs once per frame before game logic reads any key; key()
    hands out value copies so callers cannot mutate the table.
    """

    def __init__(self):
        self._previous = np.zeros(KEY_COUNT, dtype=bool)
        self._current = np.zeros(KEY_COUNT, dtype=bool)
        self._pressed = np.zeros(KEY_COUNT, dtype=bool)
        self._held = np.zeros(KEY_COUNT, dtype=bool)
        self._released = np.zeros(KEY_COUNT, dtype=bool)

    def reset(self) -> None:
        """Forget every sample: all keys up, no edges."""
        for buffer in (self._previous, self._current, self._pressed, self._held, self._released):
            buffer.fill(False)

    def refresh(self, sample: Union[Sequence[bool], np.ndarray]) -> None:
        raw = np.asarray(sample, dtype=bool)
        if raw.shape != (KEY_COUNT,):
            raise ValueError(f"Key sample must hold {KEY_COUNT} entries, got shape {raw.shape}")

        self._current[...] = raw
        changed = self._current != self._previous
        went_down = changed & self._current
        went_up = changed & ~self._current

        self._pressed[...] = went_down & ~self._held
        self._released[...] = went_up
        self._held[went_down] = True
        self._held[went_up] = False

        self._previous[...] = self._current

    def key(self, code: int) -> KeyState:
        if not 0 <= code < KEY_COUNT:
            raise ValueError(f"Key code out of range: {code}")
        return KeyState(
            pressed=bool(self._pressed[code]),
            held=bool(self._held[code]),
            released=bool(self._released[code]),
        )

    def held_keys(self) -> list[int]:
        """Codes of every key currently down."""
        return [int(code) for code in np.flatnonzero(self._held)]
