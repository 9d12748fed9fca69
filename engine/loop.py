"""
GlyphEngine - engine/loop.py
Main Frame Loop: wires the Canvas, InputTracker, game object and Backend.
========================================================================
Version:     0.1
Stack:       Python 3.12
Status:      Engine entry point.

Tick sequence
-------------
  1. clock        elapsed seconds since the previous tick started
  2. input        InputTracker.refresh(backend.sample_keys())
  3. update       game.update(canvas, elapsed)
  4. title        best-effort "<title> - <game> - FPS: n"
  5. flush        backend.flush(canvas.glyphs, canvas.attrs)

setup() runs once, before the first input refresh. There is no shutdown
state: run() only ends when the process does.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable, Protocol

from engine.canvas import Canvas
from engine.errors import PlatformError
from engine.input import InputTracker

if TYPE_CHECKING:
    from display.backend import Backend
    from engine.data_loader import DisplayDef

logger = logging.getLogger(__name__)


class Game(Protocol):
    name: str

    def setup(self) -> None:
        ...

    def update(self, canvas: Canvas, elapsed_time: float) -> None:
        ...


class GameEngine:
    """
    Owns one Canvas and drives one game object for the whole run.
    Construction opens the backend; a PlatformError there is fatal.
    """

    def __init__(
        self,
        game: Game,
        backend: "Backend",
        width: int,
        height: int,
        font_width: int = 8,
        font_height: int = 8,
        *,
        title: str = "GlyphEngine",
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.game = game
        self.backend = backend
        self.title = title
        self.clock = clock

        backend.open(width, height, font_width, font_height)
        self.canvas = Canvas(width, height, font_width, font_height, backend=backend)
        self.input = InputTracker()
        self.canvas.attach_input(self.input)

        self.running = False
        self.frame_count = 0
        self._last_tick = 0.0

    @classmethod
    def from_config(cls, game: Game, backend: "Backend", display: "DisplayDef", **kwargs) -> "GameEngine":
        return cls(
            game,
            backend,
            display.width,
            display.height,
            display.font_width,
            display.font_height,
            title=display.title,
            **kwargs,
        )

    def start(self) -> None:
        """Uninitialized -> Running. Calls game.setup() exactly once."""
        if self.running:
            raise RuntimeError("Engine already started")
        self.game.setup()
        self.input.reset()
        self._last_tick = self.clock()
        self.running = True
        logger.info(
            "Running %s on a %dx%d canvas", self.game.name, self.canvas.width, self.canvas.height
        )

    def tick(self) -> float:
        """Run one frame and return its elapsed time in seconds."""
        if not self.running:
            self.start()

        now = self.clock()
        elapsed = now - self._last_tick
        self._last_tick = now

        self.input.refresh(self.backend.sample_keys())
        self.game.update(self.canvas, elapsed)
        self._update_title(elapsed)
        self.backend.flush(self.canvas.glyphs, self.canvas.attrs)

        self.frame_count += 1
        return elapsed

    def _update_title(self, elapsed: float) -> None:
        fps = 1.0 / elapsed if elapsed > 0 else 0.0
        try:
            self.backend.set_title(f"{self.title} - {self.game.name} - FPS: {fps:3.2f}")
        except PlatformError as exc:
            logger.warning("Could not update window title: %s", exc)

    def run(self) -> None:
        """Main blocking frame loop."""
        if not self.running:
            self.start()
        while True:
            self.tick()
