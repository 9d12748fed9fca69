"""
GlyphEngine - display/screens.py
Built-in title screen launched by run.py.
"""

from engine import colors, keys
from engine.canvas import Canvas
from engine.colors import attr
from engine.sprite import Sprite

MARKER_SPEED = 12.0  # cells per second


class TitleScreen:
    """The title screen: draws with every primitive and echoes key edges."""

    name = "Title"

    def __init__(self):
        self.badge = Sprite(7, 3)
        self.space_presses = 0
        self.marker_x = 2.0
        self.marker_y = 4.0

    def setup(self) -> None:
        for x in range(self.badge.width):
            for y in (0, 2):
                self.badge.set_glyph(x, y, colors.PIXEL_HALF)
                self.badge.set_color(x, y, attr(colors.FG_DARK_CYAN, colors.FG_BLACK))
        for offset, glyph in enumerate("@ G E"):
            self.badge.set_glyph(1 + offset, 1, glyph)
            self.badge.set_color(1 + offset, 1, attr(colors.FG_WHITE, colors.FG_DARK_BLUE))

    def update(self, canvas: Canvas, elapsed_time: float) -> None:
        canvas.clear()
        w, h = canvas.width, canvas.height
        frame = attr(colors.FG_DARK_GREY)

        canvas.draw_line(0, 0, w - 1, 0, colors.PIXEL_QUARTER, frame)
        canvas.draw_line(0, h - 1, w - 1, h - 1, colors.PIXEL_QUARTER, frame)
        canvas.draw_line(0, 0, 0, h - 1, colors.PIXEL_QUARTER, frame)
        canvas.draw_line(w - 1, 0, w - 1, h - 1, colors.PIXEL_QUARTER, frame)

        title = "GlyphEngine"
        canvas.draw_string((w - len(title)) // 2, 2, title, attr(colors.FG_YELLOW))
        canvas.draw_sprite((w - self.badge.width) // 2, 4, self.badge)

        canvas.fill_triangle(4, h - 6, 12, h - 14, 20, h - 6, colors.PIXEL_SOLID, attr(colors.FG_DARK_RED))
        canvas.draw_triangle(4, h - 6, 12, h - 14, 20, h - 6, colors.PIXEL_SOLID, attr(colors.FG_RED))
        canvas.fill_circle(w - 12, h - 10, 4, colors.PIXEL_HALF, attr(colors.FG_DARK_GREEN))
        canvas.draw_circle(w - 12, h - 10, 5, colors.PIXEL_SOLID, attr(colors.FG_GREEN))

        if canvas.key(keys.VK_SPACE).pressed:
            self.space_presses += 1
        self._move_marker(canvas, elapsed_time)
        canvas.draw(int(self.marker_x), int(self.marker_y), "@", attr(colors.FG_WHITE))

        canvas.draw_string(
            2, h - 2, f"[Space] pressed {self.space_presses}x", attr(colors.FG_GREY)
        )
        canvas.draw_string_alpha(2, h - 3, "[Arrows] move   [Esc] quit", attr(colors.FG_GREY))

        if canvas.key(keys.VK_ESCAPE).pressed:
            raise SystemExit(0)

    def _move_marker(self, canvas: Canvas, elapsed_time: float) -> None:
        step = MARKER_SPEED * elapsed_time
        if canvas.key(keys.VK_LEFT).held:
            self.marker_x -= step
        if canvas.key(keys.VK_RIGHT).held:
            self.marker_x += step
        if canvas.key(keys.VK_UP).held:
            self.marker_y -= step
        if canvas.key(keys.VK_DOWN).held:
            self.marker_y += step
        self.marker_x = min(max(self.marker_x, 1.0), canvas.width - 2.0)
        self.marker_y = min(max(self.marker_y, 1.0), canvas.height - 2.0)
