import numpy as np
import pytest
import hypothesis.strategies as st
from hypothesis import given, settings

from engine.canvas import Canvas

BLANK = ord(" ")

coord = st.integers(min_value=0, max_value=31)


def written(canvas: Canvas) -> set:
    return {(int(x), int(y)) for y, x in np.argwhere(canvas.glyphs != BLANK)}


class SpanRecordingCanvas(Canvas):
    """Remembers which rows received a span, in order."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.span_rows = []

    def _draw_span(self, y, x_from, x_to, glyph, attr):
        self.span_rows.append(y)
        super()._draw_span(y, x_from, x_to, glyph, attr)


def line_cells(x1, y1, x2, y2, size=32):
    canvas = Canvas(size, size)
    canvas.draw_line(x1, y1, x2, y2, "#", 1)
    return written(canvas)


# ------------------------------------------------------------------
# Lines
# ------------------------------------------------------------------

def test_horizontal_line():
    assert line_cells(2, 3, 8, 3) == {(x, 3) for x in range(2, 9)}

def test_vertical_line():
    assert line_cells(4, 9, 4, 1) == {(4, y) for y in range(1, 10)}

def test_steep_line_drawn_upward_matches_downward():
    assert line_cells(2, 12, 5, 1) == line_cells(5, 1, 2, 12)
    assert len(line_cells(2, 12, 5, 1)) == 12
    assert len(line_cells(12, 25, 10, 2)) == 24

def test_triangle_closing_edge_runs_upward():
    canvas = Canvas(32, 32)
    canvas.draw_triangle(10, 2, 20, 20, 12, 25, "#", 1)
    assert line_cells(12, 25, 10, 2) <= written(canvas)

def test_single_point_line():
    assert line_cells(5, 5, 5, 5) == {(5, 5)}

def test_diagonal_line():
    assert line_cells(0, 0, 6, 6) == {(i, i) for i in range(7)}
    assert line_cells(0, 6, 6, 0) == {(i, 6 - i) for i in range(7)}

def test_line_crossing_the_canvas_is_clipped():
    canvas = Canvas(20, 20)
    canvas.draw_line(-10, -5, 40, 30, "#", 1)
    cells = written(canvas)
    assert cells
    assert all(0 <= x < 20 and 0 <= y < 20 for x, y in cells)

@settings(deadline=None, max_examples=200)
@given(x1=coord, y1=coord, x2=coord, y2=coord)
def test_line_direction_does_not_matter(x1, y1, x2, y2):
    assert line_cells(x1, y1, x2, y2) == line_cells(x2, y2, x1, y1)

@settings(deadline=None, max_examples=200)
@given(x1=coord, y1=coord, x2=coord, y2=coord)
def test_line_is_eight_connected_and_hits_both_ends(x1, y1, x2, y2):
    cells = line_cells(x1, y1, x2, y2)
    assert (x1, y1) in cells
    assert (x2, y2) in cells
    assert len(cells) == max(abs(x2 - x1), abs(y2 - y1)) + 1
    # one cell per step along the major axis
    if abs(x2 - x1) >= abs(y2 - y1):
        assert sorted(x for x, _ in cells) == list(range(min(x1, x2), max(x1, x2) + 1))
        by_x = dict(cells)
        for x in range(min(x1, x2), max(x1, x2)):
            assert abs(by_x[x + 1] - by_x[x]) <= 1
    else:
        assert sorted(y for _, y in cells) == list(range(min(y1, y2), max(y1, y2) + 1))
        by_y = {y: x for x, y in cells}
        for y in range(min(y1, y2), max(y1, y2)):
            assert abs(by_y[y + 1] - by_y[y]) <= 1


# ------------------------------------------------------------------
# Triangles
# ------------------------------------------------------------------

def test_triangle_outline_is_three_lines():
    canvas = Canvas(32, 32)
    canvas.draw_triangle(2, 2, 20, 5, 8, 25, "#", 1)
    expected = line_cells(2, 2, 20, 5) | line_cells(20, 5, 8, 25) | line_cells(8, 25, 2, 2)
    assert written(canvas) == expected

def test_fill_triangle_with_equal_vertices_draws_one_cell():
    canvas = Canvas(10, 10)
    canvas.fill_triangle(5, 5, 5, 5, 5, 5, "#", 1)
    assert len(written(canvas)) <= 1

def test_fill_triangle_collinear_draws_the_line():
    canvas = Canvas(16, 16)
    canvas.fill_triangle(0, 0, 5, 5, 10, 10, "#", 1)
    assert written(canvas) == {(i, i) for i in range(11)}

def test_fill_triangle_horizontal_degenerate():
    canvas = Canvas(16, 16)
    canvas.fill_triangle(1, 4, 9, 4, 5, 4, "#", 1)
    assert written(canvas) == {(x, 4) for x in range(1, 10)}

@pytest.mark.parametrize(
    "vertices",
    [
        (10, 2, 4, 8, 16, 8),   # flat bottom
        (4, 2, 16, 2, 10, 8),   # flat top
        (3, 1, 20, 9, 7, 18),   # general
        (7, 18, 3, 1, 20, 9),   # same, different vertex order
    ],
)
def test_fill_triangle_draws_each_row_once_with_contiguous_spans(vertices):
    canvas = SpanRecordingCanvas(32, 32)
    canvas.fill_triangle(*vertices, "#", 1)
    ys = vertices[1::2]
    assert canvas.span_rows == list(range(min(ys), max(ys) + 1))

    cells = written(canvas)
    for y in range(min(ys), max(ys) + 1):
        row = sorted(x for x, cy in cells if cy == y)
        assert row, f"row {y} is empty"
        assert row == list(range(row[0], row[-1] + 1))
    assert {y for _, y in cells} == set(range(min(ys), max(ys) + 1))

def test_flat_bottom_triangle_bottom_row_is_complete():
    canvas = Canvas(32, 32)
    canvas.fill_triangle(10, 2, 4, 8, 16, 8, "#", 1)
    assert {(x, 8) for x in range(4, 17)} <= written(canvas)

def test_flat_top_triangle_top_row_is_complete():
    canvas = Canvas(32, 32)
    canvas.fill_triangle(4, 2, 16, 2, 10, 8, "#", 1)
    assert {(x, 2) for x in range(4, 17)} <= written(canvas)

@settings(deadline=None, max_examples=150)
@given(x1=coord, y1=coord, x2=coord, y2=coord, x3=coord, y3=coord)
def test_fill_triangle_covers_its_outline(x1, y1, x2, y2, x3, y3):
    outline = Canvas(32, 32)
    outline.draw_triangle(x1, y1, x2, y2, x3, y3, "#", 1)
    filled = Canvas(32, 32)
    filled.fill_triangle(x1, y1, x2, y2, x3, y3, "#", 1)
    assert written(outline) <= written(filled)

def test_fill_triangle_mostly_off_canvas_does_not_raise():
    canvas = Canvas(8, 8)
    canvas.fill_triangle(-50, -40, 100, 3, 4, 90, "#", 1)
    assert (4, 4) in written(canvas)


# ------------------------------------------------------------------
# Circles
# ------------------------------------------------------------------

def test_zero_radius_circles_draw_nothing():
    canvas = Canvas(10, 10)
    canvas.fill_circle(5, 5, 0, "#", 1)
    canvas.draw_circle(5, 5, 0, "#", 1)
    assert written(canvas) == set()

def test_circle_outline_is_symmetric():
    canvas = Canvas(32, 32)
    canvas.draw_circle(15, 15, 7, "#", 1)
    cells = written(canvas)
    assert {(15, 8), (15, 22), (8, 15), (22, 15)} <= cells
    assert cells == {(30 - x, y) for x, y in cells}
    assert cells == {(x, 30 - y) for x, y in cells}
    assert cells == {(y, x) for x, y in cells}

def test_fill_circle_covers_outline_and_stays_inside():
    outline = Canvas(32, 32)
    outline.draw_circle(15, 15, 6, "#", 1)
    filled = Canvas(32, 32)
    filled.fill_circle(15, 15, 6, "#", 1)
    cells = written(filled)
    assert (15, 15) in cells
    assert written(outline) <= cells
    assert all((x - 15) ** 2 + (y - 15) ** 2 <= 7 ** 2 for x, y in cells)

def test_circle_at_corner_is_clipped():
    canvas = Canvas(10, 10)
    canvas.fill_circle(0, 0, 4, "#", 1)
    canvas.draw_circle(9, 9, 30, "#", 1)
    assert (0, 0) in written(canvas)
