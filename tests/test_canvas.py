from cellpaint.canvas import draw_box, draw_text
from cellpaint.style import DEFAULT_STYLE, Style


RED = Style(fg=(0, 0, 0), bg=(255, 0, 0))


def test_draw_text_one_cell_per_char(surface):
    draw_text(surface, 3, 2, RED, "abc")

    assert surface.cells == {
        (3, 2): (RED, "a"),
        (4, 2): (RED, "b"),
        (5, 2): (RED, "c"),
    }


def test_draw_text_does_not_wrap_or_clamp(surface):
    draw_text(surface, 78, 0, DEFAULT_STYLE, "wxyz")

    assert sorted(surface.cells) == [(78, 0), (79, 0), (80, 0), (81, 0)]


def test_draw_text_empty_is_noop(surface):
    draw_text(surface, 0, 0, RED, "")

    assert surface.cells == {}


def test_draw_box_fills_every_cell(surface):
    draw_box(surface, 10, 10, 3, 3, RED)

    expected = {(x, y) for x in range(10, 13) for y in range(10, 13)}
    assert set(surface.cells) == expected
    assert all(cell == (RED, " ") for cell in surface.cells.values())


def test_draw_box_rectangle(surface):
    draw_box(surface, 0, 0, 4, 2, RED)

    assert len(surface.cells) == 8
    assert (3, 1) in surface.cells
    assert (4, 0) not in surface.cells
    assert (0, 2) not in surface.cells


def test_draw_box_passes_negative_coordinates_through(surface):
    draw_box(surface, -1, -1, 2, 2, RED)

    assert set(surface.cells) == {(-1, -1), (0, -1), (-1, 0), (0, 0)}


def test_draw_box_zero_extent_draws_nothing(surface):
    draw_box(surface, 5, 5, 0, 3, RED)

    assert surface.cells == {}
