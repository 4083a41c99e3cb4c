import pytest

from confdeck.screen import Borders, Constraint, Frame, Rect, horizontal, vertical
from confdeck.styles import Color, Style


def test_inner_shrinks_by_one_each_side():
    assert Rect(2, 3, 10, 5).inner() == Rect(3, 4, 8, 3)


def test_inner_of_tiny_rect_is_empty():
    inner = Rect(0, 0, 1, 1).inner()
    assert inner.width == 0 and inner.height == 0


def test_vertical_length_then_min():
    area = Rect(0, 0, 10, 10)
    top, rest = vertical(area, [Constraint.length(3), Constraint.min(0)])
    assert top.height == 3
    assert rest.y == top.bottom
    assert top.height + rest.height == area.height
    assert rest.width == area.width


def test_single_length_leaves_rest_unused():
    (only,) = vertical(Rect(0, 0, 20, 10), [Constraint.length(3)])
    assert only.height == 3


def test_lengths_are_clamped_to_area():
    rects = vertical(Rect(0, 0, 5, 4), [Constraint.length(3), Constraint.length(3)])
    assert sum(r.height for r in rects) == 4


def test_horizontal_fill_centres():
    area = Rect(0, 0, 21, 1)
    left, hours, colon, minutes, right = horizontal(
        area,
        [
            Constraint.fill(1),
            Constraint.length(2),
            Constraint.length(1),
            Constraint.length(2),
            Constraint.fill(1),
        ],
    )
    assert hours.width == 2 and colon.width == 1 and minutes.width == 2
    assert left.width == right.width
    assert right.right == area.right


def test_negative_constraint_rejected():
    with pytest.raises(ValueError):
        Constraint.length(-1)


def test_set_string_clips_to_frame():
    frame = Frame(5, 1)
    frame.set_string(3, 0, "abcdef")
    assert frame.lines() == ["   ab"]


def test_set_string_records_style():
    style = Style(fg=Color.YELLOW)
    frame = Frame(3, 1)
    frame.set_string(0, 0, "x", style)
    assert frame.cell(0, 0).symbol == "x"
    assert frame.cell(0, 0).style == style


def test_draw_block_borders_and_title():
    style = Style(fg=Color.WHITE)
    frame = Frame(10, 3)
    frame.draw_block(Rect(0, 0, 10, 3), title="Hi", border_style=style)
    lines = frame.lines()
    assert "Hi" in lines[0]
    assert lines[1][1:9] == " " * 8
    assert frame.cell(0, 1).style == style
    assert frame.cell(9, 1).style == style
    assert lines[1][0] == lines[1][9]
    assert lines[2][0] != " "


def test_draw_block_without_borders_draws_only_title():
    frame = Frame(6, 2)
    frame.draw_block(Rect(0, 0, 6, 2), title="T", borders=Borders.NONE)
    assert frame.lines() == ["T     ", "      "]


def test_cursor_position():
    frame = Frame(4, 4)
    frame.set_cursor_position(2, 1)
    assert frame.cursor_position == (2, 1)


def test_cell_outside_frame_raises():
    with pytest.raises(IndexError):
        Frame(2, 2).cell(2, 0)