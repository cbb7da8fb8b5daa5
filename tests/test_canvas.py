import pytest

from vibecast.ui.canvas import (
    Alignment,
    Buffer,
    Cell,
    Constraint,
    Direction,
    Line,
    Rect,
    Span,
    draw_block,
    render_paragraph,
    split,
)
from vibecast.ui.theme import Color, Modifier, Style


def test_rect_inner_shrinks_each_side():
    area = Rect(2, 3, 10, 6)
    inner = area.inner(1)
    assert inner.x == area.x + 1
    assert inner.y == area.y + 1
    assert inner.right == area.right - 1
    assert inner.bottom == area.bottom - 1


def test_rect_inner_never_negative():
    inner = Rect(0, 0, 1, 1).inner(1)
    assert inner.width == 0 and inner.height == 0


def test_rect_contains_edges():
    area = Rect(1, 1, 3, 2)
    assert area.contains(1, 1)
    assert area.contains(3, 2)
    assert not area.contains(4, 1)
    assert not area.contains(1, 3)
    assert not area.contains(0, 1)


def test_cell_set_patches_style():
    red = Color(255, 0, 0)
    blue = Color(0, 0, 255)
    cell = Cell()
    cell.set("x", Style(bg=blue))
    cell.set("y", Style(fg=red, modifiers=Modifier.BOLD))
    assert cell.char == "y"
    assert cell.style.bg == blue
    assert cell.style.fg == red
    assert Modifier.BOLD in cell.style.modifiers


def test_buffer_cell_out_of_bounds():
    buf = Buffer(4, 2)
    assert buf.cell(4, 0) is None
    assert buf.cell(0, 2) is None
    assert buf.cell(-1, 0) is None
    assert buf.cell(3, 1).char == " "


def test_buffer_rejects_negative_size():
    with pytest.raises(ValueError):
        Buffer(-1, 3)


def test_set_string_writes_and_returns_end():
    buf = Buffer(10, 1)
    end = buf.set_string(2, 0, "abc")
    assert end == 2 + len("abc")
    assert buf.text_rows()[0] == "  abc" + " " * 5


def test_set_string_respects_max_width_and_buffer_edge():
    buf = Buffer(6, 2)
    buf.set_string(0, 0, "abcdef", max_width=3)
    buf.set_string(4, 1, "xyz")
    rows = buf.text_rows()
    assert rows[0].startswith("abc")
    assert rows[0][3:] == "   "
    assert rows[1].endswith("xy")


def test_wide_characters_take_two_cells():
    buf = Buffer(5, 1)
    end = buf.set_string(0, 0, "日日日")
    assert end == 4
    assert buf.text_rows()[0] == "日日 "


def test_set_line_applies_span_styles():
    red = Color(255, 0, 0)
    buf = Buffer(8, 1)
    line = Line([Span("ab", Style(fg=red)), "cd"])
    assert line.width() == 4
    buf.set_line(0, 0, line)
    assert buf.cell(0, 0).style.fg == red
    assert buf.cell(2, 0).style.fg is None
    assert buf.text_rows()[0].startswith("abcd")


def test_clear_resets_area_only():
    buf = Buffer(4, 2)
    buf.set_string(0, 0, "abcd")
    buf.set_string(0, 1, "efgh")
    buf.clear(Rect(1, 0, 2, 1))
    assert buf.text_rows() == ["a  d", "efgh"]


def test_split_vertical_fills_area():
    area = Rect(0, 0, 20, 30)
    chunks = split(
        area, [Constraint.length(3), Constraint.min(10), Constraint.length(1)], Direction.VERTICAL
    )
    assert [c.height for c in chunks][0] == 3
    assert chunks[2].height == 1
    assert sum(c.height for c in chunks) == area.height
    assert chunks[1].y == chunks[0].bottom
    assert chunks[2].bottom == area.bottom


def test_split_horizontal_percentages_cover_width():
    area = Rect(5, 0, 100, 4)
    chunks = split(area, [Constraint.percentage(35), Constraint.percentage(65)], Direction.HORIZONTAL)
    assert chunks[0].width == 35
    assert chunks[0].x == area.x
    assert chunks[1].right == area.right
    assert all(c.height == area.height for c in chunks)


def test_split_shrinks_when_space_is_short():
    area = Rect(0, 0, 10, 5)
    chunks = split(area, [Constraint.length(4), Constraint.length(4)])
    assert sum(c.height for c in chunks) == area.height
    assert chunks[0].height == 4


def test_draw_block_draws_border_and_title():
    buf = Buffer(12, 4)
    inner = draw_block(buf, Rect(0, 0, 12, 4), title=" Hi ")
    rows = buf.text_rows()
    assert rows[0][0] == "┌"
    assert rows[0][1:5] == " Hi "
    assert rows[3][-1] == "┘"
    assert inner == Rect(0, 0, 12, 4).inner(1)
    assert all(row[0] == "│" for row in rows[1:3])


def test_render_paragraph_alignment_and_truncation():
    buf = Buffer(6, 3)
    render_paragraph(
        buf,
        Rect(0, 0, 6, 3),
        ["abc", Line("xy", alignment=Alignment.RIGHT), "abcdefghij"],
    )
    rows = buf.text_rows()
    assert rows[0] == "abc   "
    assert rows[1] == "    xy"
    assert rows[2] == "abcdef"


def test_render_paragraph_center():
    buf = Buffer(7, 1)
    render_paragraph(buf, Rect(0, 0, 7, 1), ["abc"], Alignment.CENTER)
    assert buf.text_rows()[0].strip() == "abc"
    assert buf.text_rows()[0].index("a") == buf.text_rows()[0][::-1].index("c")