import pytest

from pingme.canvas import Canvas, Color, Rect, split_vertical


def test_inner_shrinks_each_side():
    outer = Rect(2, 3, 20, 10)
    inner = outer.inner(1)
    assert inner.x == outer.x + 1
    assert inner.y == outer.y + 1
    assert inner.width == outer.width - 2
    assert inner.height == outer.height - 2


def test_inner_of_tiny_rect_is_empty():
    inner = Rect(0, 0, 1, 5).inner(1)
    assert inner.width == 0
    assert inner.height == 0


def test_split_vertical_fills_area_and_keeps_lengths():
    area = Rect(0, 0, 40, 30)
    rects = split_vertical(area, [("length", 3), ("min", 5), ("length", 2)], 1)
    assert rects[0].height == 3
    assert rects[2].height == 2
    assert sum(r.height for r in rects) == area.height - 2
    for upper, lower in zip(rects, rects[1:]):
        assert upper.bottom == lower.y
    assert all(r.width == area.width - 2 for r in rects)


def test_split_vertical_cuts_from_bottom_when_too_small():
    rects = split_vertical(Rect(0, 0, 10, 4), [("length", 3), ("length", 3)])
    assert rects[0].height == 3
    assert rects[1].height == 1


def test_split_vertical_rejects_unknown_kind():
    with pytest.raises(ValueError):
        split_vertical(Rect(0, 0, 10, 10), [("percent", 50)])


def test_canvas_rejects_negative_size():
    with pytest.raises(ValueError):
        Canvas(-1, 3)


def test_write_clips_to_width():
    canvas = Canvas(5, 1)
    written = canvas.write(3, 0, "xyz", Color.RED)
    assert written == 2
    assert canvas.row_text(0).endswith("xy")
    assert canvas.colors[0][3] is Color.RED


def test_write_outside_rows_does_nothing():
    canvas = Canvas(5, 2)
    assert canvas.write(0, 7, "hello") == 0
    assert canvas.lines() == [" " * 5, " " * 5]


def test_draw_box_borders_and_title():
    canvas = Canvas(12, 4)
    canvas.draw_box(canvas.area, "Logs", Color.WHITE)
    lines = canvas.lines()
    assert len(lines) == 4
    assert all(len(line) == 12 for line in lines)
    assert lines[0][0] == "┌"
    assert lines[-1][-1] == "┘"
    assert "Logs" in lines[0]
    assert lines[1][0] == lines[1][-1]
    assert canvas.colors[0][0] is Color.WHITE