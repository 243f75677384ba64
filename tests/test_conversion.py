import pytest

from whiteboard.conversion import (
    line_endpoints,
    pack_color,
    shape_to_rectangle,
    to_line,
    to_point,
    to_rect_shape,
    to_rectangle,
    unpack_color,
)
from whiteboard.drawing_types import Color, Line, Point


def test_pack_black():
    assert pack_color(Color.BLACK) == 0x000000FF


def test_unpack_channel_order():
    assert unpack_color(0x12345678) == Color(0x12, 0x34, 0x56, 0x78)


@pytest.mark.parametrize("value", [0, 0xFFFFFFFF, 0x12345678, 0x000000FF])
def test_pack_unpack_round_trip(value):
    assert pack_color(unpack_color(value)) == value


@pytest.mark.parametrize("color", [Color.BLACK, Color.WHITE, Color(100, 100, 100), Color(1, 2, 3, 4)])
def test_unpack_pack_round_trip(color):
    assert unpack_color(pack_color(color)) == color


@pytest.mark.parametrize("value", [-1, 1 << 32])
def test_unpack_rejects_out_of_range(value):
    with pytest.raises(ValueError):
        unpack_color(value)


def test_to_point_keeps_position_and_colour():
    point = to_point(3, 4, Color(10, 20, 30))
    assert point.position == (3.0, 4.0)
    assert unpack_color(point.color) == Color(10, 20, 30)


def test_to_line_and_endpoints():
    line = to_line((1.0, 2.0), (5.0, 6.0), Color.BLACK, "8")
    assert line.id == "8"
    assert line_endpoints(line) == (((1.0, 2.0), Color.BLACK), ((5.0, 6.0), Color.BLACK))


def test_line_endpoints_default_missing_point():
    line = Line("1", Point(2.0, 3.0, pack_color(Color.BLACK)))
    start, end = line_endpoints(line)
    assert start == ((2.0, 3.0), Color.BLACK)
    assert end == ((0.0, 0.0), Color.TRANSPARENT)


def test_rect_shape_ignores_corner_order():
    forward = to_rectangle((4.0, 5.0), (10.0, 20.0), Color.BLACK, "1")
    backward = to_rectangle((10.0, 20.0), (4.0, 5.0), Color.BLACK, "1")
    assert to_rect_shape(forward) == to_rect_shape(backward)


def test_rect_shape_style():
    shape = to_rect_shape(to_rectangle((4.0, 5.0), (10.0, 20.0), Color(9, 8, 7), "1"))
    assert shape.top_left == (4.0, 5.0)
    assert shape.bottom_right == (10.0, 20.0)
    assert shape.outline_color == Color(9, 8, 7)
    assert shape.fill_color == Color.TRANSPARENT
    assert shape.outline_thickness == 1.0


def test_shape_round_trip():
    rectangle = to_rectangle((4.0, 5.0), (10.0, 20.0), Color.BLACK, "6")
    assert shape_to_rectangle(to_rect_shape(rectangle), "6") == rectangle