"""Conversions between wire drawing types and renderable values."""

from __future__ import annotations

from whiteboard.drawing_types import Color, Line, Point, Position, Rectangle, RectShape

Vertex = tuple[Position, Color]


def unpack_color(value: int) -> Color:
    """Split a packed 0xRRGGBBAA integer into a Color."""
    if not 0 <= value <= 0xFFFFFFFF:
        raise ValueError(f"packed colour {value} is not a 32-bit unsigned value")
    return Color((value >> 24) & 0xFF, (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


def pack_color(color: Color) -> int:
    """Pack a Color into a 0xRRGGBBAA integer."""
    return (color.r << 24) | (color.g << 16) | (color.b << 8) | color.a


def to_point(x: float, y: float, color: Color) -> Point:
    return Point(float(x), float(y), pack_color(color))


def _vertex(point: Point | None) -> Vertex:
    point = point if point is not None else Point()
    return (point.position, unpack_color(point.color))


def line_endpoints(line: Line) -> tuple[Vertex, Vertex]:
    """The two end points of a line as (position, colour) pairs."""
    return (_vertex(line.start), _vertex(line.end))


def to_line(start: Position, end: Position, color: Color, object_id: str) -> Line:
    return Line(object_id, to_point(*start, color), to_point(*end, color))


def to_rect_shape(rectangle: Rectangle) -> RectShape:
    """Normalise a two-corner rectangle into an outline-only shape."""
    (sx, sy), color = _vertex(rectangle.start)
    (ex, ey), _ = _vertex(rectangle.end)
    return RectShape(
        x=min(sx, ex),
        y=min(sy, ey),
        width=abs(sx - ex),
        height=abs(sy - ey),
        outline_color=color,
        outline_thickness=1.0,
        fill_color=Color.TRANSPARENT,
    )


def to_rectangle(start: Position, end: Position, color: Color, object_id: str) -> Rectangle:
    return Rectangle(object_id, to_point(*start, color), to_point(*end, color))


def shape_to_rectangle(shape: RectShape, object_id: str) -> Rectangle:
    return to_rectangle(shape.top_left, shape.bottom_right, shape.outline_color, object_id)