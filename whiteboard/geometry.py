"""Intersection tests between the eraser circle and drawn shapes."""

from __future__ import annotations

import math

from whiteboard.conversion import line_endpoints
from whiteboard.drawing_types import Line, Position, RectShape


def circle_intersects_segment(start: Position, end: Position, center: Position, radius: float) -> bool:
    """True when the segment comes within radius of center."""
    sx, sy = start
    ex, ey = end
    cx, cy = center
    dx, dy = ex - sx, ey - sy
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        ratio = 0.0
    else:
        ratio = ((cx - sx) * dx + (cy - sy) * dy) / length_sq
        ratio = min(max(ratio, 0.0), 1.0)
    nearest_x = sx + ratio * dx
    nearest_y = sy + ratio * dy
    return math.hypot(cx - nearest_x, cy - nearest_y) <= radius


def circle_intersects_line(line: Line, center: Position, radius: float) -> bool:
    (start, _), (end, _) = line_endpoints(line)
    return circle_intersects_segment(start, end, center, radius)


def circle_intersects_rectangle(shape: RectShape, center: Position, radius: float) -> bool:
    """True when the circle touches any edge of the rectangle's outline."""
    left, top = shape.top_left
    right, bottom = shape.bottom_right
    edges = (
        ((left, top), (right, top)),
        ((right, top), (right, bottom)),
        ((left, top), (left, bottom)),
        ((left, bottom), (right, bottom)),
    )
    return any(circle_intersects_segment(a, b, center, radius) for a, b in edges)