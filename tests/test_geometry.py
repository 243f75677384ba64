import pytest

from whiteboard.conversion import to_line
from whiteboard.drawing_types import Color, RectShape
from whiteboard.geometry import (
    circle_intersects_line,
    circle_intersects_rectangle,
    circle_intersects_segment,
)


@pytest.mark.parametrize(
    "center, radius, expected",
    [
        ((5.0, 3.0), 3.0, True),
        ((5.0, 3.0), 2.5, False),
        ((13.0, 0.0), 3.0, True),
        ((14.0, 0.0), 3.0, False),
        ((-2.0, 0.0), 2.0, True),
        ((5.0, -1.0), 1.0, True),
    ],
)
def test_circle_and_segment(center, radius, expected):
    assert circle_intersects_segment((0.0, 0.0), (10.0, 0.0), center, radius) is expected


@pytest.mark.parametrize("center", [(5.0, 3.0), (12.0, 1.0), (-1.0, -1.0), (50.0, 50.0)])
def test_segment_direction_does_not_matter(center):
    forward = circle_intersects_segment((0.0, 0.0), (10.0, 0.0), center, 3.0)
    backward = circle_intersects_segment((10.0, 0.0), (0.0, 0.0), center, 3.0)
    assert forward is backward


def test_degenerate_segment_acts_as_point():
    assert circle_intersects_segment((4.0, 4.0), (4.0, 4.0), (4.0, 6.0), 2.0) is True
    assert circle_intersects_segment((4.0, 4.0), (4.0, 4.0), (4.0, 9.0), 2.0) is False


def test_circle_and_line():
    line = to_line((0.0, 0.0), (0.0, 10.0), Color.BLACK, "1")
    assert circle_intersects_line(line, (2.0, 5.0), 2.0) is True
    assert circle_intersects_line(line, (30.0, 5.0), 20.0) is False


@pytest.mark.parametrize(
    "center, radius, expected",
    [
        ((50.0, 50.0), 10.0, False),
        ((50.0, 0.0), 1.0, True),
        ((100.0, 50.0), 1.0, True),
        ((50.0, 105.0), 5.0, True),
        ((-3.0, 50.0), 2.0, False),
        ((105.0, 105.0), 5.0, False),
        ((105.0, 105.0), 8.0, True),
        ((50.0, 95.0), 5.0, True),
    ],
)
def test_circle_and_rectangle(center, radius, expected):
    shape = RectShape(0.0, 0.0, 100.0, 100.0)
    assert circle_intersects_rectangle(shape, center, radius) is expected