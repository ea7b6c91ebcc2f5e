import math

import pytest

from st7789kit.shapes import (
    arrow_head,
    circle_points,
    fill_circle_lines,
    line_points,
    rect_angle_corners,
    round_rect_corner_points,
    triangle_corners,
)


def test_horizontal_line():
    assert line_points(0, 0, 3, 0) == [(0, 0), (1, 0), (2, 0), (3, 0)]


def test_single_point_line():
    assert line_points(5, 7, 5, 7) == [(5, 7)]


@pytest.mark.parametrize(
    "x1,y1,x2,y2",
    [(0, 0, 10, 3), (10, 3, 0, 0), (2, 2, 4, 17), (20, 5, 3, 9), (0, 0, 8, 8)],
)
def test_line_endpoints_and_length(x1, y1, x2, y2):
    points = line_points(x1, y1, x2, y2)
    assert points[0] == (x1, y1)
    assert points[-1] == (x2, y2)
    assert len(points) == max(abs(x2 - x1), abs(y2 - y1)) + 1


def test_line_steps_are_adjacent():
    points = line_points(3, 1, 40, 17)
    for (ax, ay), (bx, by) in zip(points, points[1:]):
        assert abs(ax - bx) <= 1 and abs(ay - by) <= 1


def test_circle_contains_axis_extremes():
    points = set(circle_points(50, 50, 10))
    for p in [(50, 40), (60, 50), (50, 60), (40, 50)]:
        assert p in points


def test_circle_points_close_to_radius():
    r = 15
    for x, y in circle_points(100, 100, r):
        assert abs(math.hypot(x - 100, y - 100) - r) < 1.0


def test_circle_zero_radius():
    assert set(circle_points(7, 9, 0)) == {(7, 9)}


def test_fill_circle_lines_vertical_and_symmetric():
    segments = fill_circle_lines(30, 40, 8)
    assert (30, 48, 30, 32) in segments
    xs = set()
    for xa, ya, xb, yb in segments:
        assert xa == xb
        assert ya + yb == 80
        xs.add(xa)
    assert min(xs) == 30 - 8 and max(xs) == 30 + 8


def test_round_rect_too_small_raises():
    with pytest.raises(ValueError):
        round_rect_corner_points(10, 10, 15, 40, 10)


def test_round_rect_swapped_corners_give_same_points():
    a = set(round_rect_corner_points(10, 10, 60, 50, 5))
    b = set(round_rect_corner_points(60, 50, 10, 10, 5))
    assert a == b


def test_round_rect_corners_inside_box():
    points = round_rect_corner_points(10, 20, 60, 70, 8)
    assert points
    for x, y in points:
        assert 10 <= x <= 60
        assert 20 <= y <= 70


def test_rect_angle_zero_is_axis_aligned():
    corners = rect_angle_corners(50, 50, 10, 6, 0)
    assert corners == [(45, 53), (45, 47), (55, 53), (55, 47)]


def test_rect_angle_corners_keep_distance_from_centre():
    for angle in range(0, 361, 30):
        for x, y in rect_angle_corners(100, 100, 60, 30, angle):
            assert abs(math.hypot(x - 100, y - 100) - math.hypot(30, 15)) < 2.0


def test_triangle_zero_angle():
    assert triangle_corners(50, 50, 10, 10, 0) == [(50, 55), (55, 45), (45, 45)]


def test_triangle_has_three_corners_for_any_angle():
    for angle in range(0, 361, 45):
        corners = triangle_corners(120, 120, 80, 80, angle)
        assert len(corners) == 3
        assert len(set(corners)) == 3


def test_arrow_head_horizontal():
    left, right = arrow_head(0, 10, 10, 10, 5)
    assert left == (0, 15)
    assert right == (0, 5)


def test_arrow_head_symmetric_about_shaft():
    left, right = arrow_head(10, 0, 10, 40, 6)
    assert left[1] == right[1]
    assert left[0] + right[0] == 20


def test_arrow_zero_length_raises():
    with pytest.raises(ValueError):
        arrow_head(5, 5, 5, 5, 3)