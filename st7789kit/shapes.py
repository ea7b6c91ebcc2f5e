"""Pixel geometry behind the display's line, circle and polygon drawing.

Every function returns plain integer coordinates. Values may fall outside
the screen or below zero; clipping is left to the code that draws them.
"""

from __future__ import annotations

import math
from typing import List, Tuple

Point = Tuple[int, int]
Segment = Tuple[int, int, int, int]


def line_points(x1: int, y1: int, x2: int, y2: int) -> List[Point]:
    """The pixels of a Bresenham line from (x1, y1) to (x2, y2), both ends included."""
    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x2 > x1 else -1
    sy = 1 if y2 > y1 else -1
    points: List[Point] = []
    x, y = x1, y1
    if dx > dy:
        err = -dx
        for _ in range(dx + 1):
            points.append((x, y))
            x += sx
            err += 2 * dy
            if err >= 0:
                y += sy
                err -= 2 * dx
    else:
        err = -dy
        for _ in range(dy + 1):
            points.append((x, y))
            y += sy
            err += 2 * dx
            if err >= 0:
                x += sx
                err -= 2 * dy
    return points


def circle_points(x0: int, y0: int, r: int) -> List[Point]:
    """The pixels of a circle outline of radius r around (x0, y0)."""
    points: List[Point] = []
    x = 0
    y = -r
    err = 2 - 2 * r
    while True:
        points.extend(
            [(x0 - x, y0 + y), (x0 - y, y0 - x), (x0 + x, y0 - y), (x0 + y, y0 + x)]
        )
        old_err = err
        if old_err <= x:
            x += 1
            err += x * 2 + 1
        if old_err > y or err > x:
            y += 1
            err += y * 2 + 1
        if y >= 0:
            break
    return points


def fill_circle_lines(x0: int, y0: int, r: int) -> List[Segment]:
    """Vertical segments (xa, ya, xb, yb) that together fill a circle."""
    segments: List[Segment] = []
    x = 0
    y = -r
    err = 2 - 2 * r
    change_x = True
    while True:
        if change_x:
            segments.append((x0 - x, y0 - y, x0 - x, y0 + y))
            segments.append((x0 + x, y0 - y, x0 + x, y0 + y))
        old_err = err
        change_x = old_err <= x
        if change_x:
            x += 1
            err += x * 2 + 1
        if old_err > y or err > x:
            y += 1
            err += y * 2 + 1
        if y > 0:
            break
    return segments


def round_rect_corner_points(x1: int, y1: int, x2: int, y2: int, r: int) -> List[Point]:
    """The pixels of the four rounded corners of a rectangle.

    Raises ValueError when the rectangle is smaller than the radius, in which
    case nothing of it is drawn.
    """
    # The swap goes through an 8-bit temporary, as the display firmware does.
    if x1 > x2:
        x1, x2 = x2, x1 & 0xFF
    if y1 > y2:
        y1, y2 = y2, y1 & 0xFF
    if x2 - x1 < r or y2 - y1 < r:
        raise ValueError(f"rectangle is smaller than radius {r}")
    points: List[Point] = []
    x = 0
    y = -r
    err = 2 - 2 * r
    while True:
        if x:
            points.extend(
                [
                    (x1 + r - x, y1 + r + y),
                    (x2 - r + x, y1 + r + y),
                    (x1 + r - x, y2 - r - y),
                    (x2 - r + x, y2 - r - y),
                ]
            )
        old_err = err
        if old_err <= x:
            x += 1
            err += x * 2 + 1
        if old_err > y or err > x:
            y += 1
            err += y * 2 + 1
        if y >= 0:
            break
    return points


def _rotate(xd: float, yd: float, rd: float, xc: int, yc: int) -> Point:
    return (
        int(xd * math.cos(rd) - yd * math.sin(rd) + xc),
        int(xd * math.sin(rd) + yd * math.cos(rd) + yc),
    )


def rect_angle_corners(xc: int, yc: int, w: int, h: int, angle: int) -> List[Point]:
    """Four corners of a w x h rectangle centred on (xc, yc), turned by angle degrees.

    Edges join corners 0-1, 0-2, 1-3 and 2-3.
    """
    rd = -angle * math.pi / 180.0
    half_w = w // 2
    half_h = h // 2
    return [
        _rotate(-half_w, half_h, rd, xc, yc),
        _rotate(-half_w, -half_h, rd, xc, yc),
        _rotate(half_w, half_h, rd, xc, yc),
        _rotate(half_w, -half_h, rd, xc, yc),
    ]


def triangle_corners(xc: int, yc: int, w: int, h: int, angle: int) -> List[Point]:
    """Three corners of an isosceles triangle centred on (xc, yc), turned by angle degrees."""
    rd = -angle * math.pi / 180.0
    half_w = w // 2
    half_h = h // 2
    return [
        _rotate(0.0, half_h, rd, xc, yc),
        _rotate(half_w, -half_h, rd, xc, yc),
        _rotate(-half_w, -half_h, rd, xc, yc),
    ]


def arrow_head(x0: int, y0: int, x1: int, y1: int, w: int) -> Tuple[Point, Point]:
    """The left and right base corners of an arrow head pointing at (x1, y1).

    Raises ValueError when the arrow has no length.
    """
    vx = float(x1 - x0)
    vy = float(y1 - y0)
    v = math.sqrt(vx * vx + vy * vy)
    if v == 0:
        raise ValueError("arrow has zero length")
    ux = vx / v
    uy = vy / v
    left = (int(x1 - uy * w - ux * v), int(y1 + ux * w - uy * v))
    right = (int(x1 + uy * w - ux * v), int(y1 - ux * w - uy * v))
    return left, right