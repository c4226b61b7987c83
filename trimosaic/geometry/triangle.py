import numpy as np
from typing import NamedTuple, Tuple


class Point(NamedTuple):
    """Integer pixel coordinate."""
    x: int
    y: int


class Triangle(NamedTuple):
    a: Point
    b: Point
    c: Point


class Color(NamedTuple):
    """8-bit RGBA color. Alpha is the blend opacity used when compositing."""
    r: int
    g: int
    b: int
    a: int = 255


class ColoredTriangle(NamedTuple):
    triangle: Triangle
    color: Color


Box = Tuple[int, int, int, int]


def orient(a: Point, b: Point, p: Point) -> int:
    """Signed cross product of (b - a) and (p - a)."""
    return (b.x - a.x) * (p.y - a.y) - (b.y - a.y) * (p.x - a.x)


def signed_area2(triangle: Triangle) -> int:
    """Twice the signed area of the triangle."""
    return orient(triangle.a, triangle.b, triangle.c)


def contains(triangle: Triangle, p: Point) -> bool:
    """
    Inclusive point-in-triangle test.

    Points on an edge count as inside. Either winding is accepted; a
    triangle with zero area contains nothing.
    """
    area = signed_area2(triangle)
    if area == 0:
        return False

    w0 = orient(triangle.a, triangle.b, p)
    w1 = orient(triangle.b, triangle.c, p)
    w2 = orient(triangle.c, triangle.a, p)

    if area > 0:
        return w0 >= 0 and w1 >= 0 and w2 >= 0
    return w0 <= 0 and w1 <= 0 and w2 <= 0


def bounding_box(triangle: Triangle, width: int, height: int) -> Box:
    """
    Half-open pixel rectangle (x0, y0, x1, y1) around the triangle, clamped
    to [0, width) x [0, height).

    The box may be empty (x0 >= x1 or y0 >= y1) when the triangle lies
    outside the canvas.
    """
    xs = (triangle.a.x, triangle.b.x, triangle.c.x)
    ys = (triangle.a.y, triangle.b.y, triangle.c.y)

    x0 = min(max(min(xs), 0), width)
    y0 = min(max(min(ys), 0), height)
    x1 = max(min(max(xs), width), 0)
    y1 = max(min(max(ys), height), 0)

    return x0, y0, x1, y1


def box_is_empty(box: Box) -> bool:
    x0, y0, x1, y1 = box
    return x0 >= x1 or y0 >= y1


def coverage_mask(triangle: Triangle, box: Box) -> np.ndarray:
    """
    Vectorised containment test over every pixel of ``box``.

    Returns:
        Boolean array of shape (y1 - y0, x1 - x0)
    """
    x0, y0, x1, y1 = box
    if box_is_empty(box):
        return np.zeros((max(y1 - y0, 0), max(x1 - x0, 0)), dtype=bool)

    area = signed_area2(triangle)
    if area == 0:
        return np.zeros((y1 - y0, x1 - x0), dtype=bool)

    ys, xs = np.mgrid[y0:y1, x0:x1]
    ys = ys.astype(np.int64)
    xs = xs.astype(np.int64)

    a, b, c = triangle
    w0 = (b.x - a.x) * (ys - a.y) - (b.y - a.y) * (xs - a.x)
    w1 = (c.x - b.x) * (ys - b.y) - (c.y - b.y) * (xs - b.x)
    w2 = (a.x - c.x) * (ys - c.y) - (a.y - c.y) * (xs - c.x)

    if area > 0:
        return (w0 >= 0) & (w1 >= 0) & (w2 >= 0)
    return (w0 <= 0) & (w1 <= 0) & (w2 <= 0)


def round_half_up(value: float) -> int:
    return int(np.floor(value + 0.5))


def scaled(triangle: Triangle, sx: float, sy: float) -> Triangle:
    """Scale vertex coordinates independently along x and y, rounding to pixels."""
    return Triangle(*(Point(round_half_up(p.x * sx), round_half_up(p.y * sy)) for p in triangle))
