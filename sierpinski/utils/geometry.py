"""Integer triangle geometry for fractal subdivision.

Provides:
    - Point / Triangle value types (immutable, integer pixel coordinates)
    - Signed and absolute triangle area (determinant formula)
    - Truncating midpoints and one-level subdivision (center + 3 corners)
    - Maximal centered equilateral triangle for a canvas
    - Full-canvas starting triangle and integer bounding boxes

Used by:
    - Fractal driver: subdivision loop and termination check
    - Raster sink: vertex lists for polygon fill
    - Tests: partition and permutation properties

All coordinates are pixels, image frame (top-left origin, +Y down).

Integer division truncates toward zero everywhere. Python's ``//`` floors,
so the helpers below never use it on values that may be negative; the
difference changes which pixel a midpoint lands on and therefore the
rendered image.
"""

import math
from typing import List, NamedTuple, Tuple

# Height of an equilateral triangle per unit of side length
EQUILATERAL_HEIGHT_RATIO = math.sqrt(3.0) / 2.0


class Point(NamedTuple):
    """Integer pixel coordinate."""
    x: int
    y: int


class Triangle(NamedTuple):
    """Ordered triple of vertices.

    Vertex order decides the sign of :func:`signed_area` only; the shape
    is the same for every permutation.
    """
    a: Point
    b: Point
    c: Point


def _div_trunc(n: int, d: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(n) // abs(d)
    return q if (n >= 0) == (d > 0) else -q


def signed_area(triangle: Triangle) -> int:
    """Signed area via the 2D determinant, halved with truncation.

    Parameters
    ----------
    triangle : Triangle
        Vertices (A, B, C)

    Returns
    -------
    int
        ``trunc(((bx-ax)(cy-ay) - (cx-ax)(by-ay)) / 2)``

    Notes
    -----
    Reversing the vertex order flips the sign, magnitude is unchanged.
    """
    a, b, c = triangle
    det = (b.x - a.x) * (c.y - a.y) - (c.x - a.x) * (b.y - a.y)
    return _div_trunc(det, 2)


def area(triangle: Triangle) -> int:
    """Absolute triangle area in square pixels.

    Parameters
    ----------
    triangle : Triangle
        Vertices in any order

    Returns
    -------
    int
        Non-negative area

    Notes
    -----
    The halving truncates before the absolute value is taken, so a
    triangle whose determinant is odd loses half a unit: a determinant of
    35 gives 17, not 17.5 rounded. This decides the exact generation at
    which the fractal driver stops for thresholds near an odd area.
    """
    return abs(signed_area(triangle))


def midpoint(p1: Point, p2: Point) -> Point:
    """Truncating average of two points.

    Odd coordinate sums lose up to half a pixel per axis; the bias
    compounds across subdivision depths and is part of the reference
    output.
    """
    return Point(_div_trunc(p1.x + p2.x, 2), _div_trunc(p1.y + p2.y, 2))


def center_triangle(triangle: Triangle) -> Triangle:
    """Inverted middle triangle (AB, AC, BC), the hole of one subdivision."""
    center, _ = subdivide(triangle)
    return center


def corner_triangles(triangle: Triangle) -> List[Triangle]:
    """Corner triangles (A, AB, AC), (B, AB, BC), (C, AC, BC) in that order."""
    _, corners = subdivide(triangle)
    return corners


def subdivide(triangle: Triangle) -> Tuple[Triangle, List[Triangle]]:
    """Split a triangle once at its edge midpoints.

    Parameters
    ----------
    triangle : Triangle
        Vertices (A, B, C)

    Returns
    -------
    Tuple[Triangle, List[Triangle]]
        (center, corners) where center = (AB, AC, BC) and corners =
        [(A, AB, AC), (B, AB, BC), (C, AC, BC)]

    Notes
    -----
    Each corner has a quarter of the parent's area up to midpoint
    truncation; the center takes the remaining quarter.
    """
    a, b, c = triangle
    ab = midpoint(a, b)
    ac = midpoint(a, c)
    bc = midpoint(b, c)

    center = Triangle(ab, ac, bc)
    corners = [
        Triangle(a, ab, ac),
        Triangle(b, ab, bc),
        Triangle(c, ac, bc),
    ]
    return center, corners


def max_centered_equilateral_triangle(width: int, height: int) -> Triangle:
    """Largest apex-up equilateral triangle centered on a canvas.

    Parameters
    ----------
    width : int
        Canvas width in pixels
    height : int
        Canvas height in pixels

    Returns
    -------
    Triangle
        (apex, bottom_left, bottom_right), coordinates truncated to int

    Raises
    ------
    ValueError
        If either dimension is not positive

    Notes
    -----
    With s = sqrt(3)/2: when ``width * s > height`` the height constrains
    and side = height / s, otherwise side = width. Every coordinate is
    computed in floating point from the float canvas center and only then
    truncated, which keeps output identical to the reference renders.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")

    s = EQUILATERAL_HEIGHT_RATIO
    side = equilateral_side_length(width, height)

    cx = width / 2.0
    cy = height / 2.0
    half_height = side * s / 2.0
    half_side = side / 2.0

    apex = Point(int(cx), int(cy - half_height))
    bottom_left = Point(int(cx - half_side), int(cy + half_height))
    bottom_right = Point(int(cx + half_side), int(cy + half_height))
    return Triangle(apex, bottom_left, bottom_right)


def equilateral_side_length(width: int, height: int) -> float:
    """Side length used by :func:`max_centered_equilateral_triangle`."""
    s = EQUILATERAL_HEIGHT_RATIO
    if width * s > height:
        return height / s
    return float(width)


def canvas_triangle(width: int, height: int) -> Triangle:
    """Stretched triangle spanning the whole canvas.

    Apex at the top center, base along the bottom pixel row. Not
    equilateral unless the canvas happens to have the right aspect.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
    return Triangle(
        Point(width // 2, 0),
        Point(width - 1, height - 1),
        Point(0, height - 1),
    )


def triangle_bbox(triangle: Triangle) -> Tuple[int, int, int, int]:
    """Integer bounding box (x_min, y_min, x_max, y_max)."""
    xs = [p.x for p in triangle]
    ys = [p.y for p in triangle]
    return min(xs), min(ys), max(xs), max(ys)
