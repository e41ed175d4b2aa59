"""Geometric primitives used by the decomposition pipeline.

Vectors are plain (x, y) tuples and positions are Points. Covered here:
vector arithmetic and turning angles, shoelace areas, containment under the
nonzero and even-odd rules, and line intersection with segment parameters.
"""

import math
from collections.abc import Sequence
from typing import NamedTuple

from polyuntangle.config import DEFAULT_EPSILON
from polyuntangle.domain import Containment, Point

Vector = tuple[float, float]


class LineIntersection(NamedTuple):
    """Crossing of two infinite lines, each given by a segment.

    Attributes:
        point: Crossing location
        param_a: Position along the first segment (0 at its start, 1 at its end)
        param_b: Position along the second segment
    """

    point: Point
    param_a: float
    param_b: float


def direction(p1: Point, p2: Point) -> Vector:
    """Vector from p1 to p2."""
    return (p2.x - p1.x, p2.y - p1.y)


def dot(u: Vector, v: Vector) -> float:
    """Dot product of two vectors."""
    return u[0] * v[0] + u[1] * v[1]


def cross(u: Vector, v: Vector) -> float:
    """Z component of the cross product of two 2D vectors."""
    return u[0] * v[1] - u[1] * v[0]


def normal(p1: Point, p2: Point) -> Vector:
    """Left-hand normal of the segment p1->p2, scaled by the segment length."""
    dx, dy = direction(p1, p2)
    return (-dy, dx)


def normalize(v: Vector, eps: float = DEFAULT_EPSILON) -> Vector | None:
    """Scale ``v`` to unit length.

    Returns:
        Unit vector, or None when ``v`` is shorter than ``eps``
    """
    length = math.hypot(v[0], v[1])
    if length < eps:
        return None
    return (v[0] / length, v[1] / length)


def turning_angle(incoming: Vector, outgoing: Vector) -> float:
    """Signed angle turned when continuing along ``outgoing`` after ``incoming``.

    Positive values turn counter-clockwise (left), negative values clockwise
    (right). The result lies in [-pi, pi].
    """
    return math.atan2(cross(incoming, outgoing), dot(incoming, outgoing))


def points_close(p1: Point, p2: Point, eps: float = DEFAULT_EPSILON) -> bool:
    """Whether two points coincide within ``eps``."""
    return math.hypot(p1.x - p2.x, p1.y - p2.y) <= eps


def interpolate(p1: Point, p2: Point, t: float) -> Point:
    """Point at parameter ``t`` along the segment p1->p2."""
    return Point(p1.x + t * (p2.x - p1.x), p1.y + t * (p2.y - p1.y))


def signed_area(points: Sequence[Point]) -> float:
    """Shoelace area of the closed ring through ``points``.

    Counter-clockwise rings are positive and clockwise rings negative. Fewer
    than three points enclose nothing.

    Examples:
        >>> signed_area([Point(0, 0), Point(2, 0), Point(2, 1), Point(0, 1)])
        2.0
        >>> signed_area([Point(0, 0), Point(0, 1), Point(2, 1), Point(2, 0)])
        -2.0
    """
    if len(points) < 3:
        return 0.0
    twice_area = sum(cross((a.x, a.y), (b.x, b.y)) for a, b in zip(points, [*points[1:], points[0]]))
    return twice_area / 2.0


def polygon_area(points: Sequence[Point]) -> float:
    """Unsigned area enclosed by a polygon."""
    return abs(signed_area(points))


def nearest_point_on_segment(point: Point, seg_start: Point, seg_end: Point) -> tuple[Point, float]:
    """Closest point of the segment seg_start->seg_end to ``point``, and its distance.

    A zero-length segment answers with its start point.
    """
    along = direction(seg_start, seg_end)
    length_sq = dot(along, along)
    t = 0.0
    if length_sq > 0.0:
        t = min(1.0, max(0.0, dot(direction(seg_start, point), along) / length_sq))
    nearest = interpolate(seg_start, seg_end, t)
    return nearest, math.hypot(point.x - nearest.x, point.y - nearest.y)


def point_in_polygon(
    point: Point,
    polygon: Sequence[Point],
    nonzero: bool = True,
    eps: float = DEFAULT_EPSILON,
) -> Containment:
    """Classify a point against a closed polygon.

    Points within ``eps`` of an edge are on the boundary. Otherwise a
    horizontal ray is cast towards +x; under the nonzero rule signed crossings
    are summed into a winding number, under the even-odd rule the crossing
    count parity decides.

    Args:
        point: The point to test
        polygon: Polygon vertices; the closing edge is implied
        nonzero: True for the nonzero-winding rule, False for even-odd
        eps: Boundary distance tolerance

    Returns:
        Containment of the point

    Examples:
        >>> square = [Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2)]
        >>> point_in_polygon(Point(1, 1), square)
        <Containment.INSIDE: 1>
        >>> point_in_polygon(Point(3, 3), square)
        <Containment.OUTSIDE: 2>
    """
    n = len(polygon)
    if n < 3:
        return Containment.OUTSIDE

    winding = 0
    crossings = 0
    px, py = point.x, point.y

    for i in range(n):
        a = polygon[i]
        b = polygon[(i + 1) % n]

        _, distance = nearest_point_on_segment(point, a, b)
        if distance <= eps:
            return Containment.BOUNDARY

        # Count a crossing when exactly one endpoint is strictly below py
        if (a.y < py) == (b.y < py):
            continue

        t = (py - a.y) / (b.y - a.y)
        x_intercept = a.x + t * (b.x - a.x)
        if x_intercept > px:
            crossings += 1
            winding += 1 if b.y > a.y else -1

    inside = winding != 0 if nonzero else crossings % 2 == 1
    return Containment.INSIDE if inside else Containment.OUTSIDE


def line_intersection(
    a0: Point,
    a1: Point,
    b0: Point,
    b1: Point,
    eps: float = DEFAULT_EPSILON,
) -> LineIntersection | None:
    """Intersect the infinite lines through segments a0->a1 and b0->b1.

    The returned parameters locate the crossing relative to each segment and
    are not clamped; callers decide what range to accept.

    Args:
        a0: Start of the first segment
        a1: End of the first segment
        b0: Start of the second segment
        b1: End of the second segment
        eps: Lines whose directions differ by less than this (as the sine of
            the angle between them) count as parallel

    Returns:
        LineIntersection, or None if the lines are parallel or a segment has
        zero length

    Examples:
        >>> hit = line_intersection(Point(0, 0), Point(2, 2), Point(0, 2), Point(2, 0))
        >>> hit.point, hit.param_a, hit.param_b
        (Point(x=1.0, y=1.0), 0.5, 0.5)
    """
    d = direction(a0, a1)
    e = direction(b0, b1)

    denom = cross(d, e)
    scale = math.hypot(*d) * math.hypot(*e)
    if scale == 0.0 or abs(denom) <= eps * scale:
        return None

    w = direction(a0, b0)
    t = cross(w, e) / denom
    u = cross(w, d) / denom

    return LineIntersection(interpolate(a0, a1, t), t, u)
