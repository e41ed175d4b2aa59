"""Self-intersection search for a single path.

Every segment is compared against every later, non-adjacent segment. Before
solving the line equations, candidates are pruned by projecting their
endpoints onto the normal of the reference segment: a candidate whose
endpoints lie strictly on the same side of the reference line cannot cross it.

Only transversal crossings are reported. Collinear overlaps produce parallel
lines and are skipped.
"""

from collections.abc import Sequence

from polyuntangle.config import DEFAULT_EPSILON
from polyuntangle.core.geometry import (
    cross,
    direction,
    dot,
    line_intersection,
    normal,
    normalize,
)
from polyuntangle.domain import Intersection, Path, Point

PathLike = Path | Sequence[Point | Sequence[float]]


def _side(value: float, eps: float) -> int:
    if value > eps:
        return 1
    if value < -eps:
        return -1
    return 0


def _clamp_param(t: float) -> float:
    return max(0.0, min(1.0, t))


def _segments_adjacent(i: int, j: int, path: Path) -> bool:
    if j - i == 1:
        return True
    return path.closed and i == 0 and j == path.last_segment


def find_self_intersections(
    path: PathLike,
    closed: bool | None = None,
    eps: float = DEFAULT_EPSILON,
) -> list[Intersection]:
    """Find every transversal crossing between non-adjacent segments.

    Args:
        path: Path or point sequence to scan
        closed: Whether the wrap-around segment participates (None keeps the
            Path's own flag, raw sequences default to closed)
        eps: Zero threshold for side tests and tolerance on segment parameters

    Returns:
        Intersection records ordered by (segment_a, segment_b), each pair at
        most once, with ``segment_a < segment_b`` and parameters in [0, 1]

    Raises:
        InvalidPathError: If the path has too few points or bad coordinates

    Examples:
        >>> hits = find_self_intersections([(0, 0), (2, 2), (2, 0), (0, 2)])
        >>> [(h.segment_a, h.segment_b, h.point.to_tuple()) for h in hits]
        [(0, 2, (1.0, 1.0))]
    """
    path = Path.coerce(path, closed)
    segment_count = path.segment_count
    intersections: list[Intersection] = []

    for i in range(segment_count):
        a0, a1 = path.segment(i)
        unit_normal = normalize(normal(a0, a1), eps)
        if unit_normal is None:
            # Zero-length segment, no meaningful line to cross
            continue

        base = dot((a0.x, a0.y), unit_normal)

        def side_of(p: Point) -> int:
            return _side(dot((p.x, p.y), unit_normal) - base, eps)

        for j in range(i + 2, segment_count):
            if _segments_adjacent(i, j, path):
                continue

            b0, b1 = path.segment(j)
            s0 = side_of(b0)
            s1 = side_of(b1)
            if s0 == s1 and s0 != 0:
                continue

            hit = line_intersection(a0, a1, b0, b1, eps)
            if hit is None:
                continue
            if not (-eps <= hit.param_a <= 1.0 + eps and -eps <= hit.param_b <= 1.0 + eps):
                continue

            intersections.append(
                Intersection(
                    point=hit.point,
                    segment_a=i,
                    param_a=_clamp_param(hit.param_a),
                    segment_b=j,
                    param_b=_clamp_param(hit.param_b),
                )
            )

    return intersections


def has_spike(path: PathLike, closed: bool | None = None, eps: float = DEFAULT_EPSILON) -> bool:
    """Whether two consecutive segments fold back onto each other.

    A spike is a vertex where the outgoing segment points exactly opposite the
    incoming one, enclosing zero width.
    """
    path = Path.coerce(path, closed)
    n = len(path)
    vertices = range(n) if path.closed else range(1, n - 1)

    for k in vertices:
        incoming = direction(path.vertex(k - 1), path.vertex(k))
        outgoing = direction(path.vertex(k), path.vertex(k + 1))
        u = normalize(incoming, eps)
        v = normalize(outgoing, eps)
        if u is None or v is None:
            continue
        if abs(cross(u, v)) <= eps and dot(u, v) < 0:
            return True

    return False


def is_simple(path: PathLike, closed: bool | None = None, eps: float = DEFAULT_EPSILON) -> bool:
    """Whether the path neither crosses itself nor folds back on itself.

    Examples:
        >>> is_simple([(0, 0), (4, 0), (4, 4), (0, 4)])
        True
        >>> is_simple([(0, 0), (2, 2), (2, 0), (0, 2)])
        False
    """
    path = Path.coerce(path, closed)
    return not find_self_intersections(path, eps=eps) and not has_spike(path, eps=eps)
