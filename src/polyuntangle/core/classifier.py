"""Inside/outside classification of path fragments.

A fragment lying on the outer boundary of the filled region has fill on
exactly one side. A fragment with fill on both sides runs through a region
covered more than once and does not belong to any output boundary.
"""

import math
from collections.abc import Iterable

from polyuntangle.config import DEFAULT_EPSILON, DEFAULT_PROBE_DIVISOR
from polyuntangle.core.geometry import normal, point_in_polygon
from polyuntangle.domain import Containment, Fragment, FragmentTag, Path, Point


def probe_points(
    fragment: Fragment,
    probe_divisor: float = DEFAULT_PROBE_DIVISOR,
) -> tuple[Point, Point]:
    """Two points just left and right of the middle of the first segment.

    The offset is the segment normal divided by ``probe_divisor``, so it
    scales with the segment length.
    """
    a, b = fragment.points[0], fragment.points[1]
    nx, ny = normal(a, b)
    mx, my = (a.x + b.x) / 2.0, (a.y + b.y) / 2.0
    ox, oy = nx / probe_divisor, ny / probe_divisor
    return Point(mx + ox, my + oy), Point(mx - ox, my - oy)


def classify_fragment(
    fragment: Fragment,
    boundary: Path,
    nonzero: bool = True,
    eps: float = DEFAULT_EPSILON,
    probe_divisor: float = DEFAULT_PROBE_DIVISOR,
) -> FragmentTag:
    """Tag a fragment against the original, unsplit path.

    Args:
        fragment: Fragment to classify
        boundary: The original closed path the fragment was cut from
        nonzero: True for the nonzero-winding rule, False for even-odd
        eps: Geometric tolerance
        probe_divisor: Scale of the probe offset (see ``probe_points``)

    Returns:
        INSIDE if both probes are inside the filled region, else OUTSIDE
    """
    left, right = probe_points(fragment, probe_divisor)
    # Probes sit closer to the fragment than eps on very short segments
    offset = math.hypot(left.x - right.x, left.y - right.y) / 2.0
    tolerance = min(eps, offset / 2.0)

    polygon = boundary.points
    left_in = point_in_polygon(left, polygon, nonzero, tolerance) == Containment.INSIDE
    right_in = point_in_polygon(right, polygon, nonzero, tolerance) == Containment.INSIDE

    return FragmentTag.INSIDE if left_in and right_in else FragmentTag.OUTSIDE


def classify_fragments(
    fragments: Iterable[Fragment],
    boundary: Path,
    nonzero: bool = True,
    eps: float = DEFAULT_EPSILON,
    probe_divisor: float = DEFAULT_PROBE_DIVISOR,
) -> list[Fragment]:
    """Return copies of ``fragments`` carrying their Inside/Outside tag."""
    return [
        fragment.with_tag(classify_fragment(fragment, boundary, nonzero, eps, probe_divisor))
        for fragment in fragments
    ]


def outside_fragments(fragments: Iterable[Fragment]) -> list[Fragment]:
    """Fragments tagged OUTSIDE, in their original order."""
    return [f for f in fragments if f.tag == FragmentTag.OUTSIDE]
