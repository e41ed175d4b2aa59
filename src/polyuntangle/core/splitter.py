"""Cutting a path into fragments at its self-crossings.

Cut marks locate positions along the path as (segment, parameter). The path
start, the path end and both sides of every self-crossing become marks; the
path between consecutive marks becomes one fragment. Fragments come out in
travel order and together cover the path exactly once.
"""

from collections.abc import Iterable, Mapping, Sequence
from itertools import pairwise

from polyuntangle.config import DEFAULT_EPSILON
from polyuntangle.core.geometry import interpolate, points_close
from polyuntangle.core.intersections import PathLike, find_self_intersections
from polyuntangle.domain import CutMark, Fragment, Intersection, Path, Point


def normalize_mark(mark: CutMark, last_segment: int, eps: float = DEFAULT_EPSILON) -> CutMark:
    """Snap a mark that sits on a vertex to its canonical form.

    A mark at the end of a segment is the same position as the start of the
    next one, so it is rewritten as (segment + 1, 0). Only the final segment
    keeps a parameter of 1.
    """
    if mark.param <= eps:
        return CutMark(mark.segment, 0.0)
    if mark.param >= 1.0 - eps:
        if mark.segment < last_segment:
            return CutMark(mark.segment + 1, 0.0)
        return CutMark(mark.segment, 1.0)
    return mark


def build_cut_marks(
    path: Path,
    intersections: Iterable[Intersection],
    eps: float = DEFAULT_EPSILON,
) -> list[CutMark]:
    """Sorted, de-duplicated cut marks for a path and its crossings.

    Args:
        path: The path being cut
        intersections: Self-crossings of ``path``
        eps: Marks on the same segment closer than this are merged

    Returns:
        Marks starting with (0, 0) and ending with (last segment, 1)
    """
    last = path.last_segment
    marks = [CutMark(0, 0.0), CutMark(last, 1.0)]
    for record in intersections:
        marks.extend(record.cut_marks())

    ordered = sorted(normalize_mark(m, last, eps) for m in marks)

    unique: list[CutMark] = []
    for mark in ordered:
        if unique and unique[-1].segment == mark.segment and abs(mark.param - unique[-1].param) <= eps:
            continue
        unique.append(mark)
    return unique


def point_at(path: Path, mark: CutMark) -> Point:
    """Position of a cut mark, using the exact vertex when it sits on one."""
    if mark.param == 0.0:
        return path.vertex(mark.segment)
    if mark.param == 1.0:
        return path.vertex(mark.segment + 1)
    start, end = path.segment(mark.segment)
    return interpolate(start, end, mark.param)


def _drop_repeats(points: Sequence[Point], eps: float) -> list[Point]:
    kept = [points[0]]
    for p in points[1:]:
        if not points_close(p, kept[-1], eps):
            kept.append(p)
    # Keep the exact end point so neighbouring fragments still chain
    if len(kept) > 1 and kept[-1] is not points[-1]:
        kept[-1] = points[-1]
    return kept


def split_at_marks(
    path: Path,
    marks: Sequence[CutMark],
    eps: float = DEFAULT_EPSILON,
    anchors: Mapping[CutMark, Point] | None = None,
) -> list[Fragment]:
    """Extract the sub-path between each pair of consecutive marks.

    Args:
        path: The path being cut
        marks: Sorted cut marks
        eps: Consecutive points closer than this are merged
        anchors: Optional exact positions for marks, used instead of
            interpolating along the segment

    Returns:
        Fragments of at least 2 points in travel order
    """
    anchors = anchors or {}

    def locate(mark: CutMark) -> Point:
        return anchors.get(mark) or point_at(path, mark)

    fragments: list[Fragment] = []
    for start, end in pairwise(marks):
        points = [locate(start)]
        for k in range(start.segment + 1, end.segment + 1):
            if CutMark(k, 0.0) < end:
                points.append(path.vertex(k))
        points.append(locate(end))

        points = _drop_repeats(points, eps)
        if len(points) >= 2:
            fragments.append(Fragment(points=tuple(points), start=start, end=end))

    return fragments


def split_at_self_crossings(
    path: PathLike,
    closed: bool | None = None,
    eps: float = DEFAULT_EPSILON,
) -> list[Fragment]:
    """Cut a path at every self-crossing.

    Args:
        path: Path or point sequence
        closed: Whether the wrap-around segment participates (None keeps the
            Path's own flag, raw sequences default to closed)
        eps: Geometric tolerance

    Returns:
        Fragments that, concatenated in order, reproduce the path

    Raises:
        InvalidPathError: If the path has too few points or bad coordinates
    """
    path = Path.coerce(path, closed)
    return split_at_intersections(path, find_self_intersections(path, eps=eps), eps)


def split_at_intersections(
    path: Path,
    intersections: Sequence[Intersection],
    eps: float = DEFAULT_EPSILON,
) -> list[Fragment]:
    """Cut a path at already computed self-crossings.

    Crossing points are reused as the exact end points of the fragments
    meeting there, so fragments from both sides of a crossing join exactly.
    """
    anchors: dict[CutMark, Point] = {}
    for record in intersections:
        for mark in record.cut_marks():
            snapped = normalize_mark(mark, path.last_segment, eps)
            if 0.0 < snapped.param < 1.0:
                anchors.setdefault(snapped, record.point)

    marks = build_cut_marks(path, intersections, eps)
    return split_at_marks(path, marks, eps, anchors)
