"""Decomposition of a self-intersecting path into simple polygons.

This module wires the pipeline stages together:
1. Normalize the input path
2. Find self-crossings
3. Split the path into fragments at the crossings
4. Keep fragments on the boundary of the filled region
5. Reassemble them into simple closed polygons
"""

import structlog

from polyuntangle.config import (
    DEFAULT_EPSILON,
    DecomposeConfig,
    FillRule,
    GeometryConfig,
    PolyuntangleSettings,
)
from polyuntangle.core.assembler import FragmentAssembler
from polyuntangle.core.classifier import classify_fragments, outside_fragments
from polyuntangle.core.geometry import points_close
from polyuntangle.core.intersections import PathLike, find_self_intersections
from polyuntangle.core.splitter import split_at_intersections
from polyuntangle.domain import DecompositionResult, Path
from polyuntangle.exceptions import InvalidPathError


def normalize_path(path: PathLike, eps: float = DEFAULT_EPSILON) -> Path:
    """Clean up a closed input path.

    Drops repeated consecutive points and an explicit closing point equal to
    the first one.

    Raises:
        InvalidPathError: If fewer than 3 distinct points remain
    """
    raw = Path.coerce(path, closed=True)

    cleaned = [raw.points[0]]
    for p in raw.points[1:]:
        if not points_close(p, cleaned[-1], eps):
            cleaned.append(p)
    while len(cleaned) > 1 and points_close(cleaned[-1], cleaned[0], eps):
        cleaned.pop()

    if len(cleaned) < 3:
        raise InvalidPathError(
            f"A closed path needs at least 3 distinct points, got {len(cleaned)}"
        )
    if len(cleaned) == len(raw.points):
        return raw
    return Path(points=tuple(cleaned), closed=True)


class PathDecomposer:
    """Turns one closed path into simple polygons with the same filled region.

    Example:
        decomposer = PathDecomposer(PolyuntangleSettings())
        result = decomposer.run([(0, 0), (2, 2), (2, 0), (0, 2)])
        for polygon in result.polygons:
            print(polygon.to_coords())
    """

    def __init__(self, settings: PolyuntangleSettings | None = None) -> None:
        """Initialize the decomposer.

        Args:
            settings: Tolerances and fill rule (defaults if None)
        """
        self.settings = settings or PolyuntangleSettings()
        self.logger = structlog.get_logger(__name__)

    @property
    def eps(self) -> float:
        return self.settings.geometry.epsilon

    @property
    def nonzero(self) -> bool:
        return self.settings.decompose.nonzero

    def run(self, path: PathLike) -> DecompositionResult:
        """Decompose a closed path.

        Args:
            path: Path or point sequence, treated as closed

        Returns:
            DecompositionResult with the polygons and pipeline counts

        Raises:
            InvalidPathError: If the path has fewer than 3 distinct points or
                a non-finite coordinate
        """
        geometry = self.settings.geometry
        cleaned = normalize_path(path, self.eps)

        intersections = find_self_intersections(cleaned, eps=self.eps)
        fragments = split_at_intersections(cleaned, intersections, self.eps)
        tagged = classify_fragments(
            fragments,
            cleaned,
            nonzero=self.nonzero,
            eps=self.eps,
            probe_divisor=geometry.probe_divisor,
        )
        boundary = outside_fragments(tagged)

        assembler = FragmentAssembler(eps=self.eps, area_eps=geometry.area_epsilon)
        assembly = assembler.assemble(boundary)

        result = DecompositionResult(
            polygons=tuple(Path(points=loop.points, closed=True) for loop in assembly.loops),
            intersection_count=len(intersections),
            fragment_count=len(fragments),
            outside_fragment_count=len(boundary),
            incomplete_loops=assembly.incomplete_loops,
            degenerate_loops=assembly.degenerate_loops,
        )

        self.logger.debug(
            "Path decomposed",
            points=len(cleaned),
            intersections=result.intersection_count,
            fragments=result.fragment_count,
            outside_fragments=result.outside_fragment_count,
            polygons=len(result.polygons),
            rounds=assembly.rounds,
        )
        if not result.is_complete:
            self.logger.warning(
                "Decomposition used best-effort loop closing",
                incomplete_loops=result.incomplete_loops,
            )

        return result


def decompose(
    path: PathLike,
    nonzero: bool = True,
    eps: float = DEFAULT_EPSILON,
) -> list[Path]:
    """Decompose a closed path into simple closed polygons.

    Args:
        path: Path or point sequence, treated as closed
        nonzero: True for the nonzero-winding rule, False for even-odd
        eps: Geometric tolerance

    Returns:
        Simple closed polygons covering the same filled region

    Raises:
        InvalidPathError: If the path has fewer than 3 distinct points or
            a non-finite coordinate

    Examples:
        >>> [p.to_coords() for p in decompose([(0, 0), (4, 0), (4, 4), (0, 4)])]
        [[(0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0)]]
    """
    settings = PolyuntangleSettings(
        geometry=GeometryConfig(epsilon=eps),
        decompose=DecomposeConfig(fill_rule=FillRule.NONZERO if nonzero else FillRule.EVENODD),
    )
    return list(PathDecomposer(settings).run(path).polygons)
