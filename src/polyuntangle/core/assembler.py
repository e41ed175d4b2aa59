"""Reassembly of boundary fragments into simple closed loops.

Fragments tagged OUTSIDE are joined end to end. Each round starts from the
fragment reaching furthest left, which is guaranteed to lie on an extreme part
of the boundary, and greedily extends a path from it twice: once always taking
the most clockwise continuation at a junction and once the most
counter-clockwise. The loop enclosing the smaller area is kept; fragments the
other attempt used go back to the pool for later rounds.
"""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum, auto

import structlog

from polyuntangle.config import DEFAULT_AREA_EPSILON, DEFAULT_EPSILON
from polyuntangle.core.geometry import direction, points_close, polygon_area, turning_angle
from polyuntangle.domain import Fragment, Point

logger = structlog.get_logger(__name__)


class TurnPreference(Enum):
    """Which continuation to take where several fragments meet."""

    RIGHTMOST = auto()
    LEFTMOST = auto()


@dataclass(frozen=True)
class AssembledLoop:
    """A loop built from pool fragments.

    Attributes:
        points: Loop vertices without a repeated closing point
        used: Pool indices of the fragments consumed by the loop
        leftovers: Path pieces cut off while closing the loop, to be requeued
        complete: False when extension stopped for lack of a continuation
    """

    points: tuple[Point, ...]
    used: frozenset[int]
    leftovers: tuple[Fragment, ...] = ()
    complete: bool = True

    @property
    def area(self) -> float:
        return polygon_area(self.points)


@dataclass(frozen=True)
class AssemblyResult:
    """Loops emitted by the assembler and how many were thrown away."""

    loops: tuple[AssembledLoop, ...] = ()
    degenerate_loops: int = 0
    rounds: int = field(default=0, compare=False)

    @property
    def incomplete_loops(self) -> int:
        return sum(1 for loop in self.loops if not loop.complete)


class FragmentAssembler:
    """Joins open fragments into simple closed loops.

    Example:
        assembler = FragmentAssembler(eps=1e-6)
        result = assembler.assemble(outside_fragments)
        polygons = [loop.points for loop in result.loops]
    """

    def __init__(
        self,
        eps: float = DEFAULT_EPSILON,
        area_eps: float = DEFAULT_AREA_EPSILON,
    ) -> None:
        """Initialize the assembler.

        Args:
            eps: Distance below which fragment endpoints are joined
            area_eps: Loops enclosing no more than this area are discarded
        """
        self.eps = eps
        self.area_eps = area_eps

    def assemble(self, fragments: Iterable[Fragment]) -> AssemblyResult:
        """Consume every fragment, building loops until the pool is empty.

        Args:
            fragments: Open fragments whose endpoints meet in junctions

        Returns:
            AssemblyResult with the non-degenerate loops in discovery order
        """
        pool = list(fragments)
        loops: list[AssembledLoop] = []
        degenerate = 0
        rounds = 0

        while pool:
            rounds += 1
            start = min(range(len(pool)), key=lambda i: pool[i].min_x)

            rightmost = self.extend(pool, start, TurnPreference.RIGHTMOST)
            leftmost = self.extend(pool, start, TurnPreference.LEFTMOST)
            chosen = rightmost if rightmost.area <= leftmost.area else leftmost

            pool = [f for i, f in enumerate(pool) if i not in chosen.used]
            pool.extend(chosen.leftovers)

            if len(chosen.points) < 3 or chosen.area <= self.area_eps:
                degenerate += 1
                logger.debug(
                    "Discarded degenerate loop",
                    points=len(chosen.points),
                    area=chosen.area,
                )
                continue

            if not chosen.complete:
                logger.warning(
                    "Accepted loop without a closing continuation",
                    points=len(chosen.points),
                    area=chosen.area,
                )
            loops.append(chosen)

        return AssemblyResult(loops=tuple(loops), degenerate_loops=degenerate, rounds=rounds)

    def extend(
        self,
        pool: Sequence[Fragment],
        start: int,
        preference: TurnPreference,
    ) -> AssembledLoop:
        """Grow a loop from ``pool[start]`` until it closes or gets stuck.

        At every junction the candidates are the unused fragments with an
        endpoint on the current end, oriented to leave from it. The candidate
        with the smallest (RIGHTMOST) or largest (LEFTMOST) turning angle wins.

        If the chosen fragment ends on a vertex already inside the path, the
        loop closes there. Fragments of the path before that vertex are left
        unused; one that runs across the vertex is cut and its head piece is
        returned as a leftover.

        Args:
            pool: Fragments available for this round
            start: Index of the fragment to start from
            preference: Turn to favour at junctions

        Returns:
            The loop, which is incomplete if no continuation was found
        """
        path = list(pool[start].points)
        used = [start]
        # Index in path where each used fragment begins
        offsets = [0]

        if len(path) > 2 and points_close(path[-1], path[0], self.eps):
            return AssembledLoop(points=tuple(path[:-1]), used=frozenset(used))

        while True:
            choice = self._best_continuation(pool, used, path, preference)
            if choice is None:
                return AssembledLoop(points=tuple(path), used=frozenset(used), complete=False)

            index, oriented = choice
            far = oriented.last

            if points_close(far, path[0], self.eps):
                path.extend(oriented.points[1:-1])
                return AssembledLoop(points=tuple(path), used=frozenset([*used, index]))

            k = self._find_vertex(path, far)
            if k is not None:
                kept, leftovers = self._release_head(used, offsets, path, k)
                loop = path[k:] + list(oriented.points[1:-1])
                return AssembledLoop(
                    points=tuple(loop),
                    used=frozenset([*kept, index]),
                    leftovers=leftovers,
                )

            used.append(index)
            offsets.append(len(path) - 1)
            path.extend(oriented.points[1:])

    def _release_head(
        self,
        used: Sequence[int],
        offsets: Sequence[int],
        path: Sequence[Point],
        k: int,
    ) -> tuple[list[int], tuple[Fragment, ...]]:
        kept: list[int] = []
        leftovers: list[Fragment] = []
        ends = [*offsets[1:], len(path) - 1]

        for index, begin, end in zip(used, offsets, ends, strict=True):
            if end <= k:
                continue
            kept.append(index)
            if begin < k:
                leftovers.append(Fragment(points=tuple(path[begin : k + 1])))

        return kept, tuple(leftovers)

    def _best_continuation(
        self,
        pool: Sequence[Fragment],
        used: Sequence[int],
        path: Sequence[Point],
        preference: TurnPreference,
    ) -> tuple[int, Fragment] | None:
        end = path[-1]
        heading = direction(path[-2], end)

        best: tuple[float, int, Fragment] | None = None
        for index, fragment in enumerate(pool):
            if index in used:
                continue
            for oriented in self._orientations(fragment, end):
                angle = turning_angle(heading, direction(oriented.points[0], oriented.points[1]))
                if best is None:
                    best = (angle, index, oriented)
                elif preference is TurnPreference.RIGHTMOST and angle < best[0]:
                    best = (angle, index, oriented)
                elif preference is TurnPreference.LEFTMOST and angle > best[0]:
                    best = (angle, index, oriented)

        if best is None:
            return None
        return best[1], best[2]

    def _orientations(self, fragment: Fragment, end: Point) -> Iterator[Fragment]:
        if points_close(fragment.first, end, self.eps):
            yield fragment
        if points_close(fragment.last, end, self.eps):
            yield fragment.reversed()

    def _find_vertex(self, path: Sequence[Point], target: Point) -> int | None:
        for k in range(1, len(path)):
            if points_close(path[k], target, self.eps):
                return k
        return None
