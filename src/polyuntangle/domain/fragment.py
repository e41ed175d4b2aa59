"""Types produced while cutting a path apart at its self-crossings.

- Intersection: A transversal crossing between two segments of one path
- CutMark: A position along a path, as (segment index, parameter)
- FragmentTag: Inside/Outside label assigned by the classifier
- Fragment: An open piece of a path between two cut marks
"""

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Any

from polyuntangle.domain.path import Point
from polyuntangle.exceptions import InvalidPathError


class FragmentTag(Enum):
    """Whether a fragment has the filled region on both sides or only one."""

    INSIDE = auto()
    OUTSIDE = auto()


@dataclass(frozen=True, slots=True, order=True)
class CutMark:
    """Location along a path where a fragment boundary occurs.

    Ordered lexicographically by (segment, param).

    Attributes:
        segment: Segment index
        param: Position along the segment, 0 at its start vertex and 1 at its end
    """

    segment: int
    param: float

    def to_tuple(self) -> tuple[int, float]:
        return (self.segment, self.param)


@dataclass(frozen=True, slots=True)
class Intersection:
    """A crossing between two non-adjacent segments of the same path.

    Attributes:
        point: Crossing location
        segment_a: Lower segment index
        param_a: Position of the crossing along segment_a
        segment_b: Higher segment index
        param_b: Position of the crossing along segment_b
    """

    point: Point
    segment_a: int
    param_a: float
    segment_b: int
    param_b: float

    def cut_marks(self) -> tuple[CutMark, CutMark]:
        """The two path positions this crossing cuts."""
        return CutMark(self.segment_a, self.param_a), CutMark(self.segment_b, self.param_b)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "point": list(self.point.to_tuple()),
            "segment_a": self.segment_a,
            "param_a": self.param_a,
            "segment_b": self.segment_b,
            "param_b": self.param_b,
        }


@dataclass(frozen=True, slots=True)
class Fragment:
    """An open sub-path cut out of a larger path.

    Attributes:
        points: Vertices in travel order, at least 2
        start: Cut mark the fragment starts at (None for synthesized fragments)
        end: Cut mark the fragment ends at (None for synthesized fragments)
        tag: Classification, None until classified
    """

    points: tuple[Point, ...]
    start: CutMark | None = None
    end: CutMark | None = None
    tag: FragmentTag | None = None

    def __post_init__(self) -> None:
        if len(self.points) < 2:
            raise InvalidPathError(f"A fragment needs at least 2 points, got {len(self.points)}")

    def __len__(self) -> int:
        return len(self.points)

    @property
    def first(self) -> Point:
        return self.points[0]

    @property
    def last(self) -> Point:
        return self.points[-1]

    @property
    def min_x(self) -> float:
        """Smallest x coordinate over all points."""
        return min(p.x for p in self.points)

    def reversed(self) -> "Fragment":
        """Same fragment traversed in the opposite direction."""
        return Fragment(
            points=tuple(reversed(self.points)),
            start=self.end,
            end=self.start,
            tag=self.tag,
        )

    def with_tag(self, tag: FragmentTag) -> "Fragment":
        """Copy of this fragment carrying ``tag``."""
        return replace(self, tag=tag)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "points": [list(p.to_tuple()) for p in self.points],
            "start": list(self.start.to_tuple()) if self.start else None,
            "end": list(self.end.to_tuple()) if self.end else None,
            "tag": self.tag.name.lower() if self.tag else None,
        }
