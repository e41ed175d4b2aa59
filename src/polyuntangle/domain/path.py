"""Core geometric types for path representation.

This module defines the fundamental geometric types used throughout polyuntangle:
- Point: An immutable 2D point
- Path: An immutable polyline, optionally closed
- Containment: Result of a point-in-polygon test
"""

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from polyuntangle.exceptions import InvalidPathError


class Containment(Enum):
    """Where a point lies relative to a closed polygon."""

    INSIDE = auto()
    OUTSIDE = auto()
    BOUNDARY = auto()


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def is_finite(self) -> bool:
        """Check that neither coordinate is NaN or infinite."""
        return math.isfinite(self.x) and math.isfinite(self.y)

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))

    @classmethod
    def coerce(cls, value: "Point | Sequence[float]") -> "Point":
        """Build a point from a Point or an (x, y) pair.

        Raises:
            InvalidPathError: If the value is not two-dimensional
        """
        if isinstance(value, Point):
            return value
        if len(value) != 2:
            raise InvalidPathError(f"Expected a 2D point, got {len(value)} components")
        return cls(float(value[0]), float(value[1]))


@dataclass(frozen=True)
class Path:
    """An ordered sequence of points forming a polyline.

    When ``closed`` is true the segment from the last point back to the first
    is part of the geometry. A closed path needs at least 3 points, an open
    path at least 2.

    Attributes:
        points: Vertices in travel order
        closed: Whether the path wraps around
    """

    points: tuple[Point, ...]
    closed: bool = True

    def __post_init__(self) -> None:
        points = tuple(Point.coerce(p) for p in self.points)
        object.__setattr__(self, "points", points)

        minimum = 3 if self.closed else 2
        if len(points) < minimum:
            kind = "closed" if self.closed else "open"
            raise InvalidPathError(
                f"A {kind} path needs at least {minimum} points, got {len(points)}"
            )
        for i, p in enumerate(points):
            if not p.is_finite():
                raise InvalidPathError(f"Point {i} has a non-finite coordinate: {p.to_tuple()}")

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def __getitem__(self, index: int) -> Point:
        return self.points[index]

    @property
    def segment_count(self) -> int:
        """Number of segments, including the wrap-around one for closed paths."""
        n = len(self.points)
        return n if self.closed else n - 1

    @property
    def last_segment(self) -> int:
        """Index of the final segment."""
        return self.segment_count - 1

    def vertex(self, index: int) -> Point:
        """Vertex at ``index`` with wrap-around for indices past the end."""
        return self.points[index % len(self.points)]

    def segment(self, index: int) -> tuple[Point, Point]:
        """Start and end point of segment ``index``."""
        return self.vertex(index), self.vertex(index + 1)

    def signed_area(self) -> float:
        """Shoelace area, positive for counter-clockwise paths."""
        from polyuntangle.core.geometry import signed_area

        return signed_area(self.points)

    def area(self) -> float:
        """Unsigned enclosed area."""
        return abs(self.signed_area())

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Calculate bounding box of the path.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return (min(xs), min(ys), max(xs), max(ys))

    def to_coords(self) -> list[tuple[float, float]]:
        """Points as plain (x, y) tuples."""
        return [p.to_tuple() for p in self.points]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the path
        """
        return {
            "points": [list(p.to_tuple()) for p in self.points],
            "closed": self.closed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Path":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a path

        Returns:
            Path instance
        """
        return cls(
            points=tuple(Point.coerce(p) for p in data["points"]),
            closed=data.get("closed", True),
        )

    @classmethod
    def coerce(
        cls,
        value: "Path | Sequence[Point | Sequence[float]]",
        closed: bool | None = None,
    ) -> "Path":
        """Build a path from a Path or a raw point sequence.

        A Path keeps its own ``closed`` flag unless one is given explicitly.
        Raw sequences default to closed.
        """
        if isinstance(value, Path):
            if closed is None or closed == value.closed:
                return value
            return cls(points=value.points, closed=closed)
        return cls(points=tuple(value), closed=True if closed is None else closed)
