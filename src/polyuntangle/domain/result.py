"""Decomposition result with pipeline diagnostics."""

from dataclasses import dataclass
from typing import Any

from polyuntangle.domain.path import Path


@dataclass(frozen=True)
class DecompositionResult:
    """Output of decomposing one path.

    Attributes:
        polygons: Simple closed polygons covering the filled region
        intersection_count: Self-crossings found in the input
        fragment_count: Fragments produced by splitting at the crossings
        outside_fragment_count: Fragments kept for reassembly
        incomplete_loops: Loops accepted because no continuation was found
        degenerate_loops: Loops discarded for having near-zero area
    """

    polygons: tuple[Path, ...]
    intersection_count: int = 0
    fragment_count: int = 0
    outside_fragment_count: int = 0
    incomplete_loops: int = 0
    degenerate_loops: int = 0

    @property
    def is_complete(self) -> bool:
        """False when any emitted loop came from the best-effort fallback."""
        return self.incomplete_loops == 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC and file output."""
        return {
            "polygons": [[list(p.to_tuple()) for p in poly.points] for poly in self.polygons],
            "intersection_count": self.intersection_count,
            "fragment_count": self.fragment_count,
            "outside_fragment_count": self.outside_fragment_count,
            "incomplete_loops": self.incomplete_loops,
            "degenerate_loops": self.degenerate_loops,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DecompositionResult":
        """Deserialize from dictionary."""
        return cls(
            polygons=tuple(Path(points=tuple(poly), closed=True) for poly in data["polygons"]),
            intersection_count=data.get("intersection_count", 0),
            fragment_count=data.get("fragment_count", 0),
            outside_fragment_count=data.get("outside_fragment_count", 0),
            incomplete_loops=data.get("incomplete_loops", 0),
            degenerate_loops=data.get("degenerate_loops", 0),
        )
