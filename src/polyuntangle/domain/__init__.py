"""Domain models for polyuntangle.

This module contains the value types passed between the stages of the
decomposition pipeline. All models are:

- Immutable (frozen dataclasses)
- Serializable for inter-process communication (batch processing)

Key classes:
- Point: A 2D point
- Path: A polyline, optionally closed
- Intersection: A self-crossing of a path
- CutMark: A position along a path
- Fragment: An open piece of a path
- DecompositionResult: Simple polygons plus diagnostics
"""

from polyuntangle.domain.fragment import CutMark, Fragment, FragmentTag, Intersection
from polyuntangle.domain.path import Containment, Path, Point
from polyuntangle.domain.result import DecompositionResult

__all__: list[str] = [
    # Enums
    "Containment",
    "FragmentTag",
    # Core types
    "Point",
    "Path",
    "Intersection",
    "CutMark",
    "Fragment",
    "DecompositionResult",
]
