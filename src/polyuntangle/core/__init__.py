"""Core processing algorithms for polyuntangle.

This module contains the decomposition pipeline:

- Geometry primitives (area, point-in-polygon, line intersection, angles)
- Self-intersection search
- Path splitting at crossings
- Fragment classification against the fill rule
- Greedy reassembly of boundary fragments into simple polygons
- Batch processing of independent paths

All functions are pure and stateless, safe for use in worker processes.

Key functions:
- find_self_intersections: Crossings between non-adjacent segments
- is_simple: Whether a path neither crosses nor folds back on itself
- split_at_self_crossings: Cut a path into fragments at its crossings
- decompose: Simple polygons covering a path's filled region

Key classes:
- FragmentAssembler: Joins boundary fragments into closed loops
- PathDecomposer: Runs the full pipeline with diagnostics
- BatchProcessor: Decomposes many paths in parallel
"""

from polyuntangle.core.assembler import AssembledLoop, FragmentAssembler, TurnPreference
from polyuntangle.core.classifier import classify_fragment, classify_fragments, outside_fragments
from polyuntangle.core.decomposer import PathDecomposer, decompose, normalize_path
from polyuntangle.core.geometry import (
    LineIntersection,
    line_intersection,
    point_in_polygon,
    polygon_area,
    signed_area,
    turning_angle,
)
from polyuntangle.core.intersections import find_self_intersections, has_spike, is_simple
from polyuntangle.core.processor import BatchProcessor, process_path
from polyuntangle.core.splitter import (
    build_cut_marks,
    split_at_intersections,
    split_at_marks,
    split_at_self_crossings,
)

__all__ = [
    # Assembly
    "AssembledLoop",
    "FragmentAssembler",
    "TurnPreference",
    # Processing
    "BatchProcessor",
    "PathDecomposer",
    # Geometry functions
    "LineIntersection",
    "build_cut_marks",
    "classify_fragment",
    "classify_fragments",
    "decompose",
    "find_self_intersections",
    "has_spike",
    "is_simple",
    "line_intersection",
    "normalize_path",
    "outside_fragments",
    "point_in_polygon",
    "polygon_area",
    "process_path",
    "signed_area",
    "split_at_intersections",
    "split_at_marks",
    "split_at_self_crossings",
    "turning_angle",
]
