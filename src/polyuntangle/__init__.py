"""Polyuntangle - Decompose self-intersecting polygons into simple ones.

Polyuntangle takes a closed polyline that may cross itself and returns the set
of simple (non-self-intersecting) closed polygons that cover the same region
under the nonzero-winding or even-odd fill rule.

Example:
    >>> from polyuntangle import decompose
    >>> bowtie = [(0, 0), (2, 2), (2, 0), (0, 2)]
    >>> len(decompose(bowtie))
    2
"""

from polyuntangle.core import (
    decompose,
    find_self_intersections,
    is_simple,
    split_at_self_crossings,
)

__version__ = "0.1.0"
__author__ = "Polyuntangle Developers"

__all__ = [
    "__author__",
    "__version__",
    "decompose",
    "find_self_intersections",
    "is_simple",
    "split_at_self_crossings",
]
