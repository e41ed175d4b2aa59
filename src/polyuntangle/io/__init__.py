"""Path file I/O for polyuntangle.

This module handles reading paths from and writing decomposition results to
JSON files. It keeps file-format concerns out of the domain models.

Key responsibilities:
- Parse single-path and batch JSON documents
- Validate coordinates on load
- Write results with the ``-decomposed`` naming convention

Key classes:
- PathReader: Load paths from a JSON file
- ResultWriter: Save decomposition results
"""

from polyuntangle.io.reader import PathReader, parse_paths
from polyuntangle.io.writer import ResultWriter

__all__ = [
    "PathReader",
    "ResultWriter",
    "parse_paths",
]
