"""Result writer for saving decomposition output.

This module provides the ResultWriter class for writing decomposition results
as JSON with the ``-decomposed`` naming convention.
"""

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from polyuntangle.domain import DecompositionResult
from polyuntangle.exceptions import ResultSaveError


class ResultWriter:
    """Writes decomposition results to a JSON file.

    Example:
        writer = ResultWriter(Path("star-decomposed.json"))
        writer.save([("star", result)])
    """

    def __init__(self, output_path: Path, indent: int | None = 2) -> None:
        """Initialize the writer.

        Args:
            output_path: Destination file
            indent: JSON indentation (None for compact output)
        """
        self._output_path = output_path
        self._indent = indent

    @staticmethod
    def get_output_path(input_path: Path) -> Path:
        """Generate the default output path for an input file.

        Args:
            input_path: Path to the input file

        Returns:
            Sibling path named ``{stem}-decomposed.json``

        Example:
            >>> ResultWriter.get_output_path(Path("shapes/star.json"))
            PosixPath('shapes/star-decomposed.json')
        """
        return input_path.parent / f"{input_path.stem}-decomposed.json"

    @staticmethod
    def to_document(results: Sequence[tuple[str, DecompositionResult | None]]) -> dict[str, Any]:
        """Build the JSON document for a batch of results.

        Failed paths are kept as entries with ``"error": true`` so positions
        still line up with the input file.
        """
        entries: list[dict[str, Any]] = []
        for name, result in results:
            if result is None:
                entries.append({"name": name, "error": True, "polygons": []})
            else:
                entries.append({"name": name, "error": False, **result.to_dict()})
        return {"results": entries}

    def save(self, results: Sequence[tuple[str, DecompositionResult | None]]) -> Path:
        """Write results to the output file.

        Returns:
            The path written to

        Raises:
            ResultSaveError: If the file cannot be written
        """
        document = self.to_document(results)
        try:
            self._output_path.parent.mkdir(parents=True, exist_ok=True)
            self._output_path.write_text(
                json.dumps(document, indent=self._indent) + "\n",
                encoding="utf-8",
            )
        except OSError as e:
            raise ResultSaveError(str(self._output_path), str(e)) from e
        return self._output_path
