"""Path reader for loading JSON path files.

Three document shapes are accepted:
- A bare list of [x, y] pairs (one closed path)
- An object {"points": [[x, y], ...], "closed": true, "name": "..."}
- A batch {"paths": [<list or object>, ...]}
"""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from pydantic import BaseModel, StrictBool, StrictStr, TypeAdapter, ValidationError

from polyuntangle import domain
from polyuntangle.exceptions import InvalidPathError, PathFormatError, PathLoadError

PointList = list[tuple[float, float]]


class PathEntry(BaseModel):
    """One path object; unnamed paths are labelled by their position."""

    points: PointList
    closed: StrictBool = True
    name: StrictStr | None = None


class PathBatch(BaseModel):
    """Document holding several paths under "paths"."""

    paths: list[PathEntry | PointList]


_DOCUMENT = TypeAdapter(PathBatch | PathEntry | PointList)


def _describe(error: ValidationError, limit: int = 3) -> str:
    details = error.errors(include_url=False)
    parts = [
        f"{'.'.join(str(part) for part in detail['loc']) or 'document'}: {detail['msg']}"
        for detail in details[:limit]
    ]
    if len(details) > limit:
        parts.append(f"{len(details) - limit} more")
    return "; ".join(parts)


def _to_path(entry: PathEntry | PointList, index: int, source: str) -> tuple[str, domain.Path]:
    if not isinstance(entry, PathEntry):
        entry = PathEntry(points=entry)
    name = entry.name if entry.name is not None else str(index)

    try:
        return name, domain.Path(points=tuple(entry.points), closed=entry.closed)
    except InvalidPathError as e:
        raise PathFormatError(source, f"path '{name}': {e}") from e


def parse_paths(data: Any, source: str = "<data>") -> list[tuple[str, domain.Path]]:
    """Convert a decoded JSON document into named paths.

    Args:
        data: Decoded JSON value
        source: Label used in error messages

    Returns:
        List of (name, path) pairs in document order

    Raises:
        PathFormatError: If the document shape, a flag or a coordinate is invalid
    """
    try:
        document = _DOCUMENT.validate_python(data)
    except ValidationError as e:
        raise PathFormatError(source, _describe(e)) from e

    entries = document.paths if isinstance(document, PathBatch) else [document]
    return [_to_path(entry, i, source) for i, entry in enumerate(entries)]


class PathReader:
    """Loads paths from a JSON file.

    Example:
        reader = PathReader(Path("star.json"))
        reader.load()
        for name, path in reader.iter_paths():
            print(name, len(path))
    """

    def __init__(self, file_path: Path) -> None:
        """Initialize the path reader.

        Args:
            file_path: Path to the JSON file
        """
        self._file_path = file_path
        self._paths: list[tuple[str, domain.Path]] | None = None

    def load(self) -> None:
        """Read and parse the file.

        Raises:
            PathLoadError: If the file is missing or is not valid JSON
            PathFormatError: If the JSON does not describe paths
        """
        if not self._file_path.exists():
            raise PathLoadError(str(self._file_path), "file not found")

        try:
            data = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise PathLoadError(str(self._file_path), str(e)) from e
        except json.JSONDecodeError as e:
            raise PathLoadError(str(self._file_path), f"invalid JSON: {e}") from e

        self._paths = parse_paths(data, str(self._file_path))

    def _loaded(self) -> list[tuple[str, domain.Path]]:
        if self._paths is None:
            raise RuntimeError("Paths not loaded. Call load() first.")
        return self._paths

    @property
    def path_count(self) -> int:
        """Number of paths in the file.

        Raises:
            RuntimeError: If the file has not been loaded yet
        """
        return len(self._loaded())

    @property
    def names(self) -> list[str]:
        """Path names in file order."""
        return [name for name, _ in self._loaded()]

    @property
    def paths(self) -> list[domain.Path]:
        """Paths in file order."""
        return [path for _, path in self._loaded()]

    def iter_paths(self) -> Iterator[tuple[str, domain.Path]]:
        """Iterate over (name, path) pairs.

        Raises:
            RuntimeError: If the file has not been loaded yet
        """
        yield from self._loaded()
