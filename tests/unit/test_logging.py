"""Unit tests for logging configuration and batch statistics."""

import json
import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from polyuntangle.domain import DecompositionResult
from polyuntangle.domain import Path as PolyPath
from polyuntangle.utils import BatchLogger, BatchStats, configure_logging


@pytest.fixture
def two_triangles() -> DecompositionResult:
    triangle = PolyPath.coerce([(0, 0), (1, 0), (0, 1)])
    return DecompositionResult(polygons=(triangle, triangle), intersection_count=1, incomplete_loops=1)


class TestBatchStats:
    """Tests for BatchStats."""

    def test_duration(self) -> None:
        """Test duration from start and finish times."""
        stats = BatchStats(started_at=10.0, finished_at=12.5)
        assert stats.duration_seconds == 2.5

    def test_unfinished_has_no_duration(self) -> None:
        """Test that a batch still running reports zero duration."""
        assert BatchStats(started_at=10.0).duration_seconds == 0.0

    def test_average_time(self) -> None:
        """Test the per-path average."""
        assert BatchStats().avg_path_time_ms is None
        assert BatchStats(path_timings_ms=[2.0, 4.0]).avg_path_time_ms == 3.0


class TestBatchLogger:
    """Tests for BatchLogger."""

    def test_finished_updates_totals(self, two_triangles: DecompositionResult) -> None:
        """Test that a decomposed path is counted with its polygons."""
        log = MagicMock()
        batch = BatchLogger(log)
        batch.finished("star", two_triangles, duration_ms=3.2)

        assert batch.stats.processed_count == 1
        assert batch.stats.polygons_emitted == 2
        assert batch.stats.incomplete_loops == 1
        assert batch.stats.path_timings_ms == [3.2]
        assert log.info.call_args.kwargs["intersections"] == 1

    def test_failed_updates_totals(self) -> None:
        """Test that a failure is recorded with its message."""
        log = MagicMock()
        batch = BatchLogger(log)
        batch.failed("bad", "boom", "ValueError")

        assert batch.stats.error_count == 1
        assert batch.stats.errors == [("bad", "boom")]
        assert log.error.call_args.kwargs["error_type"] == "ValueError"

    def test_close_stamps_finish(self) -> None:
        """Test that closing the batch fixes its duration."""
        stats = BatchLogger(MagicMock()).close()
        assert stats.finished_at is not None
        assert stats.duration_seconds >= 0


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_file_receives_json(self, tmp_path: Path, two_triangles: DecompositionResult) -> None:
        """Test that each event is written to the file as one JSON object."""
        log_file = tmp_path / "polyuntangle.log"
        logger = configure_logging(log_file=log_file, console_level="ERROR")
        BatchLogger(logger).finished("star", two_triangles, duration_ms=1.0)

        for handler in logging.getLogger().handlers:
            handler.flush()
        events = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        decomposed = [e for e in events if e["event"] == "Path decomposed"]
        assert decomposed[0]["path"] == "star"
        assert decomposed[0]["polygons"] == 2
        assert decomposed[0]["level"] == "info"

    def test_reconfigure_replaces_handlers(self, tmp_path: Path) -> None:
        """Test that repeated configuration does not stack handlers."""
        root = logging.getLogger()
        configure_logging(log_file=tmp_path / "a.log", quiet=True)
        count = len(root.handlers)
        configure_logging(log_file=tmp_path / "b.log", quiet=True)
        assert len(root.handlers) == count
