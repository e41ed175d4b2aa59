"""Parallel batch decomposition of independent paths.

Decompositions share no state, so a batch is spread over worker processes
with ProcessPoolExecutor. Paths and results cross the process boundary as
plain dictionaries.

Key components:
- process_path: Top-level picklable function for parallel execution
- BatchProcessor: Orchestrates a batch and collects statistics
"""

import time
import traceback
from collections.abc import Callable, Sequence
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any

import structlog

from polyuntangle.config import PolyuntangleSettings
from polyuntangle.core.decomposer import PathDecomposer
from polyuntangle.core.intersections import PathLike
from polyuntangle.domain import DecompositionResult, Path
from polyuntangle.exceptions import InvalidPathError, ProcessingCancelledError
from polyuntangle.utils import BatchLogger, BatchStats

ProgressCallback = Callable[[int, int, str, bool], None]


def process_path(
    path_dict: dict[str, Any],
    config_dict: dict[str, Any],
    name: str = "path",
) -> dict[str, Any]:
    """Decompose a single serialized path.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.

    Args:
        path_dict: Serialized path (from Path.to_dict())
        config_dict: Serialized settings (geometry and decompose sections)
        name: Label used in error reports

    Returns:
        Dictionary containing either:
        - Success: {"name": str, "result": result_dict, "duration_ms": float}
        - Error: {"name": str, "error": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.perf_counter()

    try:
        path = Path.from_dict(path_dict)
        settings = PolyuntangleSettings(**config_dict)
        result = PathDecomposer(settings).run(path)

        duration_ms = (time.perf_counter() - start_time) * 1000
        return {
            "name": name,
            "result": result.to_dict(),
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.perf_counter() - start_time) * 1000
        return {
            "name": name,
            "error": str(e),
            "error_type": type(e).__name__,
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


@dataclass
class BatchOutcome:
    """Results of a batch, aligned with the input order.

    Attributes:
        results: One entry per input path, None where decomposition failed
        stats: Counts, timing and error details
    """

    results: list[DecompositionResult | None] = field(default_factory=list)
    stats: BatchStats = field(default_factory=BatchStats)


class BatchProcessor:
    """Decomposes many independent paths, in parallel where worthwhile.

    Example:
        processor = BatchProcessor(PolyuntangleSettings())
        outcome = processor.process(paths, max_workers=4)
        for result in outcome.results:
            ...
    """

    def __init__(
        self,
        config: PolyuntangleSettings | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the batch processor.

        Args:
            config: Settings for tolerances, fill rule and worker count
            logger: Bound logger (module logger if None)
        """
        self.config = config or PolyuntangleSettings()
        self.logger = logger or structlog.get_logger(__name__)
        self.batch = BatchLogger(self.logger)

    def process(
        self,
        paths: Sequence[PathLike],
        names: Sequence[str] | None = None,
        max_workers: int | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> BatchOutcome:
        """Decompose every path in ``paths``.

        A failure on one path is recorded in the statistics and does not stop
        the batch.

        Args:
            paths: Paths or point sequences, each treated as closed
            names: Labels for logging (defaults to the input index)
            max_workers: Worker processes (None = config value, 1 = in-process)
            progress_callback: Optional callback(completed, total, name, success)

        Returns:
            BatchOutcome with per-path results and statistics

        Raises:
            ProcessingCancelledError: If processing is interrupted by the user
        """
        self.batch = BatchLogger(self.logger)

        if max_workers is None:
            max_workers = self.config.processing.max_workers
        if names is None:
            names = [str(i) for i in range(len(paths))]

        config_dict = self.config.model_dump(include={"geometry", "decompose"})
        results: list[DecompositionResult | None] = [None] * len(paths)

        pending: list[tuple[int, str, dict[str, Any]]] = []
        for index, (name, path) in enumerate(zip(names, paths, strict=True)):
            try:
                pending.append((index, name, Path.coerce(path, closed=True).to_dict()))
            except (InvalidPathError, TypeError, ValueError) as e:
                self.batch.failed(name, str(e), type(e).__name__)

        self.logger.info(
            "Starting batch decomposition",
            path_count=len(paths),
            max_workers=max_workers,
        )

        if max_workers == 1:
            self._process_serial(pending, config_dict, results, progress_callback)
        else:
            self._process_parallel(pending, config_dict, results, max_workers, progress_callback)

        stats = self.batch.close()
        self.logger.info(
            "Batch complete",
            processed=stats.processed_count,
            errors=stats.error_count,
            polygons=stats.polygons_emitted,
            incomplete_loops=stats.incomplete_loops,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return BatchOutcome(results=results, stats=stats)

    def _record(
        self,
        index: int,
        name: str,
        outcome: dict[str, Any],
        results: list[DecompositionResult | None],
    ) -> bool:
        if "error" in outcome:
            self.batch.failed(
                name,
                outcome["error"],
                outcome.get("error_type", "Exception"),
                traceback=outcome.get("traceback"),
            )
            return False

        result = DecompositionResult.from_dict(outcome["result"])
        results[index] = result
        self.batch.finished(name, result, outcome.get("duration_ms", 0.0))
        return True

    def _process_serial(
        self,
        pending: list[tuple[int, str, dict[str, Any]]],
        config_dict: dict[str, Any],
        results: list[DecompositionResult | None],
        progress_callback: ProgressCallback | None,
    ) -> None:
        for completed, (index, name, path_dict) in enumerate(pending, start=1):
            self.batch.started(name)
            success = self._record(index, name, process_path(path_dict, config_dict, name), results)
            if progress_callback is not None:
                progress_callback(completed, len(pending), name, success)

    def _process_parallel(
        self,
        pending: list[tuple[int, str, dict[str, Any]]],
        config_dict: dict[str, Any],
        results: list[DecompositionResult | None],
        max_workers: int | None,
        progress_callback: ProgressCallback | None,
    ) -> None:
        total = len(pending)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for index, name, path_dict in pending:
                future = executor.submit(process_path, path_dict, config_dict, name)
                pending_futures[future] = (index, name)

            try:
                for future in as_completed(list(pending_futures)):
                    index, name = pending_futures.pop(future)
                    success = False

                    try:
                        success = self._record(index, name, future.result(), results)
                    except Exception as e:
                        # Executor-level error
                        self.batch.failed(
                            name,
                            str(e),
                            type(e).__name__,
                            traceback=traceback.format_exc(),
                        )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, name, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                stats = self.batch.stats
                stats.cancelled_count = len(pending_futures)

                executor.shutdown(wait=True, cancel_futures=True)
                raise ProcessingCancelledError(
                    processed_count=stats.processed_count,
                    pending_count=stats.cancelled_count,
                ) from None
