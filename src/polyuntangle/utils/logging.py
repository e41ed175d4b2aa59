"""Structured logging setup and batch bookkeeping."""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from polyuntangle.domain import DecompositionResult

# Applied to structlog events and to records from plain stdlib loggers alike
_SHARED_PROCESSORS: list = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
]

_installed_handlers: list[logging.Handler] = []


def _structlog_handler(handler: logging.Handler, level: str, *renderers) -> logging.Handler:
    handler.setLevel(level.upper())
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_SHARED_PROCESSORS,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderers],
        )
    )
    return handler


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Route structlog events through the standard library root logger.

    The log file, if any, receives one JSON object per event. The console gets
    a plain key=value rendering. Calling this again replaces the handlers
    installed by the previous call.

    Args:
        log_file: JSON log destination (no file output if None)
        console_level: Threshold for the console handler
        file_level: Threshold for the file handler
        quiet: Only show errors on the console

    Returns:
        Logger bound to the "polyuntangle" name
    """
    root = logging.getLogger()
    for handler in _installed_handlers:
        root.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    if log_file is not None:
        _installed_handlers.append(
            _structlog_handler(
                logging.FileHandler(log_file, encoding="utf-8"),
                file_level,
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            )
        )
    _installed_handlers.append(
        _structlog_handler(
            logging.StreamHandler(),
            "ERROR" if quiet else console_level,
            structlog.dev.ConsoleRenderer(colors=False),
        )
    )

    for handler in _installed_handlers:
        root.addHandler(handler)
    root.setLevel(logging.DEBUG)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_SHARED_PROCESSORS,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("polyuntangle")
    logger.debug("Logging configured", log_file=str(log_file) if log_file else None)
    return logger


@dataclass
class BatchStats:
    """Running totals for one batch of decompositions."""

    processed_count: int = 0
    error_count: int = 0
    polygons_emitted: int = 0
    incomplete_loops: int = 0
    cancelled_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    path_timings_ms: list[float] = field(default_factory=list)
    started_at: float = field(default_factory=time.perf_counter)
    finished_at: float | None = None

    @property
    def duration_seconds(self) -> float:
        if self.finished_at is None:
            return 0.0
        return self.finished_at - self.started_at

    @property
    def avg_path_time_ms(self) -> float | None:
        if not self.path_timings_ms:
            return None
        return sum(self.path_timings_ms) / len(self.path_timings_ms)


class BatchLogger:
    """Logs the per-path events of a batch and keeps its totals."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self.log = logger
        self.stats = BatchStats()

    def started(self, name: str) -> None:
        self.log.debug("Decomposing path", path=name)

    def finished(self, name: str, result: DecompositionResult, duration_ms: float) -> None:
        """Count a successful decomposition."""
        self.stats.processed_count += 1
        self.stats.polygons_emitted += len(result.polygons)
        self.stats.incomplete_loops += result.incomplete_loops
        self.stats.path_timings_ms.append(duration_ms)
        self.log.info(
            "Path decomposed",
            path=name,
            polygons=len(result.polygons),
            intersections=result.intersection_count,
            incomplete_loops=result.incomplete_loops,
            duration_ms=round(duration_ms, 2),
        )

    def failed(
        self,
        name: str,
        message: str,
        error_type: str,
        traceback: str | None = None,
    ) -> None:
        """Count a failed decomposition.

        The message is kept in ``stats.errors`` for the end-of-run summary.
        """
        self.stats.error_count += 1
        self.stats.errors.append((name, message))
        self.log.error(
            "Path decomposition failed",
            path=name,
            error=message,
            error_type=error_type,
            traceback=traceback,
        )

    def close(self) -> BatchStats:
        self.stats.finished_at = time.perf_counter()
        return self.stats
