"""Logging configuration and batch statistics."""

from polyuntangle.utils.logging import BatchLogger, BatchStats, configure_logging

__all__ = [
    "BatchLogger",
    "BatchStats",
    "configure_logging",
]
