"""Configuration management for polyuntangle.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Tolerances used by the decomposition pipeline
- DecomposeConfig: Fill rule selection
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- PolyuntangleSettings: Main application settings
"""

from polyuntangle.config.settings import (
    DEFAULT_AREA_EPSILON,
    DEFAULT_EPSILON,
    DEFAULT_PROBE_DIVISOR,
    DecomposeConfig,
    FillRule,
    GeometryConfig,
    LoggingConfig,
    PolyuntangleSettings,
    ProcessingConfig,
    get_default_settings,
)

__all__ = [
    "DEFAULT_AREA_EPSILON",
    "DEFAULT_EPSILON",
    "DEFAULT_PROBE_DIVISOR",
    "DecomposeConfig",
    "FillRule",
    "GeometryConfig",
    "LoggingConfig",
    "PolyuntangleSettings",
    "ProcessingConfig",
    "get_default_settings",
]
