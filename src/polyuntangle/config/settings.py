"""Configuration settings for Polyuntangle."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_EPSILON = 1e-6
DEFAULT_AREA_EPSILON = 1e-9
DEFAULT_PROBE_DIVISOR = 1000.0
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class FillRule(str, Enum):
    """Point-membership rule used to decide which side of a boundary is filled."""

    NONZERO = "nonzero"
    EVENODD = "evenodd"


class GeometryConfig(BaseModel):
    """Numeric tolerances for the decomposition pipeline.

    All values are absolute and expressed in the coordinate units of the
    input path (areas in squared units).
    """

    epsilon: float = Field(
        default=DEFAULT_EPSILON,
        gt=0.0,
        le=1.0,
        description="Distance and parameter tolerance for treating values as equal",
    )
    area_epsilon: float = Field(
        default=DEFAULT_AREA_EPSILON,
        ge=0.0,
        description="Loops with an enclosed area below this are discarded as degenerate",
    )
    probe_divisor: float = Field(
        default=DEFAULT_PROBE_DIVISOR,
        ge=10.0,
        le=1e9,
        description="Segment normal is divided by this to get the classification probe offset",
    )


class DecomposeConfig(BaseModel):
    """Configuration for decomposition."""

    fill_rule: FillRule = Field(
        default=FillRule.NONZERO,
        description="Membership rule for the enclosed region",
    )

    @property
    def nonzero(self) -> bool:
        """Whether the nonzero-winding rule is selected."""
        return self.fill_rule == FillRule.NONZERO


class ProcessingConfig(BaseModel):
    """Batch decomposition over worker processes."""

    max_workers: int | None = Field(
        default=None,
        ge=1,
        description="Worker process count, None lets the executor decide",
    )


class LoggingConfig(BaseModel):
    """Where structured log events go and how much of them."""

    log_file: Path | None = Field(
        default=None,
        description="JSON log destination, no file when None",
    )
    log_level: str = Field(default="WARNING", description="Console threshold")
    file_log_level: str = Field(default="DEBUG", description="Log file threshold")

    @field_validator("log_level", "file_log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level {value!r}, expected one of {', '.join(LOG_LEVELS)}")
        return level


class PolyuntangleSettings(BaseModel):
    """Every option of a decomposition run, grouped by concern."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    decompose: DecomposeConfig = Field(default_factory=DecomposeConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> PolyuntangleSettings:
    """Settings with every option at its default."""
    return PolyuntangleSettings()
