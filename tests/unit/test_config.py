"""Unit tests for configuration models."""

import pytest
from pydantic import ValidationError

from polyuntangle.config import (
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


class TestGeometryConfig:
    """Tests for GeometryConfig."""

    def test_defaults(self) -> None:
        """Test default tolerances."""
        config = GeometryConfig()
        assert config.epsilon == DEFAULT_EPSILON == 1e-6
        assert config.area_epsilon == DEFAULT_AREA_EPSILON
        assert config.probe_divisor == DEFAULT_PROBE_DIVISOR == 1000.0

    def test_epsilon_must_be_positive(self) -> None:
        """Test that a zero tolerance is rejected."""
        with pytest.raises(ValidationError):
            GeometryConfig(epsilon=0.0)

    def test_area_epsilon_not_negative(self) -> None:
        """Test that a negative area threshold is rejected."""
        with pytest.raises(ValidationError):
            GeometryConfig(area_epsilon=-1.0)

    def test_probe_divisor_range(self) -> None:
        """Test probe divisor bounds."""
        GeometryConfig(probe_divisor=10.0)
        with pytest.raises(ValidationError):
            GeometryConfig(probe_divisor=1.0)


class TestDecomposeConfig:
    """Tests for DecomposeConfig."""

    def test_default_nonzero(self) -> None:
        """Test that the nonzero rule is the default."""
        assert DecomposeConfig().fill_rule == FillRule.NONZERO
        assert DecomposeConfig().nonzero

    def test_fill_rule_from_string(self) -> None:
        """Test that the fill rule accepts its string value."""
        config = DecomposeConfig(fill_rule="evenodd")
        assert config.fill_rule == FillRule.EVENODD
        assert not config.nonzero

    def test_invalid_fill_rule(self) -> None:
        """Test that unknown fill rules are rejected."""
        with pytest.raises(ValidationError):
            DecomposeConfig(fill_rule="winding")


class TestLoggingConfig:
    """Tests for LoggingConfig."""

    def test_level_normalized(self) -> None:
        """Test that level names are accepted in any case."""
        assert LoggingConfig(log_level="debug").log_level == "DEBUG"

    def test_unknown_level(self) -> None:
        """Test that an unknown level name is rejected."""
        with pytest.raises(ValidationError):
            LoggingConfig(file_log_level="chatty")


class TestProcessingConfig:
    """Tests for ProcessingConfig."""

    def test_zero_workers_rejected(self) -> None:
        """Test that a worker count must be positive."""
        with pytest.raises(ValidationError):
            ProcessingConfig(max_workers=0)


class TestSettings:
    """Tests for PolyuntangleSettings."""

    def test_default_settings(self) -> None:
        """Test the default settings factory."""
        settings = get_default_settings()
        assert settings.processing.max_workers is None
        assert settings.logging.log_file is None
        assert settings.logging.log_level == "WARNING"

    def test_round_trip_through_dump(self) -> None:
        """Test that dumped sections rebuild equal settings for worker processes."""
        settings = PolyuntangleSettings(
            geometry=GeometryConfig(epsilon=1e-4),
            decompose=DecomposeConfig(fill_rule=FillRule.EVENODD),
        )
        rebuilt = PolyuntangleSettings(**settings.model_dump(include={"geometry", "decompose"}))
        assert rebuilt.geometry == settings.geometry
        assert rebuilt.decompose == settings.decompose
