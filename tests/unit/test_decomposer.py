"""Unit tests for the decomposition pipeline."""

import math

import pytest

from polyuntangle.config import DecomposeConfig, FillRule, GeometryConfig, PolyuntangleSettings
from polyuntangle.core.decomposer import PathDecomposer, decompose, normalize_path
from polyuntangle.domain import Path, Point
from polyuntangle.exceptions import InvalidPathError


@pytest.fixture
def bowtie() -> list[tuple[float, float]]:
    """Figure-eight quadrilateral crossing at (1, 1)."""
    return [(0, 0), (2, 2), (2, 0), (0, 2)]


@pytest.fixture
def evenodd_settings() -> PolyuntangleSettings:
    return PolyuntangleSettings(decompose=DecomposeConfig(fill_rule=FillRule.EVENODD))


class TestNormalizePath:
    """Tests for normalize_path."""

    def test_clean_path_returned_unchanged(self) -> None:
        """Test that a path without repeats is returned as-is."""
        square = Path(points=((0, 0), (4, 0), (4, 4), (0, 4)))
        assert normalize_path(square) is square

    def test_repeated_points_removed(self) -> None:
        """Test that consecutive duplicates and a closing duplicate are dropped."""
        cleaned = normalize_path([(0, 0), (0, 0), (4, 0), (4, 4), (0, 4), (0, 0)])
        assert cleaned.points == (Point(0, 0), Point(4, 0), Point(4, 4), Point(0, 4))
        assert cleaned.closed

    def test_near_duplicates_removed(self) -> None:
        """Test that points within eps of their predecessor are dropped."""
        cleaned = normalize_path([(0, 0), (4, 0), (4, 1e-9), (4, 4), (0, 4)])
        assert len(cleaned) == 4

    def test_open_path_becomes_closed(self) -> None:
        """Test that decomposition always treats the input as closed."""
        path = Path(points=((0, 0), (4, 0), (4, 4)), closed=False)
        assert normalize_path(path).closed

    def test_too_few_distinct_points(self) -> None:
        """Test that a path collapsing to a segment is rejected."""
        with pytest.raises(InvalidPathError, match="3 distinct points"):
            normalize_path([(0, 0), (0, 0), (1, 1), (1, 1)])


class TestPathDecomposer:
    """Tests for PathDecomposer."""

    def test_default_settings(self) -> None:
        """Test decomposer defaults."""
        decomposer = PathDecomposer()
        assert decomposer.eps == 1e-6
        assert decomposer.nonzero

    def test_evenodd_settings(self, evenodd_settings: PolyuntangleSettings) -> None:
        """Test that the fill rule comes from settings."""
        assert not PathDecomposer(evenodd_settings).nonzero

    def test_bowtie_diagnostics(self, bowtie: list[tuple[float, float]]) -> None:
        """Test pipeline counts for a bowtie."""
        result = PathDecomposer().run(bowtie)
        assert result.intersection_count == 1
        assert result.fragment_count == 3
        assert result.outside_fragment_count == 3
        assert len(result.polygons) == 2
        assert result.is_complete
        assert result.degenerate_loops == 0

    def test_polygons_are_closed_paths(self, bowtie: list[tuple[float, float]]) -> None:
        """Test that every output polygon is a closed Path."""
        for polygon in PathDecomposer().run(bowtie).polygons:
            assert isinstance(polygon, Path)
            assert polygon.closed
            assert polygon.area() == pytest.approx(1.0)

    def test_closing_duplicate_ignored(self) -> None:
        """Test that an explicit closing point does not change the result."""
        result = PathDecomposer().run([(0, 0), (2, 2), (2, 0), (0, 2), (0, 0)])
        assert len(result.polygons) == 2

    def test_invalid_input(self) -> None:
        """Test that non-finite coordinates are rejected."""
        with pytest.raises(InvalidPathError):
            PathDecomposer().run([(0, 0), (math.inf, 0), (1, 1)])

    def test_custom_tolerance(self, bowtie: list[tuple[float, float]]) -> None:
        """Test that geometry settings are honoured."""
        settings = PolyuntangleSettings(geometry=GeometryConfig(epsilon=1e-3, area_epsilon=2.0))
        result = PathDecomposer(settings).run(bowtie)
        assert result.polygons == ()
        assert result.degenerate_loops == 2


class TestDecompose:
    """Tests for the decompose convenience function."""

    def test_square_unchanged(self) -> None:
        """Test that a simple polygon is returned as the only output."""
        polygons = decompose([(0, 0), (4, 0), (4, 4), (0, 4)])
        assert len(polygons) == 1
        assert polygons[0].to_coords() == [(0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0)]

    def test_returns_list_of_paths(self, bowtie: list[tuple[float, float]]) -> None:
        """Test the return type."""
        polygons = decompose(bowtie, nonzero=False)
        assert isinstance(polygons, list)
        assert len(polygons) == 2
