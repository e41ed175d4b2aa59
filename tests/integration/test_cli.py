"""End-to-end tests for the command line interface."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from polyuntangle import __version__
from polyuntangle.cli import app

runner = CliRunner()

BOWTIE = [[0, 0], [2, 2], [2, 0], [0, 2]]
SQUARE = [[0, 0], [4, 0], [4, 4], [0, 4]]


@pytest.fixture
def bowtie_file(tmp_path: Path) -> Path:
    path = tmp_path / "bowtie.json"
    path.write_text(json.dumps(BOWTIE), encoding="utf-8")
    return path


@pytest.fixture
def batch_file(tmp_path: Path) -> Path:
    path = tmp_path / "shapes.json"
    path.write_text(
        json.dumps(
            {
                "paths": [
                    {"name": "bowtie", "points": BOWTIE},
                    {"name": "square", "points": SQUARE},
                ]
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def square_file(tmp_path: Path) -> Path:
    path = tmp_path / "square.json"
    path.write_text(json.dumps({"name": "square", "points": SQUARE}), encoding="utf-8")
    return path


class TestVersion:
    """Tests for --version."""

    def test_version(self) -> None:
        """Test that the version is printed."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestDecomposeCommand:
    """Tests for the decompose command."""

    def test_default_output_path(self, bowtie_file: Path) -> None:
        """Test that results land next to the input by default."""
        result = runner.invoke(app, ["decompose", str(bowtie_file), "--quiet"])
        assert result.exit_code == 0, result.output

        output = bowtie_file.parent / "bowtie-decomposed.json"
        data = json.loads(output.read_text(encoding="utf-8"))
        entry = data["results"][0]
        assert entry["name"] == "0"
        assert entry["error"] is False
        assert len(entry["polygons"]) == 2
        assert entry["intersection_count"] == 1

    def test_explicit_output(self, batch_file: Path, tmp_path: Path) -> None:
        """Test a batch written to a chosen location."""
        output = tmp_path / "out" / "result.json"
        result = runner.invoke(
            app,
            ["decompose", str(batch_file), "-o", str(output), "-j", "1", "--verbose"],
        )
        assert result.exit_code == 0, result.output
        assert "Complete" in result.output

        data = json.loads(output.read_text(encoding="utf-8"))
        assert [e["name"] for e in data["results"]] == ["bowtie", "square"]
        assert [len(e["polygons"]) for e in data["results"]] == [2, 1]

    def test_evenodd(self, bowtie_file: Path, tmp_path: Path) -> None:
        """Test the even-odd fill rule option."""
        output = tmp_path / "evenodd.json"
        result = runner.invoke(
            app,
            ["decompose", str(bowtie_file), "--fill-rule", "EvenOdd", "-o", str(output), "-q"],
        )
        assert result.exit_code == 0, result.output
        assert len(json.loads(output.read_text(encoding="utf-8"))["results"][0]["polygons"]) == 2

    def test_invalid_fill_rule(self, bowtie_file: Path) -> None:
        """Test that an unknown fill rule is rejected."""
        result = runner.invoke(app, ["decompose", str(bowtie_file), "--fill-rule", "winding"])
        assert result.exit_code == 1
        assert "Invalid fill rule" in result.output

    def test_invalid_epsilon(self, bowtie_file: Path) -> None:
        """Test that a non-positive tolerance is rejected."""
        result = runner.invoke(app, ["decompose", str(bowtie_file), "--eps", "0"])
        assert result.exit_code == 1
        assert "Invalid options" in result.output

    def test_verbose_and_quiet(self, bowtie_file: Path) -> None:
        """Test that --verbose and --quiet are mutually exclusive."""
        result = runner.invoke(app, ["decompose", str(bowtie_file), "-v", "-q"])
        assert result.exit_code == 1

    def test_missing_input(self, tmp_path: Path) -> None:
        """Test a nonexistent input file."""
        result = runner.invoke(app, ["decompose", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_directory_input(self, tmp_path: Path) -> None:
        """Test that a directory is not accepted as input."""
        result = runner.invoke(app, ["decompose", str(tmp_path)])
        assert result.exit_code == 1
        assert "not a file" in result.output

    def test_malformed_file(self, tmp_path: Path) -> None:
        """Test that an invalid document is reported."""
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"paths": [[[0, 0], [1, 1]]]}), encoding="utf-8")
        result = runner.invoke(app, ["decompose", str(bad)])
        assert result.exit_code == 1
        assert "Invalid path file" in result.output

    def test_degenerate_path_fails_batch(self, tmp_path: Path) -> None:
        """Test that a path collapsing to a segment gives a failed entry and exit 1."""
        source = tmp_path / "flat.json"
        source.write_text(
            json.dumps({"paths": [[[0, 0], [0, 0], [1, 1]], BOWTIE]}),
            encoding="utf-8",
        )
        output = tmp_path / "flat-out.json"
        result = runner.invoke(app, ["decompose", str(source), "-o", str(output), "-j", "1", "-q"])
        assert result.exit_code == 1

        entries = json.loads(output.read_text(encoding="utf-8"))["results"]
        assert entries[0]["error"] is True
        assert entries[1]["error"] is False

    def test_log_file(self, bowtie_file: Path, tmp_path: Path) -> None:
        """Test that detailed logs are written when requested."""
        log_file = tmp_path / "run.log"
        result = runner.invoke(
            app,
            ["decompose", str(bowtie_file), "--log-file", str(log_file), "-q"],
        )
        assert result.exit_code == 0, result.output
        assert log_file.exists()
        assert "Path decomposed" in log_file.read_text(encoding="utf-8")


class TestIntersectionsCommand:
    """Tests for the intersections command."""

    def test_lists_crossing(self, bowtie_file: Path) -> None:
        """Test that the bowtie crossing is listed."""
        result = runner.invoke(app, ["intersections", str(bowtie_file)])
        assert result.exit_code == 0, result.output
        assert "1 intersection" in result.output

    def test_none_found(self, square_file: Path) -> None:
        """Test output for a simple path."""
        result = runner.invoke(app, ["intersections", str(square_file)])
        assert result.exit_code == 0
        assert "No self-intersections" in result.output

    def test_open_flag(self, tmp_path: Path) -> None:
        """Test that --open drops the closing segment."""
        # Only the closing edge crosses another segment
        source = tmp_path / "hook.json"
        source.write_text(json.dumps([[0, 2], [0, 0], [2, 2], [2, 0]]), encoding="utf-8")

        closed = runner.invoke(app, ["intersections", str(source)])
        assert closed.exit_code == 0
        assert "1 intersection" in closed.output

        opened = runner.invoke(app, ["intersections", str(source), "--open"])
        assert opened.exit_code == 0
        assert "No self-intersections" in opened.output

    def test_open_flag_keeps_interior_crossing(self, bowtie_file: Path) -> None:
        """Test that crossings between interior segments survive --open."""
        result = runner.invoke(app, ["intersections", str(bowtie_file), "--open"])
        assert result.exit_code == 0
        assert "1 intersection" in result.output

    def test_batch_names(self, batch_file: Path) -> None:
        """Test that each path in a batch is labelled."""
        result = runner.invoke(app, ["intersections", str(batch_file)])
        assert result.exit_code == 0
        assert "bowtie" in result.output
        assert "square" in result.output


class TestCheckCommand:
    """Tests for the check command."""

    def test_simple(self, square_file: Path) -> None:
        """Test that a simple path exits 0."""
        result = runner.invoke(app, ["check", str(square_file)])
        assert result.exit_code == 0
        assert "square: simple" in result.output

    def test_not_simple(self, batch_file: Path) -> None:
        """Test that any crossing path makes the command exit 2."""
        result = runner.invoke(app, ["check", str(batch_file)])
        assert result.exit_code == 2
        assert "bowtie: self-intersecting" in result.output
        assert "square: simple" in result.output
