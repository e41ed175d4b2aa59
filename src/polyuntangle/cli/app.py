"""CLI application entry point for polyuntangle.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.markup import escape

from polyuntangle import __version__
from polyuntangle.cli.output import (
    SYM_ERR,
    SYM_OK,
    console,
    create_progress,
    print_cancellation_summary,
    print_error,
    print_header,
    print_input_info,
    print_intersections,
    print_results,
    print_step,
    print_success,
)
from polyuntangle.config import (
    DEFAULT_AREA_EPSILON,
    DEFAULT_EPSILON,
    DecomposeConfig,
    FillRule,
    GeometryConfig,
    LoggingConfig,
    PolyuntangleSettings,
    ProcessingConfig,
)
from polyuntangle.core import BatchProcessor, find_self_intersections, is_simple
from polyuntangle.exceptions import (
    PathFileError,
    PolyuntangleError,
    ProcessingCancelledError,
)
from polyuntangle.io import PathReader, ResultWriter
from polyuntangle.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="polyuntangle",
    help="Decompose self-intersecting polygons into simple polygons.",
    add_completion=False,
    no_args_is_help=True,
)

InputArgument = Annotated[
    Path,
    typer.Argument(
        help="JSON file with one path or a {\"paths\": [...]} batch",
        show_default=False,
    ),
]
EpsOption = Annotated[
    float,
    typer.Option("--eps", help="Geometric tolerance in path units"),
]
OpenOption = Annotated[
    bool,
    typer.Option("--open", help="Treat paths as open polylines"),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Polyuntangle[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Decompose self-intersecting polygons into simple polygons."""


def _load_paths(input_file: Path) -> PathReader:
    """Validate the input location and load its paths.

    Raises:
        typer.Exit: If the file is missing or cannot be parsed
    """
    if not input_file.exists():
        print_error(
            f"Input file not found: {input_file}",
            details=f"The file '{input_file}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_file.is_file():
        print_error(
            f"Input path is not a file: {input_file}",
            details="Please provide a path to a JSON path file.",
        )
        raise typer.Exit(code=1)

    reader = PathReader(input_file)
    try:
        reader.load()
    except PathFileError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None
    return reader


@app.command("decompose")
def decompose_command(
    input_file: InputArgument,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-decomposed.json)",
        ),
    ] = None,
    fill_rule: Annotated[
        str,
        typer.Option(
            "--fill-rule",
            "-r",
            help="Point membership rule (nonzero|evenodd)",
        ),
    ] = "nonzero",
    eps: EpsOption = DEFAULT_EPSILON,
    area_eps: Annotated[
        float,
        typer.Option(
            "--area-eps",
            help="Loops with a smaller enclosed area are discarded",
        ),
    ] = DEFAULT_AREA_EPSILON,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Split every path in a file into simple closed polygons.

    Each path is treated as closed. The filled region is determined by the
    fill rule; regions covered more than once lose their inner boundaries.

    Example:
        polyuntangle decompose star.json --fill-rule evenodd
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    try:
        rule = FillRule(fill_rule.lower())
    except ValueError:
        print_error(
            f"Invalid fill rule: {fill_rule}",
            details="Valid values: nonzero, evenodd",
        )
        raise typer.Exit(code=1) from None

    try:
        settings = PolyuntangleSettings(
            geometry=GeometryConfig(epsilon=eps, area_epsilon=area_eps),
            decompose=DecomposeConfig(fill_rule=rule),
            processing=ProcessingConfig(max_workers=workers),
            logging=LoggingConfig(log_file=log_file, log_level=log_level),
        )
    except ValidationError as e:
        print_error("Invalid options", details=str(e))
        raise typer.Exit(code=1) from None

    if not quiet:
        print_header(__version__)
        print_step("Loading paths")

    reader = _load_paths(input_file)
    names = reader.names
    paths = reader.paths

    if not quiet:
        print_input_info(
            file_path=str(input_file),
            path_count=len(paths),
            point_count=sum(len(p) for p in paths),
        )

    output_path = output if output is not None else ResultWriter.get_output_path(input_file)
    # A single path is not worth a process pool
    max_workers = workers if workers is not None else (1 if len(paths) == 1 else None)

    try:
        logger = configure_logging(
            log_file=settings.logging.log_file,
            console_level=settings.logging.log_level,
            file_level=settings.logging.file_log_level,
            quiet=quiet,
        )
        processor = BatchProcessor(settings, logger=logger)

        if not quiet:
            print_step(f"Decomposing ({rule.value})")
            with create_progress() as progress:
                task_id = progress.add_task(f"Decomposing {len(paths)} paths", total=len(paths))

                def update_progress(completed: int, *_: object) -> None:
                    progress.update(task_id, completed=completed)

                outcome = processor.process(
                    paths,
                    names=names,
                    max_workers=max_workers,
                    progress_callback=update_progress,
                )
        else:
            outcome = processor.process(paths, names=names, max_workers=max_workers)

        ResultWriter(output_path).save(list(zip(names, outcome.results, strict=True)))

    except ProcessingCancelledError as e:
        if not quiet:
            print_cancellation_summary(processed=e.processed_count, cancelled=e.pending_count)
        raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code
    except PolyuntangleError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    stats = outcome.stats
    if not quiet:
        print_results(names, outcome.results, verbose=verbose)
        print_success(output_path, stats)

    if stats.error_count:
        raise typer.Exit(code=1)


@app.command("intersections")
def intersections_command(
    input_file: InputArgument,
    eps: EpsOption = DEFAULT_EPSILON,
    open_path: OpenOption = False,
) -> None:
    """List the self-intersections of every path in a file."""
    reader = _load_paths(input_file)
    multiple = reader.path_count > 1

    for name, path in reader.iter_paths():
        if multiple:
            console.print(f"\n[bold]{escape(name)}[/bold]")
        try:
            hits = find_self_intersections(path, closed=False if open_path else None, eps=eps)
        except PolyuntangleError as e:
            print_error(f"{name}: {e}")
            raise typer.Exit(code=1) from None
        print_intersections(hits)


@app.command("check")
def check_command(
    input_file: InputArgument,
    eps: EpsOption = DEFAULT_EPSILON,
    open_path: OpenOption = False,
) -> None:
    """Report whether each path in a file is simple.

    Exits with code 2 if any path crosses or folds back onto itself.
    """
    reader = _load_paths(input_file)
    all_simple = True

    for name, path in reader.iter_paths():
        try:
            simple = is_simple(path, closed=False if open_path else None, eps=eps)
        except PolyuntangleError as e:
            print_error(f"{name}: {e}")
            raise typer.Exit(code=1) from None

        if simple:
            console.print(f"  [green]{SYM_OK}[/green] {escape(name)}: simple")
        else:
            all_simple = False
            console.print(f"  [red]{SYM_ERR}[/red] {escape(name)}: self-intersecting")

    if not all_simple:
        raise typer.Exit(code=2)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
