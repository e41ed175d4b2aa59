"""Terminal rendering for the polyuntangle commands."""

from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn
from rich.table import Table

from polyuntangle.domain import DecompositionResult, Intersection
from polyuntangle.utils import BatchStats

console = Console()

SYM_STEP = "▸"
SYM_OK = "✓"
SYM_ERR = "✗"
SYM_WARN = "!"
SYM_DOT = "·"


def _plural(count: int, word: str) -> str:
    return f"{count:,} {word}" if count == 1 else f"{count:,} {word}s"


def _duration(seconds: float) -> str:
    if seconds >= 60:
        minutes, rest = divmod(seconds, 60)
        return f"{int(minutes)}m {rest:.1f}s"
    if seconds >= 1:
        return f"{seconds:.1f}s"
    return f"{seconds * 1000:.0f}ms"


def create_progress() -> Progress:
    """Progress bar showing decomposed/total paths and elapsed time."""
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
    )


def print_header(version: str) -> None:
    console.rule(f"[bold]polyuntangle[/bold] {version}", align="left")


def print_step(message: str) -> None:
    console.print(f"\n{SYM_STEP} {escape(message)}")


def print_input_info(file_path: str, path_count: int, point_count: int) -> None:
    console.print(f"  {escape(file_path)}", highlight=False)
    console.print(f"  {_plural(path_count, 'path')} {SYM_DOT} {_plural(point_count, 'point')}")


def print_results(
    names: Sequence[str],
    results: Sequence[DecompositionResult | None],
    verbose: bool,
) -> None:
    """Print one table row per path.

    Failed paths are marked in red and paths with loops closed by the
    fallback in yellow. ``verbose`` adds the pipeline counts.
    """
    table = Table(box=None, show_header=verbose, padding=(0, 1, 0, 2), header_style="bold")
    table.add_column("")
    table.add_column("path")
    table.add_column("polygons", justify="right")
    if verbose:
        table.add_column("crossings", justify="right")
        table.add_column("fragments", justify="right")
        table.add_column("kept", justify="right")
    table.add_column("")

    for name, result in zip(names, results, strict=True):
        if result is None:
            table.add_row(f"[red]{SYM_ERR}[/red]", escape(name), "[red]failed[/red]")
            continue

        marker = f"[green]{SYM_OK}[/green]" if result.is_complete else f"[yellow]{SYM_WARN}[/yellow]"
        row = [marker, escape(name), str(len(result.polygons))]
        if verbose:
            row += [
                str(result.intersection_count),
                str(result.fragment_count),
                str(result.outside_fragment_count),
            ]
        row.append("" if result.is_complete else f"[yellow]{result.incomplete_loops} incomplete[/yellow]")
        table.add_row(*row)

    console.print(table)


def print_intersections(intersections: Sequence[Intersection]) -> None:
    if not intersections:
        console.print(f"  [green]{SYM_OK}[/green] No self-intersections")
        return

    table = Table(header_style="bold")
    for column in ("#", "x", "y", "seg A", "t", "seg B", "u"):
        table.add_column(column, justify="right")
    for i, hit in enumerate(intersections):
        table.add_row(
            str(i),
            f"{hit.point.x:.6g}",
            f"{hit.point.y:.6g}",
            str(hit.segment_a),
            f"{hit.param_a:.4f}",
            str(hit.segment_b),
            f"{hit.param_b:.4f}",
        )
    console.print(table)
    console.print(f"  {_plural(len(intersections), 'intersection')}")


def print_success(output_path: Path, stats: BatchStats) -> None:
    """Print the end-of-run summary for a batch written to ``output_path``."""
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {_duration(stats.duration_seconds)}")
    console.print(f"  {escape(str(output_path))}", style="bold", highlight=False)

    errors = "red" if stats.error_count else "green"
    console.print(
        f"  {_plural(stats.processed_count, 'path')} {SYM_DOT} "
        f"{_plural(stats.polygons_emitted, 'polygon')} {SYM_DOT} "
        f"[{errors}]{_plural(stats.error_count, 'error')}[/{errors}]"
    )
    if stats.incomplete_loops:
        console.print(
            f"  [yellow]{_plural(stats.incomplete_loops, 'loop')} closed without a matching fragment[/yellow]"
        )
    if stats.avg_path_time_ms is not None:
        console.print(f"  {stats.avg_path_time_ms:.1f}ms per path")


def print_error(message: str, details: str | None = None) -> None:
    """Print an error and optional detail text, both taken literally."""
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {escape(message)}")
    if details:
        console.print(f"  {escape(details)}")


def print_cancellation_summary(processed: int, cancelled: int) -> None:
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {processed} decomposed {SYM_DOT} {cancelled} pending tasks dropped")
    console.print("  No output file written")
