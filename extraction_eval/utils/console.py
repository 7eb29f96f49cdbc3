"""
Rich console helpers for the evaluation CLI.

Two output modes share one set of functions:

Human mode (--format text):
    - Spinners, colored tables and a summary panel

Agent mode (--format json):
    - Nothing decorative; messages and results are buffered and written to
      stdout as a single JSON document by flush_json()

Examples:
    >>> from extraction_eval.utils.console import output_mode, spinner, success
    >>> output_mode.format = "text"
    >>> with spinner("Scoring runs..."):
    ...     result = score()
    >>> success("Scored 4 runs")
"""

from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from ..evals.schema import EvaluationRecord


class OutputMode:
    """
    Output mode of the CLI.

    Attributes:
        format: "text" (human) or "json" (agent)
        quiet: Suppress info messages and tables in human mode
    """

    def __init__(self, format_type: str = "text", quiet: bool = False):
        if format_type not in ["text", "json"]:
            raise ValueError(f"Invalid format: {format_type}. Must be 'text' or 'json'")

        self.format = format_type
        self.quiet = quiet
        self._json_buffer: dict[str, Any] = {}

    def is_human(self) -> bool:
        return self.format == "text"

    def is_agent(self) -> bool:
        return self.format == "json"

    def add_json(self, key: str, value: Any) -> None:
        """Buffer a key for the JSON document written by flush_json()."""
        self._json_buffer[key] = value

    def flush_json(self) -> None:
        """
        Write the buffered JSON document to stdout and clear the buffer.

        No-op in human mode or when nothing was buffered.
        """
        if self.is_agent() and self._json_buffer:
            json.dump(self._json_buffer, sys.stdout, indent=2)
            sys.stdout.write("\n")
            sys.stdout.flush()
            self._json_buffer.clear()

    def reset(self) -> None:
        """Return to human mode with an empty buffer."""
        self.format = "text"
        self.quiet = False
        self._json_buffer.clear()


# Set by CLI flags
output_mode = OutputMode()

console = Console()
console_err = Console(stderr=True)


@contextmanager
def spinner(message: str):
    """Show a spinner while the block runs (human mode only)."""
    if output_mode.is_human():
        with console.status(f"[bold blue]{message}", spinner="dots") as status:
            yield status
    else:
        yield None


def success(message: str) -> None:
    if output_mode.is_human():
        console.print(f"[green]✓[/green] {message}")
    elif output_mode.is_agent():
        output_mode.add_json("status", "success")
        output_mode.add_json("message", message)


def error(message: str) -> None:
    """Print an error to stderr, or buffer it under "error" in agent mode."""
    if output_mode.is_human():
        console_err.print(f"[red]✗[/red] {message}", style="red")
    elif output_mode.is_agent():
        output_mode.add_json("status", "error")
        output_mode.add_json("error", message)


def warning(message: str) -> None:
    if output_mode.is_human():
        console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")
    elif output_mode.is_agent():
        output_mode.add_json("warning", message)


def info(message: str) -> None:
    if output_mode.is_human() and not output_mode.quiet:
        console.print(f"[blue]ℹ[/blue] {message}")


def _score(value: float) -> str:
    return f"{value:.3f}"


def print_metrics_table(records: list[EvaluationRecord]) -> None:
    """
    Print one row per evaluated run with both metrics side by side.

    Human mode: Rich table, failed runs shown with their status in red
    Agent mode: Buffers the records under "records"
    """
    if output_mode.is_agent():
        output_mode.add_json(
            "records",
            [record.model_dump(mode="json", by_alias=True) for record in records],
        )
        return

    if output_mode.quiet:
        return

    table = Table(title="Evaluation Results", box=box.ROUNDED)

    table.add_column("Prompt", style="cyan", no_wrap=True)
    table.add_column("Model", style="magenta")
    table.add_column("Task")
    table.add_column("Classifier")
    table.add_column("Scope")
    table.add_column("Std P", justify="right")
    table.add_column("Std R", justify="right")
    table.add_column("Std F1", justify="right", style="green")
    table.add_column("Sem P", justify="right")
    table.add_column("Sem R", justify="right")
    table.add_column("Sem F1", justify="right", style="green")
    table.add_column("TPw", justify="right")
    table.add_column("Status", justify="center")

    for record in records:
        standard = record.standard_metrics
        semantic = record.semantic_metrics

        standard_cells = (
            [_score(standard.precision), _score(standard.recall), _score(standard.f1)]
            if standard
            else ["-", "-", "-"]
        )
        semantic_cells = (
            [
                _score(semantic.precision),
                _score(semantic.recall),
                _score(semantic.f1),
                f"{semantic.tp_weighted:.2f}",
            ]
            if semantic
            else ["-", "-", "-", "-"]
        )
        status_str = (
            "[green]success[/green]" if record.succeeded else "[red]error[/red]"
        )

        table.add_row(
            record.prompt_name,
            record.model,
            record.task,
            record.classifier,
            record.matching_scope,
            *standard_cells,
            *semantic_cells,
            status_str,
        )

    console.print(table)

    for record in records:
        if not record.succeeded:
            error(f"{record.prompt_name}/{record.model}/{record.task}: {record.error}")


def print_final_summary(run_id: str, summary: dict[str, Any]) -> None:
    """
    Print the suite summary.

    Human mode: Panel with a green, yellow or red border depending on how
    many runs succeeded
    Agent mode: Adds the summary to the buffer and flushes it
    Quiet mode: Tab-separated run_id, succeeded, total, semantic F1
    """
    total = summary["total_runs"]
    succeeded = summary["succeeded"]
    standard = summary["average_standard"]
    semantic = summary["average_semantic"]

    if output_mode.is_agent():
        output_mode.add_json("run_id", run_id)
        output_mode.add_json("summary", summary)
        output_mode.flush_json()
        return

    if output_mode.quiet:
        print(f"{run_id}\t{succeeded}\t{total}\t{semantic['f1']:.6f}")
        return

    summary_text = f"""
[bold]Run ID:[/bold] {run_id}
[bold]Runs:[/bold] {succeeded}/{total} evaluated successfully
[bold]Average standard F1:[/bold] {standard['f1']:.3f} (P {standard['precision']:.3f}, R {standard['recall']:.3f})
[bold]Average semantic F1:[/bold] {semantic['f1']:.3f} (P {semantic['precision']:.3f}, R {semantic['recall']:.3f})
"""

    if succeeded == total:
        border_style = "green"
        title = "[bold green]✓ Evaluation Completed[/bold green]"
    elif succeeded > 0:
        border_style = "yellow"
        title = "[bold yellow]⚠ Evaluation Completed with Failures[/bold yellow]"
    else:
        border_style = "red"
        title = "[bold red]✗ Evaluation Failed[/bold red]"

    console.print(
        Panel(
            summary_text.strip(),
            title=title,
            border_style=border_style,
            box=box.ROUNDED,
        )
    )
