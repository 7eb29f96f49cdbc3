"""
Command-line interface for Extraction Eval.

Commands:
    evaluate  Score extraction runs from a runs file against gold data
    validate  Check a configuration file without evaluating anything
    demo      Evaluate built-in sample data with a mock judge (no API keys)

Every command supports --format text (Rich output) and --format json
(one JSON document on stdout, for scripts and agents).
"""

import asyncio
from pathlib import Path

import typer
from rich.traceback import install as install_rich_traceback

from extraction_eval.config.loader import load_config
from extraction_eval.config.schema import RuntimeConfig
from extraction_eval.evals.demo import build_demo_judge, build_demo_runs
from extraction_eval.evals.runner import load_evaluation_runs, run_evaluation_suite
from extraction_eval.exceptions import (
    APIKeyMissingError,
    ConfigFileNotFoundError,
    ConfigurationError,
    InputError,
)
from extraction_eval.utils.console import (
    error,
    info,
    output_mode,
    print_final_summary,
    print_metrics_table,
    spinner,
    success,
    warning,
)
from extraction_eval.utils.logging import setup_logging

install_rich_traceback(show_locals=False)

# Exit codes
EXIT_SUCCESS = 0  # Every run evaluated
EXIT_CONFIG_ERROR = 1  # Config or runs file invalid
EXIT_PARTIAL_FAILURE = 3  # Some runs failed (judge errors)
EXIT_COMPLETE_FAILURE = 4  # All runs failed

app = typer.Typer(
    name="extraction-eval",
    help="Semantic-aware evaluation of LLM entity and relationship extraction",
    add_completion=False,
)


def _validate_format(format: str) -> None:
    if format not in ("text", "json"):
        error(f"Invalid format: {format}. Must be 'text' or 'json'")
        raise typer.Exit(EXIT_CONFIG_ERROR)
    output_mode.format = format


def _exit_code_for(summary: dict) -> int:
    if summary["failed"] == 0:
        return EXIT_SUCCESS
    if summary["succeeded"] == 0:
        return EXIT_COMPLETE_FAILURE
    return EXIT_PARTIAL_FAILURE


def _report(result: dict) -> int:
    """Print records and summary; return the exit code for the suite."""
    summary = result["summary"]

    print_metrics_table(result["records"])

    if summary["failed"]:
        warning(f"{summary['failed']} of {summary['total_runs']} run(s) failed")

    print_final_summary(result["run_id"], summary)
    return _exit_code_for(summary)


@app.command()
def evaluate(
    config: Path = typer.Option(
        ...,
        "--config",
        "-c",
        help="Path to YAML configuration file",
    ),
    input: Path = typer.Option(
        ...,
        "--input",
        "-i",
        help="Path to YAML/JSON file with the runs to evaluate",
    ),
    format: str = typer.Option(
        "text",
        "--format",
        "-f",
        help="Output format: 'text' or 'json'",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every matching decision (DEBUG level)",
    ),
):
    """
    Score extraction runs with standard and semantic-aware metrics.

    Each run in the input file is a prompt x model x task combination with
    per-sentence predictions and gold data. Both the exact-match metric and
    the weighted semantic metric are reported for every run.

    Exit codes:
      0: All runs evaluated
      1: Configuration or input file error
      3: Some runs failed (judge errors)
      4: All runs failed

    Examples:
      extraction-eval evaluate -c eval.config.yaml -i runs.yaml
      extraction-eval evaluate -c eval.config.yaml -i runs.yaml --format json
    """
    _validate_format(format)
    setup_logging(verbose=verbose, quiet_logs=output_mode.is_human())

    try:
        with spinner("Loading configuration..."):
            runtime_config = load_config(config)
        success(f"Loaded configuration from {config}")

        with spinner("Loading evaluation runs..."):
            runs = load_evaluation_runs(input)
        info(f"Loaded {len(runs)} run(s) from {input}")

        with spinner(f"Evaluating {len(runs)} run(s)..."):
            result = asyncio.run(run_evaluation_suite(runs, runtime_config))

    except (ConfigurationError, InputError) as e:
        error(str(e))
        output_mode.flush_json()
        raise typer.Exit(EXIT_CONFIG_ERROR)

    raise typer.Exit(_report(result))


@app.command()
def validate(
    config: Path = typer.Option(
        ...,
        "--config",
        "-c",
        help="Path to YAML configuration file",
    ),
    format: str = typer.Option(
        "text",
        "--format",
        "-f",
        help="Output format: 'text' or 'json'",
    ),
):
    """
    Validate a configuration file without evaluating anything.

    Checks YAML syntax, field values, that a judge is configured when a
    task uses the judge classifier, and that its API key variable is set.

    Exit codes:
      0: Configuration is valid
      1: Configuration is invalid

    Examples:
      extraction-eval validate --config eval.config.yaml
      extraction-eval validate --config eval.config.yaml --format json
    """
    _validate_format(format)

    try:
        with spinner("Validating configuration..."):
            runtime_config = load_config(config)
    except ConfigurationError as e:
        if isinstance(e, ConfigFileNotFoundError):
            error_type = "file_not_found"
        elif isinstance(e, APIKeyMissingError):
            error_type = "api_key_missing"
        else:
            error_type = "validation_error"

        error(f"Validation failed: {e}")
        if output_mode.is_agent():
            output_mode.add_json("valid", False)
            output_mode.add_json("error_type", error_type)
            output_mode.flush_json()
        raise typer.Exit(EXIT_CONFIG_ERROR)

    success("Configuration is valid")
    for task in ("entity_extraction", "relationship_extraction"):
        settings = runtime_config.tasks.for_task(task)
        info(f"{task}: classifier={settings.classifier}, scope={settings.matching_scope}")
    if runtime_config.judge is not None:
        info(f"Judge: {runtime_config.judge.provider}/{runtime_config.judge.model_name}")

    if output_mode.is_agent():
        output_mode.add_json("valid", True)
        output_mode.add_json("tasks", runtime_config.tasks.model_dump(mode="json"))
        output_mode.add_json(
            "judge_model",
            runtime_config.judge.model_name if runtime_config.judge else None,
        )
        output_mode.flush_json()

    raise typer.Exit(EXIT_SUCCESS)


@app.command()
def demo(
    format: str = typer.Option(
        "text",
        "--format",
        "-f",
        help="Output format: 'text' or 'json'",
    ),
):
    """
    Evaluate built-in sample data offline.

    Scores an entity run with a mock judge and a relationship run with the
    lexical overlap classifier. No configuration file or API key needed.

    Examples:
      extraction-eval demo
      extraction-eval demo --format json
    """
    _validate_format(format)
    setup_logging(quiet_logs=output_mode.is_human())

    runs = build_demo_runs()
    info(f"Evaluating {len(runs)} demo run(s) with a mock judge")

    result = asyncio.run(
        run_evaluation_suite(runs, RuntimeConfig(), judge_client=build_demo_judge())
    )

    raise typer.Exit(_report(result))


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
):
    """
    Extraction Eval - score LLM extraction output against gold data.

    Exact matches, near-synonyms and partial overlaps are credited with
    weights 1.0, 0.75 and 0.5 before precision, recall and F1 are taken.

    Examples:
      extraction-eval demo
      extraction-eval evaluate -c eval.config.yaml -i runs.yaml
    """
    if version:
        typer.echo(f"extraction-eval {_read_version()}")
        raise typer.Exit(EXIT_SUCCESS)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(EXIT_SUCCESS)


def _read_version() -> str:
    """Read version from package metadata, falling back to the source version."""
    try:
        from importlib.metadata import version

        return version("extraction-eval")
    except Exception:
        return "0.1.0"


if __name__ == "__main__":
    app()
