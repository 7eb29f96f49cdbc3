"""
Evaluation runner for Extraction Eval.

Loads prompt x model x task runs from a fixtures file, scores each with both
the standard exact-match metric and the weighted semantic metric, and
summarises the results. A judge failure only fails the run it happened in;
every other run still completes.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..classifiers.base import SemanticClassifier, build_classifier
from ..config.loader import format_validation_error
from ..config.schema import RuntimeConfig
from ..exceptions import (
    ConfigurationError,
    ExtractionEvalError,
    InputFileNotFoundError,
    InputValidationError,
)
from ..judge.models import JudgeClient, build_client
from ..utils.logging import log_with_context
from ..utils.time import run_id_from_timestamp, utc_timestamp
from .evaluator import evaluate_sentence_results
from .metrics import compute_standard_metrics
from .schema import EvaluationRecord, EvaluationRun

logger = logging.getLogger(__name__)


def load_evaluation_runs(fixtures_path: str | Path) -> list[EvaluationRun]:
    """
    Load evaluation runs from a YAML (or JSON) fixtures file.

    The file must contain a top-level 'runs' list.

    Args:
        fixtures_path: Path to the fixtures file

    Returns:
        List of validated EvaluationRun objects

    Raises:
        InputFileNotFoundError: If the file doesn't exist
        InputValidationError: If the file is malformed or a run is invalid
    """
    fixtures_path = Path(fixtures_path)

    if not fixtures_path.exists():
        raise InputFileNotFoundError(f"Evaluation runs file not found: {fixtures_path}")

    try:
        with open(fixtures_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InputValidationError(f"Invalid YAML/JSON in {fixtures_path}: {e}") from e

    if not isinstance(data, dict) or "runs" not in data:
        raise InputValidationError(
            f"Invalid runs file {fixtures_path}: must contain a 'runs' key"
        )

    if not isinstance(data["runs"], list):
        raise InputValidationError(f"Invalid runs file {fixtures_path}: 'runs' must be a list")

    runs = []
    for i, run_data in enumerate(data["runs"]):
        try:
            runs.append(EvaluationRun.model_validate(run_data))
        except ValidationError as e:
            raise InputValidationError(
                f"Invalid run at index {i} in {fixtures_path}:\n"
                + format_validation_error(e)
            ) from e

    return runs


def _resolve_judge_client(
    config: RuntimeConfig, judge_client: JudgeClient | None
) -> JudgeClient | None:
    if judge_client is not None or not config.tasks.uses_judge():
        return judge_client

    if config.judge is None:
        raise ConfigurationError(
            "A task uses the 'judge' classifier but no judge is configured"
        )

    return build_client(
        provider=config.judge.provider,
        model_name=config.judge.model_name,
        api_key=config.judge.api_key,
        temperature=config.judge.temperature,
        max_tokens=config.judge.max_tokens,
        retry_settings=config.retry,
    )


def build_task_classifiers(
    config: RuntimeConfig, judge_client: JudgeClient | None = None
) -> dict[str, SemanticClassifier]:
    """
    Build one classifier per task as selected in config.

    Raises:
        ConfigurationError: If a task needs a judge that isn't configured
    """
    judge_client = _resolve_judge_client(config, judge_client)
    cache_results = config.judge.cache_results if config.judge else False

    classifiers = {}
    for task in ("entity_extraction", "relationship_extraction"):
        settings = config.tasks.for_task(task)
        classifiers[task] = build_classifier(
            settings.classifier,
            task=task,
            judge_client=judge_client,
            cache_results=cache_results,
        )
    return classifiers


async def evaluate_run(
    run: EvaluationRun,
    config: RuntimeConfig,
    classifier: SemanticClassifier,
    run_id: str,
) -> EvaluationRecord:
    """
    Score one run, turning semantic evaluation failures into an error record.

    Judge errors (exhausted retries, rejected or oversized prompts) are
    recorded on this run only. Standard metrics need no judge, so they are
    filled in even when the semantic metric fails.
    """
    settings = config.tasks.for_task(run.task)
    standard = compute_standard_metrics(run.sentence_results)

    semantic = None
    error = None
    try:
        semantic = await evaluate_sentence_results(
            run.sentence_results,
            classifier,
            matching_scope=settings.matching_scope,
        )
    except ExtractionEvalError as e:
        error = str(e)
        log_with_context(
            logger,
            logging.ERROR,
            f"Semantic evaluation failed for {run.label}",
            context={"error": error},
            run_id=run_id,
        )

    return EvaluationRecord(
        run_id=run_id,
        prompt_name=run.prompt_name,
        model=run.model,
        task=run.task,
        timestamp_utc=utc_timestamp(),
        classifier=settings.classifier,
        matching_scope=settings.matching_scope,
        standard_metrics=standard,
        semantic_metrics=semantic,
        error=error,
    )


def _average(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def summarize_records(records: list[EvaluationRecord]) -> dict[str, Any]:
    """Aggregate counts and average precision/recall/F1 for both metrics."""
    succeeded = [r for r in records if r.succeeded]
    standard = [r.standard_metrics for r in records if r.standard_metrics is not None]
    semantic = [r.semantic_metrics for r in succeeded if r.semantic_metrics is not None]

    return {
        "total_runs": len(records),
        "succeeded": len(succeeded),
        "failed": len(records) - len(succeeded),
        "average_standard": {
            name: _average([getattr(m, name) for m in standard])
            for name in ("precision", "recall", "f1")
        },
        "average_semantic": {
            name: _average([getattr(m, name) for m in semantic])
            for name in ("precision", "recall", "f1")
        },
    }


async def run_evaluation_suite(
    runs: list[EvaluationRun],
    config: RuntimeConfig,
    judge_client: JudgeClient | None = None,
) -> dict[str, Any]:
    """
    Score every run and summarise the results.

    Runs are evaluated sequentially and share nothing but the classifiers
    (and, when enabled, the judge verdict cache).

    Args:
        runs: Runs to evaluate
        config: Runtime configuration (classifier and scope per task)
        judge_client: Judge to use instead of building one from config

    Returns:
        Dictionary containing:
        - 'records': List of EvaluationRecord, one per run, in input order
        - 'summary': Counts and average scores (see summarize_records)
        - 'run_id': Identifier shared by all records of this suite

    Raises:
        ConfigurationError: If a task needs a judge that isn't configured
    """
    classifiers = build_task_classifiers(config, judge_client)
    run_id = run_id_from_timestamp()

    log_with_context(
        logger,
        logging.INFO,
        f"Starting evaluation suite with {len(runs)} runs",
        run_id=run_id,
    )

    records = []
    for run in runs:
        record = await evaluate_run(run, config, classifiers[run.task], run_id)
        records.append(record)

    summary = summarize_records(records)
    log_with_context(
        logger,
        logging.INFO,
        "Evaluation suite finished",
        context={"succeeded": summary["succeeded"], "failed": summary["failed"]},
        run_id=run_id,
    )

    return {"records": records, "summary": summary, "run_id": run_id}
