"""
Evaluation of extraction runs: standard exact-match metrics and the
semantic-aware weighted metric.
"""

from .evaluator import evaluate_pools, evaluate_sentence_results
from .metrics import compute_standard_metrics
from .runner import load_evaluation_runs, run_evaluation_suite
from .schema import EvaluationMetrics, EvaluationRecord, EvaluationRun, SentenceResult

__all__ = [
    "EvaluationMetrics",
    "EvaluationRecord",
    "EvaluationRun",
    "SentenceResult",
    "compute_standard_metrics",
    "evaluate_pools",
    "evaluate_sentence_results",
    "load_evaluation_runs",
    "run_evaluation_suite",
]
