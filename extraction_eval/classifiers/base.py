"""
Semantic classifier interface and factory.

A classifier looks at the items the exact prefilter left behind and
proposes semantic (0.75) and partial (0.5) pairs. The rest of the pipeline
only depends on the SemanticClassifier protocol.
"""

from typing import Protocol

from extraction_eval.judge.models import JudgeClient
from extraction_eval.matching.models import ClassificationResult, ExtractionItem


class SemanticClassifier(Protocol):
    """
    Proposes semantic and partial pairs between leftover items.

    Implementations MUST return empty results, without doing any work,
    when either input list is empty.
    """

    async def classify(
        self,
        unmatched_gold: list[ExtractionItem],
        unmatched_predicted: list[ExtractionItem],
    ) -> ClassificationResult: ...


def build_classifier(
    kind: str,
    task: str,
    judge_client: JudgeClient | None = None,
    cache_results: bool = False,
) -> SemanticClassifier:
    """
    Create the classifier selected in configuration.

    Args:
        kind: "judge" or "lexical_overlap"
        task: Extraction task the classifier serves
        judge_client: Required when kind is "judge"
        cache_results: Enable the judge verdict cache

    Raises:
        ValueError: If kind is unknown or a judge client is missing
    """
    if kind == "judge":
        if judge_client is None:
            raise ValueError("judge classifier requires a judge client")

        from extraction_eval.classifiers.judge_classifier import JudgeClassifier

        return JudgeClassifier(judge_client, task=task, cache_results=cache_results)

    if kind == "lexical_overlap":
        from extraction_eval.classifiers.heuristic_classifier import (
            LexicalOverlapClassifier,
        )

        return LexicalOverlapClassifier()

    raise ValueError(
        f"Unsupported classifier: '{kind}'. Supported classifiers: judge, lexical_overlap"
    )
