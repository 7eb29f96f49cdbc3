"""
Semantic-aware weighted evaluation pipeline.

evaluate_pools runs the full pipeline on one gold/predicted pair of pools:

    exact prefilter -> classifier -> weight matrix -> matching -> metrics

evaluate_sentence_results decides how text blocks become pools. In global
scope every block of a run is pooled into one matching problem (one
classifier call per run); in per_text_block scope each block is matched
on its own and the results are summed.

The pipeline keeps no state between calls. Its only dependency is the
injected classifier (and optionally a matching engine).
"""

import logging

from ..classifiers.base import SemanticClassifier
from ..exceptions import EvaluationError
from ..matching.aggregator import aggregate_metrics, combine_results
from ..matching.engine import GreedyMatchingEngine, MatchingEngine
from ..matching.models import (
    ClassificationResult,
    ExtractionItem,
    StandardSemanticMetricsResult,
)
from ..matching.prefilter import find_exact_matches
from ..matching.weight_matrix import build_weight_matrix
from .schema import SentenceResult

logger = logging.getLogger(__name__)

MATCHING_SCOPES = ("global", "per_text_block")


async def evaluate_pools(
    gold: list[ExtractionItem],
    predicted: list[ExtractionItem],
    classifier: SemanticClassifier,
    engine: MatchingEngine | None = None,
) -> StandardSemanticMetricsResult:
    """
    Score one predicted pool against one gold pool.

    The classifier only sees items the exact prefilter left unmatched and
    is skipped entirely when either leftover list is empty.

    Args:
        gold: Gold pool
        predicted: Predicted pool
        classifier: Semantic classifier for the leftovers
        engine: Matching engine, GreedyMatchingEngine by default

    Returns:
        StandardSemanticMetricsResult

    Raises:
        LLMProviderError: If a judge-backed classifier fails after retries
    """
    engine = engine or GreedyMatchingEngine()

    exact = find_exact_matches(gold, predicted)

    if exact.unmatched_gold and exact.unmatched_predicted:
        classification = await classifier.classify(
            exact.unmatched_gold, exact.unmatched_predicted
        )
    else:
        classification = ClassificationResult.empty()

    weights = build_weight_matrix(gold, predicted, exact, classification)
    matching = engine.match(weights, gold, predicted)
    result = aggregate_metrics(matching, gold, predicted)

    logger.info(
        f"Evaluated pools: gold={len(gold)}, predicted={len(predicted)}, "
        f"exact={len(result.exact)}, semantic={len(result.semantic)}, "
        f"partial={len(result.partial)}, no_match={len(result.no_match)}, "
        f"f1={result.f1:.3f}"
    )
    return result


def flatten_pools(
    sentence_results: list[SentenceResult],
) -> tuple[list[ExtractionItem], list[ExtractionItem]]:
    """Concatenate gold and predicted items of all blocks, in block order."""
    gold = [item for block in sentence_results for item in block.gold_data]
    predicted = [item for block in sentence_results for item in block.predictions]
    return gold, predicted


async def evaluate_sentence_results(
    sentence_results: list[SentenceResult],
    classifier: SemanticClassifier,
    matching_scope: str = "global",
    engine: MatchingEngine | None = None,
) -> StandardSemanticMetricsResult:
    """
    Score a run's text blocks with the weighted semantic metric.

    Args:
        sentence_results: Text blocks of one run
        classifier: Semantic classifier for the leftovers
        matching_scope: "global" pools all blocks, "per_text_block" matches
            each block separately
        engine: Matching engine, GreedyMatchingEngine by default

    Raises:
        EvaluationError: If matching_scope is unknown
        LLMProviderError: If a judge-backed classifier fails after retries
    """
    if matching_scope == "global":
        gold, predicted = flatten_pools(sentence_results)
        return await evaluate_pools(gold, predicted, classifier, engine)

    if matching_scope == "per_text_block":
        block_results = [
            await evaluate_pools(block.gold_data, block.predictions, classifier, engine)
            for block in sentence_results
        ]
        return combine_results(block_results)

    raise EvaluationError(
        f"Unknown matching scope: {matching_scope}. "
        f"Expected one of: {', '.join(MATCHING_SCOPES)}"
    )
