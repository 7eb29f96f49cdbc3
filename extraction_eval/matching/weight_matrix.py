"""
Weight matrix construction.

Combines the prefilter's exact matches and the classifier's semantic and
partial pairs into one dense G x P matrix of match weights:

    exact    -> 1.0
    semantic -> 0.75
    partial  -> 0.5 (never overwrites a semantic or exact cell)
    other    -> 0.0
"""

import logging

from extraction_eval.config.constants import (
    EXACT_WEIGHT,
    NO_MATCH_WEIGHT,
    PARTIAL_WEIGHT,
    SEMANTIC_WEIGHT,
)

from .models import (
    ClassificationResult,
    ClassifiedPair,
    ExactMatchResult,
    ExtractionItem,
    WeightMatrix,
)
from .normalizer import items_equal

logger = logging.getLogger(__name__)


def _resolve_index(
    item: ExtractionItem,
    pool: list[ExtractionItem],
    excluded: frozenset[int],
) -> int | None:
    """First index in pool, outside excluded, whose item equals item."""
    for index, candidate in enumerate(pool):
        if index in excluded:
            continue
        if items_equal(item, candidate):
            return index
    return None


def _resolve_pair(
    pair: ClassifiedPair,
    gold: list[ExtractionItem],
    predicted: list[ExtractionItem],
    exact_result: ExactMatchResult,
) -> tuple[int, int] | None:
    gold_index = _resolve_index(pair.gold, gold, exact_result.matched_gold_indices)
    pred_index = _resolve_index(
        pair.predicted, predicted, exact_result.matched_pred_indices
    )
    if gold_index is None or pred_index is None:
        logger.debug(
            f"Dropping unresolvable classifier pair: {pair.gold!s} / {pair.predicted!s}"
        )
        return None
    return gold_index, pred_index


def build_weight_matrix(
    gold: list[ExtractionItem],
    predicted: list[ExtractionItem],
    exact_result: ExactMatchResult,
    classification: ClassificationResult,
) -> WeightMatrix:
    """
    Build the G x P weight matrix for the matching engine.

    Classifier pairs are mapped back to original pool positions by taking
    the first index not consumed by the prefilter whose item equals the
    pair's item. Pairs that map to nothing (for example, a judge that
    rephrased an item instead of echoing it) are dropped.

    Args:
        gold: Full gold pool
        predicted: Full predicted pool
        exact_result: Prefilter output
        classification: Semantic/partial pairs from a classifier

    Returns:
        WeightMatrix with len(gold) rows of len(predicted) columns
    """
    weights: WeightMatrix = [
        [NO_MATCH_WEIGHT] * len(predicted) for _ in range(len(gold))
    ]

    for gold_index, pred_index in exact_result.exact_matches:
        weights[gold_index][pred_index] = EXACT_WEIGHT

    dropped = 0

    for pair in classification.semantic_pairs:
        resolved = _resolve_pair(pair, gold, predicted, exact_result)
        if resolved is None:
            dropped += 1
            continue
        g, p = resolved
        weights[g][p] = SEMANTIC_WEIGHT

    for pair in classification.partial_pairs:
        resolved = _resolve_pair(pair, gold, predicted, exact_result)
        if resolved is None:
            dropped += 1
            continue
        g, p = resolved
        if weights[g][p] < SEMANTIC_WEIGHT:
            weights[g][p] = PARTIAL_WEIGHT

    if dropped:
        logger.info(f"Dropped {dropped} classifier pair(s) that matched no unmatched item")

    return weights
