"""
Exact-match prefilter.

Removes unambiguous exact matches from both pools before any semantic
judgment is requested, so the classifier only ever sees leftovers.
"""

import logging

from .models import ExactMatchResult, ExtractionItem
from .normalizer import items_equal

logger = logging.getLogger(__name__)


def find_exact_matches(
    gold: list[ExtractionItem], predicted: list[ExtractionItem]
) -> ExactMatchResult:
    """
    Greedily pair gold items with equal predicted items.

    Gold items are visited in order and each takes the first still-unused
    predicted item that is equal under normalization. Duplicates therefore
    pair up first-come, first-served, and the result is deterministic for a
    given input order.

    Args:
        gold: Gold pool
        predicted: Predicted pool

    Returns:
        ExactMatchResult with matched index pairs and the leftover items

    Example:
        >>> result = find_exact_matches(["Smoking"], ["smoking ", "tar"])
        >>> result.exact_matches
        [(0, 0)]
        >>> result.unmatched_predicted
        ['tar']
    """
    used_pred: set[int] = set()
    matches: list[tuple[int, int]] = []

    for gold_index, gold_item in enumerate(gold):
        for pred_index, pred_item in enumerate(predicted):
            if pred_index in used_pred:
                continue
            if items_equal(gold_item, pred_item):
                used_pred.add(pred_index)
                matches.append((gold_index, pred_index))
                break

    used_gold = {g for g, _ in matches}

    result = ExactMatchResult(
        exact_matches=matches,
        unmatched_gold=[item for i, item in enumerate(gold) if i not in used_gold],
        unmatched_predicted=[
            item for i, item in enumerate(predicted) if i not in used_pred
        ],
        matched_gold_indices=frozenset(used_gold),
        matched_pred_indices=frozenset(used_pred),
    )

    logger.debug(
        f"Exact prefilter: {len(matches)} matches, "
        f"{len(result.unmatched_gold)} gold and "
        f"{len(result.unmatched_predicted)} predicted left"
    )
    return result
