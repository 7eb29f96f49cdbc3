"""
Standard exact-match metrics for extraction runs.

Unlike the weighted semantic metric, this path scores each text block on its
own and never pairs items across blocks. A prediction counts as a true
positive when it equals any gold item of its block, so duplicate predictions
of one gold item each count.
"""

from ..matching.aggregator import f1_score, safe_divide
from ..matching.normalizer import items_equal
from .schema import EvaluationMetrics, SentenceResult


def count_block_matches(block: SentenceResult) -> tuple[int, int, int]:
    """
    Count (TP, FP, FN) for one text block.

    Args:
        block: Text block with predictions and gold data

    Returns:
        Tuple of true positives, false positives, false negatives
    """
    true_positives = 0
    false_positives = 0
    for prediction in block.predictions:
        if any(items_equal(prediction, gold) for gold in block.gold_data):
            true_positives += 1
        else:
            false_positives += 1

    false_negatives = sum(
        1
        for gold in block.gold_data
        if not any(items_equal(prediction, gold) for prediction in block.predictions)
    )

    return true_positives, false_positives, false_negatives


def compute_standard_metrics(
    sentence_results: list[SentenceResult],
) -> EvaluationMetrics:
    """
    Compute exact-match precision, recall and F1 across all text blocks.

    Counts are summed over blocks before the ratios are taken.

    Example:
        >>> block = SentenceResult(
        ...     sentence_id="s1", predictions=["Rain"], gold_data=["rain", "flooding"]
        ... )
        >>> compute_standard_metrics([block]).recall
        0.5
    """
    true_positives = false_positives = false_negatives = 0

    for block in sentence_results:
        tp, fp, fn = count_block_matches(block)
        true_positives += tp
        false_positives += fp
        false_negatives += fn

    precision = safe_divide(true_positives, true_positives + false_positives)
    recall = safe_divide(true_positives, true_positives + false_negatives)

    return EvaluationMetrics(
        precision=precision,
        recall=recall,
        f1=f1_score(precision, recall),
        true_positives=true_positives,
        false_positives=false_positives,
        false_negatives=false_negatives,
    )
