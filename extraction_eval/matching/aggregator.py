"""
Weighted metrics aggregation.

Turns a MatchingResult into precision/recall/F1 using the conservation laws

    TPw + FNw = G
    TPw + FPw = P

and splits the predicted pool into exact / semantic / partial / noMatch
buckets.
"""

from .models import ExtractionItem, MatchingResult, StandardSemanticMetricsResult


def safe_divide(numerator: float, denominator: float) -> float:
    """Return numerator / denominator, or 0.0 when the denominator is 0."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def f1_score(precision: float, recall: float) -> float:
    return safe_divide(2 * precision * recall, precision + recall)


def _from_counts(
    tp_weighted: float,
    gold_count: float,
    predicted_count: float,
    buckets: dict[str, list[ExtractionItem]],
) -> StandardSemanticMetricsResult:
    precision = safe_divide(tp_weighted, predicted_count)
    recall = safe_divide(tp_weighted, gold_count)
    return StandardSemanticMetricsResult(
        precision=precision,
        recall=recall,
        f1=f1_score(precision, recall),
        tp_weighted=tp_weighted,
        fp_weighted=predicted_count - tp_weighted,
        fn_weighted=gold_count - tp_weighted,
        exact=buckets["exact"],
        semantic=buckets["semantic"],
        partial=buckets["partial"],
        no_match=buckets["no_match"],
    )


def aggregate_metrics(
    matching: MatchingResult,
    gold: list[ExtractionItem],
    predicted: list[ExtractionItem],
) -> StandardSemanticMetricsResult:
    """
    Compute weighted metrics and bucket predicted items by match type.

    Empty pools never raise: with G=0 or P=0 the affected ratios are 0.

    Args:
        matching: Output of a matching engine
        gold: Full gold pool (only its size is used)
        predicted: Full predicted pool

    Returns:
        StandardSemanticMetricsResult whose buckets partition predicted
    """
    buckets: dict[str, list[ExtractionItem]] = {
        "exact": [],
        "semantic": [],
        "partial": [],
        "no_match": [],
    }

    for pair in sorted(matching.matches, key=lambda m: m.pred_index):
        buckets[pair.match_type].append(predicted[pair.pred_index])

    for pred_index in matching.unmatched_pred_indices:
        buckets["no_match"].append(predicted[pred_index])

    return _from_counts(matching.total_weight, len(gold), len(predicted), buckets)


def combine_results(
    results: list[StandardSemanticMetricsResult],
) -> StandardSemanticMetricsResult:
    """
    Merge independently matched results (one per text block) into one.

    Weighted counts and pool sizes are summed and the ratios recomputed
    from the sums (micro-averaging). Buckets are concatenated in order.
    """
    tp_weighted = sum(r.tp_weighted for r in results)
    gold_count = sum(r.gold_count for r in results)
    predicted_count = sum(r.predicted_count for r in results)

    buckets: dict[str, list[ExtractionItem]] = {
        "exact": [item for r in results for item in r.exact],
        "semantic": [item for r in results for item in r.semantic],
        "partial": [item for r in results for item in r.partial],
        "no_match": [item for r in results for item in r.no_match],
    }

    return _from_counts(tp_weighted, gold_count, predicted_count, buckets)
