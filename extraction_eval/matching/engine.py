"""
Maximum-weight matching engines.

The pipeline only depends on the MatchingEngine protocol, so an exact
assignment solver can replace the greedy engine without other changes.
"""

import logging
from typing import Protocol

from extraction_eval.config.constants import EXACT_WEIGHT, SEMANTIC_WEIGHT

from .models import ExtractionItem, MatchingResult, MatchPair, MatchType, WeightMatrix

logger = logging.getLogger(__name__)


class MatchingEngine(Protocol):
    """Produces a 1:1 gold/predicted alignment from a weight matrix."""

    def match(
        self,
        weights: WeightMatrix,
        gold: list[ExtractionItem],
        predicted: list[ExtractionItem],
    ) -> MatchingResult: ...


def match_type_for_weight(weight: float) -> MatchType:
    """Map a weight tier back to its match type."""
    if weight >= EXACT_WEIGHT:
        return "exact"
    if weight >= SEMANTIC_WEIGHT:
        return "semantic"
    return "partial"


class GreedyMatchingEngine:
    """
    Highest-weight-first greedy assignment.

    Every positive cell becomes a candidate. Candidates are stably sorted by
    weight (ties keep row-major order) and accepted when neither their row
    nor their column is taken yet.

    This is not a globally optimal assignment: with equal-weight candidates
    competing for the same row or column it can return less total weight
    than the Hungarian algorithm would. With four discrete tiers and exact
    matches resolved beforehand the two agree in practice.
    """

    def match(
        self,
        weights: WeightMatrix,
        gold: list[ExtractionItem],
        predicted: list[ExtractionItem],
    ) -> MatchingResult:
        candidates = [
            (g, p, weight)
            for g, row in enumerate(weights)
            for p, weight in enumerate(row)
            if weight > 0
        ]
        # sorted() is stable, so ties keep enumeration order
        candidates = sorted(candidates, key=lambda c: c[2], reverse=True)

        used_gold: set[int] = set()
        used_pred: set[int] = set()
        matches: list[MatchPair] = []
        total_weight = 0.0

        for g, p, weight in candidates:
            if g in used_gold or p in used_pred:
                continue
            used_gold.add(g)
            used_pred.add(p)
            pair = MatchPair(
                gold_index=g,
                pred_index=p,
                weight=weight,
                match_type=match_type_for_weight(weight),
                gold_item=gold[g],
                pred_item=predicted[p],
            )
            matches.append(pair)
            total_weight += weight
            logger.debug(
                f"Matched gold[{g}] to predicted[{p}] as {pair.match_type} ({weight})"
            )

        return MatchingResult(
            total_weight=total_weight,
            matches=matches,
            unmatched_gold_indices=[g for g in range(len(gold)) if g not in used_gold],
            unmatched_pred_indices=[
                p for p in range(len(predicted)) if p not in used_pred
            ],
        )
