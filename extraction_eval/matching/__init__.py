"""
Weighted bipartite matching of gold and predicted extraction items.

Pipeline stages, in order: exact prefilter, (classifier, outside this
package), weight matrix, matching engine, metrics aggregation.
"""

from .aggregator import aggregate_metrics, combine_results
from .engine import GreedyMatchingEngine, MatchingEngine
from .models import (
    CausalRelationship,
    ClassificationResult,
    ClassifiedPair,
    ExactMatchResult,
    ExtractionItem,
    MatchingResult,
    MatchPair,
    StandardSemanticMetricsResult,
    WeightMatrix,
)
from .normalizer import item_key, items_equal, normalize
from .prefilter import find_exact_matches
from .weight_matrix import build_weight_matrix

__all__ = [
    "CausalRelationship",
    "ClassificationResult",
    "ClassifiedPair",
    "ExactMatchResult",
    "ExtractionItem",
    "GreedyMatchingEngine",
    "MatchingEngine",
    "MatchingResult",
    "MatchPair",
    "StandardSemanticMetricsResult",
    "WeightMatrix",
    "aggregate_metrics",
    "build_weight_matrix",
    "combine_results",
    "find_exact_matches",
    "item_key",
    "items_equal",
    "normalize",
]
