"""
Lexical-overlap semantic classifier.

Scores leftover items with word-set Jaccard similarity and never calls a
judge, so results are deterministic and free.

For relationships the cause and effect are scored separately and averaged;
entities get a single score. Only tokens longer than MIN_TOKEN_LENGTH
characters count, so short function words like "of" or "in" do not
inflate overlap.
"""

import logging
import re

from extraction_eval.config.constants import (
    MIN_TOKEN_LENGTH,
    PARTIAL_SIMILARITY_THRESHOLD,
    SEMANTIC_SIMILARITY_THRESHOLD,
)
from extraction_eval.matching.models import (
    CausalRelationship,
    ClassificationResult,
    ClassifiedPair,
    ExtractionItem,
)

logger = logging.getLogger(__name__)

_TOKEN_SPLIT = re.compile(r"\s+")


def tokenize(text: str) -> set[str]:
    """Lowercased whitespace tokens longer than MIN_TOKEN_LENGTH."""
    return {
        token
        for token in _TOKEN_SPLIT.split(text.lower())
        if len(token) > MIN_TOKEN_LENGTH
    }


def jaccard_similarity(a: str, b: str) -> float:
    """|A & B| / |A | B| over token sets, 0.0 when both are empty."""
    tokens_a = tokenize(a)
    tokens_b = tokenize(b)
    union = tokens_a | tokens_b
    if not union:
        return 0.0
    return len(tokens_a & tokens_b) / len(union)


def item_similarity(gold: ExtractionItem, predicted: ExtractionItem) -> float:
    """
    Similarity of two items of the same kind.

    Mixed kinds (entity vs relationship) score 0.0.
    """
    if isinstance(gold, CausalRelationship) and isinstance(predicted, CausalRelationship):
        cause = jaccard_similarity(gold.cause, predicted.cause)
        effect = jaccard_similarity(gold.effect, predicted.effect)
        return (cause + effect) / 2
    if isinstance(gold, str) and isinstance(predicted, str):
        return jaccard_similarity(gold, predicted)
    return 0.0


class LexicalOverlapClassifier:
    """
    Greedy Jaccard-based classifier.

    Predicted items are visited in pool order. Each is compared with every
    still-free gold item and takes the best-scoring one (the earliest on
    ties). The pair is emitted as semantic when similarity > 0.7, partial
    when > 0.4, and dropped otherwise. Only an emitted pair reserves its
    gold item.

    Example:
        >>> classifier = LexicalOverlapClassifier()
        >>> result = await classifier.classify(["heavy rain"], ["heavy rainfall"])
    """

    def __init__(
        self,
        semantic_threshold: float = SEMANTIC_SIMILARITY_THRESHOLD,
        partial_threshold: float = PARTIAL_SIMILARITY_THRESHOLD,
    ):
        if partial_threshold > semantic_threshold:
            raise ValueError("partial_threshold cannot exceed semantic_threshold")
        self.semantic_threshold = semantic_threshold
        self.partial_threshold = partial_threshold

    async def classify(
        self,
        unmatched_gold: list[ExtractionItem],
        unmatched_predicted: list[ExtractionItem],
    ) -> ClassificationResult:
        return self._classify(unmatched_gold, unmatched_predicted)

    def _classify(
        self,
        unmatched_gold: list[ExtractionItem],
        unmatched_predicted: list[ExtractionItem],
    ) -> ClassificationResult:
        """Synchronous core of classify(); the scoring never awaits."""
        if not unmatched_gold or not unmatched_predicted:
            return ClassificationResult.empty()

        semantic: list[ClassifiedPair] = []
        partial: list[ClassifiedPair] = []
        used_gold: set[int] = set()

        for predicted in unmatched_predicted:
            best_index: int | None = None
            best_score = -1.0

            for gold_index, gold in enumerate(unmatched_gold):
                if gold_index in used_gold:
                    continue
                score = item_similarity(gold, predicted)
                if score > best_score:
                    best_index = gold_index
                    best_score = score

            if best_index is None:
                continue

            pair = ClassifiedPair(gold=unmatched_gold[best_index], predicted=predicted)

            if best_score > self.semantic_threshold:
                semantic.append(pair)
                used_gold.add(best_index)
            elif best_score > self.partial_threshold:
                partial.append(pair)
                used_gold.add(best_index)

            logger.debug(
                f"Lexical overlap {best_score:.3f} for {predicted!s} -> "
                f"{unmatched_gold[best_index]!s}"
            )

        return ClassificationResult(semantic_pairs=semantic, partial_pairs=partial)
