"""
Judge-backed semantic classifier.

Sends the leftover gold and predicted items to a judge model in a single
prompt and parses its JSON verdict. Transport failures that survive the
client's retries propagate; unusable replies degrade to empty results.
"""

import logging

from extraction_eval.classifiers.prompts import build_judge_prompt
from extraction_eval.classifiers.response_parser import parse_classification_response
from extraction_eval.config.constants import TASK_ENTITY, TASK_RELATIONSHIP
from extraction_eval.judge.models import JudgeClient
from extraction_eval.matching.models import ClassificationResult, ExtractionItem
from extraction_eval.matching.normalizer import item_key

logger = logging.getLogger(__name__)

CacheKey = tuple[str, frozenset[tuple[str, ...]], frozenset[tuple[str, ...]]]


class JudgeClassifier:
    """
    Classify leftover items by asking a judge model.

    Attributes:
        client: Any JudgeClient implementation
        task: "entity_extraction" or "relationship_extraction"
        cache_results: Reuse verdicts for identical normalized pools. The
            cache lives on this instance only.

    Example:
        >>> classifier = JudgeClassifier(client, task="entity_extraction")
        >>> result = await classifier.classify(["myocardial infarction"], ["heart attack"])
        >>> result.semantic_pairs[0].predicted
        'heart attack'
    """

    def __init__(self, client: JudgeClient, task: str, cache_results: bool = False):
        if task not in (TASK_ENTITY, TASK_RELATIONSHIP):
            raise ValueError(f"Unknown task: {task}")

        self.client = client
        self.task = task
        self.cache_results = cache_results
        self._cache: dict[CacheKey, ClassificationResult] = {}

    def _cache_key(
        self,
        unmatched_gold: list[ExtractionItem],
        unmatched_predicted: list[ExtractionItem],
    ) -> CacheKey:
        return (
            self.task,
            frozenset(item_key(item) for item in unmatched_gold),
            frozenset(item_key(item) for item in unmatched_predicted),
        )

    async def classify(
        self,
        unmatched_gold: list[ExtractionItem],
        unmatched_predicted: list[ExtractionItem],
    ) -> ClassificationResult:
        """
        Ask the judge for semantic and partial pairs.

        Returns empty results without calling the judge when either list
        is empty.

        Raises:
            LLMProviderError: If the judge call fails after retries
        """
        if not unmatched_gold or not unmatched_predicted:
            return ClassificationResult.empty()

        key = self._cache_key(unmatched_gold, unmatched_predicted)
        if self.cache_results and key in self._cache:
            logger.debug("Judge cache hit")
            return self._cache[key]

        prompt = build_judge_prompt(self.task, unmatched_gold, unmatched_predicted)

        logger.info(
            f"Requesting judge classification: task={self.task}, "
            f"gold={len(unmatched_gold)}, predicted={len(unmatched_predicted)}, "
            f"model={self.client.model_name}"
        )
        response = await self.client.generate_answer(prompt)

        result = parse_classification_response(response.answer_text, self.task)
        logger.info(
            f"Judge returned {len(result.semantic_pairs)} semantic and "
            f"{len(result.partial_pairs)} partial pairs"
        )

        if self.cache_results:
            self._cache[key] = result
        return result
