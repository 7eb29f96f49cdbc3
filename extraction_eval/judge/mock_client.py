"""
Mock judge client for testing and offline demos.

MockJudgeClient implements the JudgeClient protocol without any HTTP.
Replies are served from a queue, then from default_response, and every
prompt received is recorded so tests can assert on what was sent.

Example:
    >>> client = MockJudgeClient(
    ...     responses=['{"semantic_match_pairs": [], "partial_match_pairs": []}']
    ... )
    >>> response = await client.generate_answer("prompt")
    >>> client.call_count
    1
"""

import logging
from dataclasses import dataclass, field

from extraction_eval.judge.models import LLMResponse
from extraction_eval.utils.time import utc_timestamp

logger = logging.getLogger(__name__)

EMPTY_JUDGMENT = '{"semantic_match_pairs": [], "partial_match_pairs": []}'


@dataclass
class MockJudgeClient:
    """
    Deterministic judge stand-in.

    Attributes:
        responses: Replies returned in order, one per call
        default_response: Reply once responses is exhausted
        error: If set, raised on every call instead of replying
        model_name: Model identifier reported in responses
        provider: Provider name reported in responses
        tokens_per_response: Token count reported for each reply
        prompts: Prompts received so far (filled in by generate_answer)
    """

    responses: list[str] = field(default_factory=list)
    default_response: str = EMPTY_JUDGMENT
    error: Exception | None = None
    model_name: str = "mock-judge"
    provider: str = "mock"
    tokens_per_response: int = 100
    prompts: list[str] = field(default_factory=list)

    def __post_init__(self):
        self._queue = list(self.responses)
        logger.info(
            f"Initialized MockJudgeClient with {len(self._queue)} queued responses"
        )

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    async def generate_answer(self, prompt: str) -> LLMResponse:
        self.prompts.append(prompt)

        if self.error is not None:
            raise self.error

        answer_text = self._queue.pop(0) if self._queue else self.default_response
        logger.debug(f"MockJudgeClient answering call #{self.call_count}")

        return LLMResponse(
            answer_text=answer_text,
            tokens_used=self.tokens_per_response,
            prompt_tokens=self.tokens_per_response // 2,
            completion_tokens=self.tokens_per_response // 2,
            provider=self.provider,
            model_name=self.model_name,
            timestamp_utc=utc_timestamp(),
        )
