"""
OpenAI judge client for Extraction Eval.

Asynchronous client for the OpenAI Chat Completions API, used by the
judge-backed semantic classifier.

Key features:
- Async HTTP via httpx.AsyncClient
- Retry on 429/5xx, network errors and timeouts with backoff and jitter
- Fail fast on 400/401/403/404
- Deterministic judging (temperature 0.0 by default)
- Security: NEVER logs API keys

Example:
    >>> from extraction_eval.judge.openai_client import OpenAIClient
    >>> client = OpenAIClient("gpt-4o-mini", api_key="sk-...")
    >>> response = await client.generate_answer(prompt)
    >>> response.answer_text[:40]
    '{"semantic_match_pairs": [{"gold": "my'
"""

import logging
from typing import Any

from extraction_eval.config.constants import (
    JUDGE_MAX_TOKENS,
    JUDGE_TEMPERATURE,
    MAX_PROMPT_LENGTH,
)
from extraction_eval.config.schema import RetrySettings
from extraction_eval.exceptions import LLMPromptTooLongError, LLMResponseError
from extraction_eval.judge.models import LLMResponse
from extraction_eval.judge.transport import post_json
from extraction_eval.utils.time import utc_timestamp

OPENAI_API_URL = "https://api.openai.com/v1/chat/completions"

SYSTEM_MESSAGE = (
    "You are a precise evaluation assistant. "
    "Answer only with the JSON object you are asked for."
)

logger = logging.getLogger(__name__)


class OpenAIClient:
    """
    OpenAI Chat Completions judge client.

    Attributes:
        model_name: OpenAI model identifier (e.g., "gpt-4o-mini")
        api_key: OpenAI API key (NEVER logged)
        temperature: Sampling temperature
        max_tokens: Reply length limit
        retry_settings: Backoff policy for this client

    Retry behavior:
        - Retries on: 429, 500, 502, 503, 504, transport errors, timeouts
        - Fails immediately on: 400, 401, 403, 404
        - Defaults: 3 retries, 1s base delay, x2 multiplier, up to 1s jitter
    """

    def __init__(
        self,
        model_name: str,
        api_key: str,
        temperature: float = JUDGE_TEMPERATURE,
        max_tokens: int = JUDGE_MAX_TOKENS,
        retry_settings: RetrySettings | None = None,
    ):
        """
        Raises:
            ValueError: If model_name or api_key is empty
        """
        if not model_name or model_name.isspace():
            raise ValueError("model_name cannot be empty")

        if not api_key or api_key.isspace():
            raise ValueError("api_key cannot be empty")

        self.model_name = model_name
        self.api_key = api_key
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.retry_settings = retry_settings or RetrySettings()

        logger.info(f"Initialized OpenAI judge client for model: {model_name}")

    async def generate_answer(self, prompt: str) -> LLMResponse:
        """
        Send the judge prompt and return the reply.

        Args:
            prompt: Fully rendered judge prompt

        Returns:
            LLMResponse with the raw reply text and token usage

        Raises:
            ValueError: If prompt is empty
            LLMPromptTooLongError: If prompt exceeds MAX_PROMPT_LENGTH
            LLMAuthenticationError: On 401/403
            LLMRateLimitError: If still rate limited after retries
            LLMTimeoutError: If every attempt timed out
            LLMResponseError: On 400/404 or an unexpected response body
            LLMProviderError: On other failures after retries
        """
        if not prompt or prompt.isspace():
            raise ValueError("Prompt cannot be empty")

        if len(prompt) > MAX_PROMPT_LENGTH:
            raise LLMPromptTooLongError(
                f"Prompt exceeds maximum length of {MAX_PROMPT_LENGTH:,} characters "
                f"(received {len(prompt):,} characters)"
            )

        payload = {
            "model": self.model_name,
            "messages": [
                {"role": "system", "content": SYSTEM_MESSAGE},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

        # NEVER log headers
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        data = await post_json(
            OPENAI_API_URL,
            payload,
            headers,
            provider_label="OpenAI",
            model_name=self.model_name,
            retry_settings=self.retry_settings,
        )

        answer_text = self._extract_answer_text(data)
        tokens_used, prompt_tokens, completion_tokens = self._extract_token_usage(data)

        return LLMResponse(
            answer_text=answer_text,
            tokens_used=tokens_used,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            provider="openai",
            model_name=self.model_name,
            timestamp_utc=utc_timestamp(),
        )

    def _extract_answer_text(self, data: dict[str, Any]) -> str:
        """
        Extract choices[0].message.content.

        Raises:
            LLMResponseError: If the structure is missing or invalid
        """
        choices = data.get("choices")
        if not choices or not isinstance(choices, list):
            raise LLMResponseError("OpenAI response missing 'choices' array")

        message = choices[0].get("message") if isinstance(choices[0], dict) else None
        if not isinstance(message, dict):
            raise LLMResponseError("OpenAI response missing 'message' in first choice")

        content = message.get("content")
        if content is None:
            raise LLMResponseError("OpenAI response message missing 'content'")

        return str(content)

    def _extract_token_usage(self, data: dict[str, Any]) -> tuple[int, int, int]:
        """Return (total, prompt, completion) tokens, zeros if usage is absent."""
        usage = data.get("usage")
        if not isinstance(usage, dict):
            logger.warning(
                f"OpenAI response missing 'usage' data for model={self.model_name}"
            )
            return 0, 0, 0

        prompt_tokens = int(usage.get("prompt_tokens") or 0)
        completion_tokens = int(usage.get("completion_tokens") or 0)
        total_tokens = int(usage.get("total_tokens") or prompt_tokens + completion_tokens)
        return total_tokens, prompt_tokens, completion_tokens
