"""
Anthropic judge client for Extraction Eval.

Asynchronous client for the Anthropic Messages API with the same retry and
error semantics as the OpenAI judge client.

Example:
    >>> from extraction_eval.judge.anthropic_client import AnthropicClient
    >>> client = AnthropicClient("claude-3-5-haiku-20241022", api_key="sk-ant-...")
    >>> response = await client.generate_answer(prompt)
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
from extraction_eval.judge.openai_client import SYSTEM_MESSAGE
from extraction_eval.judge.transport import post_json
from extraction_eval.utils.time import utc_timestamp

ANTHROPIC_API_URL = "https://api.anthropic.com/v1/messages"

# Required version header
ANTHROPIC_VERSION = "2023-06-01"

logger = logging.getLogger(__name__)


class AnthropicClient:
    """
    Anthropic Messages API judge client.

    Attributes:
        model_name: Anthropic model identifier
        api_key: Anthropic API key (NEVER logged, sent as x-api-key)
        temperature: Sampling temperature
        max_tokens: Reply length limit (required by the API)
        retry_settings: Backoff policy for this client
    """

    def __init__(
        self,
        model_name: str,
        api_key: str,
        temperature: float = JUDGE_TEMPERATURE,
        max_tokens: int = JUDGE_MAX_TOKENS,
        retry_settings: RetrySettings | None = None,
    ):
        if not model_name or model_name.isspace():
            raise ValueError("model_name cannot be empty")

        if not api_key or api_key.isspace():
            raise ValueError("api_key cannot be empty")

        self.model_name = model_name
        self.api_key = api_key
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.retry_settings = retry_settings or RetrySettings()

        logger.info(f"Initialized Anthropic judge client for model: {model_name}")

    async def generate_answer(self, prompt: str) -> LLMResponse:
        """
        Send the judge prompt and return the reply.

        Raises:
            ValueError: If prompt is empty
            LLMPromptTooLongError: If prompt exceeds MAX_PROMPT_LENGTH
            LLMProviderError: See OpenAIClient.generate_answer
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
            "max_tokens": self.max_tokens,
            "system": SYSTEM_MESSAGE,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.temperature,
        }

        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "content-type": "application/json",
        }

        data = await post_json(
            ANTHROPIC_API_URL,
            payload,
            headers,
            provider_label="Anthropic",
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
            provider="anthropic",
            model_name=self.model_name,
            timestamp_utc=utc_timestamp(),
        )

    def _extract_answer_text(self, data: dict[str, Any]) -> str:
        """
        Concatenate the text blocks of the reply.

        Raises:
            LLMResponseError: If no text content is present
        """
        content = data.get("content")
        if not content or not isinstance(content, list):
            raise LLMResponseError("Anthropic response missing 'content' array")

        texts = [
            str(block["text"])
            for block in content
            if isinstance(block, dict) and block.get("type") == "text" and "text" in block
        ]
        if not texts:
            raise LLMResponseError("Anthropic response contains no text content block")

        return "".join(texts)

    def _extract_token_usage(self, data: dict[str, Any]) -> tuple[int, int, int]:
        """Return (total, input, output) tokens, zeros if usage is absent."""
        usage = data.get("usage")
        if not isinstance(usage, dict):
            logger.warning(
                f"Anthropic response missing 'usage' data for model={self.model_name}"
            )
            return 0, 0, 0

        input_tokens = int(usage.get("input_tokens") or 0)
        output_tokens = int(usage.get("output_tokens") or 0)
        return input_tokens + output_tokens, input_tokens, output_tokens
