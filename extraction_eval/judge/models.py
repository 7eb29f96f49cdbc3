"""
Judge client abstraction and factory for Extraction Eval.

A judge is a text-generation model asked to classify leftover gold and
predicted items as semantic or partial matches. Providers are hidden
behind the JudgeClient Protocol so classifiers never see HTTP details.

Key components:
- LLMResponse: Structured dataclass holding one judge reply
- JudgeClient: Protocol every provider client implements
- build_client: Factory creating the right client for a provider

Example:
    >>> from extraction_eval.judge.models import build_client
    >>> client = build_client("openai", "gpt-4o-mini", api_key)
    >>> response = await client.generate_answer(prompt)
    >>> response.answer_text
    '{"semantic_match_pairs": [...], "partial_match_pairs": []}'
"""

from dataclasses import dataclass
from typing import Protocol

from extraction_eval.config.constants import JUDGE_MAX_TOKENS, JUDGE_TEMPERATURE
from extraction_eval.config.schema import RetrySettings


@dataclass
class LLMResponse:
    """
    Structured reply from a judge model.

    Attributes:
        answer_text: Raw reply text, expected to contain a JSON object
        tokens_used: Total tokens consumed (prompt + completion)
        provider: Provider name (e.g., "openai", "anthropic", "mock")
        model_name: Model identifier
        timestamp_utc: ISO 8601 timestamp with 'Z' suffix
        prompt_tokens: Tokens in the prompt
        completion_tokens: Tokens in the reply
    """

    answer_text: str
    tokens_used: int
    provider: str
    model_name: str
    timestamp_utc: str
    prompt_tokens: int = 0
    completion_tokens: int = 0


class JudgeClient(Protocol):
    """
    Provider-agnostic interface for judge clients.

    Implementations MUST:
    - Use httpx.AsyncClient for requests
    - Retry transient failures with backoff and jitter
    - Raise LLMProviderError subclasses once a call cannot succeed
    - Never log API keys
    """

    model_name: str

    async def generate_answer(self, prompt: str) -> LLMResponse:
        """
        Send a prompt to the judge and return its reply.

        Raises:
            LLMProviderError: On permanent failures or after retries
        """
        ...


def build_client(
    provider: str,
    model_name: str,
    api_key: str,
    temperature: float = JUDGE_TEMPERATURE,
    max_tokens: int = JUDGE_MAX_TOKENS,
    retry_settings: RetrySettings | None = None,
) -> JudgeClient:
    """
    Create a judge client for the given provider.

    Args:
        provider: "openai" or "anthropic"
        model_name: Model identifier
        api_key: Provider API key (NEVER logged)
        temperature: Sampling temperature, 0.0 by default
        max_tokens: Reply length limit
        retry_settings: Backoff policy, defaults to RetrySettings()

    Returns:
        JudgeClient implementation

    Raises:
        ValueError: If provider is not supported
    """
    if provider == "openai":
        # Lazy import keeps provider modules independent
        from extraction_eval.judge.openai_client import OpenAIClient

        return OpenAIClient(
            model_name=model_name,
            api_key=api_key,
            temperature=temperature,
            max_tokens=max_tokens,
            retry_settings=retry_settings,
        )

    if provider == "anthropic":
        from extraction_eval.judge.anthropic_client import AnthropicClient

        return AnthropicClient(
            model_name=model_name,
            api_key=api_key,
            temperature=temperature,
            max_tokens=max_tokens,
            retry_settings=retry_settings,
        )

    raise ValueError(
        f"Unsupported provider: '{provider}'. Supported providers: openai, anthropic"
    )
