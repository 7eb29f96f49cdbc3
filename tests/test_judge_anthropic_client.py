"""
Tests for judge.anthropic_client module.

Tests cover:
- Initialization and validation
- Messages API payload and headers
- Text block concatenation and token usage
- Error mapping shared with the OpenAI client
"""

import json

import httpx
import pytest

from extraction_eval.config.schema import RetrySettings
from extraction_eval.exceptions import (
    LLMAuthenticationError,
    LLMPromptTooLongError,
    LLMProviderError,
    LLMRateLimitError,
    LLMResponseError,
)
from extraction_eval.judge.anthropic_client import (
    ANTHROPIC_API_URL,
    ANTHROPIC_VERSION,
    AnthropicClient,
)

FAST_RETRY = RetrySettings(max_retries=1, base_delay_seconds=0.0, max_jitter_seconds=0.0)

VERDICT = '{"semantic_match_pairs": [], "partial_match_pairs": []}'


def _client() -> AnthropicClient:
    return AnthropicClient(
        "claude-3-5-haiku-20241022", "sk-ant-test", retry_settings=FAST_RETRY
    )


class TestAnthropicClientInit:
    """Test suite for AnthropicClient initialization."""

    def test_init_success(self):
        client = AnthropicClient("claude-3-5-haiku-20241022", "sk-ant-test")

        assert client.model_name == "claude-3-5-haiku-20241022"
        assert client.max_tokens == 1000

    def test_init_empty_model_name(self):
        with pytest.raises(ValueError, match="model_name cannot be empty"):
            AnthropicClient("", "sk-ant-test")

    def test_init_empty_api_key(self):
        with pytest.raises(ValueError, match="api_key cannot be empty"):
            AnthropicClient("claude-3-5-haiku-20241022", " ")


class TestAnthropicGenerateAnswer:
    """Test suite for AnthropicClient.generate_answer()."""

    @pytest.mark.asyncio
    async def test_success(self, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=ANTHROPIC_API_URL,
            json={
                "content": [{"type": "text", "text": VERDICT}],
                "usage": {"input_tokens": 200, "output_tokens": 40},
            },
        )

        response = await _client().generate_answer("Classify these items")

        assert response.answer_text == VERDICT
        assert response.tokens_used == 240
        assert response.prompt_tokens == 200
        assert response.completion_tokens == 40
        assert response.provider == "anthropic"

    @pytest.mark.asyncio
    async def test_sends_messages_payload_and_headers(self, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=ANTHROPIC_API_URL,
            json={"content": [{"type": "text", "text": VERDICT}]},
        )

        await _client().generate_answer("Classify these items")

        request = httpx_mock.get_request()
        body = json.loads(request.content)
        assert body["model"] == "claude-3-5-haiku-20241022"
        assert body["messages"] == [{"role": "user", "content": "Classify these items"}]
        assert "system" in body
        assert body["temperature"] == 0.0
        assert request.headers["x-api-key"] == "sk-ant-test"
        assert request.headers["anthropic-version"] == ANTHROPIC_VERSION

    @pytest.mark.asyncio
    async def test_concatenates_text_blocks(self, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=ANTHROPIC_API_URL,
            json={
                "content": [
                    {"type": "text", "text": '{"semantic_match_pairs": [], '},
                    {"type": "tool_use", "id": "x"},
                    {"type": "text", "text": '"partial_match_pairs": []}'},
                ]
            },
        )

        response = await _client().generate_answer("prompt")

        assert response.answer_text == VERDICT

    @pytest.mark.asyncio
    async def test_no_text_block(self, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=ANTHROPIC_API_URL,
            json={"content": [{"type": "tool_use", "id": "x"}]},
        )

        with pytest.raises(LLMResponseError, match="no text content"):
            await _client().generate_answer("prompt")

    @pytest.mark.asyncio
    async def test_missing_content(self, httpx_mock):
        httpx_mock.add_response(method="POST", url=ANTHROPIC_API_URL, json={})

        with pytest.raises(LLMResponseError, match="missing 'content'"):
            await _client().generate_answer("prompt")

    @pytest.mark.asyncio
    async def test_auth_error(self, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=ANTHROPIC_API_URL,
            status_code=401,
            json={"error": {"type": "authentication_error", "message": "invalid x-api-key"}},
        )

        with pytest.raises(LLMAuthenticationError, match="Anthropic"):
            await _client().generate_answer("prompt")

    @pytest.mark.asyncio
    async def test_rate_limit_exhausted(self, httpx_mock):
        for _ in range(2):
            httpx_mock.add_response(method="POST", url=ANTHROPIC_API_URL, status_code=429)

        with pytest.raises(LLMRateLimitError):
            await _client().generate_answer("prompt")

    @pytest.mark.asyncio
    async def test_prompt_too_long(self):
        with pytest.raises(LLMPromptTooLongError, match="exceeds maximum length"):
            await _client().generate_answer("x" * 100_001)

    @pytest.mark.asyncio
    async def test_protocol_error_exhausted(self, httpx_mock):
        for _ in range(2):
            httpx_mock.add_exception(
                httpx.RemoteProtocolError("server disconnected"), url=ANTHROPIC_API_URL
            )

        with pytest.raises(LLMProviderError, match="Anthropic API unreachable"):
            await _client().generate_answer("prompt")
