"""
Shared HTTP transport for judge clients.

Wraps one JSON POST in the tenacity retry policy and turns failures into the
package's LLMProviderError hierarchy:

- 401/403          -> LLMAuthenticationError (no retry)
- 400/404          -> LLMResponseError (no retry)
- 429 exhausted    -> LLMRateLimitError
- 5xx exhausted    -> LLMProviderError
- timeout          -> LLMTimeoutError
- transport error  -> LLMProviderError (connect, read, write, protocol)
- non-JSON body    -> LLMResponseError
"""

import logging
from typing import Any

import httpx

from extraction_eval.config.schema import RetrySettings
from extraction_eval.exceptions import (
    LLMAuthenticationError,
    LLMProviderError,
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
)
from extraction_eval.judge.retry_config import (
    AUTH_ERROR_STATUS_CODES,
    NO_RETRY_STATUS_CODES,
    REQUEST_TIMEOUT,
    create_retry_decorator,
)

logger = logging.getLogger(__name__)


def extract_error_detail(response: httpx.Response) -> str:
    """
    Pull the provider's error message out of an error response.

    Both OpenAI and Anthropic use {"error": {"message": ...}}. Never
    includes request headers, so API keys cannot leak through here.
    """
    try:
        error = response.json().get("error", {})
        return str(error.get("message", "Unknown error"))
    except (ValueError, AttributeError):
        return f"HTTP {response.status_code}"


async def post_json(
    url: str,
    payload: dict[str, Any],
    headers: dict[str, str],
    *,
    provider_label: str,
    model_name: str,
    retry_settings: RetrySettings | None = None,
    timeout: float = REQUEST_TIMEOUT,
) -> dict[str, Any]:
    """
    POST payload to url with retries and return the decoded JSON body.

    Args:
        url: Provider endpoint
        payload: JSON request body
        headers: Request headers (NEVER logged)
        provider_label: Human-readable provider name for messages
        model_name: Model identifier for messages
        retry_settings: Backoff policy
        timeout: Per-attempt timeout in seconds

    Raises:
        LLMProviderError: Or one of its subclasses, see module docstring
    """

    @create_retry_decorator(retry_settings)
    async def _attempt() -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                response = await client.post(url, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            logger.warning(f"{provider_label} API timeout: model={model_name}, error={e}")
            raise
        except httpx.TransportError as e:
            logger.warning(
                f"{provider_label} API transport error: model={model_name}, "
                f"error={type(e).__name__}: {e}"
            )
            raise

        if response.status_code in NO_RETRY_STATUS_CODES:
            detail = extract_error_detail(response)
            message = (
                f"{provider_label} API error (non-retryable): "
                f"status={response.status_code}, model={model_name}, detail={detail}"
            )
            if response.status_code in AUTH_ERROR_STATUS_CODES:
                raise LLMAuthenticationError(message)
            raise LLMResponseError(message)

        if response.is_error:
            logger.warning(
                f"{provider_label} API HTTP error: status={response.status_code}, "
                f"model={model_name}, detail={extract_error_detail(response)}"
            )
        # 429/5xx raise here and are retried by the decorator
        response.raise_for_status()
        return response

    logger.debug(f"Sending request to {provider_label}: model={model_name}")

    try:
        response = await _attempt()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        detail = extract_error_detail(e.response)
        message = (
            f"{provider_label} API error after retries: "
            f"status={status}, model={model_name}, detail={detail}"
        )
        logger.error(message)
        if status == 429:
            raise LLMRateLimitError(message) from e
        raise LLMProviderError(message) from e
    except httpx.TimeoutException as e:
        message = f"{provider_label} API timed out after retries: model={model_name}"
        logger.error(message)
        raise LLMTimeoutError(message) from e
    except httpx.TransportError as e:
        message = (
            f"{provider_label} API unreachable after retries: "
            f"model={model_name}, error={type(e).__name__}: {e}"
        )
        logger.error(message)
        raise LLMProviderError(message) from e

    try:
        return response.json()
    except ValueError as e:
        raise LLMResponseError(
            f"Failed to parse {provider_label} response JSON: {e}"
        ) from e
