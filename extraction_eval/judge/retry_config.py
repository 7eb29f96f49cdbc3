"""
Retry configuration for judge API calls.

Centralized tenacity policy shared by every judge client: exponential
backoff with additive random jitter, retrying only transient HTTP failures.

Key features:
- Wait before retry n (0-based): base * multiplier**n + uniform(0, jitter)
- Defaults: 3 retries (4 attempts), 1s base, x2 multiplier, up to 1s jitter
- Retry on transport errors (connect, read, write, protocol), timeouts and retryable status codes (429, 5xx)
- Fail fast on client errors (400, 401, 403, 404); clients raise typed
  errors for those before tenacity ever sees them
- The last error is re-raised once attempts are exhausted

Example:
    >>> from extraction_eval.judge.retry_config import create_retry_decorator
    >>> @create_retry_decorator()
    ... async def call_judge():
    ...     response.raise_for_status()  # 429/5xx will be retried
"""

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from extraction_eval.config.schema import RetrySettings

# ============================================================================
# RETRY CONSTANTS
# ============================================================================

DEFAULT_MAX_RETRIES = 3
DEFAULT_BASE_DELAY_SECONDS = 1.0
DEFAULT_MULTIPLIER = 2.0
DEFAULT_MAX_JITTER_SECONDS = 1.0

# 429: rate limited, 5xx: server trouble. Both usually clear up.
RETRY_STATUS_CODES = frozenset([429, 500, 502, 503, 504])

# Retrying these cannot change the outcome
NO_RETRY_STATUS_CODES = frozenset([400, 401, 403, 404])

AUTH_ERROR_STATUS_CODES = frozenset([401, 403])

# Per-attempt HTTP timeout in seconds
REQUEST_TIMEOUT = 30.0

# TransportError covers connect, read, write, protocol and timeout failures
RETRYABLE_EXCEPTIONS = (
    httpx.HTTPStatusError,
    httpx.TransportError,
)

# ============================================================================
# RETRY DECORATOR FACTORY
# ============================================================================


def create_retry_decorator(settings: RetrySettings | None = None):
    """
    Create a tenacity retry decorator for judge API calls.

    Works on both sync and async callables.

    Args:
        settings: Backoff policy. Defaults to RetrySettings() (3 retries,
            1s base, x2 multiplier, up to 1s jitter).

    Returns:
        Retry decorator

    Note:
        The caller must raise a non-retryable exception for status codes in
        NO_RETRY_STATUS_CODES; any httpx.HTTPStatusError reaching the
        decorator is treated as transient.
    """
    if settings is None:
        settings = RetrySettings()

    return retry(
        stop=stop_after_attempt(settings.max_retries + 1),
        wait=wait_exponential(
            multiplier=settings.base_delay_seconds,
            exp_base=settings.multiplier,
        )
        + wait_random(0, settings.max_jitter_seconds),
        retry=retry_if_exception_type(RETRYABLE_EXCEPTIONS),
        reraise=True,
    )
