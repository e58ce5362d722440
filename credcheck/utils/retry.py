"""
Retry utilities for handling rate limits and transient errors.
"""

import asyncio
import logging
import re
from collections.abc import Awaitable, Callable
from typing import Any

import openai

logger = logging.getLogger(__name__)


# openai exception types that represent transient failures worth retrying.
# Authentication, bad request and not-found errors are permanent.
_TRANSIENT_OPENAI_ERRORS: tuple[type[Exception], ...] = (
    openai.RateLimitError,
    openai.APIConnectionError,  # includes APITimeoutError
    openai.InternalServerError,
)

_RETRY_AFTER_RE = re.compile(r"(\d+(?:\.\d+)?)\s{0,10}seconds?", re.IGNORECASE)


def is_rate_limit_error(exception: BaseException) -> bool:
    """Check if an exception signals a rate limit."""
    if isinstance(exception, openai.RateLimitError):
        return True
    error_str = str(exception).lower()
    return "rate limit" in error_str or "rate_limit" in error_str


def is_transient_error(exception: BaseException) -> bool:
    """Check if an exception is transient and worth retrying."""
    if isinstance(exception, _TRANSIENT_OPENAI_ERRORS):
        return True
    if isinstance(exception, (TimeoutError, asyncio.TimeoutError)):
        return True
    return is_rate_limit_error(exception)


def retry_delay(
    exception: BaseException,
    attempt: int,
    initial_delay: float,
    backoff_factor: float,
    max_delay: float,
) -> float:
    """Delay before the next attempt, honouring a "retry in N seconds" hint."""
    hint = _RETRY_AFTER_RE.search(str(exception))
    if hint:
        wait_time = float(hint.group(1))
    else:
        wait_time = initial_delay * (backoff_factor**attempt)
    return min(wait_time, max_delay)


async def run_with_retry(
    func: Callable[[], Awaitable[Any]],
    max_retries: int = 3,
    initial_delay: float = 1.0,
    backoff_factor: float = 2.0,
    max_delay: float = 30.0,
    retry_on_rate_limit: bool = True,
) -> Any:
    """
    Execute an async function with retry logic for rate limit and transient errors.

    Args:
        func: Async function to execute (no parameters)
        max_retries: Maximum number of attempts
        initial_delay: Delay in seconds before the first retry
        backoff_factor: Multiplier for delay between retries
        max_delay: Upper bound for any single wait
        retry_on_rate_limit: Whether to retry at all

    Returns:
        Result from the function

    Raises:
        Exception: If max retries exceeded or non-retryable error occurs
    """
    last_exception: Exception | None = None

    for attempt in range(max_retries):
        try:
            return await func()
        except Exception as e:
            last_exception = e

            should_retry = retry_on_rate_limit and is_transient_error(e)

            if should_retry and attempt < max_retries - 1:
                wait_time = retry_delay(e, attempt, initial_delay, backoff_factor, max_delay)
                error_type = "rate limit" if is_rate_limit_error(e) else "connection/timeout"
                logger.warning(
                    "Transient %s error detected (%s). Attempt %s/%s. Waiting %.1f seconds before retry...",
                    error_type,
                    e,
                    attempt + 1,
                    max_retries,
                    wait_time,
                )
                await asyncio.sleep(wait_time)
                continue

            raise

    if last_exception:
        raise last_exception
    raise RuntimeError("Max retries exceeded")
