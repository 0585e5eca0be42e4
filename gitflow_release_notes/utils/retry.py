"""Retry decorator for handling GitHub API rate limits.

Only rate limit responses are retried. Every other error propagates
immediately, since the changelog generator never works on a partial snapshot.
"""

import asyncio
import functools
import time
from typing import Any, Awaitable, Callable, TypeVar

import structlog
from githubkit.exception import PrimaryRateLimitExceeded, RequestFailed, SecondaryRateLimitExceeded

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def _wait_time_from_headers(exc: RequestFailed, default: float) -> float:
    """Read how long GitHub asks us to wait from the response headers."""
    retry_after = exc.response.headers.get("retry-after")
    if retry_after:
        try:
            return float(retry_after)
        except ValueError:
            logger.warning("Invalid retry-after header value", retry_after=retry_after)
    rate_limit_reset = exc.response.headers.get("x-ratelimit-reset")
    if rate_limit_reset:
        try:
            return max(int(rate_limit_reset) - int(time.time()) + 1, 0)
        except ValueError:
            logger.warning("Invalid x-ratelimit-reset header value", rate_limit_reset=rate_limit_reset)
    return default


def _is_rate_limit(exc: RequestFailed) -> bool:
    status_code = exc.response.status_code
    return status_code == 429 or (status_code == 403 and "rate limit" in str(exc).lower())


def retry_on_rate_limit(
    max_retries: int = 5,
    initial_delay: float = 10.0,
    max_delay: float = 300.0,
    exponential_base: float = 2.0,
) -> Callable[[F], F]:
    """Decorator for retrying async GitHub calls that hit a rate limit.

    Waits for the period GitHub reports (retry-after or x-ratelimit-reset),
    falling back to exponential backoff, capped at ``max_delay``.

    Example:
        @retry_on_rate_limit()
        async def list_tags(self, limit: int = 100) -> list[Tag]:
            ...
    """

    def decorator(func: F) -> F:
        if not asyncio.iscoroutinefunction(func):
            raise TypeError(f"Function {func.__name__} decorated with @retry_on_rate_limit must be async.")

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay
            attempt = 0
            while True:
                try:
                    return await func(*args, **kwargs)
                except (PrimaryRateLimitExceeded, SecondaryRateLimitExceeded) as e:
                    retry_after = getattr(e, "retry_after", None)
                    wait_time = retry_after.total_seconds() if retry_after else delay
                    rate_limit_type = "primary" if isinstance(e, PrimaryRateLimitExceeded) else "secondary"
                    if attempt >= max_retries:
                        logger.error("Max retries reached for GitHub rate limit", function=func.__name__, rate_limit_type=rate_limit_type)
                        raise
                except RequestFailed as e:
                    if not _is_rate_limit(e):
                        raise
                    if attempt >= max_retries:
                        logger.error("Max retries reached for GitHub rate limit", function=func.__name__, status_code=e.response.status_code)
                        raise
                    wait_time = _wait_time_from_headers(e, delay)
                    rate_limit_type = "primary"

                wait_time = min(wait_time, max_delay)
                attempt += 1
                logger.warning(
                    f"GitHub rate limit exceeded, waiting {wait_time} seconds",
                    function=func.__name__,
                    rate_limit_type=rate_limit_type,
                    attempt=attempt,
                    max_retries=max_retries,
                )
                await asyncio.sleep(wait_time)
                delay = min(delay * exponential_base, max_delay)

        return wrapper  # type: ignore

    return decorator
