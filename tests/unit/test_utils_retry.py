"""Unit tests for the rate limit retry decorator."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from githubkit.exception import RequestFailed
from pytest import MonkeyPatch

from gitflow_release_notes.utils.retry import retry_on_rate_limit


def make_request_failed(status_code: int, headers: dict[str, str] | None = None) -> RequestFailed:
    """Create a RequestFailed error with the given status and headers."""
    response = MagicMock(status_code=status_code)
    response.headers = headers or {}
    return RequestFailed(response)


@pytest.mark.asyncio
async def test_retries_after_rate_limit(monkeypatch: MonkeyPatch) -> None:
    """A 429 response is retried after the advertised delay."""
    sleep = AsyncMock()
    monkeypatch.setattr("gitflow_release_notes.utils.retry.asyncio.sleep", sleep)
    call = AsyncMock(side_effect=[make_request_failed(429, {"retry-after": "3"}), "ok"])

    @retry_on_rate_limit()
    async def fetch() -> str:
        return await call()

    assert await fetch() == "ok"
    assert call.await_count == 2
    sleep.assert_awaited_once_with(3.0)


@pytest.mark.asyncio
async def test_gives_up_after_max_retries(monkeypatch: MonkeyPatch) -> None:
    """The rate limit error propagates once retries are exhausted."""
    monkeypatch.setattr("gitflow_release_notes.utils.retry.asyncio.sleep", AsyncMock())
    call = AsyncMock(side_effect=make_request_failed(429))

    @retry_on_rate_limit(max_retries=2, initial_delay=1)
    async def fetch() -> str:
        return await call()

    with pytest.raises(RequestFailed):
        await fetch()
    assert call.await_count == 3


@pytest.mark.asyncio
async def test_other_errors_propagate_immediately(monkeypatch: MonkeyPatch) -> None:
    """Errors that are not rate limits are never retried."""
    sleep = AsyncMock()
    monkeypatch.setattr("gitflow_release_notes.utils.retry.asyncio.sleep", sleep)
    call = AsyncMock(side_effect=make_request_failed(500))

    @retry_on_rate_limit()
    async def fetch() -> str:
        return await call()

    with pytest.raises(RequestFailed):
        await fetch()
    assert call.await_count == 1
    sleep.assert_not_awaited()


def test_rejects_sync_functions() -> None:
    """Only coroutine functions can be decorated."""
    with pytest.raises(TypeError):

        @retry_on_rate_limit()
        def fetch() -> str:
            return "ok"
