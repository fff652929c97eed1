"""Unit tests for the cancellation token."""

from __future__ import annotations

import asyncio

import pytest

from resilient_http.resilience.cancellation import CancellationToken


class TestCancellationToken:
    def test_starts_uncancelled(self) -> None:
        token = CancellationToken()
        assert token.cancelled is False
        assert token.reason is None

    def test_first_reason_wins(self) -> None:
        token = CancellationToken()
        token.cancel("navigated away")
        token.cancel("second")

        assert token.cancelled is True
        assert token.reason == "navigated away"

    @pytest.mark.asyncio
    async def test_wait_returns_after_cancel(self) -> None:
        token = CancellationToken()
        asyncio.get_running_loop().call_soon(token.cancel)

        await asyncio.wait_for(token.wait(), timeout=1.0)

        assert token.cancelled is True

    @pytest.mark.asyncio
    async def test_sleep_completes_without_cancel(self) -> None:
        assert await CancellationToken().sleep(0.01) is False

    @pytest.mark.asyncio
    async def test_sleep_interrupted_by_cancel(self) -> None:
        token = CancellationToken()
        asyncio.get_running_loop().call_later(0.01, token.cancel)

        assert await token.sleep(10.0) is True

    @pytest.mark.asyncio
    async def test_sleep_on_cancelled_token_returns_immediately(self) -> None:
        token = CancellationToken()
        token.cancel()
        assert await token.sleep(10.0) is True
