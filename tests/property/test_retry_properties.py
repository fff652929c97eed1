"""Property tests for the retry loop.

Validates attempt counts and inter-attempt delays for transient and
non-transient statuses across retry configurations.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import httpx
import pytest
from conftest import ScriptedBackend, json_response
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from resilient_http.client import HttpClient
from resilient_http.resilience.retry_policy import RetryPolicy

transient_statuses = st.sampled_from([429, 500, 502, 503, 504])
client_error_statuses = st.sampled_from([400, 401, 403, 404, 409, 422])
retry_counts = st.integers(min_value=0, max_value=5)
base_delays = st.floats(min_value=0.01, max_value=5.0, allow_nan=False, allow_infinity=False)


async def _run(status: int, retries: int, delay: float, backoff: bool) -> tuple[ScriptedBackend, list[float]]:
    backend = ScriptedBackend([json_response(status, {"message": "failure"})])
    client = HttpClient(base_url="https://api.example.com", transport=backend.transport)

    with patch("asyncio.sleep", new_callable=AsyncMock) as sleep:
        envelope = await client.get(
            "/items",
            retries=retries,
            retry_delay=delay,
            retry_backoff=backoff,
        )

    assert envelope.status == status
    assert envelope.error.code == str(status)
    return backend, [c.args[0] for c in sleep.call_args_list]


@pytest.mark.asyncio
@settings(max_examples=30, suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(status=transient_statuses, retries=retry_counts, delay=base_delays, backoff=st.booleans())
async def test_transient_statuses_use_every_attempt(
    status: int,
    retries: int,
    delay: float,
    backoff: bool,
) -> None:
    backend, delays = await _run(status, retries, delay, backoff)

    assert backend.calls == 1 + retries
    expected = [delay * (2 ** (n - 1) if backoff else 1) for n in range(1, retries + 1)]
    assert delays == pytest.approx(expected)


@pytest.mark.asyncio
@settings(max_examples=30, suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(status=client_error_statuses, retries=retry_counts, delay=base_delays)
async def test_client_errors_are_attempted_once(status: int, retries: int, delay: float) -> None:
    backend, delays = await _run(status, retries, delay, True)

    assert backend.calls == 1
    assert delays == []


@settings(max_examples=100)
@given(retries=st.integers(min_value=-3, max_value=10), status=st.integers(min_value=100, max_value=599))
def test_last_attempt_is_never_retried(retries: int, status: int) -> None:
    policy = RetryPolicy(retries=retries)
    outcome = httpx.Response(status)

    assert policy.should_retry(policy.total_attempts, outcome) is False
    retried = [a for a in range(1, policy.total_attempts + 1) if policy.should_retry(a, outcome)]
    assert len(retried) <= max(retries, 0)
