"""Shared test fixtures and hypothesis strategies for the HTTP client test suite."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Union

import httpx
import pytest
from hypothesis import strategies as st

from resilient_http.client import HttpClient
from resilient_http.config.settings import HttpClientSettings
from resilient_http.models.envelope import NotificationType

BASE_URL = "https://api.example.com/v1"

Outcome = Union[httpx.Response, Exception, Callable[[httpx.Request], Any]]


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class RecordingNotifier:
    """Notification sink that remembers every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[NotificationType, str]] = []

    def notify(self, kind: NotificationType, message: str) -> None:
        self.calls.append((kind, message))


class ScriptedBackend:
    """Serves a fixed sequence of outcomes through an httpx mock transport.

    Each outcome is a response (copied per call), an exception to raise, or
    a handler called with the request. The last outcome repeats once the
    script runs out.
    """

    def __init__(self, outcomes: Iterable[Outcome]) -> None:
        self._outcomes = list(outcomes)
        self.requests: list[httpx.Request] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    async def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self._outcomes.pop(0) if len(self._outcomes) > 1 else self._outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, httpx.Response):
            return httpx.Response(
                outcome.status_code,
                headers=outcome.headers,
                content=outcome.content,
            )
        result = outcome(request)
        if not isinstance(result, httpx.Response):
            result = await result
        return result


def json_response(status: int, body: Any) -> httpx.Response:
    return httpx.Response(status, json=body)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> HttpClientSettings:
    """Test settings with safe defaults."""
    return HttpClientSettings(
        base_url=BASE_URL,
        default_retries=0,
        default_retry_delay_seconds=0.0,
        timeout_seconds=5.0,
    )


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def make_client(notifier: RecordingNotifier) -> Callable[..., tuple[HttpClient, ScriptedBackend]]:
    """Factory: build a client whose transport replays *outcomes*."""

    def _make(*outcomes: Outcome, **options: Any) -> tuple[HttpClient, ScriptedBackend]:
        backend = ScriptedBackend(outcomes)
        options.setdefault("base_url", BASE_URL)
        options.setdefault("notifier", notifier)
        client = HttpClient(transport=backend.transport, **options)
        return client, backend

    return _make


# ---------------------------------------------------------------------------
# Hypothesis strategies
# ---------------------------------------------------------------------------

json_scalars = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-(2**31), max_value=2**31),
    st.text(max_size=20),
)

json_values = st.recursive(
    json_scalars,
    lambda children: st.one_of(
        st.lists(children, max_size=4),
        st.dictionaries(st.text(max_size=8), children, max_size=4),
    ),
    max_leaves=10,
)

notification_entries = st.fixed_dictionaries(
    {
        "type": st.sampled_from([kind.value for kind in NotificationType]),
        "message": st.text(max_size=30),
    }
)

envelope_bodies = st.fixed_dictionaries(
    {"isSuccess": st.one_of(st.booleans(), st.none())},
    optional={
        "data": json_values,
        "error": st.one_of(
            st.none(),
            st.text(max_size=20),
            st.fixed_dictionaries(
                {"message": st.text(max_size=20)},
                optional={"code": st.text(min_size=1, max_size=10)},
            ),
        ),
        "notifications": st.one_of(st.lists(notification_entries, max_size=3), json_scalars),
        "message": st.text(max_size=20),
    },
)

response_bodies = st.one_of(json_values, envelope_bodies)

http_statuses = st.sampled_from([200, 201, 202, 204, 301, 400, 401, 403, 404, 409, 422, 429, 500, 502, 503, 504])
