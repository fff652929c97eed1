"""Adapter protocol and helpers shared by the built-in adapters.

An adapter maps a raw transport response plus its parsed body into an
``ApiResponse``. Adapters are pure and synchronous: they never perform I/O
and never read the response stream themselves.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from resilient_http.models.envelope import ApiNotification, ApiResponse
from resilient_http.models.headers import HeaderMap

logger = logging.getLogger(__name__)


class ResponseAdapter(Protocol):
    """Callable that normalizes a response into an envelope."""

    def __call__(self, response: httpx.Response, body: Any) -> ApiResponse[Any]: ...


def is_protocol_success(response: httpx.Response) -> bool:
    """True for 2xx statuses."""
    return 200 <= response.status_code < 300


def response_headers(response: httpx.Response) -> HeaderMap:
    return HeaderMap(response.headers)


def reason_phrase(response: httpx.Response, fallback: str) -> str:
    return response.reason_phrase or fallback


def first_text(body: Any, *keys: str) -> str | None:
    """Return the first non-empty string value found under *keys* in a mapping body."""
    if not isinstance(body, dict):
        return None
    for key in keys:
        value = body.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def parse_notifications(raw: Any) -> tuple[ApiNotification, ...]:
    """Validate a server-declared notification list, skipping malformed entries."""
    if not isinstance(raw, list):
        return ()
    notifications: list[ApiNotification] = []
    for entry in raw:
        try:
            notifications.append(ApiNotification.model_validate(entry))
        except ValidationError:
            logger.debug("Skipping malformed notification entry: %r", entry)
    return tuple(notifications)
