"""Per-call request configuration.

A ``RequestConfig`` is built fresh for every call from the client's defaults
merged with call-site overrides, handed through the request interceptors and
consumed by a single attempt loop. It is never reused across calls.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

from resilient_http.models.headers import HeaderMap
from resilient_http.urls import ParamValue, append_query

if TYPE_CHECKING:
    from resilient_http.adapters.base import ResponseAdapter
    from resilient_http.resilience.cancellation import CancellationToken


class HttpMethod(str, Enum):
    """Supported request methods."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


@dataclass(frozen=True)
class FormData:
    """Multipart body: plain form fields plus file parts.

    ``files`` values follow httpx's file spec: a file object, bytes, or a
    ``(filename, content[, content_type])`` tuple.
    """

    fields: Mapping[str, str] = field(default_factory=dict)
    files: Mapping[str, Any] = field(default_factory=dict)


RequestBody = Union[str, bytes, FormData, None]


@dataclass(frozen=True)
class RequestConfig:
    """Everything the attempt loop needs to execute one call."""

    url: str
    method: HttpMethod = HttpMethod.GET
    headers: HeaderMap = field(default_factory=HeaderMap)
    params: Mapping[str, ParamValue] | None = None
    body: RequestBody = None
    adapter: ResponseAdapter | None = None
    retries: int = 0
    retry_delay: float = 1.0
    retry_backoff: bool = True
    signal: CancellationToken | None = None
    notify_on_error: bool = False
    timeout: float | None = 30.0

    @property
    def full_url(self) -> str:
        """``url`` with ``params`` applied; what the transport actually requests."""
        return append_query(self.url, self.params)

    @property
    def is_multipart(self) -> bool:
        return isinstance(self.body, FormData)

    def with_header(self, name: str, value: str) -> RequestConfig:
        return dataclasses.replace(self, headers=self.headers.set(name, value))

    def without_header(self, name: str) -> RequestConfig:
        return dataclasses.replace(self, headers=self.headers.remove(name))
