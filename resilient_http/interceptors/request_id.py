"""Request ID interceptor.

Tags every outgoing request with an ``X-Request-ID`` header so server logs
can be correlated with client logs. A caller-supplied ID is kept; otherwise
a new UUID4 is generated per call.
"""

from __future__ import annotations

import uuid

from resilient_http.models.request import RequestConfig

DEFAULT_HEADER = "X-Request-ID"


class RequestIdInterceptor:
    """Request interceptor that assigns a unique request ID to each call."""

    def __init__(self, header: str = DEFAULT_HEADER) -> None:
        self._header = header

    def __call__(self, config: RequestConfig) -> RequestConfig:
        # Reuse caller-provided ID or generate a fresh one.
        if config.headers.get(self._header):
            return config
        return config.with_header(self._header, str(uuid.uuid4()))
