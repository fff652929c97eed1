"""Error taxonomy and exception hierarchy for the HTTP client.

Callers branch on ``envelope.error.code``. The code is one of:

- a stringified protocol status (``"404"``, ``"503"``) for server-reported failures,
- ``NETWORK_ERROR`` when the transport failed before any response existed,
- ``REQUEST_ABORTED`` when the caller's cancellation token fired.

The exceptions below are used for internal signalling inside ``request()``
and for failures in caller-supplied code (interceptors). Transport-level
failures never escape the public call surface.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes that are not derived from a protocol status."""

    NETWORK_ERROR = "NETWORK_ERROR"
    REQUEST_ABORTED = "REQUEST_ABORTED"


def status_error_code(status: int) -> str:
    """Error code for a server-reported failure."""
    return str(status)


# ---------------------------------------------------------------------------
# Error hierarchy
# ---------------------------------------------------------------------------


class HttpClientError(Exception):
    """Base error for all client-specific errors."""

    message: str = "HTTP client error"

    def __init__(self, message: str | None = None, **kwargs: object) -> None:
        self.message = message or self.__class__.message
        self.details = kwargs
        super().__init__(self.message)


class RequestAbortedError(HttpClientError):
    """The cancellation token fired before or during a transport call."""

    code = ErrorCode.REQUEST_ABORTED.value
    message = "Request cancelled"


class NetworkError(HttpClientError):
    """The transport failed before a response was received."""

    code = ErrorCode.NETWORK_ERROR.value
    message = "Connection failed"


class InterceptorError(HttpClientError):
    """An interceptor returned a value of the wrong type."""

    message = "Interceptor returned an invalid value"
