"""Standard adapter for envelope-aware backends.

Expects the server to answer with { data, isSuccess, error, notifications }.
Missing fields fall back to what the protocol status says.
"""

from __future__ import annotations

from typing import Any

import httpx

from resilient_http.adapters.base import (
    first_text,
    is_protocol_success,
    parse_notifications,
    reason_phrase,
    response_headers,
)
from resilient_http.errors import status_error_code
from resilient_http.models.envelope import ApiError, ApiResponse

_DEFAULT_MESSAGE = "Request failed"


def _declared_error(response: httpx.Response, declared: Any) -> ApiError:
    """Normalize a server-declared ``error`` value into an ApiError."""
    code = status_error_code(response.status_code)
    if isinstance(declared, dict):
        message = first_text(declared, "message") or reason_phrase(response, _DEFAULT_MESSAGE)
        declared_code = declared.get("code")
        return ApiError(
            code=str(declared_code) if declared_code is not None else code,
            message=message,
            details=declared.get("details"),
        )
    if isinstance(declared, str) and declared:
        return ApiError(code=code, message=declared)
    return ApiError(code=code, message=reason_phrase(response, _DEFAULT_MESSAGE), details=declared)


def standard_adapter(response: httpx.Response, body: Any) -> ApiResponse[Any]:
    payload = body if isinstance(body, dict) else {}
    ok = is_protocol_success(response)

    declared_success = payload.get("isSuccess")
    is_success = ok if declared_success is None else bool(declared_success)

    error: ApiError | None = None
    if not is_success:
        declared_error = payload.get("error")
        if declared_error:
            error = _declared_error(response, declared_error)
        elif not ok:
            error = ApiError(
                code=status_error_code(response.status_code),
                message=first_text(payload, "message")
                or reason_phrase(response, _DEFAULT_MESSAGE),
            )

    return ApiResponse(
        data=payload.get("data"),
        error=error,
        is_success=is_success,
        status=response.status_code,
        headers=response_headers(response),
        notifications=parse_notifications(payload.get("notifications")),
    )
