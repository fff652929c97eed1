"""Raw adapter for third-party APIs: the whole body is the payload."""

from __future__ import annotations

from typing import Any

import httpx

from resilient_http.adapters.base import (
    first_text,
    is_protocol_success,
    reason_phrase,
    response_headers,
)
from resilient_http.errors import status_error_code
from resilient_http.models.envelope import ApiError, ApiResponse

_DEFAULT_MESSAGE = "External request failed"


def raw_adapter(response: httpx.Response, body: Any) -> ApiResponse[Any]:
    if is_protocol_success(response):
        return ApiResponse(
            data=body,
            error=None,
            is_success=True,
            status=response.status_code,
            headers=response_headers(response),
        )

    return ApiResponse(
        data=None,
        error=ApiError(
            code=status_error_code(response.status_code),
            message=first_text(body, "message", "error")
            or reason_phrase(response, _DEFAULT_MESSAGE),
            details=body,
        ),
        is_success=False,
        status=response.status_code,
        headers=response_headers(response),
    )
