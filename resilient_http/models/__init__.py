"""Public models for the HTTP client."""

from resilient_http.models.envelope import (
    ApiError,
    ApiNotification,
    ApiResponse,
    NotificationType,
)
from resilient_http.models.headers import HeaderMap
from resilient_http.models.request import FormData, HttpMethod, RequestConfig

__all__ = [
    "ApiError",
    "ApiNotification",
    "ApiResponse",
    "FormData",
    "HeaderMap",
    "HttpMethod",
    "NotificationType",
    "RequestConfig",
]
