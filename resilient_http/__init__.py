"""Resilient asynchronous HTTP client with adapters, retries and interceptors."""

from resilient_http.adapters import raw_adapter, smart_adapter, standard_adapter
from resilient_http.client import HttpClient
from resilient_http.composition import create_api_client
from resilient_http.config import HttpClientSettings
from resilient_http.credentials import (
    CredentialStore,
    EnvCredentialStore,
    MappingCredentialStore,
)
from resilient_http.errors import ErrorCode
from resilient_http.interceptors import BearerTokenInterceptor, RequestIdInterceptor
from resilient_http.logging_config import JsonFormatter, configure_logging
from resilient_http.models import (
    ApiError,
    ApiNotification,
    ApiResponse,
    FormData,
    HeaderMap,
    HttpMethod,
    NotificationType,
    RequestConfig,
)
from resilient_http.notifications import LoggingNotifier, NotificationSink
from resilient_http.resilience import CancellationToken, RetryPolicy

__all__ = [
    "ApiError",
    "ApiNotification",
    "ApiResponse",
    "BearerTokenInterceptor",
    "CancellationToken",
    "CredentialStore",
    "EnvCredentialStore",
    "ErrorCode",
    "FormData",
    "HeaderMap",
    "HttpClient",
    "HttpClientSettings",
    "HttpMethod",
    "JsonFormatter",
    "LoggingNotifier",
    "MappingCredentialStore",
    "NotificationSink",
    "NotificationType",
    "RequestConfig",
    "RequestIdInterceptor",
    "RetryPolicy",
    "configure_logging",
    "create_api_client",
    "raw_adapter",
    "smart_adapter",
    "standard_adapter",
]
