"""Construction of the application's API client.

The client is built once at startup and handed to whatever needs it; there
is no module-level instance.
"""

from __future__ import annotations

import logging

import httpx

from resilient_http.client import HttpClient
from resilient_http.config.settings import HttpClientSettings
from resilient_http.credentials import CredentialStore
from resilient_http.interceptors.auth import BearerTokenInterceptor
from resilient_http.interceptors.request_id import RequestIdInterceptor
from resilient_http.notifications import NotificationSink

logger = logging.getLogger(__name__)


def create_api_client(
    settings: HttpClientSettings,
    *,
    credential_store: CredentialStore | None = None,
    notifier: NotificationSink | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> HttpClient:
    """Build a client from settings with the standard request interceptors.

    Interceptor order: request id first, then bearer token (only when a
    credential store is supplied, scoped to ``settings.base_url``).
    """
    client = HttpClient.from_settings(settings, notifier=notifier, transport=transport)
    client.use_request_interceptor(RequestIdInterceptor(settings.request_id_header))

    if credential_store is not None:
        client.use_request_interceptor(
            BearerTokenInterceptor(
                credential_store,
                base_url=settings.base_url,
                key=settings.auth_token_key,
            )
        )

    logger.info(
        "API client ready for %s (retries=%d, backoff=%s)",
        settings.base_url or "<relative>",
        settings.default_retries,
        settings.default_retry_backoff,
    )
    return client
