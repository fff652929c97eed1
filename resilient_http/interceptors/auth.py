"""Bearer-token request interceptor.

Reads the current credential from a credential store and attaches it as an
``Authorization`` header, but only for requests addressed to our own API:
relative endpoints, or absolute URLs whose host matches the configured base
URL. Third-party hosts never receive the credential.

SECURITY: Never logs credential values.
"""

from __future__ import annotations

import logging

from resilient_http.credentials import CredentialStore
from resilient_http.models.request import RequestConfig
from resilient_http.urls import host_of, is_absolute_url

logger = logging.getLogger(__name__)


def is_internal_endpoint(url: str, base_url: str) -> bool:
    """Check whether *url* belongs to the API served at *base_url*.

    Relative URLs are always internal. Absolute URLs are internal iff their
    host (and port) equals the base URL's.
    """
    if not is_absolute_url(url):
        return True
    ours = host_of(base_url) if is_absolute_url(base_url) else ""
    return bool(ours) and host_of(url) == ours


class BearerTokenInterceptor:
    """Request interceptor injecting ``Authorization: <scheme> <token>``.

    Parameters
    ----------
    credential_store:
        Synchronous key/value store holding the current token.
    base_url:
        Base URL of our API; decides which requests are internal.
    key:
        Store key under which the token lives (default ``"token"``).
    scheme:
        Authorization scheme prefix (default ``"Bearer"``).
    """

    def __init__(
        self,
        credential_store: CredentialStore,
        base_url: str,
        key: str = "token",
        scheme: str = "Bearer",
    ) -> None:
        self._store = credential_store
        self._base_url = base_url
        self._key = key
        self._scheme = scheme

    def __call__(self, config: RequestConfig) -> RequestConfig:
        if not is_internal_endpoint(config.url, self._base_url):
            logger.debug("Skipping credential injection for external host %s", host_of(config.url))
            return config

        token = self._store.read(self._key)
        if not token:
            return config

        return config.with_header("Authorization", f"{self._scheme} {token}")
