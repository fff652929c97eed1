"""Configuration module: client settings."""

from resilient_http.config.settings import HttpClientSettings

__all__ = [
    "HttpClientSettings",
]
