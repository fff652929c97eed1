"""Pydantic Settings for the HTTP client.

All environment variables use the HTTP_CLIENT_ prefix.
Example: HTTP_CLIENT_BASE_URL=https://api.example.com/v1, HTTP_CLIENT_DEFAULT_RETRIES=2
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class HttpClientSettings(BaseSettings):
    """HTTP client configuration validated from environment variables."""

    # Target API
    base_url: str = ""  # e.g. "https://api.example.com/v1"
    default_headers: dict[str, str] = {}

    # Resilience
    default_retries: int = Field(default=0, ge=0, le=10)
    default_retry_delay_seconds: float = Field(default=1.0, ge=0)
    default_retry_backoff: bool = True
    timeout_seconds: float = Field(default=30.0, gt=0)

    # Interceptors
    auth_token_key: str = "token"  # Credential store key for the bearer token
    request_id_header: str = "X-Request-ID"

    # Logging
    log_level: str = "INFO"

    model_config = {"env_prefix": "HTTP_CLIENT_"}
