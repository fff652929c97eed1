"""Credential stores consulted by request interceptors.

The client never owns credentials; it reads them through a synchronous
key/value protocol. Two stores are provided: an in-memory mapping (for
applications that keep the session token in process) and an environment
variable store.

SECURITY: Never logs or persists credential values.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Protocol, runtime_checkable


@runtime_checkable
class CredentialStore(Protocol):
    """Synchronous key/value read of stored credentials."""

    def read(self, key: str) -> str | None: ...


class MappingCredentialStore:
    """Credential store backed by a mutable in-memory mapping."""

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(values or {})

    def read(self, key: str) -> str | None:
        return self._values.get(key)

    def write(self, key: str, value: str) -> None:
        self._values[key] = value

    def clear(self, key: str) -> None:
        """Remove a stored credential. Missing keys are ignored."""
        self._values.pop(key, None)


class EnvCredentialStore:
    """Credential store reading ``<prefix><KEY>`` environment variables."""

    def __init__(self, prefix: str = "HTTP_CLIENT_CREDENTIAL_") -> None:
        self._prefix = prefix

    def read(self, key: str) -> str | None:
        value = os.getenv(f"{self._prefix}{key.upper()}", "").strip()
        return value or None
