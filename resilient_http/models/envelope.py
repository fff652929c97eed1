"""Uniform response envelope returned by every request.

Every call resolves to this shape regardless of transport outcome:
{ data, error, is_success, status, headers, notifications }

Invariants, checked when an envelope is constructed:
- is_success implies error is None
- status == 0 implies not is_success
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from resilient_http.models.headers import HeaderMap

T = TypeVar("T")
U = TypeVar("U")


class NotificationType(str, Enum):
    """Kinds of side messages a server can attach to a response."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"


class ApiError(BaseModel):
    """Error detail for an unsuccessful call."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    details: Any = None


class ApiNotification(BaseModel):
    """Server-declared side message, independent of success."""

    model_config = ConfigDict(frozen=True)

    type: NotificationType
    message: str
    code: str | None = None


class ApiResponse(BaseModel, Generic[T]):
    """Envelope for all client responses."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    data: T | None = None
    error: ApiError | None = None
    is_success: bool
    status: int = Field(ge=0)
    headers: HeaderMap = Field(default_factory=HeaderMap)
    notifications: tuple[ApiNotification, ...] = ()

    @field_validator("headers", mode="before")
    @classmethod
    def _coerce_headers(cls, value: Any) -> HeaderMap:
        if isinstance(value, HeaderMap):
            return value
        try:
            return HeaderMap(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"headers must be a mapping or name/value pairs: {exc}") from exc

    @model_validator(mode="after")
    def _check_invariants(self) -> ApiResponse[T]:
        if self.is_success and self.error is not None:
            raise ValueError("a successful envelope cannot carry an error")
        if self.status == 0 and self.is_success:
            raise ValueError("an envelope without a response cannot be successful")
        return self

    @classmethod
    def failure(
        cls,
        code: str,
        message: str,
        *,
        status: int = 0,
        details: Any = None,
    ) -> ApiResponse[Any]:
        """Build a failure envelope (no payload, no headers, no notifications)."""
        return cls(
            data=None,
            error=ApiError(code=str(code), message=message, details=details),
            is_success=False,
            status=status,
        )

    @property
    def error_code(self) -> str | None:
        return self.error.code if self.error is not None else None

    def with_data(self, data: U) -> ApiResponse[U]:
        """Return a copy carrying *data*, keeping status, headers and notifications."""
        return ApiResponse(
            data=data,
            error=self.error,
            is_success=self.is_success,
            status=self.status,
            headers=self.headers,
            notifications=self.notifications,
        )
