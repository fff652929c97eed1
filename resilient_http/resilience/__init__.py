"""Resilience components for the HTTP client."""

from resilient_http.resilience.cancellation import CancellationToken
from resilient_http.resilience.retry_policy import RetryPolicy, is_cancellation

__all__ = [
    "CancellationToken",
    "RetryPolicy",
    "is_cancellation",
]
