"""Retry policy for transient request failures.

Decides, per attempt outcome, whether another attempt should be made and
how long to wait before it.

Key behaviors:
- total attempts = 1 + retries
- transport exceptions are retryable unless they are cancellations
- responses are retryable iff status >= 500 or status == 429
- delay = base_delay * 2^(retry_index - 1) with backoff, base_delay without
- the final attempt is never checked; its outcome is what gets returned
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Union

import httpx

from resilient_http.errors import RequestAbortedError

Outcome = Union[httpx.Response, BaseException]

RATE_LIMITED_STATUS = 429
SERVER_ERROR_FLOOR = 500


def is_cancellation(exc: BaseException) -> bool:
    return isinstance(exc, (RequestAbortedError, asyncio.CancelledError))


@dataclass(frozen=True)
class RetryPolicy:
    """Retry decision and delay computation for one request.

    Args:
        retries: Additional attempts allowed beyond the first.
        base_delay: Delay in seconds before the first retry.
        backoff: Double the delay on every subsequent retry.
    """

    retries: int = 0
    base_delay: float = 1.0
    backoff: bool = True

    @property
    def total_attempts(self) -> int:
        return 1 + max(self.retries, 0)

    def is_retryable(self, outcome: Outcome) -> bool:
        if isinstance(outcome, httpx.Response):
            status = outcome.status_code
            return status >= SERVER_ERROR_FLOOR or status == RATE_LIMITED_STATUS
        return not is_cancellation(outcome)

    def delay_for(self, retry_index: int) -> float:
        """Seconds to wait before retry number *retry_index* (1-based)."""
        if not self.backoff:
            return self.base_delay
        return self.base_delay * (2 ** (max(retry_index, 1) - 1))

    def should_retry(self, attempt: int, outcome: Outcome) -> bool:
        """True when *attempt* (1-based) is not the last and *outcome* is transient."""
        return attempt < self.total_attempts and self.is_retryable(outcome)
