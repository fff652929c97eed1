"""Notification sinks.

The client surfaces failures and server-declared messages through a
fire-and-forget ``notify(kind, message)`` call. The presentation layer owns
the real sink; ``LoggingNotifier`` routes notifications to a logger for
services and scripts that have no visual surface.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from resilient_http.models.envelope import NotificationType

logger = logging.getLogger(__name__)

_LEVELS: dict[NotificationType, int] = {
    NotificationType.SUCCESS: logging.INFO,
    NotificationType.INFO: logging.INFO,
    NotificationType.WARNING: logging.WARNING,
    NotificationType.ERROR: logging.ERROR,
}


@runtime_checkable
class NotificationSink(Protocol):
    """Receives user-facing notifications. Must not block."""

    def notify(self, kind: NotificationType, message: str) -> None: ...


class LoggingNotifier:
    """Notification sink that writes each notification to a logger."""

    def __init__(self, target: logging.Logger | None = None) -> None:
        self._logger = target or logger

    def notify(self, kind: NotificationType, message: str) -> None:
        self._logger.log(
            _LEVELS.get(kind, logging.INFO),
            message,
            extra={"notification_type": kind.value},
        )
