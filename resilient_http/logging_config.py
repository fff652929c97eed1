"""JSON log output for the HTTP client.

Every entry carries request_id, level, timestamp and message. Records
emitted by the client add method, url and status. Retry records add
attempt, max_attempts and delay_seconds.

Credential values, auth tokens and request bodies never reach the output:
free text is scrubbed for ``key=value`` and bearer forms, and URLs keep
their query names but lose the values of sensitive parameters.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import IO, Any, Optional

REDACTED = "[REDACTED]"

_SENSITIVE_TEXT = re.compile(
    r"(api.key|secret|password|token|credential|authorization)"
    r"[\s]*[=:]\s*(?:bearer\s+)?\S+"
    r"|bearer\s+\S+",
    re.IGNORECASE,
)

# A query pair whose name looks like a credential: ?api_key=..., &access_token=...
_SENSITIVE_QUERY_PAIR = re.compile(
    r"([?&][^=&#]*(?:key|secret|password|token|credential|signature|auth)[^=&#]*=)[^&#]*",
    re.IGNORECASE,
)

_CONTEXT_FIELDS = (
    "method",
    "status",
    "attempt",
    "max_attempts",
    "delay_seconds",
    "error_code",
    "duration_ms",
    "notification_type",
)


def redact_text(text: str) -> str:
    return _SENSITIVE_TEXT.sub(REDACTED, text)


def redact_url(url: str) -> str:
    """Blank the values of credential-like query parameters in *url*."""
    return _SENSITIVE_QUERY_PAIR.sub(rf"\1{REDACTED}", url)


class JsonFormatter(logging.Formatter):
    """Formats log records as one JSON object per line.

    Fields passed through ``extra`` on client log calls are copied when
    present; anything else on the record is ignored.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": redact_text(record.getMessage()),
            "request_id": getattr(record, "request_id", None),
        }

        url = getattr(record, "url", None)
        if url is not None:
            entry["url"] = redact_url(str(url))

        for name in _CONTEXT_FIELDS:
            if hasattr(record, name):
                value = getattr(record, name)
                entry[name] = redact_text(value) if isinstance(value, str) else value

        if hasattr(record, "error_reason"):
            entry["error_reason"] = redact_text(str(getattr(record, "error_reason")))

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = redact_text(self.formatException(record.exc_info))

        return json.dumps(entry, default=str)


def configure_logging(
    level: str = "INFO",
    *,
    logger_name: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> logging.Handler:
    """Install a single JSON handler and return it.

    Parameters
    ----------
    level:
        Log level name, usually ``HttpClientSettings.log_level``. Unknown
        names fall back to INFO.
    logger_name:
        Logger to configure. ``None`` configures the root logger;
        ``"resilient_http"`` scopes output to this package.
    stream:
        Destination stream, stderr by default.
    """
    target = logging.getLogger(logger_name)
    target.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Replace rather than stack handlers when called more than once
    target.handlers.clear()

    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter())
    target.addHandler(handler)
    return handler
