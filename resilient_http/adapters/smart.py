"""Smart adapter: picks Standard or Raw from the shape of the parsed body.

The client talks both to an envelope-aware backend and to arbitrary
third-party APIs without per-call configuration. The body shape is
classified once into an explicit ``BodyShape`` and dispatched through a
table that covers every shape:

- SEQUENCE (list/tuple) -> Raw, for array-returning endpoints
- ENVELOPE (mapping with an ``isSuccess`` key) -> Standard
- OPAQUE (anything else, including unknown error bodies) -> Raw
"""

from __future__ import annotations

from enum import Enum
from typing import Any

import httpx

from resilient_http.adapters.base import ResponseAdapter
from resilient_http.adapters.raw import raw_adapter
from resilient_http.adapters.standard import standard_adapter
from resilient_http.models.envelope import ApiResponse

ENVELOPE_MARKER = "isSuccess"


class BodyShape(str, Enum):
    """Candidate shapes of a parsed response body."""

    SEQUENCE = "sequence"
    ENVELOPE = "envelope"
    OPAQUE = "opaque"


_DISPATCH: dict[BodyShape, ResponseAdapter] = {
    BodyShape.SEQUENCE: raw_adapter,
    BodyShape.ENVELOPE: standard_adapter,
    BodyShape.OPAQUE: raw_adapter,
}


def classify_body(body: Any) -> BodyShape:
    if isinstance(body, (list, tuple)):
        return BodyShape.SEQUENCE
    if isinstance(body, dict) and ENVELOPE_MARKER in body:
        return BodyShape.ENVELOPE
    return BodyShape.OPAQUE


def smart_adapter(response: httpx.Response, body: Any) -> ApiResponse[Any]:
    return _DISPATCH[classify_body(body)](response, body)
