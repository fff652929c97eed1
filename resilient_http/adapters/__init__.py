"""Response adapters: Standard, Raw and Smart."""

from resilient_http.adapters.base import ResponseAdapter, is_protocol_success
from resilient_http.adapters.raw import raw_adapter
from resilient_http.adapters.smart import BodyShape, classify_body, smart_adapter
from resilient_http.adapters.standard import standard_adapter

__all__ = [
    "BodyShape",
    "ResponseAdapter",
    "classify_body",
    "is_protocol_success",
    "raw_adapter",
    "smart_adapter",
    "standard_adapter",
]
