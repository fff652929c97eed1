"""URL resolution and query serialization for outgoing requests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Union
from urllib.parse import urlencode, urlparse

ParamValue = Union[str, int, float, bool, None]

_ABSOLUTE_SCHEMES = ("http://", "https://")


def is_absolute_url(url: str) -> bool:
    return url.lower().startswith(_ABSOLUTE_SCHEMES)


def host_of(url: str) -> str:
    """Lower-cased ``host[:port]`` of an absolute URL, empty for relative ones."""
    return urlparse(url).netloc.lower()


def _param_text(value: ParamValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_params(params: Mapping[str, ParamValue] | None) -> str:
    """Serialize query parameters, omitting ``None`` values."""
    if not params:
        return ""
    pairs = [(key, _param_text(value)) for key, value in params.items() if value is not None]
    return urlencode(pairs)


def join_base(endpoint: str, base_url: str) -> str:
    """Absolute endpoints pass through unchanged; relative ones get *base_url* prefixed."""
    return endpoint if is_absolute_url(endpoint) else f"{base_url}{endpoint}"


def append_query(url: str, params: Mapping[str, ParamValue] | None) -> str:
    """Append serialized *params*, joined with ``?`` or ``&`` as the URL requires."""
    query = encode_params(params)
    if not query:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"


def resolve_url(
    endpoint: str,
    base_url: str,
    params: Mapping[str, ParamValue] | None = None,
) -> str:
    """Build the request URL from an endpoint, a base URL and query parameters."""
    return append_query(join_base(endpoint, base_url), params)
