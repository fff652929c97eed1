"""Immutable, ordered, case-insensitive header multimap.

Every operation that would mutate the map returns a new ``HeaderMap``, so a
header collection can be handed from one pipeline stage to the next without
any stage observing another's changes.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Union

import httpx

HeaderInput = Union[
    "HeaderMap",
    httpx.Headers,
    Mapping[str, str],
    Iterable[tuple[str, str]],
    None,
]


class HeaderMap(Mapping[str, str]):
    """Ordered multimap of header name -> value.

    Lookups are case-insensitive and return the first value for a name.
    ``multi_items()`` exposes every pair in insertion order.
    """

    __slots__ = ("_items",)

    def __init__(self, headers: HeaderInput = None) -> None:
        self._items: tuple[tuple[str, str], ...] = _normalize(headers)

    # -- Mapping protocol ------------------------------------------------

    def __getitem__(self, name: str) -> str:
        key = name.lower()
        for item_name, value in self._items:
            if item_name.lower() == key:
                return value
        raise KeyError(name)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._items:
            key = name.lower()
            if key not in seen:
                seen.add(key)
                yield name

    def __len__(self) -> int:
        return len({name.lower() for name, _ in self._items})

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HeaderMap):
            return self._lowered() == other._lowered()
        if isinstance(other, Mapping):
            return self._lowered() == HeaderMap(other)._lowered()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._lowered())

    def __repr__(self) -> str:
        return f"HeaderMap({list(self._items)!r})"

    # -- Multimap views --------------------------------------------------

    def get_list(self, name: str) -> list[str]:
        key = name.lower()
        return [value for item_name, value in self._items if item_name.lower() == key]

    def multi_items(self) -> list[tuple[str, str]]:
        return list(self._items)

    # -- Copy-on-write operations ---------------------------------------

    def set(self, name: str, value: str) -> HeaderMap:
        """Replace every value for *name* with a single *value*.

        The new value takes the position of the first existing entry, or is
        appended when the name is absent.
        """
        key = name.lower()
        items: list[tuple[str, str]] = []
        placed = False
        for item_name, item_value in self._items:
            if item_name.lower() == key:
                if not placed:
                    items.append((name, value))
                    placed = True
                continue
            items.append((item_name, item_value))
        if not placed:
            items.append((name, value))
        return HeaderMap(items)

    def add(self, name: str, value: str) -> HeaderMap:
        return HeaderMap([*self._items, (name, value)])

    def remove(self, name: str) -> HeaderMap:
        key = name.lower()
        return HeaderMap([item for item in self._items if item[0].lower() != key])

    def merge(self, other: HeaderInput) -> HeaderMap:
        """Overlay *other* on this map; names in *other* replace existing ones."""
        overlay = HeaderMap(other)
        overridden = {name.lower() for name, _ in overlay._items}
        kept = [item for item in self._items if item[0].lower() not in overridden]
        return HeaderMap([*kept, *overlay._items])

    def _lowered(self) -> tuple[tuple[str, str], ...]:
        return tuple((name.lower(), value) for name, value in self._items)


def _normalize(headers: HeaderInput) -> tuple[tuple[str, str], ...]:
    if headers is None:
        return ()
    if isinstance(headers, HeaderMap):
        return headers._items
    if isinstance(headers, httpx.Headers):
        return tuple(headers.multi_items())
    if isinstance(headers, Mapping):
        return tuple((str(name), str(value)) for name, value in headers.items())
    return tuple((str(name), str(value)) for name, value in headers)
