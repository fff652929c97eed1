"""Ordered interceptor chains.

A chain applies its stages strictly in registration order, feeding each
stage's output (awaited when it is awaitable) into the next. Stages are
registered at setup time and only read while requests are processed.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable
from typing import Callable, Generic, TypeVar, Union

from resilient_http.errors import InterceptorError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Interceptor = Callable[[T], Union[T, Awaitable[T]]]


class InterceptorChain(Generic[T]):
    """Append-only list of interceptors over values of type ``expected``."""

    def __init__(self, expected: type, name: str) -> None:
        self._expected = expected
        self._name = name
        self._stages: list[Interceptor[T]] = []

    def __len__(self) -> int:
        return len(self._stages)

    def use(self, interceptor: Interceptor[T]) -> None:
        self._stages.append(interceptor)
        logger.debug("Registered %s interceptor %r", self._name, interceptor)

    async def run(self, value: T) -> T:
        for index, stage in enumerate(self._stages):
            result = stage(value)
            if inspect.isawaitable(result):
                result = await result
            if not isinstance(result, self._expected):
                raise InterceptorError(
                    f"{self._name} interceptor #{index} returned "
                    f"{type(result).__name__}, expected {self._expected.__name__}",
                    interceptor=repr(stage),
                )
            value = result
        return value
