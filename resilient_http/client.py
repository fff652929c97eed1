"""Resilient asynchronous HTTP client.

Every call walks the same pipeline:

    build config -> request interceptors -> attempt loop (transport call,
    retry decision, backoff) -> body parse -> adapter -> response
    interceptors -> notifications -> envelope

Transport failures, exhausted retries and cancellation are all captured in
the returned ``ApiResponse``; nothing transport-related is raised out of
``request()``. Errors raised by caller-supplied code (interceptors, custom
adapters) propagate unchanged.

The client holds configuration and append-only interceptor chains only, so
one instance can serve any number of concurrent requests.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import Mapping
from typing import Any

import httpx

from resilient_http.adapters.base import ResponseAdapter
from resilient_http.adapters.smart import smart_adapter
from resilient_http.config.settings import HttpClientSettings
from resilient_http.errors import ErrorCode, NetworkError, RequestAbortedError
from resilient_http.interceptors.chain import Interceptor, InterceptorChain
from resilient_http.interceptors.request_id import DEFAULT_HEADER as REQUEST_ID_HEADER
from resilient_http.models.envelope import ApiResponse, NotificationType
from resilient_http.models.headers import HeaderInput, HeaderMap
from resilient_http.models.request import (
    FormData,
    HttpMethod,
    ParamValue,
    RequestBody,
    RequestConfig,
)
from resilient_http.notifications import NotificationSink
from resilient_http.resilience.cancellation import CancellationToken
from resilient_http.resilience.retry_policy import Outcome, RetryPolicy
from resilient_http.urls import join_base

logger = logging.getLogger(__name__)

DEFAULT_HEADERS: tuple[tuple[str, str], ...] = (
    ("Content-Type", "application/json"),
    ("Accept", "application/json"),
)

NO_CONTENT_STATUS = 204
USE_CLIENT_TIMEOUT = object()
_GENERIC_ERROR_MESSAGE = "An error occurred"


class HttpClient:
    """Asynchronous HTTP client with adapters, retries and interceptors.

    Parameters
    ----------
    base_url:
        Prefix for relative endpoints (e.g. "https://api.example.com/v1").
    headers:
        Extra default headers, applied after ``Content-Type`` / ``Accept``.
    default_adapter:
        Adapter used when a call does not pick one (Smart when omitted).
    default_retries:
        Additional attempts after the first on transient failures (default 0).
    default_retry_delay:
        Seconds before the first retry (default 1.0).
    default_retry_backoff:
        Double the delay on every subsequent retry (default True).
    timeout:
        Per-attempt transport timeout in seconds; ``None`` disables it.
    notifier:
        Sink for ``notify_on_error`` calls. Without one, notifications are dropped.
    transport:
        httpx transport used for every attempt (mock or ASGI transports in tests).
    """

    def __init__(
        self,
        base_url: str = "",
        headers: HeaderInput = None,
        default_adapter: ResponseAdapter | None = None,
        default_retries: int = 0,
        default_retry_delay: float = 1.0,
        *,
        default_retry_backoff: bool = True,
        timeout: float | None = 30.0,
        notifier: NotificationSink | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url
        self._default_headers = HeaderMap(DEFAULT_HEADERS).merge(headers)
        self._adapter = default_adapter or smart_adapter
        self._default_retries = max(default_retries, 0)
        self._default_retry_delay = default_retry_delay
        self._default_retry_backoff = default_retry_backoff
        self._timeout = timeout
        self._notifier = notifier
        self._transport = transport

        self._request_interceptors: InterceptorChain[RequestConfig] = InterceptorChain(
            RequestConfig, "request"
        )
        self._response_interceptors: InterceptorChain[ApiResponse[Any]] = InterceptorChain(
            ApiResponse, "response"
        )

    @classmethod
    def from_settings(cls, settings: HttpClientSettings, **overrides: Any) -> HttpClient:
        """Build a client from validated settings; keyword overrides win."""
        options: dict[str, Any] = {
            "base_url": settings.base_url,
            "headers": settings.default_headers,
            "default_retries": settings.default_retries,
            "default_retry_delay": settings.default_retry_delay_seconds,
            "default_retry_backoff": settings.default_retry_backoff,
            "timeout": settings.timeout_seconds,
        }
        options.update(overrides)
        return cls(**options)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def default_headers(self) -> HeaderMap:
        return self._default_headers

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def use_request_interceptor(self, interceptor: Interceptor[RequestConfig]) -> None:
        self._request_interceptors.use(interceptor)

    def use_response_interceptor(self, interceptor: Interceptor[ApiResponse[Any]]) -> None:
        self._response_interceptors.use(interceptor)

    # ------------------------------------------------------------------
    # Call surface
    # ------------------------------------------------------------------

    async def request(
        self,
        endpoint: str,
        *,
        method: HttpMethod | str = HttpMethod.GET,
        headers: HeaderInput = None,
        params: Mapping[str, ParamValue] | None = None,
        body: RequestBody = None,
        notify_on_error: bool = False,
        retries: int | None = None,
        retry_delay: float | None = None,
        retry_backoff: bool | None = None,
        adapter: ResponseAdapter | None = None,
        signal: CancellationToken | None = None,
        timeout: float | None | object = USE_CLIENT_TIMEOUT,
        base_url: str | None = None,
    ) -> ApiResponse[Any]:
        """Execute one request and resolve it into an envelope.

        The default ``timeout`` keeps the client timeout; ``None``
        disables it for this call.
        """
        config = self.build_config(
            endpoint,
            method=method,
            headers=headers,
            params=params,
            body=body,
            notify_on_error=notify_on_error,
            retries=retries,
            retry_delay=retry_delay,
            retry_backoff=retry_backoff,
            adapter=adapter,
            signal=signal,
            timeout=timeout,
            base_url=base_url,
        )
        config = await self._request_interceptors.run(config)

        started = time.monotonic()
        envelope = await self._execute(config)
        envelope = await self._response_interceptors.run(envelope)

        logger.info(
            "%s %s -> %s",
            config.method.value,
            config.full_url,
            envelope.status,
            extra={
                "request_id": config.headers.get(REQUEST_ID_HEADER),
                "method": config.method.value,
                "url": config.full_url,
                "status": envelope.status,
                "error_code": envelope.error_code,
                "duration_ms": round((time.monotonic() - started) * 1000, 1),
            },
        )

        self._notify(config, envelope)
        return envelope

    async def get(self, endpoint: str, **config: Any) -> ApiResponse[Any]:
        return await self.request(endpoint, **{**config, "method": HttpMethod.GET})

    async def delete(self, endpoint: str, **config: Any) -> ApiResponse[Any]:
        return await self.request(endpoint, **{**config, "method": HttpMethod.DELETE})

    async def post(self, endpoint: str, body: Any = None, **config: Any) -> ApiResponse[Any]:
        return await self._send_with_body(HttpMethod.POST, endpoint, body, config)

    async def put(self, endpoint: str, body: Any = None, **config: Any) -> ApiResponse[Any]:
        return await self._send_with_body(HttpMethod.PUT, endpoint, body, config)

    async def patch(self, endpoint: str, body: Any = None, **config: Any) -> ApiResponse[Any]:
        return await self._send_with_body(HttpMethod.PATCH, endpoint, body, config)

    async def _send_with_body(
        self,
        method: HttpMethod,
        endpoint: str,
        body: Any,
        config: dict[str, Any],
    ) -> ApiResponse[Any]:
        return await self.request(
            endpoint,
            **{**config, "method": method, "body": serialize_body(body)},
        )

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def build_config(
        self,
        endpoint: str,
        *,
        method: HttpMethod | str = HttpMethod.GET,
        headers: HeaderInput = None,
        params: Mapping[str, ParamValue] | None = None,
        body: RequestBody = None,
        notify_on_error: bool = False,
        retries: int | None = None,
        retry_delay: float | None = None,
        retry_backoff: bool | None = None,
        adapter: ResponseAdapter | None = None,
        signal: CancellationToken | None = None,
        timeout: float | None | object = USE_CLIENT_TIMEOUT,
        base_url: str | None = None,
    ) -> RequestConfig:
        """Merge client defaults with call overrides into a fresh config.

        ``params`` stay separate from ``url`` until dispatch, so request
        interceptors can still change them.
        """
        url = join_base(endpoint, self._base_url if base_url is None else base_url)

        merged_headers = self._default_headers.merge(headers)
        if isinstance(body, FormData):
            # The transport writes the multipart boundary itself.
            merged_headers = merged_headers.remove("Content-Type")

        return RequestConfig(
            url=url,
            method=HttpMethod(method.upper() if isinstance(method, str) else method),
            headers=merged_headers,
            params=dict(params) if params else None,
            body=body,
            adapter=adapter or self._adapter,
            retries=self._default_retries if retries is None else max(retries, 0),
            retry_delay=self._default_retry_delay if retry_delay is None else retry_delay,
            retry_backoff=self._default_retry_backoff if retry_backoff is None else retry_backoff,
            signal=signal,
            notify_on_error=notify_on_error,
            timeout=self._timeout if timeout is USE_CLIENT_TIMEOUT else timeout,
        )

    # ------------------------------------------------------------------
    # Attempt loop
    # ------------------------------------------------------------------

    async def _execute(self, config: RequestConfig) -> ApiResponse[Any]:
        policy = RetryPolicy(
            retries=config.retries,
            base_delay=config.retry_delay,
            backoff=config.retry_backoff,
        )
        log_extra = {
            "request_id": config.headers.get(REQUEST_ID_HEADER),
            "method": config.method.value,
            "url": config.full_url,
        }

        outcome: Outcome | None = None
        for attempt in range(1, policy.total_attempts + 1):
            try:
                outcome = await self._dispatch(config)
            except RequestAbortedError as exc:
                logger.info(
                    "Request aborted on attempt %d/%d",
                    attempt,
                    policy.total_attempts,
                    extra={**log_extra, "attempt": attempt, "max_attempts": policy.total_attempts},
                )
                return _aborted(exc)
            except Exception as exc:  # every transport failure becomes NETWORK_ERROR
                outcome = exc

            if not policy.should_retry(attempt, outcome):
                break

            delay = policy.delay_for(attempt)
            logger.warning(
                "Transient failure (%s) on attempt %d/%d, retrying in %.2fs",
                _describe(outcome),
                attempt,
                policy.total_attempts,
                delay,
                extra={
                    **log_extra,
                    "attempt": attempt,
                    "max_attempts": policy.total_attempts,
                    "delay_seconds": delay,
                },
            )
            if await _backoff(delay, config.signal):
                return _aborted(RequestAbortedError(config.signal.reason if config.signal else None))

        if isinstance(outcome, httpx.Response):
            adapter = config.adapter or self._adapter
            return adapter(outcome, parse_body(outcome))

        return _network_failure(outcome)

    async def _dispatch(self, config: RequestConfig) -> httpx.Response:
        """Run one transport call, racing it against the cancellation token."""
        signal = config.signal
        if signal is not None and signal.cancelled:
            raise RequestAbortedError(signal.reason)

        async with httpx.AsyncClient(transport=self._transport, timeout=config.timeout) as client:
            send = client.request(config.method.value, config.full_url, **_body_kwargs(config))
            if signal is None:
                return await send

            send_task = asyncio.ensure_future(send)
            abort_task = asyncio.ensure_future(signal.wait())
            try:
                await asyncio.wait({send_task, abort_task}, return_when=asyncio.FIRST_COMPLETED)
            except asyncio.CancelledError:
                send_task.cancel()
                raise
            finally:
                abort_task.cancel()

            if signal.cancelled:
                send_task.cancel()
                try:
                    await send_task
                except (asyncio.CancelledError, Exception):
                    logger.debug("Transport call discarded after cancellation")
                raise RequestAbortedError(signal.reason)

            return send_task.result()

    # ------------------------------------------------------------------
    # Notifying
    # ------------------------------------------------------------------

    def _notify(self, config: RequestConfig, envelope: ApiResponse[Any]) -> None:
        if not config.notify_on_error or self._notifier is None:
            return

        if not envelope.is_success and envelope.error_code != ErrorCode.REQUEST_ABORTED.value:
            message = envelope.error.message if envelope.error else ""
            self._emit(NotificationType.ERROR, message or _GENERIC_ERROR_MESSAGE)

        for notification in envelope.notifications:
            self._emit(notification.type, notification.message)

    def _emit(self, kind: NotificationType, message: str) -> None:
        try:
            self._notifier.notify(kind, message)
        except Exception:
            logger.exception("Notification sink failed for %s notification", kind.value)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def serialize_body(body: Any) -> RequestBody:
    """JSON-encode a payload unless it is already a transport-ready body."""
    if body is None or isinstance(body, (str, bytes, FormData)):
        return body
    return json.dumps(body, default=str)


def parse_body(response: httpx.Response) -> Any:
    """Decode a committed response by its declared content type.

    No-content responses yield ``None``; JSON responses are decoded (``None``
    when malformed); everything else is returned as text.
    """
    if response.status_code == NO_CONTENT_STATUS:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" in content_type.lower():
        try:
            return response.json()
        except ValueError:
            logger.debug("Malformed JSON body with status %d", response.status_code)
            return None
    return response.text


def _body_kwargs(config: RequestConfig) -> dict[str, Any]:
    kwargs: dict[str, Any] = {"headers": config.headers.multi_items()}
    body = config.body
    if isinstance(body, FormData):
        kwargs["data"] = dict(body.fields)
        kwargs["files"] = dict(body.files)
    elif body is not None:
        kwargs["content"] = body
    return kwargs


async def _backoff(delay: float, signal: CancellationToken | None) -> bool:
    """Sleep between attempts; True when the token fired meanwhile."""
    if signal is None:
        await asyncio.sleep(delay)
        return False
    return await signal.sleep(delay)


def _describe(outcome: Outcome | None) -> str:
    if isinstance(outcome, httpx.Response):
        return f"status {outcome.status_code}"
    return type(outcome).__name__


def _aborted(exc: RequestAbortedError) -> ApiResponse[Any]:
    return ApiResponse.failure(
        ErrorCode.REQUEST_ABORTED.value,
        exc.message,
        details=exc.details or None,
    )


def _network_failure(exc: BaseException | None) -> ApiResponse[Any]:
    wrapped = NetworkError(str(exc) if exc is not None and str(exc) else None)
    logger.error(
        "Request failed without a response: %s",
        type(exc).__name__,
        extra={"error_code": ErrorCode.NETWORK_ERROR.value, "error_reason": wrapped.message},
    )
    return ApiResponse.failure(
        ErrorCode.NETWORK_ERROR.value,
        wrapped.message,
        details={"exception": type(exc).__name__},
    )
