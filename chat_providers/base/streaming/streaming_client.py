"""Shared streaming HTTP client for every vendor.

One POST per request; the response body is read incrementally with
``httpx.Client.send(stream=True)`` and pushed through the vendor's frame
decoder and delta extractor (see :class:`VendorProfile`).

Cancellation
------------
The POST itself runs on a worker thread while the generator waits for the
response head, so a cancel that arrives before headers ends the stream at once
with no deltas and no error. After that, a callback registered on the
request's :class:`CancellationToken` closes the open response, and the token
is checked again after every transport read and after every delivered delta.
A transport fault raised *after* a cancel request is the expected consequence
of aborting and ends the stream cleanly. The callback registration is
disposed and the response closed on every exit path, including the consumer
abandoning the generator.
"""
from __future__ import annotations

import logging
import threading
from typing import Iterator, Optional

import httpx

from ..cancellation import CancellationToken
from ..errors import RETRYABLE_CODES, ErrorCode, TransportError, classify_exception, classify_status
from ..http import get_httpx_client
from ..logging import LogContext, get_logger, log_event
from ..models import TextDelta
from .stream_request import StreamRequest
from .vendor_profile import VendorProfile

_NO_BODY_STATUSES = frozenset({204, 205, 304})


def _has_readable_body(response: httpx.Response) -> bool:
    if response.status_code in _NO_BODY_STATUSES:
        return False
    return response.headers.get("content-length", "").strip() != "0"


class StreamingRequestClient:
    """POST a :class:`StreamRequest` and yield :class:`TextDelta` values."""

    def __init__(
        self,
        profile: VendorProfile,
        *,
        http_client: Optional[httpx.Client] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._profile = profile
        self._http_client = http_client
        self._logger = logger or get_logger(f"providers.{profile.vendor}.stream")

    @property
    def profile(self) -> VendorProfile:
        return self._profile

    def _client(self) -> httpx.Client:
        return self._http_client or get_httpx_client(None, purpose="stream")

    def _transport_error(
        self,
        message: str,
        ctx: Optional[LogContext],
        *,
        status: Optional[int] = None,
        exc: Optional[Exception] = None,
    ) -> TransportError:
        if status is not None:
            code = classify_status(status)
        elif exc is not None:
            code = classify_exception(exc)
        else:
            code = ErrorCode.TRANSPORT
        return TransportError(
            message=message,
            provider=self._profile.vendor,
            model=ctx.model if ctx else None,
            retryable=code in RETRYABLE_CODES,
            status_code=status,
            raw=exc,
            code=code,
        )

    def stream(
        self,
        request: StreamRequest,
        token: Optional[CancellationToken] = None,
        ctx: Optional[LogContext] = None,
    ) -> Iterator[TextDelta]:
        """Generator of deltas for ``request``; nothing happens until first ``next``.

        Raises:
            TransportError: non-2xx status, no readable body, or a transport
                fault that was not caused by cancellation. Raised at most once
                and never after a delta that followed it.
        """
        token = token or CancellationToken()
        if token.cancelled:
            return
        vendor = self._profile.vendor
        decoder = self._profile.new_decoder()
        extract = self._profile.extractor
        client = self._client()
        http_request = client.build_request("POST", request.url, json=request.body, headers=request.headers)
        pending = _PendingSend(client, http_request, name=f"{vendor}-send")

        def _abort() -> None:
            log_event(self._logger, "stream.abort", ctx, level=logging.DEBUG)
            pending.abort()

        registration = token.register(_abort)
        try:
            try:
                response = pending.wait()
            except (httpx.HTTPError, OSError) as exc:
                if token.cancelled:
                    return
                raise self._transport_error(f"{vendor} request failed: {exc}", ctx, exc=exc) from exc
            if response is None:
                return
            try:
                if token.cancelled:
                    return
                if not response.is_success:
                    raise self._transport_error(
                        f"{vendor} API error: {response.status_code} {response.reason_phrase}",
                        ctx,
                        status=response.status_code,
                    )
                if not _has_readable_body(response):
                    raise self._transport_error("No response body", ctx, status=response.status_code)
                try:
                    for chunk in response.iter_bytes():
                        if token.cancelled:
                            return
                        for frame in decoder.feed(chunk):
                            delta = extract(frame)
                            if delta is None:
                                continue
                            yield delta
                            if token.cancelled:
                                return
                except (httpx.HTTPError, httpx.StreamError, OSError) as exc:
                    if token.cancelled:
                        return
                    raise self._transport_error(f"{vendor} stream interrupted: {exc}", ctx, exc=exc) from exc
                decoder.close()
            finally:
                response.close()
        finally:
            registration.dispose()
            pending.abort()


class _PendingSend:
    """``client.send(stream=True)`` on a worker thread, abortable before headers.

    Waiting for the response head cannot be interrupted from another thread in
    the sync client, so the send runs on a daemon thread and the caller waits
    on an event that either the worker or :meth:`abort` sets. A response that
    arrives after an abort is closed by the worker.
    """

    def __init__(self, client: httpx.Client, request: httpx.Request, *, name: str) -> None:
        self._client = client
        self._request = request
        self._lock = threading.Lock()
        self._ready = threading.Event()
        self._response: Optional[httpx.Response] = None
        self._error: Optional[Exception] = None
        self._aborted = False
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        response: Optional[httpx.Response] = None
        error: Optional[Exception] = None
        try:
            response = self._client.send(self._request, stream=True)
        except Exception as exc:  # noqa: BLE001 - handed to the waiting thread
            error = exc
        with self._lock:
            aborted = self._aborted
            self._response, self._error = response, error
        if aborted and response is not None:
            response.close()
        self._ready.set()

    def wait(self) -> Optional[httpx.Response]:
        """Block until the response head arrives or the send is aborted.

        Returns ``None`` when aborted first; re-raises the worker's error.
        """
        try:
            self._ready.wait()
        except BaseException:
            self.abort()
            raise
        with self._lock:
            if self._aborted:
                return None
            if self._error is not None:
                raise self._error
            return self._response

    def abort(self) -> None:
        """Give up on the send; an already delivered response is closed."""
        with self._lock:
            if self._aborted:
                return
            self._aborted = True
            response = self._response
        if response is not None:
            response.close()
        self._ready.set()


__all__ = ["StreamingRequestClient"]
