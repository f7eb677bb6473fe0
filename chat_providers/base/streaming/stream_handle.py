"""Consumer-facing handle for one streamed chat request.

A :class:`StreamHandle` is returned synchronously by ``send``; the network
call only starts when the consumer begins iterating. Besides the delta
iterator it offers ``cancel``, ``close`` (also via ``with``), and a
``result`` future resolved with a :class:`ChatResult` once the stream ends.

Teardown (metrics, the terminal log event, resolving ``result``) runs exactly
once whichever way the stream ends: exhaustion, cancellation, error, or the
consumer closing the handle early.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from typing import Callable, Iterator, List, Optional

from ..cancellation import CancellationToken
from ..errors import ProviderError
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import ChatResult, TextDelta
from .streaming_metrics import StreamMetrics

DeltaSource = Callable[[], Iterator[TextDelta]]


class StreamHandle:
    """Iterable of :class:`TextDelta` with cancellation and a result future.

    Iterate from a single thread; ``cancel`` may be called from any thread.
    """

    def __init__(
        self,
        source: DeltaSource,
        *,
        token: CancellationToken,
        ctx: LogContext,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._source = source
        self._token = token
        self._ctx = ctx
        self._logger = logger or get_logger("providers.stream")
        self._metrics = StreamMetrics()
        self._lock = threading.Lock()
        self._finished = False
        self._iterator: Optional[Iterator[TextDelta]] = None
        self.result: "Future[ChatResult]" = Future()

    # Iteration -----------------------------------------------------------
    def __iter__(self) -> "StreamHandle":
        return self

    def __next__(self) -> TextDelta:
        if self._iterator is None:
            if self._finished:
                raise StopIteration
            self._iterator = self._run()
        return next(self._iterator)

    def _run(self) -> Iterator[TextDelta]:
        self._metrics = StreamMetrics()
        normalized_log_event(self._logger, "stream.start", self._ctx, phase="start", emitted=0)
        source: Optional[Iterator[TextDelta]] = None
        try:
            source = self._source()
            for delta in source:
                self._metrics.record_delta()
                yield delta
        except GeneratorExit:
            # Closed or garbage-collected before exhaustion.
            self._token.cancel("stream abandoned")
            raise
        except KeyboardInterrupt:
            self._token.cancel("interrupted")
            raise
        except Exception as exc:
            self._finish(error=exc)
            raise
        finally:
            close = getattr(source, "close", None)
            if close is not None:
                close()
            self._finish()

    # Control -------------------------------------------------------------
    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def cancelled(self) -> bool:
        return self._token.cancelled

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def emitted(self) -> int:
        return self._metrics.emitted

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cancellation; safe to call repeatedly or after the end."""
        self._token.cancel(reason or "cancelled by consumer")

    def close(self) -> None:
        """Stop the stream (if running) and release its resources."""
        if not self._finished:
            self.cancel("handle closed")
        iterator = self._iterator
        if iterator is not None:
            iterator.close()
        self._finish()

    def __enter__(self) -> "StreamHandle":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # Convenience ---------------------------------------------------------
    def text(self) -> str:
        """Drain the stream and return the concatenated text."""
        parts: List[str] = [delta.value for delta in self]
        return "".join(parts)

    # Teardown ------------------------------------------------------------
    def _finish(self, error: Optional[BaseException] = None) -> None:
        with self._lock:
            if self._finished:
                return
            self._finished = True
        self._token.detach()
        self._metrics.finish()
        cancelled = self._token.cancelled
        if error is not None:
            code = error.code.value if isinstance(error, ProviderError) else type(error).__name__
            normalized_log_event(
                self._logger,
                "stream.error",
                self._ctx,
                phase="finalize",
                error_code=code,
                emitted=self._metrics.emitted,
                level=logging.WARNING,
                error=str(error),
                total_duration_ms=self._metrics.total_duration_ms,
            )
            self.result.set_exception(error)
            return
        normalized_log_event(
            self._logger,
            "stream.cancelled" if cancelled else "stream.end",
            self._ctx,
            phase="finalize",
            emitted=self._metrics.emitted,
            reason=self._token.reason if cancelled else None,
            time_to_first_delta_ms=self._metrics.time_to_first_delta_ms,
            total_duration_ms=self._metrics.total_duration_ms,
        )
        self.result.set_result(
            ChatResult(
                provider=self._ctx.provider or "",
                model=self._ctx.model or "",
                emitted=self._metrics.emitted,
                cancelled=cancelled,
                time_to_first_delta_ms=self._metrics.time_to_first_delta_ms,
                total_duration_ms=self._metrics.total_duration_ms,
            )
        )


__all__ = ["StreamHandle", "DeltaSource"]
