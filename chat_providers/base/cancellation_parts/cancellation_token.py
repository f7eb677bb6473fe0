"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class used across providers to end streaming
requests early. Besides polling (``cancelled`` / ``raise_if_cancelled``), a
token accepts callbacks via ``register`` so transports can translate a cancel
request into their native abort primitive (closing the HTTP response).
"""

from __future__ import annotations

from threading import Lock
from typing import Callable, List

from ..lifecycle_parts.disposable import Disposable
from ..logging import get_logger
from .state import State
from .cancelled_error import CancelledError

_logger = get_logger("providers.cancellation")


class CancellationToken:
    """A cooperative cancellation token with optional cascading semantics.

    Thread-safe. Callbacks registered before cancellation run exactly once on
    the cancelling thread; callbacks registered after cancellation run
    immediately on the registering thread. Child tokens inherit cancellation
    when the parent is cancelled.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        self._callbacks: List[Callable[[], None]] = []
        self._parent: "CancellationToken | None" = None
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cooperative cancellation, run callbacks, cascade to children."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            children = list(self._children)
            callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            self._run_callback(callback)
        for child in children:
            child.cancel(reason)

    def register(self, callback: Callable[[], None]) -> Disposable:
        """Invoke ``callback`` when cancellation is requested.

        Returns a :class:`Disposable` that removes the callback; disposing after
        the callback already ran is a no-op.
        """
        with self._lock:
            if not self._state.cancelled:
                self._callbacks.append(callback)

                def _remove() -> None:
                    with self._lock:
                        if callback in self._callbacks:
                            self._callbacks.remove(callback)

                return Disposable(_remove)
        self._run_callback(callback)
        return Disposable.none()

    @property
    def callback_count(self) -> int:
        """Number of callbacks still waiting for cancellation."""
        return len(self._callbacks)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            token._parent = self
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def unlink_child(self, token: "CancellationToken") -> None:
        """Stop cascading to ``token``; unknown tokens are ignored."""
        with self._lock:
            if token in self._children:
                self._children.remove(token)
            if token._parent is self:
                token._parent = None

    def detach(self) -> None:
        """Unlink this token from its parent; a no-op for root tokens."""
        parent = self._parent
        if parent is not None:
            parent.unlink_child(self)

    @property
    def child_count(self) -> int:
        """Number of linked child tokens."""
        return len(self._children)

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    @staticmethod
    def _run_callback(callback: Callable[[], None]) -> None:
        try:
            callback()
        except Exception:  # noqa: BLE001 - one faulty callback must not block the rest
            _logger.exception("cancellation callback raised")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, callbacks={len(self._callbacks)}, "
            f"children={len(self._children)})"
        )


__all__ = ["CancellationToken"]
