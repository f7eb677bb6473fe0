"""Minimal synchronous event emitter.

Listeners subscribe with a callable and receive a :class:`Disposable` that
removes them. ``fire`` invokes a snapshot of the listener list so listeners may
unsubscribe (or subscribe others) while an event is being delivered.
"""

from __future__ import annotations

from threading import Lock
from typing import Callable, Generic, Tuple, TypeVar

from ..logging import get_logger
from .disposable import Disposable

T = TypeVar("T")

_logger = get_logger("providers.events")


class Emitter(Generic[T]):
    """Fan-out of a single event type to registered listeners."""

    def __init__(self, name: str = "event") -> None:
        self._name = name
        self._lock = Lock()
        self._listeners: Tuple[Callable[[T], None], ...] = ()

    def subscribe(self, listener: Callable[[T], None]) -> Disposable:
        """Register ``listener``; dispose the returned handle to remove it."""
        with self._lock:
            self._listeners = self._listeners + (listener,)

        def _remove() -> None:
            with self._lock:
                self._listeners = tuple(l for l in self._listeners if l is not listener)

        return Disposable(_remove)

    # Alias matching the ``on_did_change(listener)`` reading at call sites.
    __call__ = subscribe

    def fire(self, value: T) -> None:
        """Deliver ``value`` to every listener registered at call time.

        A failing listener is logged and does not prevent delivery to the
        remaining listeners.
        """
        for listener in self._listeners:
            try:
                listener(value)
            except Exception:  # noqa: BLE001 - listener faults are isolated
                _logger.exception("listener for %s raised", self._name)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)


__all__ = ["Emitter"]
