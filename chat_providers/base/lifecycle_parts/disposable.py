"""Disposable handle returned by subscriptions and registrations.

Wraps a release callback so it runs at most once, regardless of how many
times (or from how many threads) ``dispose`` is invoked. Usable as a context
manager so scoped acquisitions read naturally at call sites.
"""

from __future__ import annotations

from threading import Lock
from typing import Callable, Optional


class Disposable:
    """Idempotent release handle.

    Attributes:
        disposed: True once the release callback has run (or was skipped
            because none was supplied).
    """

    def __init__(self, on_dispose: Optional[Callable[[], None]] = None) -> None:
        self._on_dispose = on_dispose
        self._lock = Lock()
        self._disposed = False

    @property
    def disposed(self) -> bool:  # noqa: D401 - short form
        """Whether ``dispose`` has already been called."""
        return self._disposed

    def dispose(self) -> None:
        """Run the release callback once; later calls are no-ops."""
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            callback, self._on_dispose = self._on_dispose, None
        if callback is not None:
            callback()

    def __enter__(self) -> "Disposable":
        return self

    def __exit__(self, *exc_info) -> None:
        self.dispose()

    @classmethod
    def none(cls) -> "Disposable":
        """Return an already-inert handle (nothing to release)."""
        handle = cls()
        handle.dispose()
        return handle


__all__ = ["Disposable"]
