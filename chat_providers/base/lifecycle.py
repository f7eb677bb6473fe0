"""Lifecycle primitives (public API facade).

Purpose
-------
Expose :class:`Disposable` (idempotent release handle) and :class:`Emitter`
(listener fan-out) via the canonical ``chat_providers.base.lifecycle`` import
path. Registrations, cancellation subscriptions, and change notifications all
hand out ``Disposable`` objects so callers release them the same way.
"""

from .lifecycle_parts.disposable import Disposable
from .lifecycle_parts.emitter import Emitter

__all__ = ["Disposable", "Emitter"]
