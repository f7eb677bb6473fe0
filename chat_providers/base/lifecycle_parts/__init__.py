"""Lifecycle parts package (one class per module)."""

from .disposable import Disposable
from .emitter import Emitter

__all__ = ["Disposable", "Emitter"]
