"""Composition root (registry, directory, dispatcher) for the chat layer."""
from __future__ import annotations

from .container import ProvidersContainer, build_container

__all__ = ["ProvidersContainer", "build_container"]
