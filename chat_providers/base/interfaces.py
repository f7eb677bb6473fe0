"""
Provider-agnostic interfaces (Protocols) for the chat layer.

Re-exports the single-class modules under
``chat_providers.base.interfaces_parts``.
"""

from __future__ import annotations

from .interfaces_parts import ChatProvider, ModelListingProvider

__all__ = ["ChatProvider", "ModelListingProvider"]
