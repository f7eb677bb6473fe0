"""Interfaces (Protocols), one per module."""

from .model_listing_provider import ModelListingProvider
from .chat_provider import ChatProvider

__all__ = ["ModelListingProvider", "ChatProvider"]
