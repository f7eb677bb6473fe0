"""Validated DTOs (pydantic) used at the boundaries of the chat layer."""

from .chat_options import ChatOptions
from .vendor_settings import VendorSettings

__all__ = ["ChatOptions", "VendorSettings"]
