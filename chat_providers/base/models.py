"""
Provider-agnostic domain models (DTOs) public surface.

Re-exports the one-class-per-file implementations under
``chat_providers.base.models_parts``.
"""

from .models_parts.content_part import ContentPart, DataPart, TextPart, part_text
from .models_parts.message import ChatMessageRole, Message, join_text
from .models_parts.model_capabilities import ModelCapabilities
from .models_parts.model_descriptor import ModelDescriptor
from .models_parts.vendor_snapshot import VendorSnapshot
from .models_parts.text_delta import TextDelta
from .models_parts.chat_result import ChatResult

__all__ = [
    "ContentPart",
    "DataPart",
    "TextPart",
    "part_text",
    "ChatMessageRole",
    "Message",
    "join_text",
    "ModelCapabilities",
    "ModelDescriptor",
    "VendorSnapshot",
    "TextDelta",
    "ChatResult",
]
