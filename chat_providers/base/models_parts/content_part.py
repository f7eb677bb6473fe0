"""
Content parts carried by a chat message.

Only text parts have semantic payload in the streaming layer. Anything else
(images, tool data, ...) travels as a :class:`DataPart` placeholder which
adapters flatten to the empty string.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Union

from ..constants import TEXT_DELTA_KIND


@dataclass(frozen=True)
class TextPart:
    """A run of plain text."""

    value: str
    type: Literal["text"] = TEXT_DELTA_KIND


@dataclass(frozen=True)
class DataPart:
    """Non-text placeholder (mime type plus opaque payload)."""

    mime_type: str
    data: Dict[str, Any] = field(default_factory=dict, hash=False, compare=False)
    type: Literal["data"] = "data"


ContentPart = Union[TextPart, DataPart]


def part_text(part: ContentPart) -> str:
    """Return the text carried by ``part`` (empty for non-text parts)."""
    return part.value if isinstance(part, TextPart) else ""


__all__ = ["TextPart", "DataPart", "ContentPart", "part_text"]
