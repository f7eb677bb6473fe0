"""
Message DTO used across providers.

Defines the immutable `Message` dataclass and the `ChatMessageRole` enum. A
message owns an ordered tuple of content parts; ``text()`` flattens them the
way every vendor schema in this package expects (text parts concatenated,
non-text parts dropped).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple, Union

from .content_part import ContentPart, TextPart, part_text


class ChatMessageRole(str, Enum):
    """Role of a message author in the backend-agnostic conversation."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """A chat message in backend-agnostic form.

    Attributes:
        role: Author role.
        content: Ordered content parts.

    Construct with :meth:`of` for the common single-text case.
    """

    role: ChatMessageRole
    content: Tuple[ContentPart, ...]

    def __post_init__(self) -> None:
        # Accept any iterable (lists included) but freeze it.
        if not isinstance(self.content, tuple):
            object.__setattr__(self, "content", tuple(self.content))
        if not isinstance(self.role, ChatMessageRole):
            object.__setattr__(self, "role", ChatMessageRole(self.role))

    @classmethod
    def of(cls, role: Union[ChatMessageRole, str], text: str) -> "Message":
        """Build a message holding a single text part."""
        return cls(role=ChatMessageRole(role), content=(TextPart(text),))

    @classmethod
    def system(cls, text: str) -> "Message":
        return cls.of(ChatMessageRole.SYSTEM, text)

    @classmethod
    def user(cls, text: str) -> "Message":
        return cls.of(ChatMessageRole.USER, text)

    @classmethod
    def assistant(cls, text: str) -> "Message":
        return cls.of(ChatMessageRole.ASSISTANT, text)

    def text(self) -> str:
        """Concatenate text parts; non-text parts contribute nothing."""
        return "".join(part_text(p) for p in self.content)


def join_text(parts: Iterable[ContentPart]) -> str:
    """Flatten arbitrary content parts to text."""
    return "".join(part_text(p) for p in parts)


__all__ = ["ChatMessageRole", "Message", "join_text"]
