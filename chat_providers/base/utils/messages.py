"""Message conversion helpers shared across vendor adapters.

Pure functions over provider-agnostic :class:`Message` DTOs; no I/O.
Content parts that carry no text (binary data parts) flatten to nothing.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from ..models import ChatMessageRole, Message

WireMessage = Dict[str, str]


def to_wire_messages(messages: Iterable[Message]) -> List[WireMessage]:
    """``[{"role": ..., "content": ...}]`` in input order, all roles kept."""
    return [{"role": m.role.value, "content": m.text()} for m in messages]


def split_system(messages: Iterable[Message]) -> Tuple[Optional[str], List[Message]]:
    """Separate system instructions from the conversational turns.

    Returns ``(system_text, rest)`` where ``system_text`` is the text of the
    *first* system message (``None`` when there is none) and ``rest`` holds
    every non-system message in order. Later system messages are dropped.
    """
    system: Optional[str] = None
    rest: List[Message] = []
    for m in messages:
        if m.role is ChatMessageRole.SYSTEM:
            if system is None:
                system = m.text()
            continue
        rest.append(m)
    return system, rest


__all__ = ["WireMessage", "to_wire_messages", "split_system"]
