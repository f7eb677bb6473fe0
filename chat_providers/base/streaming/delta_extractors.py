"""Per-vendor translation of one decoded frame into at most one text delta.

All three upstreams interleave control events (role headers, pings, block
start/stop, usage, ``done`` markers) with content events on the same channel,
so anything that is not recognisably text is dropped. Malformed JSON is
dropped too: a single garbled frame must not abort an otherwise good stream.
Each dropped frame is logged at DEBUG as ``stream.frame_skip`` and never
raised.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Optional

from ..constants import ANTHROPIC_TEXT_EVENT, OPENAI_DONE_SENTINEL
from ..logging import get_logger, log_event
from ..models import TextDelta

DeltaExtractor = Callable[[str], Optional[TextDelta]]

_logger = get_logger("providers.streaming.extract")
_PREVIEW_CHARS = 120


def _skip(vendor: str, reason: str, frame: str) -> None:
    log_event(
        _logger,
        "stream.frame_skip",
        level=logging.DEBUG,
        vendor=vendor,
        reason=reason,
        frame=frame[:_PREVIEW_CHARS],
    )


def _load_object(vendor: str, frame: str) -> Optional[Dict[str, Any]]:
    """Parse ``frame`` as a JSON object; ``None`` (and a skip log) otherwise."""
    try:
        parsed = json.loads(frame)
    except ValueError:
        _skip(vendor, "malformed_json", frame)
        return None
    if not isinstance(parsed, dict):
        _skip(vendor, "not_an_object", frame)
        return None
    return parsed


def _text_delta(value: Any) -> Optional[TextDelta]:
    if isinstance(value, str) and value:
        return TextDelta(value)
    return None


def extract_openai_delta(frame: str) -> Optional[TextDelta]:
    """``choices[0].delta.content`` of a chat-completions chunk.

    ``[DONE]`` is the normal terminal frame: no delta, no error.
    """
    if frame.strip() == OPENAI_DONE_SENTINEL:
        return None
    obj = _load_object("openai", frame)
    if obj is None:
        return None
    choices = obj.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return None
    delta = choices[0].get("delta")
    if not isinstance(delta, dict):
        return None
    return _text_delta(delta.get("content"))


def extract_anthropic_delta(frame: str) -> Optional[TextDelta]:
    """``delta.text`` of ``content_block_delta`` events; every other type is ignored."""
    obj = _load_object("anthropic", frame)
    if obj is None or obj.get("type") != ANTHROPIC_TEXT_EVENT:
        return None
    delta = obj.get("delta")
    if not isinstance(delta, dict):
        return None
    return _text_delta(delta.get("text"))


def extract_ollama_delta(frame: str) -> Optional[TextDelta]:
    """``message.content`` of an ``/api/chat`` NDJSON line."""
    obj = _load_object("ollama", frame)
    if obj is None:
        return None
    message = obj.get("message")
    if not isinstance(message, dict):
        return None
    return _text_delta(message.get("content"))


__all__ = [
    "DeltaExtractor",
    "extract_openai_delta",
    "extract_anthropic_delta",
    "extract_ollama_delta",
]
