"""Base shared constants for the streaming chat layer.

Central location for wire-level literals so decoders and adapters do not
scatter magic strings.

Security
--------
This module contains only protocol sentinels. No credentials are embedded.
"""
from __future__ import annotations

# SSE-line dialect: only lines carrying this exact prefix have a payload.
SSE_DATA_PREFIX = "data: "

# OpenAI-compatible terminal frame body.
OPENAI_DONE_SENTINEL = "[DONE]"

# Anthropic event type that carries text.
ANTHROPIC_TEXT_EVENT = "content_block_delta"

# Frame separator shared by both line dialects.
FRAME_SEPARATOR = "\n"

# Kind tag of the only delta payload this layer emits.
TEXT_DELTA_KIND = "text"

__all__ = [
    "SSE_DATA_PREFIX",
    "OPENAI_DONE_SENTINEL",
    "ANTHROPIC_TEXT_EVENT",
    "FRAME_SEPARATOR",
    "TEXT_DELTA_KIND",
]
