"""Streaming package for the provider layer.

Bytes in, deltas out: frame decoders split a response body into frames,
vendor extractors turn frames into :class:`TextDelta` values, the streaming
client drives one HTTP request through that pipeline, and
:class:`StreamHandle` is what callers iterate and cancel.
"""

from .frame_decoder import FrameDecoder, FrameDialect, NdjsonDecoder, SseLineDecoder, make_decoder
from .delta_extractors import (
    DeltaExtractor,
    extract_anthropic_delta,
    extract_ollama_delta,
    extract_openai_delta,
)
from .vendor_profile import ANTHROPIC_PROFILE, OLLAMA_PROFILE, OPENAI_PROFILE, PROFILES, VendorProfile
from .stream_request import StreamRequest
from .streaming_metrics import StreamMetrics
from .streaming_client import StreamingRequestClient
from .stream_handle import StreamHandle

__all__ = [
    "FrameDecoder",
    "FrameDialect",
    "NdjsonDecoder",
    "SseLineDecoder",
    "make_decoder",
    "DeltaExtractor",
    "extract_anthropic_delta",
    "extract_ollama_delta",
    "extract_openai_delta",
    "VendorProfile",
    "OPENAI_PROFILE",
    "ANTHROPIC_PROFILE",
    "OLLAMA_PROFILE",
    "PROFILES",
    "StreamRequest",
    "StreamMetrics",
    "StreamingRequestClient",
    "StreamHandle",
]
