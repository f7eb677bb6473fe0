"""Per-vendor streaming strategy.

A :class:`VendorProfile` is the only thing that differs between vendors once
a request has been built: which line dialect frames the body and which
extractor turns a frame into a delta. The streaming client is otherwise
shared.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .delta_extractors import (
    DeltaExtractor,
    extract_anthropic_delta,
    extract_ollama_delta,
    extract_openai_delta,
)
from .frame_decoder import FrameDecoder, FrameDialect, make_decoder


@dataclass(frozen=True)
class VendorProfile:
    """Framing dialect plus delta extractor for one vendor."""

    vendor: str
    dialect: FrameDialect
    extractor: DeltaExtractor

    def new_decoder(self) -> FrameDecoder:
        return make_decoder(self.dialect)


OPENAI_PROFILE = VendorProfile("openai", FrameDialect.SSE, extract_openai_delta)
ANTHROPIC_PROFILE = VendorProfile("anthropic", FrameDialect.SSE, extract_anthropic_delta)
OLLAMA_PROFILE = VendorProfile("ollama", FrameDialect.NDJSON, extract_ollama_delta)

PROFILES: Dict[str, VendorProfile] = {
    p.vendor: p for p in (OPENAI_PROFILE, ANTHROPIC_PROFILE, OLLAMA_PROFILE)
}


__all__ = [
    "VendorProfile",
    "OPENAI_PROFILE",
    "ANTHROPIC_PROFILE",
    "OLLAMA_PROFILE",
    "PROFILES",
]
