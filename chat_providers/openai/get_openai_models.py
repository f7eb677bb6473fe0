"""
OpenAI model catalog.

OpenAI chat models are advertised from a fixed catalog rather than the live
``/models`` listing (which mixes embeddings, audio, and fine-tunes). The
catalog is only offered when an API key is configured, so pickers never show
models that would fail on first use.
"""

from __future__ import annotations

from typing import List, Optional

from ..base.models import ModelCapabilities, ModelDescriptor

PROVIDER = "openai"

_CHAT_CAPABILITIES = ModelCapabilities(vision=True, tool_calling=True, agent_mode=True)

CATALOG = (
    ModelDescriptor(
        identifier="openai-gpt-4o",
        vendor=PROVIDER,
        name="GPT-4o",
        model_id="gpt-4o",
        family="gpt-4",
        max_input_tokens=128000,
        max_output_tokens=16384,
        capabilities=_CHAT_CAPABILITIES,
        tooltip="OpenAI GPT-4o - Most capable model (requires API key & credits)",
    ),
    ModelDescriptor(
        identifier="openai-gpt-4o-mini",
        vendor=PROVIDER,
        name="GPT-4o Mini",
        model_id="gpt-4o-mini",
        family="gpt-4",
        max_input_tokens=128000,
        max_output_tokens=16384,
        capabilities=_CHAT_CAPABILITIES,
        tooltip="OpenAI GPT-4o Mini - Faster and cheaper (requires API key & credits)",
    ),
)


def run(api_key: Optional[str]) -> List[ModelDescriptor]:
    """Catalog entries when ``api_key`` is set, otherwise nothing."""
    return list(CATALOG) if api_key else []


__all__ = ["CATALOG", "run"]
