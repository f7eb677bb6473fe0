"""Anthropic model catalog.

A fixed list of Messages API models, offered only when an API key is
configured.
"""

from __future__ import annotations

from typing import List, Optional

from ..base.models import ModelCapabilities, ModelDescriptor

PROVIDER = "anthropic"

CATALOG = (
    ModelDescriptor(
        identifier="anthropic-claude-3.5-sonnet",
        vendor=PROVIDER,
        name="Claude 3.5 Sonnet",
        model_id="claude-3-5-sonnet-20241022",
        family="claude-3.5",
        max_input_tokens=200000,
        max_output_tokens=8192,
        capabilities=ModelCapabilities(vision=True, tool_calling=True, agent_mode=True),
        tooltip="Anthropic Claude 3.5 Sonnet",
    ),
)


def run(api_key: Optional[str]) -> List[ModelDescriptor]:
    return list(CATALOG) if api_key else []


__all__ = ["CATALOG", "run"]
