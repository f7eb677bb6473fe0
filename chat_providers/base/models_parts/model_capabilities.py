"""Capability flags advertised with a model descriptor."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict


@dataclass(frozen=True)
class ModelCapabilities:
    """What a model can be used for in the chat front end."""

    vision: bool = False
    tool_calling: bool = False
    agent_mode: bool = False

    def to_dict(self) -> Dict[str, bool]:
        return asdict(self)


__all__ = ["ModelCapabilities"]
