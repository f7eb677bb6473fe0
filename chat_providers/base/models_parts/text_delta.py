"""
TextDelta: one incremental fragment of generated text.

The only payload the streaming decoders emit; consumers append ``value`` to
the in-progress reply.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal

from ..constants import TEXT_DELTA_KIND


@dataclass(frozen=True)
class TextDelta:
    """A single ``{kind: "text", value}`` unit."""

    value: str
    kind: Literal["text"] = TEXT_DELTA_KIND

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind, "value": self.value}


__all__ = ["TextDelta"]
