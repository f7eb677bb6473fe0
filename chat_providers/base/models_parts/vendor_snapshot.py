"""
VendorSnapshot: the model directory's unit of atomic replacement.

Holds the full descriptor list for one vendor as returned by its latest
refresh. Snapshots are immutable; a refresh builds a new one and swaps it in.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Tuple

from .model_descriptor import ModelDescriptor


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class VendorSnapshot:
    """Descriptors advertised by one vendor at ``fetched_at``."""

    vendor: str
    models: Tuple[ModelDescriptor, ...] = ()
    fetched_at: str = field(default_factory=_now_iso)

    @property
    def is_empty(self) -> bool:
        return not self.models

    def find(self, identifier: str) -> Optional[ModelDescriptor]:
        return next((m for m in self.models if m.identifier == identifier), None)

    def default_model(self) -> Optional[ModelDescriptor]:
        return next((m for m in self.models if m.is_default), None)


__all__ = ["VendorSnapshot"]
