"""Mutable flag pair guarded by ``CancellationToken``'s lock."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class State:
    """Cancellation status and the reason given by the canceller."""

    cancelled: bool = False
    reason: Optional[str] = None


__all__ = ["State"]
