"""Structured logging context carried through one chat request.

:class:`LogContext` bundles the vendor id, model identifier, and a per-request
id so every event of a stream can be correlated. ``to_dict`` merges ``extra``
and prunes ``None`` values.
"""
from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


def new_request_id() -> str:
    """Return a short random id used to correlate the events of one stream."""
    return uuid.uuid4().hex[:12]


@dataclass
class LogContext:
    """Structured context for provider logging events."""

    provider: Optional[str] = None
    model: Optional[str] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext", "new_request_id"]
