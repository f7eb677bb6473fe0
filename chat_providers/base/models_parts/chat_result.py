"""
ChatResult: end-of-turn metadata delivered through ``StreamHandle.result``.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ChatResult:
    """Summary of one finished stream.

    Attributes:
        provider: Vendor id that served the request.
        model: Model identifier (directory id, not the wire name).
        emitted: Number of deltas delivered to the consumer.
        cancelled: True when the stream ended because of a cancel request.
        time_to_first_delta_ms: Latency until the first delta (None if none).
        total_duration_ms: Wall time from start to teardown.
    """

    provider: str
    model: str
    emitted: int = 0
    cancelled: bool = False
    time_to_first_delta_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["ChatResult"]
