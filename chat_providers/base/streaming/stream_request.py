"""Fully prepared vendor HTTP request (URL, headers, JSON body)."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class StreamRequest:
    """What a vendor adapter hands to :class:`StreamingRequestClient`.

    Building one is where configuration problems surface, so adapters build it
    eagerly (before returning a handle) and the network call happens later.
    """

    url: str
    body: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=dict)

    def redacted_headers(self) -> Dict[str, str]:
        """Headers safe to log (credential values masked)."""
        masked = {"authorization", "x-api-key"}
        return {k: ("***" if k.lower() in masked else v) for k, v in self.headers.items()}


__all__ = ["StreamRequest"]
