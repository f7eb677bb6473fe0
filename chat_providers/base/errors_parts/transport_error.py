"""Upstream HTTP failure surfaced before streaming starts."""
from __future__ import annotations

from dataclasses import dataclass, field

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class TransportError(ProviderError):
    """Non-success status, unreadable body, or a transport fault not caused by cancellation.

    ``code`` is refined from the HTTP status where one is known (see
    :func:`classify_status`); ``status_code`` keeps the raw value.
    """

    code: ErrorCode = field(default=ErrorCode.TRANSPORT, kw_only=True)


__all__ = ["TransportError"]
