"""Unknown model identifier, unknown vendor, or no model available anywhere."""
from __future__ import annotations

from dataclasses import dataclass, field

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class NotFoundError(ProviderError):
    """Raised by registry lookups and model resolution."""

    code: ErrorCode = field(default=ErrorCode.NOT_FOUND, kw_only=True)


__all__ = ["NotFoundError"]
