"""Missing or unusable configuration (e.g. no API key)."""
from __future__ import annotations

from dataclasses import dataclass, field

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class ConfigurationError(ProviderError):
    """Raised from ``send`` before any network call is attempted."""

    code: ErrorCode = field(default=ErrorCode.CONFIGURATION, kw_only=True)


__all__ = ["ConfigurationError"]
