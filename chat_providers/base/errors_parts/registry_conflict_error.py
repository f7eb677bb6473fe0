"""Duplicate vendor registration."""
from __future__ import annotations

from dataclasses import dataclass, field

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class RegistryConflictError(ProviderError):
    """Raised by ``ProviderRegistry.register`` when the vendor id is already bound."""

    code: ErrorCode = field(default=ErrorCode.CONFLICT, kw_only=True)


__all__ = ["RegistryConflictError"]
