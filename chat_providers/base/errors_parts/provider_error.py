"""
Structured provider error exception type.

Wraps failures with a normalized `ErrorCode` for consistent handling and
structured logging. The specialised subclasses in this package only pin the
code; they carry no additional state.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Vendor id where the error originated (e.g., ``"openai"``).
        model: Optional model identifier associated with the failure.
        retryable: Hint for callers that implement their own retry policy.
        status_code: HTTP status when the failure came from an upstream reply.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    status_code: Optional[int] = None
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


__all__ = ["ProviderError"]
