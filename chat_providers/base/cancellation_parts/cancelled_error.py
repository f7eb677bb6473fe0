"""Cancellation error type.

Defines the public ``CancelledError`` used to signal cooperative cancellation
in provider operations. Only ``CancellationToken.raise_if_cancelled`` raises
it; streams observe cancellation by polling and end cleanly instead.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation observes a cancelled token."""


__all__ = ["CancelledError"]
