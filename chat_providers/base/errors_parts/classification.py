"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Implements HTTP status extraction, status-to-code mapping, httpx transport
exception mapping, and message-based heuristics as a last resort.
"""
from __future__ import annotations

from typing import Dict, Optional

import httpx

from .error_code import ErrorCode
from .provider_error import ProviderError


def _extract_status(exc: Exception) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

RETRYABLE_CODES = frozenset(
    {ErrorCode.TRANSIENT, ErrorCode.RATE_LIMIT, ErrorCode.TIMEOUT, ErrorCode.UNAVAILABLE}
)


def classify_status(status: int) -> ErrorCode:
    """Map an HTTP status to an :class:`ErrorCode` (``TRANSPORT`` when unmapped)."""
    if status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if 500 <= status < 600:
        return ErrorCode.SERVER_ERROR
    return ErrorCode.TRANSPORT


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:  # pragma: no cover - simple mapping
    """Substring heuristic mapping for exceptions without structured data."""
    pattern_groups = (
        (ErrorCode.TIMEOUT, ("timeout", "timed out")),
        (ErrorCode.AUTH, ("unauthorized", "forbidden", "api key")),
        (ErrorCode.NOT_FOUND, ("not found", "does not exist")),
        (ErrorCode.CONFLICT, ("conflict", "already exists")),
        (ErrorCode.UNAVAILABLE, ("unavailable", "connection refused")),
        (ErrorCode.VALIDATION, ("invalid", "malformed")),
    )
    for code, patterns in pattern_groups:
        if any(p in msg for p in patterns):
            return code
    if "rate" in msg and "limit" in msg:
        return ErrorCode.RATE_LIMIT
    return None


def classify_exception(exc: Exception) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. httpx / builtin timeouts.
        3. httpx connection failures.
        4. HTTP status mapping.
        5. Other httpx transport errors.
        6. Substring heuristics.
        7. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, httpx.ConnectError):
        return ErrorCode.UNAVAILABLE
    status = _extract_status(exc)
    if status is not None:
        return classify_status(status)
    if isinstance(exc, httpx.TransportError):
        return ErrorCode.TRANSPORT
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


__all__ = [
    "classify_exception",
    "classify_status",
    "RETRYABLE_CODES",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
