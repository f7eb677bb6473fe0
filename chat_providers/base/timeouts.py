"""Timeout configuration for the HTTP transports.

Streaming reads deliberately carry no deadline: a reply may legitimately take
minutes and the only way to stop it early is the cancellation token. What
*is* bounded is establishing the connection, and the model-discovery probe
(which must not hang the directory when a local daemon is down).

get_timeout_config()
    Returns a process-cached :class:`TimeoutConfig`, re-read when the
    relevant environment variables change. Supported variables (optional):
        CHAT_PROVIDERS_CONNECT_TIMEOUT_SECONDS
        CHAT_PROVIDERS_DISCOVERY_TIMEOUT_SECONDS
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx

from ..config.defaults import DEFAULT_CONNECT_TIMEOUT_SECONDS, DEFAULT_DISCOVERY_TIMEOUT_SECONDS


@dataclass(frozen=True)
class TimeoutConfig:
    """Normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Upper bound for opening the TCP/TLS connection
            of a chat request.
        discovery_timeout_seconds: Overall bound for a model-listing probe
            (e.g. ``GET /api/tags``).
    """

    connect_timeout_seconds: float = DEFAULT_CONNECT_TIMEOUT_SECONDS
    discovery_timeout_seconds: float = DEFAULT_DISCOVERY_TIMEOUT_SECONDS

    def stream_timeout(self) -> httpx.Timeout:
        """httpx timeout for chat streams: bounded connect, unbounded reads."""
        return httpx.Timeout(None, connect=self.connect_timeout_seconds)

    def discovery_timeout(self) -> httpx.Timeout:
        return httpx.Timeout(self.discovery_timeout_seconds)


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None
_ENV_NAMES = (
    "CHAT_PROVIDERS_CONNECT_TIMEOUT_SECONDS",
    "CHAT_PROVIDERS_DISCOVERY_TIMEOUT_SECONDS",
)


def _parse_env_float(name: str, default: float) -> float:
    """Parse a positive float from the environment, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the cached :class:`TimeoutConfig` (refreshed on env change)."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(n, "") for n in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float(_ENV_NAMES[0], defaults.connect_timeout_seconds),
        discovery_timeout_seconds=_parse_env_float(_ENV_NAMES[1], defaults.discovery_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
