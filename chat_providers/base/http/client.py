"""Shared HTTP client pool for providers.

Purpose:
    Keep one reusable ``httpx.Client`` per (base URL, purpose) so concurrent
    chat streams and discovery probes share connection pools instead of
    paying a handshake per request.

External dependencies:
    - ``httpx`` for the underlying synchronous HTTP client.

Timeout strategy:
    - ``purpose="stream"`` clients use :meth:`TimeoutConfig.stream_timeout`
      (bounded connect, no read deadline).
    - ``purpose="discovery"`` clients use the short discovery timeout.
    - Other purposes default to the stream timeout.

Lifecycle & cleanup:
    - All clients are closed at interpreter exit via ``atexit``. Tests may call
      :func:`close_all_clients` explicitly.
    - ``httpx.Client`` is safe to share across threads; there is no bound on
      concurrent streams beyond httpx's own pool limits.
"""

from __future__ import annotations

import atexit
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

_CLIENTS: Dict[Tuple[Optional[str], str], httpx.Client] = {}
_LOCK = threading.RLock()


def _timeout_for(purpose: str) -> httpx.Timeout:
    cfg = get_timeout_config()
    return cfg.discovery_timeout() if purpose == "discovery" else cfg.stream_timeout()


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    Parameters:
        base_url: Optional API base URL set on the client so callers can use
            relative paths. ``None`` groups clients under a shared key and
            callers must pass absolute URLs.
        purpose: Pool discriminator (``"stream"`` or ``"discovery"``).

    Returns:
        A reusable ``httpx.Client`` instance.
    """
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        timeout = _timeout_for(purpose)
        client = httpx.Client(base_url=base_url, timeout=timeout) if base_url else httpx.Client(timeout=timeout)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            try:
                c.close()
            except Exception:  # nosec B110 - best-effort shutdown
                pass
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
