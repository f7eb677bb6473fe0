"""chat_providers.config.env
=========================

Environment variable mapping and credential helpers.

Purpose
-------
- Single source of truth for the vendor → API key variable names.
- Placeholder detection: template values such as ``changeme`` or
  ``sk-placeholder`` count as *missing* credentials so a request fails with
  a configuration error instead of reaching the vendor with a bogus key.

Failure Modes
-------------
Helpers never raise for unknown vendors or unset variables; they return
``None`` and callers decide (adapters raise ``ConfigurationError``).
Ollama runs locally without credentials and therefore has no entry.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}

# Vendor → extra variable names accepted for the base URL (after <VENDOR>_BASE_URL)
BASE_URL_ALIASES: Dict[str, Tuple[str, ...]] = {
    "ollama": ("OLLAMA_HOST",),
}

_PLACEHOLDER_MARKERS = ("placeholder", "changeme", "your-api-key", "your_api_key")


def is_placeholder(val: Optional[str]) -> bool:
    """Return True when ``val`` looks like a template rather than a real key.

    Case-insensitive; surrounding whitespace is ignored. ``None`` is not a
    placeholder (it is simply absent).
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return any(marker in v for marker in _PLACEHOLDER_MARKERS) or v.startswith("test_")


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the API key variable name for ``provider`` (case-insensitive)."""
    return ENV_MAP.get(provider.lower()) if provider else None


def base_url_env_candidates(provider: str) -> Iterable[str]:
    """Yield base URL variable names in priority order."""
    p = (provider or "").lower()
    yield f"{p.upper()}_BASE_URL"
    yield from BASE_URL_ALIASES.get(p, ())


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_var)`` for the vendor's key, ``(None, None)`` if unset.

    Placeholder values are skipped.
    """
    name = get_env_var_name(provider)
    if name is None:
        return None, None
    val = os.environ.get(name)
    if val and val.strip() and not is_placeholder(val):
        return val.strip(), name
    return None, None


def resolve_base_url(provider: str) -> Optional[str]:
    """First non-empty base URL found in the environment for ``provider``."""
    for name in base_url_env_candidates(provider):
        val = os.environ.get(name)
        if val and val.strip():
            return val.strip()
    return None


__all__ = [
    "ENV_MAP",
    "BASE_URL_ALIASES",
    "is_placeholder",
    "get_env_var_name",
    "base_url_env_candidates",
    "resolve_provider_key",
    "resolve_base_url",
]
