"""Layered configuration resolver for vendor settings.

Merge order (later wins)
------------------------
1. Built-in defaults (base URLs from :mod:`.defaults`)
2. Optional external config file (JSON or YAML) named by ``PROVIDERS_CONFIG_FILE``
3. Environment: ``<VENDOR>_API_KEY``, ``<VENDOR>_BASE_URL`` (plus aliases
   such as ``OLLAMA_HOST``)
4. In-code overrides passed to :func:`get_provider_config`

An optional ``.env`` file (path from ``DOTENV_FILE``, default ``./.env``) is
read once before the environment is consulted; it never replaces variables
that are already set to real values.

External file structure::

    openai:
      api_key: sk-...
    ollama:
      base_url: http://gpu-box:11434

Placeholder credentials (see :func:`.env.is_placeholder`) are dropped here,
so callers only ever see a real key or no key.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import ANTHROPIC_DEFAULT_BASE_URL, OLLAMA_DEFAULT_BASE_URL, OPENAI_DEFAULT_BASE_URL
from .env import is_placeholder, resolve_base_url, resolve_provider_key

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"base_url": OPENAI_DEFAULT_BASE_URL},
    "anthropic": {"base_url": ANTHROPIC_DEFAULT_BASE_URL},
    "ollama": {"base_url": OLLAMA_DEFAULT_BASE_URL},
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Parse KEY=VALUE lines of the dotenv file (comments and blanks skipped)."""
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    _DOTENV_LOADED = True
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        return
    with open(path, "r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            k, v = line.split("=", 1)
            k = k.strip()
            v = v.strip().strip('"').strip("'")
            if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                os.environ[k] = v


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv("PROVIDERS_CONFIG_FILE")
    if not path or not Path(path).exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        # YAML is a superset of JSON; a parse failure here is a real config error.
        data = yaml.safe_load(text) or {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def reset_config_cache() -> None:
    """Forget the cached external file (and dotenv state); used by tests."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    key, _ = resolve_provider_key(provider)
    if key:
        out["api_key"] = key
    if base_url := resolve_base_url(provider):
        out["base_url"] = base_url
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged ``{"base_url": ..., "api_key": ...}`` mapping for a vendor.

    ``api_key`` is absent (not ``None``) when no real credential was found.
    """
    _load_dotenv_once()
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = dict(DEFAULTS.get(name, {}))

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= {k: v for k, v in file_cfg.items() if k in ("api_key", "base_url") and v}

    cfg |= _env_overrides(name)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    if is_placeholder(cfg.get("api_key")) or not cfg.get("api_key"):
        cfg.pop("api_key", None)
    return cfg


__all__ = [
    "DEFAULTS",
    "get_provider_config",
    "reset_config_cache",
]
