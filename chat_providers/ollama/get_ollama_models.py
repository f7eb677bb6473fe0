"""Ollama model discovery.

Purpose
    List the models installed in the local Ollama daemon (``GET /api/tags``)
    and turn them into :class:`ModelDescriptor` values.

External Dependencies
    * Local Ollama HTTP API via the pooled ``httpx`` client
      (``purpose="discovery"``, short bounded timeout).

Fallback Semantics
    An unreachable daemon, a non-success status or an unparsable payload all
    mean "Ollama is not available": the failure is logged and an empty list is
    returned. A reachable daemon with zero models yields one informational,
    non-selectable placeholder descriptor telling the user how to install one.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ModelCapabilities, ModelDescriptor
from ..config.defaults import (
    OLLAMA_DEFAULT_MAX_INPUT_TOKENS,
    OLLAMA_DEFAULT_MAX_OUTPUT_TOKENS,
    OLLAMA_MODEL_ID_PREFIX,
)

PROVIDER = "ollama"
PLACEHOLDER_IDENTIFIER = "ollama-suggestion"

_logger = get_logger("providers.ollama.models")


def encode_model_identifier(name: str) -> str:
    """``"llama3.1:8b"`` -> ``"ollama-llama3_dot_1_colon_8b"``.

    Dots and colons are rewritten so identifiers stay safe as opaque keys.
    """
    return OLLAMA_MODEL_ID_PREFIX + name.replace(".", "_dot_").replace(":", "_colon_")


def fetch_installed_models(base_url: str, client: Optional[httpx.Client] = None) -> Optional[List[str]]:
    """Return installed model names, or ``None`` when the daemon is unusable."""
    ctx = LogContext(provider=PROVIDER)
    http = client or get_httpx_client(base_url, purpose="discovery")
    url = f"{base_url.rstrip('/')}/api/tags"
    try:
        response = http.get(url)
    except httpx.HTTPError as exc:
        log_event(_logger, "ollama.models.unreachable", ctx, level=logging.INFO, url=url, error=str(exc))
        return None
    if not response.is_success:
        log_event(_logger, "ollama.models.bad_status", ctx, level=logging.INFO, url=url, status=response.status_code)
        return None
    try:
        payload = response.json()
    except ValueError as exc:
        log_event(_logger, "ollama.models.malformed", ctx, level=logging.WARNING, url=url, error=str(exc))
        return None
    raw_items = payload.get("models") if isinstance(payload, dict) else None
    names: List[str] = []
    for raw in raw_items or []:
        name = raw.get("name") if isinstance(raw, dict) else None
        if isinstance(name, str) and name:
            names.append(name)
    log_event(_logger, "ollama.models.fetched", ctx, level=logging.DEBUG, count=len(names))
    return names


def build_descriptor(name: str, *, is_default: bool) -> ModelDescriptor:
    return ModelDescriptor(
        identifier=encode_model_identifier(name),
        vendor=PROVIDER,
        name=f"Ollama: {name}",
        model_id=name,
        family=name.split(":", 1)[0],
        max_input_tokens=OLLAMA_DEFAULT_MAX_INPUT_TOKENS,
        max_output_tokens=OLLAMA_DEFAULT_MAX_OUTPUT_TOKENS,
        capabilities=ModelCapabilities(vision=False, tool_calling=False, agent_mode=True),
        is_default=is_default,
        tooltip=f"Free local model: {name}",
    )


def placeholder_descriptor() -> ModelDescriptor:
    """Informational entry shown when the daemon runs but has no models."""
    return ModelDescriptor(
        identifier=PLACEHOLDER_IDENTIFIER,
        vendor=PROVIDER,
        name="Ollama (No models installed)",
        model_id="none",
        family="ollama",
        is_user_selectable=False,
        tooltip="Install models with: ollama pull llama3.1",
    )


def run(base_url: str, client: Optional[httpx.Client] = None) -> List[ModelDescriptor]:
    """Discover models and build descriptors; the first model is the default."""
    names = fetch_installed_models(base_url, client)
    if names is None:
        return []
    if not names:
        return [placeholder_descriptor()]
    return [build_descriptor(name, is_default=(i == 0)) for i, name in enumerate(names)]


__all__ = [
    "PLACEHOLDER_IDENTIFIER",
    "encode_model_identifier",
    "fetch_installed_models",
    "build_descriptor",
    "placeholder_descriptor",
    "run",
]
