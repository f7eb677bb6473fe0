"""chat_providers.config.defaults
=============================

Stable default values (no I/O). Overridable through environment variables or
the external config file; see :func:`chat_providers.config.get_provider_config`.

This module imports nothing from the rest of the package so any layer can
depend on it without cycles.
"""

from __future__ import annotations

# ---- Vendors ----
# Registration order of the built-in vendors; default-model selection and
# identifier resolution follow this order.
BUILTIN_VENDORS = ("openai", "anthropic", "ollama")

# ---- Base URLs ----
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
OLLAMA_DEFAULT_BASE_URL = "http://localhost:11434"

# ---- Anthropic wire defaults ----
ANTHROPIC_API_VERSION = "2023-06-01"
# Messages API requires max_tokens on every request.
ANTHROPIC_DEFAULT_MAX_TOKENS = 8192

# ---- Ollama descriptor defaults ----
OLLAMA_MODEL_ID_PREFIX = "ollama-"
OLLAMA_DEFAULT_MAX_INPUT_TOKENS = 128000
OLLAMA_DEFAULT_MAX_OUTPUT_TOKENS = 4096

# ---- Timeouts (seconds) ----
DEFAULT_CONNECT_TIMEOUT_SECONDS = 10.0
DEFAULT_DISCOVERY_TIMEOUT_SECONDS = 3.0


__all__ = [
    "BUILTIN_VENDORS",
    "OPENAI_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_BASE_URL",
    "OLLAMA_DEFAULT_BASE_URL",
    "ANTHROPIC_API_VERSION",
    "ANTHROPIC_DEFAULT_MAX_TOKENS",
    "OLLAMA_MODEL_ID_PREFIX",
    "OLLAMA_DEFAULT_MAX_INPUT_TOKENS",
    "OLLAMA_DEFAULT_MAX_OUTPUT_TOKENS",
    "DEFAULT_CONNECT_TIMEOUT_SECONDS",
    "DEFAULT_DISCOVERY_TIMEOUT_SECONDS",
]
