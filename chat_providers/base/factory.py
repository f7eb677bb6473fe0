"""Provider factory.

Purpose
-------
Create vendor adapters by canonical vendor id. Adapter modules are imported
lazily with ``importlib`` so importing the factory does not import every
vendor package.

Failure semantics
-----------------
No retries or fallbacks: the factory returns an instance or raises
:class:`UnknownProviderError` naming what went wrong (unknown vendor, import
failure, missing class, constructor rejection).
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple, Type


class UnknownProviderError(Exception):
    """Raised when a vendor id cannot be resolved to a constructible adapter."""


def create_provider(provider: str, **kwargs: Any) -> Any:
    """Shortcut for :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider, **kwargs)


class ProviderFactory:
    """Create vendor adapters from a canonical id (e.g. ``"ollama"``).

    Constructor keyword arguments (``settings``, ``http_client``) are passed
    through unchanged.
    """

    # Registration order of the built-in vendors follows this mapping.
    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "openai": {"module": "chat_providers.openai.client", "class": "OpenAIProvider"},
        "anthropic": {"module": "chat_providers.anthropic.client", "class": "AnthropicProvider"},
        "ollama": {"module": "chat_providers.ollama.client", "class": "OllamaProvider"},
    }

    @classmethod
    def create(cls, provider: str, **kwargs: Any) -> Any:
        """Instantiate the adapter for ``provider``.

        Raises
        ------
        UnknownProviderError
            Unknown vendor, import failure, missing adapter class, or a
            constructor ``TypeError``.
        """
        name = (provider or "").lower().strip()
        entry = cls._PROVIDERS.get(name)
        if not entry:
            raise UnknownProviderError(f"Unknown provider '{provider}'")

        module_path, class_name = entry["module"], entry["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:  # pragma: no cover - packaging failure
            raise UnknownProviderError(
                f"Failed to import module '{module_path}' for provider '{provider}': {exc}"
            ) from exc

        try:
            klass: Type = getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownProviderError(
                f"Adapter class '{class_name}' not found in '{module_path}' for provider '{provider}'"
            ) from exc

        try:
            return klass(**kwargs)
        except TypeError as exc:
            raise UnknownProviderError(
                f"Invalid arguments for '{provider}' adapter constructor: {exc}"
            ) from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Canonical vendor ids in registration order."""
        return tuple(cls._PROVIDERS.keys())
