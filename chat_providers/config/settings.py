"""Observable in-memory store of per-vendor settings.

Providers read their :class:`VendorSettings` from here at request time and
subscribe to ``on_did_change`` so a configuration edit (new key, different
base URL) is announced to the registry and the model directory. The store is
seeded lazily from :func:`chat_providers.config.get_provider_config`.
"""
from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Mapping, Optional

from pydantic import ValidationError

from ..base.dto import VendorSettings
from ..base.errors import ConfigurationError
from ..base.lifecycle import Emitter
from ..base.logging import get_logger, log_event
from . import get_provider_config

Resolver = Callable[[str], Dict[str, Any]]

_logger = get_logger("providers.settings")


class ProviderSettings:
    """Thread-safe ``vendor -> VendorSettings`` map with change notification.

    Example:
        settings = ProviderSettings()
        settings.on_did_change(lambda vendor: print("changed", vendor))
        settings.update("openai", api_key="sk-...")
    """

    def __init__(
        self,
        initial: Optional[Mapping[str, Mapping[str, Any]]] = None,
        *,
        resolver: Resolver = get_provider_config,
    ) -> None:
        self._resolver = resolver
        self._lock = threading.Lock()
        self._values: Dict[str, VendorSettings] = {}
        self.on_did_change: Emitter[str] = Emitter("settings.did_change")
        for vendor, values in (initial or {}).items():
            self._values[vendor] = self._build(vendor, {**resolver(vendor), **dict(values)})

    @staticmethod
    def _build(vendor: str, values: Mapping[str, Any]) -> VendorSettings:
        try:
            return VendorSettings(**values)
        except ValidationError as exc:
            raise ConfigurationError(
                message=f"invalid settings for {vendor}: {exc.errors()[0].get('msg', exc)}",
                provider=vendor,
                raw=exc,
            ) from exc

    def get(self, vendor: str) -> VendorSettings:
        """Current settings for ``vendor`` (resolved from config on first use)."""
        with self._lock:
            current = self._values.get(vendor)
        if current is not None:
            return current
        built = self._build(vendor, self._resolver(vendor))
        with self._lock:
            return self._values.setdefault(vendor, built)

    def update(self, vendor: str, **values: Any) -> VendorSettings:
        """Apply ``values`` on top of the current settings and notify on change.

        Raises:
            ConfigurationError: the merged values do not validate.
        """
        current = self.get(vendor)
        merged = self._build(vendor, {**current.model_dump(), **values})
        with self._lock:
            self._values[vendor] = merged
        if merged != current:
            log_event(_logger, "settings.update", provider=vendor, fields=sorted(values))
            self.on_did_change.fire(vendor)
        return merged

    def reload(self, vendor: str) -> VendorSettings:
        """Re-read ``vendor`` from the layered config and notify on change."""
        fresh = self._build(vendor, self._resolver(vendor))
        with self._lock:
            previous = self._values.get(vendor)
            self._values[vendor] = fresh
        if previous is not None and previous != fresh:
            self.on_did_change.fire(vendor)
        return fresh


__all__ = ["ProviderSettings"]
