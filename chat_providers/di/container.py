"""Composition root for the chat layer.

Builds the settings store, the provider registry (with the built-in vendors
registered through its public ``register`` call), the model directory and the
dispatcher, and tears them down again in ``dispose``.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

import httpx

from ..base.dispatch import Dispatcher
from ..base.factory import ProviderFactory
from ..base.lifecycle import Disposable
from ..base.registry import ModelDirectory, ProviderRegistry
from ..config.defaults import BUILTIN_VENDORS
from ..config.settings import ProviderSettings


class ProvidersContainer:
    """Owns the long-lived objects of one chat session host.

    Args:
        settings: Settings store shared by all adapters (a fresh one reading
            the layered config when omitted).
        http_client: Optional ``httpx.Client`` injected into every adapter
            (tests pass one backed by ``httpx.MockTransport``).
        vendors: Vendor ids to register, in order.
        auto_refresh: Re-query a vendor's models when it reports a change.
    """

    def __init__(
        self,
        settings: Optional[ProviderSettings] = None,
        *,
        http_client: Optional[httpx.Client] = None,
        vendors: Iterable[str] = BUILTIN_VENDORS,
        auto_refresh: bool = True,
    ) -> None:
        self.settings = settings if settings is not None else ProviderSettings()
        self.registry = ProviderRegistry()
        self.directory = ModelDirectory(self.registry, auto_refresh=auto_refresh)
        self.dispatcher = Dispatcher(self.directory)
        self._providers = []
        self._registrations: List[Disposable] = []
        for vendor in vendors:
            provider = ProviderFactory.create(vendor, settings=self.settings, http_client=http_client)
            self._providers.append(provider)
            self._registrations.append(self.registry.register(vendor, provider))

    def provider(self, vendor: str):
        """Registered adapter for ``vendor`` (raises ``NotFoundError``)."""
        return self.registry.get(vendor)

    def dispose(self) -> None:
        """Unregister every vendor and drop all subscriptions."""
        for registration in reversed(self._registrations):
            registration.dispose()
        self._registrations.clear()
        for provider in self._providers:
            provider.dispose()
        self._providers.clear()
        self.directory.dispose()

    def __enter__(self) -> "ProvidersContainer":
        return self

    def __exit__(self, *exc_info) -> None:
        self.dispose()


def build_container(settings: Optional[ProviderSettings] = None, **kwargs) -> ProvidersContainer:
    """Construct a :class:`ProvidersContainer` and load every vendor's models."""
    container = ProvidersContainer(settings, **kwargs)
    if not kwargs.get("auto_refresh", True):
        container.directory.refresh_all()
    return container


__all__ = ["ProvidersContainer", "build_container"]
