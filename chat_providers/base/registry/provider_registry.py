"""Provider registry: the set of live vendor adapters.

Registration order is significant (it drives default-model selection and
identifier resolution) and is preserved. The binding list is an immutable
tuple replaced under a lock, so readers always see a complete snapshot
without locking.
"""

from __future__ import annotations

import threading
from typing import Dict, List, Optional, Tuple

from ..errors import NotFoundError, RegistryConflictError
from ..interfaces import ChatProvider
from ..lifecycle import Disposable, Emitter
from ..logging import get_logger, log_event

Binding = Tuple[str, ChatProvider]


class ProviderRegistry:
    """Registry of ``vendor_id -> ChatProvider`` bindings.

    ``on_did_change_providers`` fires with the vendor id after a register, an
    unregister, or a change notification from a registered provider.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._bindings: Tuple[Binding, ...] = ()
        self._subscriptions: Dict[str, Disposable] = {}
        self.on_did_change_providers: Emitter[str] = Emitter("registry.did_change_providers")
        self._logger = get_logger("providers.registry")

    def register(self, vendor_id: str, provider: ChatProvider) -> Disposable:
        """Bind ``provider`` under ``vendor_id``.

        Returns:
            Disposable that removes exactly this binding (idempotent).

        Raises:
            RegistryConflictError: ``vendor_id`` is already bound.
        """
        with self._lock:
            if any(vid == vendor_id for vid, _ in self._bindings):
                raise RegistryConflictError(
                    message=f"vendor '{vendor_id}' is already registered",
                    provider=vendor_id,
                )
            self._bindings = self._bindings + ((vendor_id, provider),)
        on_change = getattr(provider, "on_did_change", None)
        if on_change is not None:
            subscription = on_change(lambda _vendor: self.on_did_change_providers.fire(vendor_id))
            with self._lock:
                self._subscriptions[vendor_id] = subscription
        log_event(self._logger, "registry.register", provider=vendor_id, position=len(self._bindings))
        self.on_did_change_providers.fire(vendor_id)
        return Disposable(lambda: self._unregister(vendor_id, provider))

    def _unregister(self, vendor_id: str, provider: ChatProvider) -> None:
        with self._lock:
            before = self._bindings
            self._bindings = tuple(b for b in before if not (b[0] == vendor_id and b[1] is provider))
            removed = len(self._bindings) != len(before)
            subscription = self._subscriptions.pop(vendor_id, None) if removed else None
        if not removed:
            return
        if subscription is not None:
            subscription.dispose()
        log_event(self._logger, "registry.dispose", provider=vendor_id)
        self.on_did_change_providers.fire(vendor_id)

    def list_providers(self) -> List[Binding]:
        """Current bindings in registration order."""
        return list(self._bindings)

    def vendor_ids(self) -> List[str]:
        return [vid for vid, _ in self._bindings]

    def find(self, vendor_id: str) -> Optional[ChatProvider]:
        for vid, provider in self._bindings:
            if vid == vendor_id:
                return provider
        return None

    def get(self, vendor_id: str) -> ChatProvider:
        """Return the provider for ``vendor_id`` or raise :class:`NotFoundError`."""
        provider = self.find(vendor_id)
        if provider is None:
            raise NotFoundError(message=f"no provider registered for '{vendor_id}'", provider=vendor_id)
        return provider

    def __contains__(self, vendor_id: object) -> bool:
        return any(vid == vendor_id for vid, _ in self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)


__all__ = ["ProviderRegistry", "Binding"]
