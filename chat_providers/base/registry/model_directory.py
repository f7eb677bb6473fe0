"""Model directory: per-vendor descriptor snapshots and default selection.

Each vendor's descriptors are held as one immutable :class:`VendorSnapshot`.
A refresh builds a complete new snapshot and swaps it in; the mapping of
snapshots is itself replaced (copy-on-write), so a concurrent reader sees
either the old or the new snapshot of a vendor, never a mix.

Normalisation applied on refresh
--------------------------------
- At most one ``is_default`` per snapshot: later flags are cleared (warning).
- An identifier is owned by the earliest-registered vendor listing it: it is
  dropped from the vendor being refreshed when an earlier vendor already
  lists it, and pruned from later vendors when the refreshed vendor claims
  it (warning either way), regardless of refresh order.
- Duplicate identifiers within one vendor keep the first occurrence.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..errors import NotFoundError
from ..interfaces import ChatProvider
from ..lifecycle import Disposable, Emitter
from ..logging import get_logger, log_event
from ..models import ModelDescriptor, VendorSnapshot
from .provider_registry import ProviderRegistry


class ModelDirectory:
    """Descriptor snapshots for every registered vendor.

    Parameters:
        registry: Source of live providers (and their order).
        auto_refresh: Re-query a vendor whenever the registry reports a change
            for it (registration, settings edit). Snapshots of vendors that
            leave the registry are always dropped.
    """

    def __init__(self, registry: ProviderRegistry, *, auto_refresh: bool = False) -> None:
        self._registry = registry
        self._auto_refresh = auto_refresh
        self._lock = threading.Lock()
        self._snapshots: Dict[str, VendorSnapshot] = {}
        self.on_did_change_models: Emitter[str] = Emitter("directory.did_change_models")
        self._logger = get_logger("providers.directory")
        self._subscription: Disposable = registry.on_did_change_providers(self._providers_changed)

    # ----- Refresh -----
    def refresh(self, vendor_id: str) -> VendorSnapshot:
        """Query ``vendor_id`` and atomically replace its snapshot.

        A provider whose listing raises yields an empty snapshot; the failure
        is logged, not propagated.

        Raises:
            NotFoundError: ``vendor_id`` is not registered.
        """
        provider = self._registry.get(vendor_id)
        try:
            listed = list(provider.list_models())
        except Exception as exc:  # noqa: BLE001 - one broken vendor must not poison the directory
            log_event(
                self._logger,
                "directory.refresh_failed",
                level=logging.WARNING,
                provider=vendor_id,
                error=f"{type(exc).__name__}: {exc}",
            )
            listed = []
        order = self._registry.vendor_ids()
        position = order.index(vendor_id) if vendor_id in order else len(order)
        earlier, later = set(order[:position]), set(order[position + 1:])
        pruned: List[Tuple[str, str]] = []
        with self._lock:
            taken = {
                m.identifier
                for vid, snap in self._snapshots.items()
                if vid in earlier
                for m in snap.models
            }
            snapshot = VendorSnapshot(vendor_id, self._normalize(vendor_id, listed, taken))
            claimed = {m.identifier for m in snapshot.models}
            updated = dict(self._snapshots)
            updated[vendor_id] = snapshot
            for vid in later & updated.keys():
                models = updated[vid].models
                keep = tuple(m for m in models if m.identifier not in claimed)
                if len(keep) != len(models):
                    pruned.extend((vid, m.identifier) for m in models if m.identifier in claimed)
                    updated[vid] = VendorSnapshot(vid, keep, updated[vid].fetched_at)
            self._snapshots = updated
        for vid, identifier in pruned:
            log_event(
                self._logger,
                "directory.identifier_conflict",
                level=logging.WARNING,
                provider=vid,
                model=identifier,
                owner=vendor_id,
            )
        log_event(
            self._logger,
            "directory.refresh",
            provider=vendor_id,
            models=len(snapshot.models),
            default=getattr(snapshot.default_model(), "identifier", None),
        )
        self.on_did_change_models.fire(vendor_id)
        for vid in dict.fromkeys(vid for vid, _ in pruned):
            self.on_did_change_models.fire(vid)
        return snapshot

    def refresh_all(self) -> List[VendorSnapshot]:
        """Refresh every registered vendor in registration order."""
        return [self.refresh(vid) for vid in self._registry.vendor_ids()]

    def _normalize(
        self,
        vendor_id: str,
        models: Iterable[ModelDescriptor],
        taken: Set[str],
    ) -> Tuple[ModelDescriptor, ...]:
        kept: List[ModelDescriptor] = []
        seen: Set[str] = set()
        has_default = False
        for model in models:
            if model.identifier in taken:
                log_event(
                    self._logger,
                    "directory.identifier_conflict",
                    level=logging.WARNING,
                    provider=vendor_id,
                    model=model.identifier,
                )
                continue
            if model.identifier in seen:
                continue
            seen.add(model.identifier)
            if model.is_default:
                if has_default:
                    log_event(
                        self._logger,
                        "directory.extra_default",
                        level=logging.WARNING,
                        provider=vendor_id,
                        model=model.identifier,
                    )
                    model = model.with_default(False)
                has_default = True
            kept.append(model)
        return tuple(kept)

    def _providers_changed(self, vendor_id: str) -> None:
        if vendor_id not in self._registry:
            with self._lock:
                if vendor_id not in self._snapshots:
                    return
                updated = dict(self._snapshots)
                updated.pop(vendor_id)
                self._snapshots = updated
            self.on_did_change_models.fire(vendor_id)
            return
        if self._auto_refresh:
            self.refresh(vendor_id)

    # ----- Queries -----
    def _ordered(self) -> List[Tuple[str, ChatProvider, VendorSnapshot]]:
        snapshots = self._snapshots
        return [
            (vid, provider, snapshots[vid])
            for vid, provider in self._registry.list_providers()
            if vid in snapshots
        ]

    def snapshot(self, vendor_id: str) -> Optional[VendorSnapshot]:
        return self._snapshots.get(vendor_id)

    def list_models(self) -> List[ModelDescriptor]:
        """Every known descriptor, vendors in registration order."""
        return [m for _, _, snap in self._ordered() for m in snap.models]

    def lookup(self, model_id: str) -> Optional[ModelDescriptor]:
        for _, _, snap in self._ordered():
            found = snap.find(model_id)
            if found is not None:
                return found
        return None

    def resolve(self, model_id: str) -> Tuple[ChatProvider, ModelDescriptor]:
        """Return ``(provider, descriptor)`` for a model identifier.

        Raises:
            NotFoundError: no current snapshot contains ``model_id``.
        """
        for _, provider, snap in self._ordered():
            found = snap.find(model_id)
            if found is not None:
                return provider, found
        raise NotFoundError(message=f"unknown model '{model_id}'", provider="directory", model=model_id)

    def select_default(self) -> ModelDescriptor:
        """Pick the model a front end should preselect.

        First descriptor flagged ``is_default`` (vendors in registration
        order); otherwise the first user-selectable descriptor of the first
        vendor offering one.

        Raises:
            NotFoundError: no selectable model anywhere.
        """
        ordered = self._ordered()
        for _, _, snap in ordered:
            flagged = snap.default_model()
            if flagged is not None:
                return flagged
        for _, _, snap in ordered:
            for model in snap.models:
                if model.is_user_selectable:
                    return model
        raise NotFoundError(message="no language model available", provider="directory")

    def dispose(self) -> None:
        self._subscription.dispose()


__all__ = ["ModelDirectory"]
