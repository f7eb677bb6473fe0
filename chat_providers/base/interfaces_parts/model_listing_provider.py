"""ModelListingProvider Protocol (single-class module)."""

from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from ..models import ModelDescriptor


@runtime_checkable
class ModelListingProvider(Protocol):
    """Something that can enumerate the models a vendor currently offers."""

    def list_models(self) -> List[ModelDescriptor]:
        """Return the vendor's models; an empty list when none are reachable.

        Discovery failures (daemon down, missing credential) are not errors
        here: implementations log and return ``[]``.
        """
        ...
