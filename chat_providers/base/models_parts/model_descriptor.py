"""
ModelDescriptor DTO advertised by providers.

A descriptor is produced fresh on every availability query and never
mutated. ``identifier`` is what callers pass to the dispatcher; ``model_id``
is what goes on the wire to the vendor.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, Optional

from .model_capabilities import ModelCapabilities


@dataclass(frozen=True)
class ModelDescriptor:
    """Metadata describing one selectable model exposed by a vendor.

    Attributes:
        identifier: Globally unique id (e.g. ``"openai-gpt-4o"``).
        vendor: Owning vendor id.
        name: Human-friendly display name.
        model_id: Vendor-side model name sent in request bodies.
        family: Model family (e.g. ``"gpt-4"``).
        version: Descriptor version string.
        max_input_tokens: Context window limit.
        max_output_tokens: Completion limit.
        capabilities: Capability flags.
        is_default: Preferred model of its vendor (at most one per snapshot).
        is_user_selectable: False for informational placeholder entries.
        tooltip: Optional hover text for pickers.
    """

    identifier: str
    vendor: str
    name: str
    model_id: str
    family: str
    version: str = "1.0.0"
    max_input_tokens: int = 0
    max_output_tokens: int = 0
    capabilities: ModelCapabilities = field(default_factory=ModelCapabilities)
    is_default: bool = False
    is_user_selectable: bool = True
    tooltip: Optional[str] = None

    def with_default(self, is_default: bool) -> "ModelDescriptor":
        """Return a copy with ``is_default`` replaced."""
        return replace(self, is_default=is_default)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        return asdict(self)


__all__ = ["ModelDescriptor"]
