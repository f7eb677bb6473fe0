"""
Per-request chat options.

Purpose
-------
Validate the free-form ``options`` mapping a front end passes alongside a
conversation before it reaches a vendor adapter. Adapters read the typed
fields they understand and merge ``extra`` into the request body verbatim.

External dependencies: Pydantic only.

Failure modes: construction raises ``pydantic.ValidationError`` for
out-of-range values; there is no silent clamping.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ChatOptions(BaseModel):
    """Options honoured by every vendor adapter.

    Attributes
    ----------
    max_tokens:
        Completion cap. Anthropic requires one; its adapter falls back to the
        configured default when unset. Other vendors omit it when ``None``.
    temperature:
        Sampling temperature, forwarded when set.
    extra:
        Vendor-specific body fields merged last (e.g. ``{"top_p": 0.9}``).
        Keys that the adapter owns (``model``, ``messages``, ``stream``)
        cannot be overridden.
    """

    model_config = ConfigDict(frozen=True)

    max_tokens: Optional[int] = Field(default=None, gt=0)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    extra: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def coerce(cls, value: Union["ChatOptions", Mapping[str, Any], None]) -> "ChatOptions":
        """Accept an instance, a plain mapping, or ``None``.

        Unknown top-level keys in a mapping are moved into ``extra`` so hosts
        can pass vendor knobs without knowing about the DTO.
        """
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        known = {k: v for k, v in value.items() if k in cls.model_fields}
        unknown = {k: v for k, v in value.items() if k not in cls.model_fields}
        if unknown:
            known["extra"] = {**unknown, **dict(known.get("extra") or {})}
        return cls(**known)


__all__ = ["ChatOptions"]
