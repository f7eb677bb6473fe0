"""
Typed per-vendor settings consumed read-only by provider adapters.

Purpose
-------
Capture the configuration surface the streaming layer recognizes for each
vendor: an API key and a base URL. Values originate from the layered config
resolver (``chat_providers.config``) or from an in-memory
:class:`~chat_providers.config.settings.ProviderSettings` store that a host
updates when the user edits configuration.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``model_copy`` convenience.

Notes
-----
- ``api_key`` values that look like placeholders (see
  :func:`chat_providers.config.env.is_placeholder`) are normalized to
  ``None`` so a template ``.env`` never masquerades as a credential.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ...config.env import is_placeholder


class VendorSettings(BaseModel):
    """Recognized options for one vendor.

    Attributes
    ----------
    api_key:
        Credential; ``None`` when not configured.
    base_url:
        API root without trailing slash (e.g. ``https://api.openai.com/v1``).
    """

    model_config = ConfigDict(frozen=True)

    api_key: Optional[str] = None
    base_url: str

    @field_validator("api_key", mode="before")
    @classmethod
    def _blank_key_is_missing(cls, value: object) -> Optional[str]:
        if value is None:
            return None
        text = str(value).strip()
        if not text or is_placeholder(text):
            return None
        return text

    @field_validator("base_url", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, value: object) -> str:
        text = str(value or "").strip().rstrip("/")
        if not text:
            raise ValueError("base_url must not be empty")
        return text


__all__ = ["VendorSettings"]
