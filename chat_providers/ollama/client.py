"""Ollama provider adapter.

Purpose:
        Chat streaming against a local Ollama daemon (default
        ``http://localhost:11434``) via ``POST /api/chat``, which answers
        with newline-delimited JSON.

External dependencies:
        - ``httpx`` only; Ollama needs no API key.

Model listing:
        Live discovery through ``GET /api/tags`` on every call (see
        :mod:`.get_ollama_models`); an unreachable daemon lists nothing.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

from ..base.dto import ChatOptions
from ..base.models import Message, ModelDescriptor
from ..base.provider_base import BaseHttpChatProvider
from ..base.streaming import OLLAMA_PROFILE, StreamRequest
from ..base.utils.messages import to_wire_messages
from . import get_ollama_models


class OllamaProvider(BaseHttpChatProvider):
    """Adapter for the local Ollama daemon."""

    vendor = "ollama"
    display_name = "Ollama"
    profile = OLLAMA_PROFILE
    owned_body_keys = BaseHttpChatProvider.owned_body_keys | {"options"}

    def list_models(self) -> List[ModelDescriptor]:
        return get_ollama_models.run(self.settings.base_url, self._http_client)

    def build_request(
        self,
        descriptor: ModelDescriptor,
        messages: Sequence[Message],
        options: ChatOptions,
    ) -> StreamRequest:
        settings = self.settings
        body: Dict[str, object] = {
            "model": descriptor.model_id,
            "messages": to_wire_messages(messages),
            "stream": True,
        }
        # Caller options (num_ctx, seed, ...) merge under the typed ones.
        passthrough = options.extra.get("options")
        extra_options: Dict[str, object] = dict(passthrough) if isinstance(passthrough, dict) else {}
        if options.temperature is not None:
            extra_options["temperature"] = options.temperature
        if options.max_tokens is not None:
            extra_options["num_predict"] = options.max_tokens
        if extra_options:
            body["options"] = extra_options
        for key, value in options.extra.items():
            if key not in self.owned_body_keys:
                body[key] = value
        return StreamRequest(
            url=f"{settings.base_url}/api/chat",
            body=body,
            headers={"Content-Type": "application/json"},
        )


__all__ = ["OllamaProvider"]
