"""OpenAI provider adapter.

Streams ``POST {base_url}/chat/completions`` with ``stream: true``; the reply
is server-sent events whose ``data:`` payloads are chat-completion chunks,
terminated by ``data: [DONE]``.

Credentials come from :class:`ProviderSettings` (which layers
``OPENAI_API_KEY`` and the config file); there is no built-in fallback key.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from ..base.dto import ChatOptions
from ..base.models import Message, ModelDescriptor
from ..base.provider_base import BaseHttpChatProvider
from ..base.streaming import OPENAI_PROFILE, StreamRequest
from ..base.utils.messages import to_wire_messages
from . import get_openai_models

__all__ = ["OpenAIProvider"]


class OpenAIProvider(BaseHttpChatProvider):
    """OpenAI chat-completions adapter."""

    vendor = "openai"
    display_name = "OpenAI"
    profile = OPENAI_PROFILE

    def list_models(self) -> List[ModelDescriptor]:
        return get_openai_models.run(self.settings.api_key)

    def build_request(
        self,
        descriptor: ModelDescriptor,
        messages: Sequence[Message],
        options: ChatOptions,
    ) -> StreamRequest:
        settings = self.settings
        api_key = self.require_api_key(settings)
        body: Dict[str, Any] = {
            "model": descriptor.model_id,
            "messages": to_wire_messages(messages),
            "stream": True,
        }
        if options.max_tokens is not None:
            body["max_tokens"] = options.max_tokens
        return StreamRequest(
            url=f"{settings.base_url}/chat/completions",
            body=self.apply_options(body, options),
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {api_key}",
            },
        )
