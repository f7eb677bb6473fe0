"""AnthropicProvider adapter.

Streams the Messages API (``POST {base_url}/messages``, ``stream: true``).

Wire notes:
* The Messages API takes system instructions in a top-level ``system`` field,
  not in ``messages``. The first system message becomes that field; every
  system message is removed from the array.
* ``max_tokens`` is mandatory; :data:`ANTHROPIC_DEFAULT_MAX_TOKENS` applies
  when the caller sets none.
* Only ``content_block_delta`` events carry text (see the Anthropic delta
  extractor); pings, block start/stop and usage events are ignored.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from ..base.dto import ChatOptions
from ..base.models import Message, ModelDescriptor
from ..base.provider_base import BaseHttpChatProvider
from ..base.streaming import ANTHROPIC_PROFILE, StreamRequest
from ..base.utils.messages import split_system, to_wire_messages
from ..config.defaults import ANTHROPIC_API_VERSION, ANTHROPIC_DEFAULT_MAX_TOKENS
from . import get_anthropic_models


class AnthropicProvider(BaseHttpChatProvider):
    """Anthropic Messages API adapter."""

    vendor = "anthropic"
    display_name = "Anthropic"
    profile = ANTHROPIC_PROFILE
    owned_body_keys = BaseHttpChatProvider.owned_body_keys | {"system"}

    def list_models(self) -> List[ModelDescriptor]:
        return get_anthropic_models.run(self.settings.api_key)

    def build_request(
        self,
        descriptor: ModelDescriptor,
        messages: Sequence[Message],
        options: ChatOptions,
    ) -> StreamRequest:
        settings = self.settings
        api_key = self.require_api_key(settings)
        system, turns = split_system(messages)
        body: Dict[str, Any] = {
            "model": descriptor.model_id,
            "messages": to_wire_messages(turns),
            "max_tokens": options.max_tokens or ANTHROPIC_DEFAULT_MAX_TOKENS,
            "stream": True,
        }
        if system is not None:
            body["system"] = system
        return StreamRequest(
            url=f"{settings.base_url}/messages",
            body=self.apply_options(body, options),
            headers={
                "Content-Type": "application/json",
                "x-api-key": api_key,
                "anthropic-version": ANTHROPIC_API_VERSION,
            },
        )


__all__ = ["AnthropicProvider"]
