"""ChatProvider Protocol (single-class module).

The contract every vendor adapter fulfils so the registry, the model
directory and the dispatcher can treat OpenAI, Anthropic and Ollama alike.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Protocol, Sequence, runtime_checkable

from ..cancellation import CancellationToken
from ..lifecycle import Emitter
from ..models import Message, ModelDescriptor

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..dto import ChatOptions
    from ..streaming import StreamHandle


@runtime_checkable
class ChatProvider(Protocol):
    """Vendor adapter surface.

    ``on_did_change`` fires (with the vendor id) whenever the vendor's model
    list may have changed, e.g. after its settings were edited.
    """

    @property
    def vendor_id(self) -> str:
        """Stable vendor identifier, e.g. ``"ollama"``."""
        ...

    @property
    def on_did_change(self) -> Emitter[str]:
        ...

    def list_models(self) -> List[ModelDescriptor]:
        ...

    def send_chat_request(
        self,
        descriptor: ModelDescriptor,
        messages: Sequence[Message],
        options: "ChatOptions | dict | None" = None,
        token: Optional[CancellationToken] = None,
    ) -> "StreamHandle":
        """Return a lazy stream of deltas for ``messages``.

        Raises ``ConfigurationError`` synchronously (before any network call)
        when the vendor is not usable, e.g. a missing API key.
        """
        ...
