"""Dispatcher: one entry point from a model identifier to a delta stream."""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from .cancellation import CancellationToken
from .dto import ChatOptions
from .models import Message
from .registry import ModelDirectory
from .streaming import StreamHandle


class Dispatcher:
    """Route chat requests to the provider that owns the requested model."""

    def __init__(self, directory: ModelDirectory) -> None:
        self._directory = directory

    @property
    def directory(self) -> ModelDirectory:
        return self._directory

    def send(
        self,
        model_id: str,
        messages: Sequence[Message],
        options: "ChatOptions | Dict[str, Any] | None" = None,
        token: Optional[CancellationToken] = None,
    ) -> StreamHandle:
        """Resolve ``model_id`` and return the provider's lazy stream.

        Raises (synchronously, before any network call):
            NotFoundError: unknown ``model_id``.
            ConfigurationError: the owning vendor is not configured.
        """
        provider, descriptor = self._directory.resolve(model_id)
        return provider.send_chat_request(descriptor, tuple(messages), options, token)

    def send_default(
        self,
        messages: Sequence[Message],
        options: "ChatOptions | Dict[str, Any] | None" = None,
        token: Optional[CancellationToken] = None,
    ) -> StreamHandle:
        """Like :meth:`send` with :meth:`ModelDirectory.select_default`."""
        return self.send(self._directory.select_default().identifier, messages, options, token)


__all__ = ["Dispatcher"]
