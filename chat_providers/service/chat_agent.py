"""Default chat agent: one prompt in, streamed reply out.

The agent picks the directory's default model, sends the prompt as a single
user message and forwards each text delta to a ``progress`` callback. It never
raises for provider failures: they are reported through ``progress`` and in
``AgentResult.error_details`` so a front end can render them inline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from ..base.cancellation import CancellationToken
from ..base.dispatch import Dispatcher
from ..base.errors import NotFoundError, ProviderError
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import Message

Progress = Callable[[str], None]

_logger = get_logger("providers.agent")


@dataclass(frozen=True)
class AgentResult:
    """Outcome of :meth:`ChatAgent.invoke` (exactly one field is set)."""

    metadata: Optional[Dict[str, Any]] = None
    error_details: Optional[Dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.error_details is None


class ChatAgent:
    """Answers prompts with the default model of a :class:`Dispatcher`."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    def invoke(
        self,
        prompt: str,
        progress: Progress,
        token: Optional[CancellationToken] = None,
    ) -> AgentResult:
        try:
            descriptor = self._dispatcher.directory.select_default()
        except NotFoundError:
            progress("No language models are available. Check the provider configuration.")
            return AgentResult(error_details={"message": "No language models available"})

        ctx = LogContext(provider=descriptor.vendor, model=descriptor.identifier)
        log_event(_logger, "agent.invoke", ctx, level=logging.DEBUG, prompt_chars=len(prompt))
        try:
            with self._dispatcher.send(descriptor.identifier, [Message.user(prompt)], token=token) as handle:
                for delta in handle:
                    progress(delta.value)
            result = handle.result.result()
        except ProviderError as exc:
            progress(f"Error: {exc.message}")
            return AgentResult(
                error_details={"message": exc.message, "code": exc.code.value, "provider": exc.provider}
            )
        return AgentResult(
            metadata={
                "model": descriptor.identifier,
                "emitted": result.emitted,
                "cancelled": result.cancelled,
            }
        )


__all__ = ["AgentResult", "ChatAgent", "Progress"]
