"""Shared base class for HTTP streaming vendor adapters.

Purpose
-------
Everything that is the same for OpenAI, Anthropic and Ollama lives here:
settings lookup and change notification, option validation, credential
checks, log context, and wiring a prepared :class:`StreamRequest` into a
lazy :class:`StreamHandle`. Subclasses implement only ``list_models`` and
``build_request`` (message conversion plus the vendor's wire shape).

Failure semantics
-----------------
- ``send_chat_request`` raises :class:`ConfigurationError` (missing key) or a
  ``validation`` :class:`ProviderError` (bad options) synchronously, before
  a handle exists and before any network call.
- Transport failures surface while iterating the handle.
"""
from __future__ import annotations

import logging
from typing import Any, ClassVar, Dict, FrozenSet, List, Optional, Sequence

import httpx
from pydantic import ValidationError

from ..config.settings import ProviderSettings
from .cancellation import CancellationToken
from .dto import ChatOptions, VendorSettings
from .errors import ConfigurationError, ErrorCode, ProviderError
from .lifecycle import Emitter
from .logging import LogContext, get_logger, log_event
from .log_support import new_request_id
from .models import Message, ModelDescriptor
from .streaming import StreamHandle, StreamingRequestClient, StreamRequest, VendorProfile


class BaseHttpChatProvider:
    """Reusable base for adapters that stream over a single HTTP POST.

    Subclasses set ``vendor`` and ``profile`` and implement
    :meth:`list_models` and :meth:`build_request`.
    """

    vendor: ClassVar[str] = ""
    display_name: ClassVar[str] = ""
    profile: ClassVar[VendorProfile]
    # Body keys the adapter owns; ``ChatOptions.extra`` cannot replace them.
    owned_body_keys: ClassVar[FrozenSet[str]] = frozenset({"model", "messages", "stream"})

    def __init__(
        self,
        settings: Optional[ProviderSettings] = None,
        *,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self._settings = settings if settings is not None else ProviderSettings()
        self._http_client = http_client
        self._logger = get_logger(f"providers.{self.vendor}")
        self._on_did_change: Emitter[str] = Emitter(f"{self.vendor}.did_change")
        self._settings_subscription = self._settings.on_did_change(self._settings_changed)
        self._streamer = StreamingRequestClient(
            self.profile,
            http_client=http_client,
            logger=get_logger(f"providers.{self.vendor}.stream"),
        )

    # ----- ChatProvider surface -----
    @property
    def vendor_id(self) -> str:
        return self.vendor

    @property
    def on_did_change(self) -> Emitter[str]:
        return self._on_did_change

    def list_models(self) -> List[ModelDescriptor]:  # pragma: no cover - abstract
        raise NotImplementedError

    def build_request(
        self,
        descriptor: ModelDescriptor,
        messages: Sequence[Message],
        options: ChatOptions,
    ) -> StreamRequest:  # pragma: no cover - abstract
        raise NotImplementedError

    def send_chat_request(
        self,
        descriptor: ModelDescriptor,
        messages: Sequence[Message],
        options: "ChatOptions | Dict[str, Any] | None" = None,
        token: Optional[CancellationToken] = None,
    ) -> StreamHandle:
        """Prepare the vendor request now; stream it when the handle is iterated."""
        opts = self._coerce_options(descriptor, options)
        msgs = tuple(messages)
        request = self.build_request(descriptor, msgs, opts)
        handle_token = token.child() if token is not None else CancellationToken()
        ctx = LogContext(provider=self.vendor, model=descriptor.identifier, request_id=new_request_id())
        log_event(
            self._logger,
            "request.prepared",
            ctx,
            level=logging.DEBUG,
            url=request.url,
            headers=request.redacted_headers(),
            message_count=len(msgs),
        )
        return StreamHandle(
            lambda: self._streamer.stream(request, handle_token, ctx),
            token=handle_token,
            ctx=ctx,
            logger=self._logger,
        )

    # ----- Helpers for subclasses -----
    @property
    def settings(self) -> VendorSettings:
        """Current settings, read at call time so edits apply to the next request."""
        return self._settings.get(self.vendor)

    def require_api_key(self, settings: VendorSettings) -> str:
        if not settings.api_key:
            raise ConfigurationError(
                message=(
                    f"{self.display_name or self.vendor} API key not configured; "
                    f"set it in the provider settings or the environment"
                ),
                provider=self.vendor,
            )
        return settings.api_key

    def apply_options(self, body: Dict[str, Any], options: ChatOptions) -> Dict[str, Any]:
        """Merge temperature and ``extra`` into ``body`` (owned keys are kept)."""
        if options.temperature is not None:
            body["temperature"] = options.temperature
        for key, value in options.extra.items():
            if key not in self.owned_body_keys:
                body[key] = value
        return body

    def _coerce_options(self, descriptor: ModelDescriptor, options: Any) -> ChatOptions:
        try:
            return ChatOptions.coerce(options)
        except ValidationError as exc:
            raise ProviderError(
                code=ErrorCode.VALIDATION,
                message=f"invalid chat options: {exc.errors()[0].get('msg', exc)}",
                provider=self.vendor,
                model=descriptor.identifier,
                raw=exc,
            ) from exc

    def _settings_changed(self, vendor: str) -> None:
        if vendor == self.vendor:
            self._on_did_change.fire(self.vendor)

    def dispose(self) -> None:
        """Stop listening for settings changes."""
        self._settings_subscription.dispose()


__all__ = ["BaseHttpChatProvider"]
