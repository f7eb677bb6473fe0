"""chat_providers package

Streaming chat protocol layer: one lazy, cancellable stream of text deltas
from OpenAI, Anthropic or a local Ollama daemon, whatever the wire format.

Public API (re-exported):
    - Version: ``__version__``
    - Composition root: :class:`ProvidersContainer`
    - Messages: :class:`Message`, :class:`ChatMessageRole`
    - Cancellation: :class:`CancellationToken`
    - Errors: :class:`ProviderError` and its subclasses, :class:`ErrorCode`
    - Factory: :func:`create`

Typical use::

    with ProvidersContainer() as container:
        container.directory.refresh_all()
        model = container.directory.select_default()
        with container.dispatcher.send(model.identifier, [Message.user("hi")]) as stream:
            for delta in stream:
                print(delta.value, end="")
"""

from typing import Any

from .base.cancellation import CancellationToken
from .base.errors import (
    ConfigurationError,
    ErrorCode,
    NotFoundError,
    ProviderError,
    RegistryConflictError,
    TransportError,
)
from .base.factory import ProviderFactory, UnknownProviderError
from .base.models import ChatMessageRole, Message, ModelDescriptor, TextDelta
from .di import ProvidersContainer, build_container

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ProvidersContainer",
    "build_container",
    "Message",
    "ChatMessageRole",
    "ModelDescriptor",
    "TextDelta",
    "CancellationToken",
    "ProviderError",
    "ErrorCode",
    "ConfigurationError",
    "TransportError",
    "RegistryConflictError",
    "NotFoundError",
    "ProviderFactory",
    "create",
]


def create(provider_name: str, **kwargs: Any):
    """Instantiate a vendor adapter by id (``"openai"``, ``"anthropic"``, ``"ollama"``).

    Raises
    ------
    ProviderError
        ``not_found`` when the vendor is unknown or its adapter cannot be built.
    """
    try:
        return ProviderFactory.create(provider_name, **kwargs)
    except UnknownProviderError as e:
        raise ProviderError(
            code=ErrorCode.NOT_FOUND,
            message=f"Failed to create provider '{provider_name}': {e}",
            provider=provider_name,
        ) from e
