"""
Chat providers base package.

Exports the vendor-agnostic core: DTOs, the error taxonomy, cancellation and
lifecycle primitives, the ``ChatProvider`` protocol, the streaming pipeline,
the provider registry / model directory, and the dispatcher.

Layering:
- Models / DTOs: immutable messages, descriptors, deltas, results
- Streaming: frame decoding, delta extraction, the HTTP streaming client
- Registry: live providers and their model snapshots
- Dispatch: model identifier -> provider -> lazy delta stream
"""

from .cancellation import CancellationToken, CancelledError
from .dispatch import Dispatcher
from .errors import (
    ConfigurationError,
    ErrorCode,
    NotFoundError,
    ProviderError,
    RegistryConflictError,
    TransportError,
)
from .factory import ProviderFactory, UnknownProviderError
from .interfaces import ChatProvider, ModelListingProvider
from .lifecycle import Disposable, Emitter
from .models import (
    ChatMessageRole,
    ChatResult,
    DataPart,
    Message,
    ModelCapabilities,
    ModelDescriptor,
    TextDelta,
    TextPart,
    VendorSnapshot,
)
from .registry import ModelDirectory, ProviderRegistry
from .streaming import StreamHandle, StreamingRequestClient, StreamRequest, VendorProfile
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Models
    "ChatMessageRole",
    "ChatResult",
    "DataPart",
    "Message",
    "ModelCapabilities",
    "ModelDescriptor",
    "TextDelta",
    "TextPart",
    "VendorSnapshot",
    # Errors
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "TransportError",
    "RegistryConflictError",
    "NotFoundError",
    # Interfaces & factory
    "ChatProvider",
    "ModelListingProvider",
    "ProviderFactory",
    "UnknownProviderError",
    # Lifecycle, timeouts & cancellation
    "Disposable",
    "Emitter",
    "TimeoutConfig",
    "get_timeout_config",
    "CancellationToken",
    "CancelledError",
    # Streaming
    "StreamHandle",
    "StreamingRequestClient",
    "StreamRequest",
    "VendorProfile",
    # Registry & dispatch
    "ProviderRegistry",
    "ModelDirectory",
    "Dispatcher",
]
