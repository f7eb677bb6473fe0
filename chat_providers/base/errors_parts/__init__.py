"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `chat_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .configuration_error import ConfigurationError
from .transport_error import TransportError
from .registry_conflict_error import RegistryConflictError
from .not_found_error import NotFoundError
from .classification import RETRYABLE_CODES, classify_exception, classify_status

__all__ = [
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "TransportError",
    "RegistryConflictError",
    "NotFoundError",
    "RETRYABLE_CODES",
    "classify_exception",
    "classify_status",
]
