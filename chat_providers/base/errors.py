"""Unified provider error taxonomy public surface.

Taxonomy
--------
- ``ConfigurationError``: missing credential; raised before any network call.
- ``TransportError``: non-success HTTP status or unreadable body; raised
  before the first delta.
- ``RegistryConflictError``: duplicate vendor registration.
- ``NotFoundError``: unknown model/vendor, or no model available anywhere.

Cancellation is not an error (streams end cleanly) and malformed frames are
skipped where they are decoded; neither has an exception type here.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.configuration_error import ConfigurationError
from .errors_parts.transport_error import TransportError
from .errors_parts.registry_conflict_error import RegistryConflictError
from .errors_parts.not_found_error import NotFoundError
from .errors_parts.classification import RETRYABLE_CODES, classify_exception, classify_status

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
