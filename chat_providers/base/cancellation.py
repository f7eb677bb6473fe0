"""Cooperative cancellation primitives (public API facade).

Notes
-----
- ``CancellationToken`` carries a cancel request from the chat front end to
  in-flight streams; transports subscribe with ``register``.
- ``CancelledError`` is raised by operations that observe a cancellation
  request while polling.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
