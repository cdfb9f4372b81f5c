"""Cooperative cancellation primitives (public API facade).

``CancellationToken`` is the abort signal a caller passes into a stream
session; ``CancelledError`` is raised by operations that observe it.
Implementations live under ``cancellation_parts``.
"""

from .cancellation_parts.cancelled_error import DEFAULT_CANCEL_REASON, CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError", "DEFAULT_CANCEL_REASON"]
