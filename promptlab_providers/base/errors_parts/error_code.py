"""Failure categories carried by ``Failed`` events and ``ProviderError``.

Values are lowercase snake_case and appear verbatim in events and logs.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    TRANSIENT = "transient"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    INTERNAL = "internal"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"

    @property
    def retryable(self) -> bool:
        """Whether an outer layer may retry; sessions themselves never do."""
        return self in _RETRYABLE


_RETRYABLE = frozenset(
    {ErrorCode.RATE_LIMIT, ErrorCode.TIMEOUT, ErrorCode.TRANSIENT, ErrorCode.UNAVAILABLE}
)


__all__ = ["ErrorCode"]
