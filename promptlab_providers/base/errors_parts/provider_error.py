"""Exception raised when a vendor call cannot produce a completion.

Request builders and the frame decoder raise it; the stream session turns it
into a ``Failed`` event and ``StreamSession.complete`` re-raises it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Failure of one vendor call.

    Attributes:
        code: Failure category.
        message: Text shown to the user as-is.
        provider: Provider kind value, e.g. ``"anthropic"``.
        model: Model id, when known.
        retryable: Defaults to ``code.retryable``.
        raw: Decoded vendor payload or original exception.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: Optional[bool] = None
    raw: Optional[Any] = None

    def __post_init__(self) -> None:
        if self.retryable is None:
            self.retryable = self.code.retryable
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.provider}/{self.model or '-'}] {self.code.value}: {self.message}"


__all__ = ["ProviderError"]
