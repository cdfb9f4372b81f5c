"""User-initiated abort of a generation."""

from __future__ import annotations

DEFAULT_CANCEL_REASON = "operation cancelled"


class CancelledError(RuntimeError):
    """Raised when a session observes its cancellation token.

    Unrelated to ``asyncio.CancelledError``: this one means the user stopped
    the generation, not that the host task was torn down. Sessions map it to
    an ``Aborted`` event instead of ``Failed``.
    """

    def __init__(self, reason: str = DEFAULT_CANCEL_REASON) -> None:
        super().__init__(reason)
        self.reason = reason


__all__ = ["CancelledError", "DEFAULT_CANCEL_REASON"]
