"""Abort signal shared between a caller and a stream session.

The session polls the token before sending the request, between network
reads and between decoded frames; an in-flight read is never interrupted.
Cancellation may come from any thread (a UI callback, a signal handler) while
the session runs on an event loop.
"""

from __future__ import annotations

import threading
from typing import List, Optional

from .cancelled_error import DEFAULT_CANCEL_REASON, CancelledError


class CancellationToken:
    """Thread-safe, one-way abort flag with cascading children.

    Once cancelled a token stays cancelled and keeps the first reason given.
    Children created through :meth:`child` (or ``parent=``) are cancelled with
    their parent; cancelling a child leaves the parent alone.
    """

    __slots__ = ("_flag", "_reason", "_lock", "_children")

    def __init__(self, *, parent: Optional["CancellationToken"] = None) -> None:
        self._flag = threading.Event()
        self._reason: Optional[str] = None
        self._lock = threading.Lock()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:
        return self._flag.is_set()

    @property
    def reason(self) -> Optional[str]:
        """Reason given to the first :meth:`cancel` call, if any."""
        return self._reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Mark the token cancelled and cascade to linked children.

        Later calls are no-ops.
        """
        with self._lock:
            if self._flag.is_set():
                return
            self._reason = reason
            self._flag.set()
            children = tuple(self._children)
        for child in children:
            child.cancel(reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Attach ``token`` so it follows this token; returns ``token``.

        Linking to an already cancelled parent cancels the child immediately.
        """
        with self._lock:
            self._children.append(token)
            cancelled, reason = self._flag.is_set(), self._reason
        if cancelled:
            token.cancel(reason)
        return token

    def child(self) -> "CancellationToken":
        return CancellationToken(parent=self)

    def raise_if_cancelled(self) -> None:
        """Raise :class:`CancelledError` when cancellation was requested."""
        if self._flag.is_set():
            raise CancelledError(self._reason or DEFAULT_CANCEL_REASON)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block the calling thread until cancelled or ``timeout`` elapses.

        Returns whether the token is cancelled. Meant for host threads; never
        call it from the event loop running the session.
        """
        return self._flag.wait(timeout)

    def __repr__(self) -> str:  # pragma: no cover
        return f"CancellationToken(cancelled={self.cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken"]
