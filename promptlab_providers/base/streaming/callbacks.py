"""Callback sink interface.

``CallbackSink`` is the consumer-facing surface of a stream session for
callers that prefer notifications over iterating events. All methods are
optional no-ops; subclasses override what they need. ``dispatch_event``
routes one ``StreamEvent`` to the matching method.
"""

from __future__ import annotations

from typing import Optional

from ..models import TokenUsage
from .events import Aborted, Completed, Failed, ReasoningToken, StreamEvent, Token, UsageUpdate


class CallbackSink:
    """Receives streaming notifications for one session.

    Exactly one of ``on_complete``, ``on_error`` and ``on_abort`` is called
    per session, after every token notification.
    """

    def on_token(self, text: str) -> None:
        """Called for each visible answer delta."""

    def on_reasoning_token(self, text: str) -> None:
        """Called for each reasoning delta."""

    def on_usage(self, usage: TokenUsage) -> None:
        """Called whenever the vendor reports updated token totals."""

    def on_complete(self, content: str, thinking: Optional[str], usage: TokenUsage) -> None:
        """Called once when the stream finishes normally."""

    def on_error(self, message: str) -> None:
        """Called once when the session fails."""

    def on_abort(self) -> None:
        """Called once when the session is cancelled."""


def dispatch_event(sink: CallbackSink, event: StreamEvent) -> None:
    """Invoke the ``sink`` method matching ``event``."""
    if isinstance(event, Token):
        sink.on_token(event.text)
    elif isinstance(event, ReasoningToken):
        sink.on_reasoning_token(event.text)
    elif isinstance(event, UsageUpdate):
        sink.on_usage(event.to_usage())
    elif isinstance(event, Completed):
        sink.on_complete(event.content, event.thinking, event.usage)
    elif isinstance(event, Failed):
        sink.on_error(event.message)
    elif isinstance(event, Aborted):
        sink.on_abort()
    else:  # pragma: no cover - exhaustive over StreamEvent
        raise TypeError(f"unknown stream event: {event!r}")


__all__ = ["CallbackSink", "dispatch_event"]
