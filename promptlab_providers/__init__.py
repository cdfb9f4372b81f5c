"""promptlab_providers package

Multi-vendor streaming chat adapter.

Purpose:
    Send one chat request to an OpenAI-compatible, Anthropic, Gemini,
    OpenRouter or custom-gateway backend and normalize the vendor's streaming
    wire format into one event stream: answer tokens, reasoning tokens, usage
    updates and exactly one terminal outcome.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`, :class:`CancelledError`
    - Values: :class:`ChatMessage`, :class:`ChatRequest`, :class:`ProviderDescriptor`, ...
    - Driver: :class:`StreamSession`, :func:`open_session`, :func:`stream_chat`

Example::

    descriptor = ProviderDescriptor.from_config("anthropic")
    request = ChatRequest(model="claude-sonnet-4", messages=(ChatMessage("user", "hi"),))
    async for event in stream_chat(descriptor, request):
        ...
"""

from __future__ import annotations

from contextlib import aclosing
from typing import Any, AsyncIterator

from .base.errors import ErrorCode, ProviderError
from .base.cancellation import CancellationToken, CancelledError
from .base.models import (
    ChatMessage,
    ChatRequest,
    FileReference,
    ModelParameters,
    ProviderDescriptor,
    ProviderKind,
    ReasoningConfig,
    ResolvedFile,
    TokenUsage,
)
from .base.factory import ProviderFactory, create_adapter
from .base.streaming import (
    Aborted,
    CallbackSink,
    Completed,
    Failed,
    ReasoningToken,
    StreamEvent,
    Token,
    UsageUpdate,
)
from .base.streaming.stream_session import SessionState, StreamSession

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "ProviderError",
    "ErrorCode",
    "CancelledError",
    # Values
    "ProviderKind",
    "ChatMessage",
    "FileReference",
    "ResolvedFile",
    "ModelParameters",
    "ReasoningConfig",
    "ProviderDescriptor",
    "ChatRequest",
    "TokenUsage",
    # Events
    "Token",
    "ReasoningToken",
    "UsageUpdate",
    "Completed",
    "Aborted",
    "Failed",
    "StreamEvent",
    "CallbackSink",
    # Driver
    "CancellationToken",
    "ProviderFactory",
    "create_adapter",
    "StreamSession",
    "SessionState",
    "open_session",
    "stream_chat",
]


def open_session(descriptor: ProviderDescriptor, request: ChatRequest, **options: Any) -> StreamSession:
    """Create a :class:`StreamSession`; ``options`` are its keyword arguments."""
    return StreamSession(descriptor, request, **options)


async def stream_chat(descriptor: ProviderDescriptor, request: ChatRequest, **options: Any) -> AsyncIterator[StreamEvent]:
    """Yield the events of a fresh session for ``request``.

    Parameters:
        descriptor: Backend and credential.
        request: Normalized chat request.
        **options: Forwarded to :class:`StreamSession` (``cancellation_token``,
            ``client``, ``logger``, ``file_resolver``, ...).

    Yields:
        ``Token``/``ReasoningToken``/``UsageUpdate`` events, then exactly one of
        ``Completed``, ``Aborted`` or ``Failed``.
    """
    session = open_session(descriptor, request, **options)
    async with aclosing(session.events()) as stream:
        async for event in stream:
            yield event
