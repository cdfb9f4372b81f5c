"""Streaming primitives: events, frame decoding, callbacks and metrics.

``StreamSession`` lives in :mod:`.stream_session` and is re-exported from
``promptlab_providers.base``; it is not imported here because the adapter
interface depends on this package's event types.
"""

from .events import (
    TERMINAL_TYPES,
    Aborted,
    Completed,
    Failed,
    FrameEvent,
    ReasoningToken,
    StreamEvent,
    TerminalEvent,
    Token,
    UsageUpdate,
    accumulate_text,
    is_terminal,
)
from .callbacks import CallbackSink, dispatch_event
from .frame_state import FrameState
from .frame_decoder import DATA_PREFIX, DONE_SENTINEL, LineBuffer, StreamFrameDecoder
from .streaming_metrics import StreamMetrics
from .streaming_finalize import finalize_stream

__all__ = [
    "Token",
    "ReasoningToken",
    "UsageUpdate",
    "Completed",
    "Aborted",
    "Failed",
    "FrameEvent",
    "TerminalEvent",
    "StreamEvent",
    "TERMINAL_TYPES",
    "is_terminal",
    "accumulate_text",
    "CallbackSink",
    "dispatch_event",
    "FrameState",
    "LineBuffer",
    "StreamFrameDecoder",
    "DATA_PREFIX",
    "DONE_SENTINEL",
    "StreamMetrics",
    "finalize_stream",
]
