"""Terminal logging for stream sessions.

Every session ends with exactly one normalized log line:
``stream.adapter.end`` on completion, ``stream.adapter.cancelled`` on abort
and ``stream.adapter.error`` on failure, each carrying the stream metrics.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..logging import LogContext, normalized_log_event
from .events import Aborted, Failed, TerminalEvent
from .streaming_metrics import StreamMetrics


def finalize_stream(
    *,
    logger: Optional[logging.Logger],
    ctx: LogContext,
    metrics: StreamMetrics,
    outcome: TerminalEvent,
) -> None:
    """Close ``metrics`` and emit the terminal log event for ``outcome``."""
    metrics.finish()
    if logger is None:
        return
    error: Optional[str] = None
    error_code: Optional[str] = None
    if isinstance(outcome, Failed):
        event = "stream.adapter.error"
        error = outcome.message
        error_code = outcome.code.value
        level = logging.WARNING
    elif isinstance(outcome, Aborted):
        event = "stream.adapter.cancelled"
        error_code = "cancelled"
        level = logging.INFO
    else:
        event = "stream.adapter.end"
        level = logging.INFO
    normalized_log_event(
        logger,
        event,
        ctx,
        phase="finalize",
        attempt=1,
        error_code=error_code,
        emitted=metrics.emitted > 0,
        tokens=metrics.tokens,
        level=level,
        emitted_count=metrics.emitted,
        time_to_first_token_ms=metrics.time_to_first_token_ms,
        total_duration_ms=metrics.total_duration_ms,
        error=error,
    )


__all__ = ["finalize_stream"]
