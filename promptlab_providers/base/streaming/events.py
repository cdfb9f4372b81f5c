"""Stream event types.

A session produces zero or more ``Token``, ``ReasoningToken`` and
``UsageUpdate`` events in arrival order, followed by exactly one terminal
event: ``Completed``, ``Aborted`` or ``Failed``. Nothing follows a terminal
event.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Union

from ..errors import ErrorCode
from ..models import TokenUsage


@dataclass(frozen=True)
class Token:
    """Visible answer text delta."""

    text: str


@dataclass(frozen=True)
class ReasoningToken:
    """Reasoning (thinking) text delta from a structured channel."""

    text: str


@dataclass(frozen=True)
class UsageUpdate:
    """Current token totals as last reported by the vendor."""

    tokens_input: int
    tokens_output: int

    def to_usage(self) -> TokenUsage:
        return TokenUsage(tokens_input=self.tokens_input, tokens_output=self.tokens_output)


@dataclass(frozen=True)
class Completed:
    """Terminal success: aggregated answer, thinking and usage."""

    content: str
    thinking: Optional[str] = None
    usage: TokenUsage = field(default_factory=TokenUsage)


@dataclass(frozen=True)
class Aborted:
    """Terminal user cancellation."""

    reason: Optional[str] = None


@dataclass(frozen=True)
class Failed:
    """Terminal failure with a user-presentable message."""

    message: str
    code: ErrorCode = ErrorCode.UNKNOWN


FrameEvent = Union[Token, ReasoningToken, UsageUpdate]
TerminalEvent = Union[Completed, Aborted, Failed]
StreamEvent = Union[Token, ReasoningToken, UsageUpdate, Completed, Aborted, Failed]

TERMINAL_TYPES = (Completed, Aborted, Failed)


def is_terminal(event: StreamEvent) -> bool:
    return isinstance(event, TERMINAL_TYPES)


def accumulate_text(events: Iterable[StreamEvent]) -> str:
    """Concatenate the ``Token`` texts of ``events`` in order."""
    parts: List[str] = [e.text for e in events if isinstance(e, Token)]
    return "".join(parts)


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
]
