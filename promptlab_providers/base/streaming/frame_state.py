"""Per-stream decoding state shared between the decoder and vendor parsers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .events import UsageUpdate


@dataclass
class FrameState:
    """Mutable state carried across the frames of one response.

    Attributes:
        block_type: Type of the currently open Anthropic content block.
        tokens_input: Last reported input token count.
        tokens_output: Last reported output token count.
        usage_seen: Whether any frame reported usage.
        saw_reasoning: Whether an incremental reasoning delta arrived.
        reasoning_details: ``reasoning.text`` entries from a closing message,
            used only when no incremental reasoning arrived.
        frames: Number of JSON frames decoded.
    """

    block_type: Optional[str] = None
    tokens_input: int = 0
    tokens_output: int = 0
    usage_seen: bool = False
    saw_reasoning: bool = False
    reasoning_details: List[str] = field(default_factory=list)
    frames: int = 0

    def set_usage(self, *, tokens_input: Optional[int] = None, tokens_output: Optional[int] = None) -> UsageUpdate:
        """Overwrite the reported counters present in this frame and return the totals."""
        if tokens_input is not None:
            self.tokens_input = int(tokens_input)
        if tokens_output is not None:
            self.tokens_output = int(tokens_output)
        self.usage_seen = True
        return UsageUpdate(tokens_input=self.tokens_input, tokens_output=self.tokens_output)

    def fallback_thinking(self) -> Optional[str]:
        """Return joined reasoning details when no incremental reasoning arrived."""
        if self.saw_reasoning or not self.reasoning_details:
            return None
        joined = "\n\n".join(self.reasoning_details)
        return joined or None


__all__ = ["FrameState"]
