"""
Token usage counters for one completion.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TokenUsage:
    """Input/output token counts reported by the vendor (0 when unreported)."""

    tokens_input: int = 0
    tokens_output: int = 0

    @property
    def total(self) -> int:
        return self.tokens_input + self.tokens_output

    def to_dict(self) -> dict:
        return {"prompt": self.tokens_input, "completion": self.tokens_output, "total": self.total}


__all__ = ["TokenUsage"]
