"""Streaming metrics for a single session."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..models import TokenUsage


@dataclass
class StreamMetrics:
    """Timing and volume of one stream.

    Attributes:
        emitted: Number of Token/ReasoningToken events forwarded.
        time_to_first_token_ms: Delay between start and the first delta.
        total_duration_ms: Delay between start and the terminal event.
        tokens: Last usage reported by the vendor as ``prompt/completion/total``.
    """

    emitted: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    tokens: Optional[Dict[str, Any]] = None
    _started_at: float = field(default_factory=time.monotonic, repr=False)

    def start(self) -> None:
        self._started_at = time.monotonic()

    def _elapsed_ms(self) -> float:
        return round((time.monotonic() - self._started_at) * 1000.0, 3)

    def record_delta(self) -> None:
        """Count one forwarded delta and stamp time-to-first-token once."""
        self.emitted += 1
        if self.time_to_first_token_ms is None:
            self.time_to_first_token_ms = self._elapsed_ms()

    def record_usage(self, usage: TokenUsage) -> None:
        self.tokens = usage.to_dict()

    def finish(self) -> None:
        self.total_duration_ms = self._elapsed_ms()


__all__ = ["StreamMetrics"]
