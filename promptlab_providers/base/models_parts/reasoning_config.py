"""
Reasoning (extended thinking) request configuration.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


ReasoningEffort = Literal["default", "none", "low", "medium", "high"]


@dataclass(frozen=True)
class ReasoningConfig:
    """How much extra reasoning to request from the model.

    Attributes:
        enabled: ``False`` behaves exactly like effort ``"none"``.
        effort: ``default`` and ``none`` never request extra reasoning.
    """

    enabled: bool = False
    effort: ReasoningEffort = "default"

    @property
    def active_effort(self) -> str | None:
        """Return ``low``/``medium``/``high`` when reasoning should be requested."""
        if not self.enabled or self.effort in ("default", "none"):
            return None
        return self.effort


__all__ = ["ReasoningConfig", "ReasoningEffort"]
