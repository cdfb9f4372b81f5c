"""
Sampling parameters for a chat request.

Every field is optional. Builders omit absent fields from the vendor body,
except ``temperature`` and ``max_tokens`` which fall back to the configured
defaults.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ModelParameters:
    """Sampling controls passed through to the vendor."""

    temperature: Optional[float] = None
    top_p: Optional[float] = None
    max_tokens: Optional[int] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None


__all__ = ["ModelParameters"]
