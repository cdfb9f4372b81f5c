"""
Provider kind enumeration.

Each kind selects one request-builder/decoder family; ``openrouter`` and
``custom-gateway`` share the OpenAI-compatible wire format.
"""
from __future__ import annotations

from enum import Enum


class ProviderKind(str, Enum):
    """Backends a stream session can talk to."""

    OPENAI_COMPATIBLE = "openai-compatible"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"
    OPENROUTER = "openrouter"
    CUSTOM_GATEWAY = "custom-gateway"

    @classmethod
    def parse(cls, value: "str | ProviderKind") -> "ProviderKind":
        """Return the member for ``value``; accepts ``openai`` as an alias."""
        if isinstance(value, ProviderKind):
            return value
        name = (value or "").strip().lower().replace("_", "-")
        if name == "openai":
            return cls.OPENAI_COMPATIBLE
        return cls(name)


__all__ = ["ProviderKind"]
