"""Inline thinking extraction."""

from .extractor import THINKING_PATTERNS, ThinkingContent, extract_thinking, wrap_thinking

__all__ = ["THINKING_PATTERNS", "ThinkingContent", "extract_thinking", "wrap_thinking"]
