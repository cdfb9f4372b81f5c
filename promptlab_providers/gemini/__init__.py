"""Gemini provider family."""

from .client import GeminiAdapter

__all__ = ["GeminiAdapter"]
