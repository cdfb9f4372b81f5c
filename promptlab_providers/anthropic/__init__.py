"""Anthropic provider family."""

from .client import AnthropicAdapter

__all__ = ["AnthropicAdapter"]
