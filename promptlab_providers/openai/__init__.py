"""OpenAI-compatible provider family (OpenAI, OpenRouter, custom gateways)."""

from .client import OpenAICompatibleAdapter
from .policies import CUSTOM_GATEWAY, OPENAI, OPENROUTER, OpenAICompatiblePolicy

__all__ = ["OpenAICompatibleAdapter", "OpenAICompatiblePolicy", "OPENAI", "OPENROUTER", "CUSTOM_GATEWAY"]
