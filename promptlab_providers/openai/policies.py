"""OpenAI-compatible endpoint policies.

OpenAI, OpenRouter and custom gateways speak the same chat-completions wire
format and differ only in defaults and extra headers. Each difference is
captured by an ``OpenAICompatiblePolicy`` preset rather than a separate
adapter.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from ..base.models import ProviderDescriptor, ProviderKind
from ..config.defaults import (
    OPENAI_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_APP_TITLE,
    OPENROUTER_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_REFERER,
)


@dataclass(frozen=True)
class OpenAICompatiblePolicy:
    """Per-backend settings for the chat-completions format.

    Attributes:
        kind: Provider kind the policy applies to.
        label: Vendor name used in error messages.
        default_base_url: Endpoint root when the descriptor has none;
            ``None`` means a base URL is mandatory.
        attribution_headers: Send ``HTTP-Referer``/``X-Title`` (OpenRouter).
    """

    kind: ProviderKind
    label: str
    default_base_url: Optional[str]
    attribution_headers: bool = False

    def base_url(self, descriptor: ProviderDescriptor) -> Optional[str]:
        return (descriptor.base_url or "").strip() or self.default_base_url

    def extra_headers(self, descriptor: ProviderDescriptor) -> Dict[str, str]:
        if not self.attribution_headers:
            return {}
        headers = {"HTTP-Referer": descriptor.options.get("referer") or OPENROUTER_DEFAULT_REFERER}
        title = descriptor.options.get("app_title", OPENROUTER_DEFAULT_APP_TITLE)
        if title:
            headers["X-Title"] = title
        return headers


OPENAI = OpenAICompatiblePolicy(
    kind=ProviderKind.OPENAI_COMPATIBLE,
    label="OpenAI",
    default_base_url=OPENAI_DEFAULT_BASE_URL,
)

OPENROUTER = OpenAICompatiblePolicy(
    kind=ProviderKind.OPENROUTER,
    label="OpenRouter",
    default_base_url=OPENROUTER_DEFAULT_BASE_URL,
    attribution_headers=True,
)

CUSTOM_GATEWAY = OpenAICompatiblePolicy(
    kind=ProviderKind.CUSTOM_GATEWAY,
    label="Custom gateway",
    default_base_url=None,
)

POLICIES = {p.kind: p for p in (OPENAI, OPENROUTER, CUSTOM_GATEWAY)}


__all__ = ["OpenAICompatiblePolicy", "OPENAI", "OPENROUTER", "CUSTOM_GATEWAY", "POLICIES"]
