"""Reasoning effort → vendor request fragment.

Every vendor exposes extended reasoning differently: OpenRouter and
gateways take a qualitative ``reasoning.effort``, OpenAI o-series and GPT-5
take ``reasoning_effort``, Anthropic and Gemini take a numeric thinking
budget. This module translates the uniform ``ReasoningConfig`` into the
fragment to deep-merge into the vendor body.

Rules are evaluated per provider kind and the first match wins. ``default``
and ``none`` (and ``enabled=False``) never produce a fragment. Budgets are
``min + (max - min) * ratio`` rounded half-up, with the ratio taken from
``REASONING_EFFORT_RATIOS``. The ratios and ranges are fixed compatibility
constants, not vendor-published limits.
"""
from __future__ import annotations

import math
import re
from typing import Any, Dict

from ...config.defaults import (
    ANTHROPIC_THINKING_MAX,
    ANTHROPIC_THINKING_MIN,
    GEMINI_FLASH_THINKING_MAX,
    GEMINI_PRO_THINKING_MAX,
    GEMINI_PRO_THINKING_MIN,
    REASONING_EFFORT_RATIOS,
)
from ..models import ProviderDescriptor, ProviderKind, ReasoningConfig

# Pro tier: thinking is always on and cannot be set to zero.
GEMINI_PRO_PATTERN = re.compile(r"gemini-(2\.5|3(\.\d+)?)-pro", re.IGNORECASE)
GEMINI_THINKING_PATTERN = re.compile(r"gemini-[23]|flash-thinking", re.IGNORECASE)
OPENAI_REASONING_PATTERN = re.compile(r"(^|/)(o1|o3|o4)(-|$)|gpt-5", re.IGNORECASE)
ANTHROPIC_THINKING_PATTERN = re.compile(r"claude-3[.-]7|sonnet-4|opus-4|claude-4", re.IGNORECASE)
GATEWAY_REASONING_PATTERN = re.compile(
    r"gemini-(2\.5|3)|qwen3|qwq|deepseek-r|thinking|reasoning", re.IGNORECASE
)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def thinking_budget(effort: str, minimum: int, maximum: int) -> int:
    """Scale ``effort`` into the ``[minimum, maximum]`` token range."""
    ratio = REASONING_EFFORT_RATIOS[effort]
    return round_half_up(minimum + (maximum - minimum) * ratio)


def _gemini_fragment(budget: int) -> Dict[str, Any]:
    return {"generationConfig": {"thinkingConfig": {"thinkingBudget": budget, "includeThoughts": True}}}


def map_reasoning_parameters(
    provider: ProviderDescriptor | ProviderKind | str,
    model: str,
    reasoning: ReasoningConfig,
) -> Dict[str, Any]:
    """Return the request fragment requesting ``reasoning`` from ``model``.

    Parameters
    ----------
    provider:
        Descriptor or bare provider kind.
    model:
        Vendor model identifier; matched by substring patterns.
    reasoning:
        Requested effort.

    Returns
    -------
    Dict[str, Any]
        Fragment to deep-merge into the request body; ``{}`` when nothing
        should be requested.
    """
    kind = provider.kind if isinstance(provider, ProviderDescriptor) else ProviderKind.parse(provider)
    effort = reasoning.active_effort
    if effort is None:
        return {}
    model = model or ""

    if kind is ProviderKind.OPENROUTER:
        return {"reasoning": {"effort": effort}}
    if kind is ProviderKind.GEMINI:
        if GEMINI_PRO_PATTERN.search(model):
            return _gemini_fragment(thinking_budget(effort, GEMINI_PRO_THINKING_MIN, GEMINI_PRO_THINKING_MAX))
        if GEMINI_THINKING_PATTERN.search(model):
            return _gemini_fragment(thinking_budget(effort, 0, GEMINI_FLASH_THINKING_MAX))
        return {}
    if kind is ProviderKind.OPENAI_COMPATIBLE:
        if OPENAI_REASONING_PATTERN.search(model):
            return {"reasoning_effort": effort}
        return {}
    if kind is ProviderKind.ANTHROPIC:
        if ANTHROPIC_THINKING_PATTERN.search(model):
            budget = thinking_budget(effort, ANTHROPIC_THINKING_MIN, ANTHROPIC_THINKING_MAX)
            return {"thinking": {"type": "enabled", "budget_tokens": budget}}
        return {}
    if kind is ProviderKind.CUSTOM_GATEWAY:
        # The backend behind a gateway is unknown; only name-recognized
        # reasoning families get the field.
        if GATEWAY_REASONING_PATTERN.search(model):
            return {"reasoning": {"effort": effort}}
        return {}
    return {}


__all__ = [
    "map_reasoning_parameters",
    "thinking_budget",
    "round_half_up",
]
