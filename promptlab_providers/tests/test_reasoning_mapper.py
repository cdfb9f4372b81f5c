"""Table-driven tests for the reasoning effort mapper.

Budgets follow ``min + (max - min) * ratio`` rounded half-up with ratios
low=0.05, medium=0.5, high=0.8.
"""
from __future__ import annotations

import pytest

from promptlab_providers.base.models import ProviderDescriptor, ProviderKind, ReasoningConfig
from promptlab_providers.base.reasoning import map_reasoning_parameters, round_half_up, thinking_budget


def _on(effort: str) -> ReasoningConfig:
    return ReasoningConfig(enabled=True, effort=effort)


def _anthropic(budget: int) -> dict:
    return {"thinking": {"type": "enabled", "budget_tokens": budget}}


def _gemini(budget: int) -> dict:
    return {"generationConfig": {"thinkingConfig": {"thinkingBudget": budget, "includeThoughts": True}}}


@pytest.mark.parametrize(
    ("kind", "model", "effort", "expected"),
    [
        ("openrouter", "anthropic/claude-sonnet-4", "low", {"reasoning": {"effort": "low"}}),
        ("openrouter", "meta-llama/llama-3-70b", "high", {"reasoning": {"effort": "high"}}),
        ("openai-compatible", "o3-mini", "medium", {"reasoning_effort": "medium"}),
        ("openai-compatible", "openai/o1", "high", {"reasoning_effort": "high"}),
        ("openai-compatible", "gpt-5", "low", {"reasoning_effort": "low"}),
        ("openai-compatible", "gpt-4o", "high", {}),
        ("anthropic", "claude-opus-4", "high", _anthropic(51405)),
        ("anthropic", "claude-opus-4", "medium", _anthropic(32512)),
        ("anthropic", "claude-sonnet-4-20250514", "low", _anthropic(4173)),
        ("anthropic", "claude-3-7-sonnet-latest", "medium", _anthropic(32512)),
        ("anthropic", "claude-3-5-sonnet-latest", "high", {}),
        ("gemini", "gemini-2.5-pro", "low", _gemini(1760)),
        ("gemini", "gemini-2.5-pro", "medium", _gemini(16448)),
        ("gemini", "gemini-2.5-pro", "high", _gemini(26240)),
        ("gemini", "gemini-2.5-flash", "low", _gemini(1229)),
        ("gemini", "gemini-2.5-flash", "medium", _gemini(12288)),
        ("gemini", "gemini-2.5-flash", "high", _gemini(19661)),
        ("gemini", "gemini-1.5-pro", "high", {}),
        ("custom-gateway", "qwen3-32b", "high", {"reasoning": {"effort": "high"}}),
        ("custom-gateway", "deepseek-r1", "low", {"reasoning": {"effort": "low"}}),
        ("custom-gateway", "llama-3.1-8b", "high", {}),
    ],
)
def test_mapping_table(kind: str, model: str, effort: str, expected: dict) -> None:
    assert map_reasoning_parameters(kind, model, _on(effort)) == expected  # nosec B101


def test_scenario_anthropic_opus_high_budget() -> None:
    descriptor = ProviderDescriptor(kind=ProviderKind.ANTHROPIC, api_key="sk-ant")
    fragment = map_reasoning_parameters(descriptor, "claude-opus-4", _on("high"))
    assert fragment["thinking"]["budget_tokens"] == 51405  # nosec B101


@pytest.mark.parametrize(
    "reasoning",
    [
        ReasoningConfig(enabled=False, effort="high"),
        ReasoningConfig(enabled=True, effort="default"),
        ReasoningConfig(enabled=True, effort="none"),
    ],
)
@pytest.mark.parametrize("kind", [k.value for k in ProviderKind])
def test_disabled_or_default_never_produces_fragment(kind: str, reasoning: ReasoningConfig) -> None:
    assert map_reasoning_parameters(kind, "claude-opus-4 gemini-2.5-pro o3 qwen3", reasoning) == {}  # nosec B101


def test_openai_alias_kind_is_accepted() -> None:
    assert map_reasoning_parameters("openai", "o4-mini", _on("low")) == {"reasoning_effort": "low"}  # nosec B101


def test_round_half_up_and_budget_helpers() -> None:
    assert round_half_up(0.5) == 1  # nosec B101
    assert round_half_up(1228.8) == 1229  # nosec B101
    assert round_half_up(2.4999) == 2  # nosec B101
    assert thinking_budget("high", 1024, 64000) == 51405  # nosec B101
    assert thinking_budget("low", 0, 24576) == 1229  # nosec B101
