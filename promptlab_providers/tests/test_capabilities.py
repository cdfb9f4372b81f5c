"""Model capability inference and attachment gating."""

from __future__ import annotations

import pytest

from promptlab_providers.base.capabilities import (
    get_file_upload_capabilities,
    get_model_capabilities,
    infer_function_calling_support,
    infer_pdf_support,
    infer_reasoning_support,
    infer_vision_support,
    is_file_type_allowed,
)
from promptlab_providers.base.models import ProviderKind


@pytest.mark.parametrize(
    ("model", "expected"),
    [
        ("gpt-4o", True),
        ("claude-sonnet-4-20250514", True),
        ("gemini-2.5-flash", True),
        ("meta-llama/llama-3.1-70b", True),
        ("text-embedding-3-small", False),
        ("whisper-1", False),
        ("gpt-3.5-turbo", False),
        ("davinci-002", False),
    ],
)
def test_vision_defaults_to_true_unless_marked(model: str, expected: bool) -> None:
    assert infer_vision_support(model) is expected  # nosec B101


@pytest.mark.parametrize(
    ("model", "expected"),
    [
        ("o3-mini", True),
        ("gpt-5", True),
        ("claude-opus-4", True),
        ("gemini-2.5-pro", True),
        ("qwen3-32b", True),
        ("deepseek-r1", True),
        ("gpt-4o", False),
        ("claude-3-5-sonnet", False),
    ],
)
def test_reasoning_inference(model: str, expected: bool) -> None:
    assert infer_reasoning_support(model) is expected  # nosec B101


def test_function_calling_inference() -> None:
    assert infer_function_calling_support("gpt-4o") is True  # nosec B101
    assert infer_function_calling_support("mistral-large") is True  # nosec B101
    assert infer_function_calling_support("text-embedding-3-large") is False  # nosec B101
    assert infer_function_calling_support("phi-3") is False  # nosec B101


@pytest.mark.parametrize(
    ("kind", "model", "expected"),
    [
        (ProviderKind.ANTHROPIC, "claude-3-5-haiku", True),
        (ProviderKind.GEMINI, "gemini-1.5-flash", True),
        (ProviderKind.OPENAI_COMPATIBLE, "gpt-4o-mini", True),
        (ProviderKind.OPENAI_COMPATIBLE, "gpt-4.1", False),
        (ProviderKind.OPENROUTER, "anthropic/claude-sonnet-4", True),
        (ProviderKind.CUSTOM_GATEWAY, "llama-3.1-8b", False),
        ("openai", "o1", True),
    ],
)
def test_pdf_support_by_provider(kind, model: str, expected: bool) -> None:
    assert infer_pdf_support(kind, model) is expected  # nosec B101


def test_user_overrides_win() -> None:
    caps = get_model_capabilities(ProviderKind.GEMINI, "gemini-2.5-pro", vision=False, reasoning=False)
    assert caps.supports_vision is False  # nosec B101
    assert caps.supports_pdf is False  # nosec B101
    assert caps.supports_reasoning is False  # nosec B101

    forced = get_model_capabilities(ProviderKind.OPENAI_COMPATIBLE, "whisper-1", vision=True, function_calling=True)
    assert forced.supports_vision is True  # nosec B101
    assert forced.supports_function_calling is True  # nosec B101


def test_upload_capabilities_accept_string() -> None:
    caps = get_file_upload_capabilities(ProviderKind.ANTHROPIC, "claude-sonnet-4", supports_vision=True)
    assert caps.accept.endswith("image/*,application/pdf")  # nosec B101
    assert caps.can_upload_image and caps.can_upload_pdf and caps.can_upload_text  # nosec B101

    text_only = get_file_upload_capabilities(ProviderKind.OPENAI_COMPATIBLE, "gpt-4o", supports_vision=False)
    assert text_only.accept == ".txt,.md,.json,.csv,.xml,.yaml,.yml"  # nosec B101
    assert not text_only.can_upload_image  # nosec B101


@pytest.mark.parametrize(
    ("name", "mime", "vision", "expected"),
    [
        ("notes.md", "application/octet-stream", False, True),
        ("data.csv", "text/csv", False, True),
        ("cat.png", "image/png", True, True),
        ("cat.png", "image/png", False, False),
        ("paper.pdf", "application/pdf", True, True),
        ("paper.pdf", "", False, False),
        ("archive.zip", "application/zip", True, False),
    ],
)
def test_is_file_type_allowed(name: str, mime: str, vision: bool, expected: bool) -> None:
    allowed = is_file_type_allowed(name, mime, ProviderKind.ANTHROPIC, "claude-sonnet-4", vision)
    assert allowed is expected  # nosec B101
