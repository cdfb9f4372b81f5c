"""Model capability inference from provider kind and model id.

Vendors do not expose a uniform capability listing, so the workbench infers
what a model can accept from substrings of its id. Every inference can be
overridden by an explicit user setting, which always wins.

Vision is assumed unless the id carries an explicit non-vision marker
(embeddings, audio, legacy completion models); users switch it off per model.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..models import ProviderKind
from ..utils.files import PDF_MIME_TYPE, TEXT_EXTENSIONS, TEXT_MIME_TYPES, file_extension

NON_VISION_MODEL_PATTERNS: Tuple[str, ...] = (
    "text-embedding",
    "embedding",
    "whisper",
    "tts",
    "dall-e",
    "gpt-3.5",
    "gpt-3",
    "babbage",
    "davinci",
    "curie",
    "ada",
)

REASONING_MODEL_PATTERNS: Tuple[str, ...] = (
    "o1",
    "o3",
    "o4",
    "gpt-5",
    "claude-3.7",
    "claude-sonnet-4",
    "claude-opus-4",
    "claude-4",
    "gemini-2",
    "gemini-3",
    "qwq",
    "qwen3",
    "deepseek-r",
    "deepseek-reasoner",
    "thinking",
)

FUNCTION_CALLING_MODEL_PATTERNS: Tuple[str, ...] = (
    "gpt-4",
    "gpt-3.5-turbo",
    "claude-3",
    "gemini",
    "qwen",
    "deepseek",
    "mistral",
    "command-r",
)

OPENAI_PDF_MODELS: Tuple[str, ...] = ("gpt-4o", "gpt-4-turbo", "o1", "o3", "chatgpt-4o")


@dataclass(frozen=True)
class ModelCapabilities:
    """Inferred (or user-configured) abilities of one model."""

    supports_vision: bool
    supports_pdf: bool
    supports_reasoning: bool
    supports_function_calling: bool


@dataclass(frozen=True)
class FileUploadCapabilities:
    """Which attachment kinds the UI should offer for a model."""

    accept: str
    can_upload_image: bool
    can_upload_pdf: bool
    can_upload_text: bool = True


def _contains_any(model_id: str, patterns: Tuple[str, ...]) -> bool:
    lower = (model_id or "").lower()
    return any(p in lower for p in patterns)


def infer_vision_support(model_id: str) -> bool:
    """Return whether ``model_id`` likely accepts image input (default True)."""
    if _contains_any(model_id, NON_VISION_MODEL_PATTERNS):
        return False
    return True


def infer_reasoning_support(model_id: str) -> bool:
    return _contains_any(model_id, REASONING_MODEL_PATTERNS)


def infer_function_calling_support(model_id: str) -> bool:
    if _contains_any(model_id, NON_VISION_MODEL_PATTERNS):
        return False
    return _contains_any(model_id, FUNCTION_CALLING_MODEL_PATTERNS)


def infer_pdf_support(kind: ProviderKind | str, model_id: str) -> bool:
    """Return whether the provider/model pair accepts PDF documents.

    Anthropic and Gemini accept PDFs natively. OpenAI accepts them only on the
    multimodal GPT-4o/GPT-4-turbo/o-series models. Gateways (custom and
    OpenRouter) are judged by the routed model's family.
    """
    resolved = ProviderKind.parse(kind)
    if resolved in (ProviderKind.ANTHROPIC, ProviderKind.GEMINI):
        return True
    if resolved is ProviderKind.OPENAI_COMPATIBLE:
        return _contains_any(model_id, OPENAI_PDF_MODELS)
    return _contains_any(model_id, ("gemini", "claude")) or _contains_any(model_id, OPENAI_PDF_MODELS)


def get_model_capabilities(
    kind: ProviderKind | str,
    model_id: str,
    *,
    vision: Optional[bool] = None,
    reasoning: Optional[bool] = None,
    function_calling: Optional[bool] = None,
) -> ModelCapabilities:
    """Combine inference with user overrides.

    PDF support additionally requires vision support: a model that cannot see
    images is never offered document uploads.
    """
    supports_vision = infer_vision_support(model_id) if vision is None else vision
    return ModelCapabilities(
        supports_vision=supports_vision,
        supports_pdf=supports_vision and infer_pdf_support(kind, model_id),
        supports_reasoning=infer_reasoning_support(model_id) if reasoning is None else reasoning,
        supports_function_calling=(
            infer_function_calling_support(model_id) if function_calling is None else function_calling
        ),
    )


def get_file_upload_capabilities(kind: ProviderKind | str, model_id: str, supports_vision: bool) -> FileUploadCapabilities:
    """Return the upload ``accept`` string and per-kind flags for a model."""
    caps = get_model_capabilities(kind, model_id, vision=supports_vision)
    accept = [".txt", ".md", ".json", ".csv", ".xml", ".yaml", ".yml"]
    if caps.supports_vision:
        accept.append("image/*")
    if caps.supports_pdf:
        accept.append(PDF_MIME_TYPE)
    return FileUploadCapabilities(
        accept=",".join(accept),
        can_upload_image=caps.supports_vision,
        can_upload_pdf=caps.supports_pdf,
    )


def is_file_type_allowed(name: str, mime_type: str, kind: ProviderKind | str, model_id: str, supports_vision: bool) -> bool:
    """Return whether an attachment may be sent to this provider/model."""
    mime = (mime_type or "").lower()
    ext = file_extension(name)
    if mime in TEXT_MIME_TYPES or ext in TEXT_EXTENSIONS:
        return True
    caps = get_file_upload_capabilities(kind, model_id, supports_vision)
    if mime.startswith("image/"):
        return caps.can_upload_image
    if mime == PDF_MIME_TYPE or ext == ".pdf":
        return caps.can_upload_pdf
    return False


__all__ = [
    "ModelCapabilities",
    "FileUploadCapabilities",
    "infer_vision_support",
    "infer_reasoning_support",
    "infer_function_calling_support",
    "infer_pdf_support",
    "get_model_capabilities",
    "get_file_upload_capabilities",
    "is_file_type_allowed",
]
