"""
ChatRequest: the caller's normalized request for one completion.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from .chat_message import ChatMessage
from .file_reference import FileReference
from .model_parameters import ModelParameters
from .reasoning_config import ReasoningConfig


@dataclass(frozen=True)
class ChatRequest:
    """Normalized chat request handed to a stream session.

    Attributes:
        model: Target model identifier as the vendor expects it.
        messages: Ordered conversation turns.
        files: Attachments for the last user message.
        parameters: Sampling controls.
        reasoning: Reasoning effort request.
        response_format: OpenAI-style ``response_format`` object for structured
            output (``{"type": "json_schema", "json_schema": {...}}``).
    """

    model: str
    messages: Tuple[ChatMessage, ...]
    files: Tuple[FileReference, ...] = ()
    parameters: ModelParameters = field(default_factory=ModelParameters)
    reasoning: ReasoningConfig = field(default_factory=ReasoningConfig)
    response_format: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "messages", tuple(self.messages))
        object.__setattr__(self, "files", tuple(self.files))

    def with_files(self, files: List[FileReference]) -> "ChatRequest":
        """Return a copy with ``files`` replaced (used after resolution)."""
        return replace(self, files=tuple(files))


__all__ = ["ChatRequest"]
