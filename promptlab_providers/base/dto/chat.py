"""
Pydantic DTOs and validators for inbound chat requests.

Purpose
-------
Validate chat payloads at the edge (HTTP handler, CLI, job queue) before they
are turned into the frozen ``ChatRequest`` dataclass consumed by stream
sessions. Roles, content, file references and numeric parameter bounds are
checked here so adapters never see malformed input.

External dependencies: Pydantic v2 only. No I/O.

Failure modes: validation either succeeds or raises
``pydantic.ValidationError``; callers translate it into a 4xx response or a
CLI usage error.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from ..models import ChatMessage, ChatRequest, FileReference, ModelParameters, ReasoningConfig

Role = Literal["system", "user", "assistant"]
Effort = Literal["default", "none", "low", "medium", "high"]


class MessageDTO(BaseModel):
    """One conversation turn.

    ``content`` may be empty only for assistant turns (an assistant prefill
    placeholder); system and user turns must carry text.
    """

    role: Role
    content: str

    @model_validator(mode="after")
    def _validate_content(self) -> "MessageDTO":
        if self.role != "assistant" and not self.content.strip():
            raise ValueError(f"{self.role} message content must be non-empty")
        return self


class FileDTO(BaseModel):
    """Attachment reference: inline base64 ``data`` or a stored ``file_id``."""

    name: str = Field(..., min_length=1)
    mime_type: str = ""
    data: Optional[str] = None
    file_id: Optional[str] = None

    @model_validator(mode="after")
    def _exactly_one_source(self) -> "FileDTO":
        if (self.data is None) == (self.file_id is None):
            raise ValueError("file reference needs exactly one of data or file_id")
        return self


class ReasoningDTO(BaseModel):
    enabled: bool = False
    effort: Effort = "default"


class ChatRequestDTO(BaseModel):
    """Validated chat request.

    Parameters:
        model: Target model identifier (non-empty).
        messages: Ordered, non-empty list of turns.
        files: Attachments for the last user message.
        temperature: Within [0.0, 2.0] when given.
        top_p: Within [0.0, 1.0] when given.
        max_tokens: Positive when given.
        frequency_penalty / presence_penalty: Within [-2.0, 2.0] when given.
        reasoning: Reasoning toggle and effort.
        response_format: OpenAI-style structured output object.

    Raises:
        ValidationError: On invalid roles, empty content, missing user turn
        for attachments or out-of-range parameters.
    """

    model: str = Field(..., min_length=1)
    messages: List[MessageDTO] = Field(..., min_length=1)
    files: List[FileDTO] = Field(default_factory=list)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    frequency_penalty: Optional[float] = Field(default=None, ge=-2.0, le=2.0)
    presence_penalty: Optional[float] = Field(default=None, ge=-2.0, le=2.0)
    reasoning: ReasoningDTO = Field(default_factory=ReasoningDTO)
    response_format: Optional[Dict[str, Any]] = None

    @model_validator(mode="after")
    def _validate_sequence(self) -> "ChatRequestDTO":
        if self.files and not any(m.role == "user" for m in self.messages):
            raise ValueError("files require at least one user message")
        return self

    def to_request(self) -> ChatRequest:
        """Return the frozen ``ChatRequest`` equivalent of this payload."""
        return ChatRequest(
            model=self.model,
            messages=tuple(ChatMessage(role=m.role, content=m.content) for m in self.messages),
            files=tuple(
                FileReference(name=f.name, mime_type=f.mime_type, data=f.data, file_id=f.file_id)
                for f in self.files
            ),
            parameters=ModelParameters(
                temperature=self.temperature,
                top_p=self.top_p,
                max_tokens=self.max_tokens,
                frequency_penalty=self.frequency_penalty,
                presence_penalty=self.presence_penalty,
            ),
            reasoning=ReasoningConfig(enabled=self.reasoning.enabled, effort=self.reasoning.effort),
            response_format=self.response_format,
        )


__all__ = [
    "Role",
    "Effort",
    "MessageDTO",
    "FileDTO",
    "ReasoningDTO",
    "ChatRequestDTO",
]
