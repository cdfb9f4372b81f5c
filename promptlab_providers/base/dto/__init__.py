"""DTO validation package for inbound chat requests."""

from .chat import ChatRequestDTO, Effort, FileDTO, MessageDTO, ReasoningDTO, Role

__all__ = [
    "Role",
    "Effort",
    "MessageDTO",
    "FileDTO",
    "ReasoningDTO",
    "ChatRequestDTO",
]
