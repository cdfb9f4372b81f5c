"""
Chat message value type.

Messages are immutable once built; request builders derive vendor shapes from
them without mutating the caller's list.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    """A single turn of a conversation.

    Attributes:
        role: ``"system"``, ``"user"`` or ``"assistant"``.
        content: Plain text of the turn.
    """

    role: Role
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


__all__ = ["ChatMessage", "Role"]
