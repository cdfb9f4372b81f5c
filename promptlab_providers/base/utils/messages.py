"""Message preparation helpers shared across request builders.

Helpers here operate on provider-agnostic models only and never mutate their
inputs.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ..models import ChatMessage, FileReference
from .files import file_kind, render_text_file, render_unsupported_file


@dataclass(frozen=True)
class PreparedMessages:
    """Conversation split the way vendor builders consume it.

    Attributes:
        system: Joined system text (``None`` when the conversation has none).
        turns: Non-system messages in order; text attachments already folded
            into the last user turn.
        attach_index: Index into ``turns`` of the message that receives binary
            parts, or ``None`` when there is no user turn.
        binary_files: Image and PDF attachments, in caller order.
    """

    system: Optional[str]
    turns: Tuple[ChatMessage, ...]
    attach_index: Optional[int]
    binary_files: Tuple[FileReference, ...]


def last_user_index(messages: Sequence[ChatMessage]) -> Optional[int]:
    """Return the index of the last ``user`` message, or ``None``."""
    for idx in range(len(messages) - 1, -1, -1):
        if messages[idx].role == "user":
            return idx
    return None


def fold_text_files(messages: Sequence[ChatMessage], files: Sequence[FileReference]) -> Tuple[List[ChatMessage], List[FileReference]]:
    """Append text and unsupported attachments to the last user message.

    Returns the rewritten message list and the remaining binary (image/PDF)
    attachments. Without a user message, text attachments are dropped.
    """
    out = list(messages)
    binary: List[FileReference] = []
    blocks: List[str] = []
    for ref in files:
        kind = file_kind(ref)
        if kind in ("image", "pdf"):
            binary.append(ref)
        elif kind == "text":
            blocks.append(render_text_file(ref))
        else:
            blocks.append(render_unsupported_file(ref))
    idx = last_user_index(out)
    if blocks and idx is not None:
        target = out[idx]
        text = "\n\n".join([target.content, *blocks]) if target.content else "\n\n".join(blocks)
        out[idx] = ChatMessage(role="user", content=text)
    return out, binary


def prepare_messages(messages: Sequence[ChatMessage], files: Sequence[FileReference], *, system_separator: str = "\n") -> PreparedMessages:
    """Split ``messages`` into system text and turns for vendors without a system role.

    All system messages, wherever they appear, are joined with
    ``system_separator`` in order.
    """
    folded, binary = fold_text_files(messages, files)
    system_parts = [m.content for m in folded if m.role == "system"]
    turns = tuple(m for m in folded if m.role != "system")
    return PreparedMessages(
        system=system_separator.join(system_parts) if system_parts else None,
        turns=turns,
        attach_index=last_user_index(turns),
        binary_files=tuple(binary),
    )


def deep_merge(base: Dict[str, Any], fragment: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``fragment`` into a copy of ``base`` (fragment wins)."""
    out = dict(base)
    for key, value in fragment.items():
        current = out.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            out[key] = deep_merge(current, value)
        else:
            out[key] = value
    return out


__all__ = [
    "PreparedMessages",
    "last_user_index",
    "fold_text_files",
    "prepare_messages",
    "deep_merge",
]
