"""Request body helpers for the chat-completions wire format.

Pure functions: they build plain dicts from provider-agnostic models and never
perform I/O.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from ..base.models import ChatMessage, ChatRequest, FileReference
from ..base.utils.files import effective_mime_type, file_kind
from ..base.utils.messages import fold_text_files, last_user_index
from ..config.defaults import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE


def file_part(ref: FileReference) -> Dict[str, Any]:
    """Return the ``image_url`` or ``file`` content part for an attachment."""
    mime = effective_mime_type(ref.name, ref.mime_type)
    data_url = f"data:{mime};base64,{ref.data}"
    if file_kind(ref) == "image":
        return {"type": "image_url", "image_url": {"url": data_url}}
    return {"type": "file", "file": {"filename": ref.name, "file_data": data_url}}


def build_messages(messages: Sequence[ChatMessage], files: Sequence[FileReference]) -> List[Dict[str, Any]]:
    """Translate messages to chat-completions dicts.

    Text attachments are folded into the last user message. With image/PDF
    attachments, that message's content becomes a parts list: the text part
    first, then one part per attachment.
    """
    folded, binary = fold_text_files(messages, files)
    out: List[Dict[str, Any]] = [m.to_dict() for m in folded]
    idx = last_user_index(folded)
    if binary and idx is not None:
        parts: List[Dict[str, Any]] = [{"type": "text", "text": folded[idx].content}]
        parts.extend(file_part(ref) for ref in binary)
        out[idx] = {"role": "user", "content": parts}
    return out


def build_body(request: ChatRequest) -> Dict[str, Any]:
    """Return the streaming chat-completions body (without reasoning fragment)."""
    params = request.parameters
    body: Dict[str, Any] = {
        "model": request.model,
        "messages": build_messages(request.messages, request.files),
        "temperature": DEFAULT_TEMPERATURE if params.temperature is None else params.temperature,
        "max_tokens": params.max_tokens or DEFAULT_MAX_TOKENS,
        "stream": True,
        "stream_options": {"include_usage": True},
    }
    for name in ("top_p", "frequency_penalty", "presence_penalty"):
        value = getattr(params, name)
        if value is not None:
            body[name] = value
    if request.response_format:
        body["response_format"] = request.response_format
    return body


__all__ = ["file_part", "build_messages", "build_body"]
