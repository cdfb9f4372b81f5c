"""Anthropic Messages API request helpers.

Pure body construction:

* All system messages are joined (newline-separated) into the top-level
  ``system`` field; the Messages API has no system role.
* Image and PDF attachments become ``image`` / ``document`` blocks placed
  before the text block of the last user message.
* ``max_tokens`` is mandatory. With extended thinking requested, the API
  requires ``temperature == 1`` and no ``top_p``, and ``max_tokens`` must
  exceed the thinking budget, so the body is adjusted accordingly.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from ..base.models import ChatRequest, FileReference
from ..base.utils.files import effective_mime_type, file_kind
from ..base.utils.messages import deep_merge, prepare_messages
from ..config.defaults import (
    ANTHROPIC_THINKING_OUTPUT_HEADROOM,
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
)


def file_block(ref: FileReference) -> Dict[str, Any]:
    """Return the base64 ``image`` or ``document`` block for an attachment."""
    source = {
        "type": "base64",
        "media_type": effective_mime_type(ref.name, ref.mime_type),
        "data": ref.data,
    }
    block_type = "image" if file_kind(ref) == "image" else "document"
    return {"type": block_type, "source": source}


def build_body(request: ChatRequest, fragment: Mapping[str, Any]) -> Dict[str, Any]:
    """Return the streaming Messages API body with ``fragment`` merged in."""
    prepared = prepare_messages(request.messages, request.files, system_separator="\n")
    messages: List[Dict[str, Any]] = []
    for idx, turn in enumerate(prepared.turns):
        if idx == prepared.attach_index and prepared.binary_files:
            blocks: List[Dict[str, Any]] = [file_block(ref) for ref in prepared.binary_files]
            blocks.append({"type": "text", "text": turn.content})
            messages.append({"role": turn.role, "content": blocks})
        else:
            messages.append({"role": turn.role, "content": turn.content})

    params = request.parameters
    body: Dict[str, Any] = {
        "model": request.model,
        "messages": messages,
        "max_tokens": params.max_tokens or DEFAULT_MAX_TOKENS,
        "temperature": DEFAULT_TEMPERATURE if params.temperature is None else params.temperature,
        "stream": True,
    }
    if prepared.system:
        body["system"] = prepared.system
    if params.top_p is not None:
        body["top_p"] = params.top_p
    body = deep_merge(body, fragment)

    thinking = body.get("thinking")
    if isinstance(thinking, dict) and thinking.get("type") == "enabled":
        body["temperature"] = 1
        body.pop("top_p", None)
        budget = int(thinking.get("budget_tokens") or 0)
        if body["max_tokens"] <= budget:
            body["max_tokens"] = budget + ANTHROPIC_THINKING_OUTPUT_HEADROOM
    return body


__all__ = ["file_block", "build_body"]
