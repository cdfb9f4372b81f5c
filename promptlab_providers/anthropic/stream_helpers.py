"""Anthropic streaming frame translation.

Frames carry a ``type`` discriminator::

    message_start        message.usage.input_tokens   → input usage
    content_block_start  content_block.type           → "text" | "thinking"
    content_block_delta  delta.type == "text_delta"     → Token(delta.text)
                         delta.type == "thinking_delta" → ReasoningToken(delta.thinking)
    content_block_stop                                → block closed
    message_delta        usage.output_tokens          → output usage

``ping`` and ``message_stop`` carry nothing of interest. Error frames are
handled generically by the decoder before reaching this module.
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..base.streaming.events import FrameEvent, ReasoningToken, Token
from ..base.streaming.frame_state import FrameState


def _delta_events(delta: Dict[str, Any], state: FrameState) -> List[FrameEvent]:
    delta_type = delta.get("type")
    if delta_type == "thinking_delta":
        text = delta.get("thinking")
        if text:
            state.saw_reasoning = True
            return [ReasoningToken(str(text))]
        return []
    if delta_type == "text_delta":
        text = delta.get("text")
        if not text:
            return []
        # Text inside a thinking block is still reasoning.
        if state.block_type == "thinking":
            state.saw_reasoning = True
            return [ReasoningToken(str(text))]
        return [Token(str(text))]
    return []


def translate_frame(payload: Dict[str, Any], state: FrameState) -> List[FrameEvent]:
    """Return the events carried by one Anthropic stream frame."""
    frame_type = payload.get("type")
    if frame_type == "message_start":
        usage = (payload.get("message") or {}).get("usage") or {}
        if "input_tokens" in usage:
            return [state.set_usage(tokens_input=usage.get("input_tokens") or 0)]
        return []
    if frame_type == "content_block_start":
        block = payload.get("content_block") or {}
        state.block_type = block.get("type")
        return []
    if frame_type == "content_block_delta":
        delta = payload.get("delta")
        return _delta_events(delta, state) if isinstance(delta, dict) else []
    if frame_type == "content_block_stop":
        state.block_type = None
        return []
    if frame_type == "message_delta":
        usage = payload.get("usage") or {}
        if "output_tokens" in usage:
            return [state.set_usage(tokens_output=usage.get("output_tokens") or 0)]
        return []
    return []


__all__ = ["translate_frame"]
