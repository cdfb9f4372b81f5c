"""Gemini streaming frame translation.

With ``alt=sse`` every ``data:`` frame is a ``GenerateContentResponse``::

    {"candidates": [{"content": {"parts": [{"text": "...", "thought": true}]}}],
     "usageMetadata": {"promptTokenCount": 7, "candidatesTokenCount": 12}}

Parts flagged ``thought`` are reasoning summaries. ``usageMetadata`` is a
running total, so each report replaces the previous one.
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..base.streaming.events import FrameEvent, ReasoningToken, Token
from ..base.streaming.frame_state import FrameState


def _parts(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return []
    content = (candidates[0] or {}).get("content") or {}
    parts = content.get("parts")
    return [p for p in parts if isinstance(p, dict)] if isinstance(parts, list) else []


def translate_frame(payload: Dict[str, Any], state: FrameState) -> List[FrameEvent]:
    """Return the events carried by one Gemini stream frame."""
    events: List[FrameEvent] = []
    for part in _parts(payload):
        text = part.get("text")
        if not text:
            continue
        if part.get("thought") is True:
            state.saw_reasoning = True
            events.append(ReasoningToken(str(text)))
        else:
            events.append(Token(str(text)))
    usage = payload.get("usageMetadata")
    if isinstance(usage, dict):
        events.append(
            state.set_usage(
                tokens_input=usage.get("promptTokenCount") or 0,
                tokens_output=usage.get("candidatesTokenCount") or 0,
            )
        )
    return events


__all__ = ["translate_frame"]
