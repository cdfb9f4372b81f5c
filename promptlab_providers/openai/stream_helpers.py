"""Frame translation for the chat-completions streaming format.

Each ``data:`` frame is a ``chat.completion.chunk``::

    {"choices": [{"delta": {"content": "Hel"}}]}
    {"choices": [{"delta": {"reasoning_content": "..."}}]}
    {"choices": [], "usage": {"prompt_tokens": 5, "completion_tokens": 3}}

Reasoning arrives as ``delta.reasoning`` (OpenRouter) or
``delta.reasoning_content`` (DeepSeek-style gateways). Some routers also send
a closing ``message.reasoning_details`` array; it is kept on the frame state
and used only when no incremental reasoning arrived.
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..base.streaming.events import FrameEvent, ReasoningToken, Token
from ..base.streaming.frame_state import FrameState


def _first_choice(payload: Dict[str, Any]) -> Dict[str, Any]:
    choices = payload.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], dict):
        return choices[0]
    return {}


def collect_reasoning_details(message: Any, state: FrameState) -> None:
    """Store the ``reasoning.text`` entries of a closing message on ``state``.

    Each closing message carries the full list, so the latest one replaces
    whatever an earlier frame stored.
    """
    if not isinstance(message, dict):
        return
    details = message.get("reasoning_details")
    if not isinstance(details, list):
        return
    state.reasoning_details = [
        str(item["text"])
        for item in details
        if isinstance(item, dict) and item.get("type") == "reasoning.text" and item.get("text")
    ]


def translate_frame(payload: Dict[str, Any], state: FrameState) -> List[FrameEvent]:
    """Return the events carried by one chat-completions chunk.

    Order within a frame: content, reasoning, reasoning_content, usage.
    """
    events: List[FrameEvent] = []
    choice = _first_choice(payload)
    delta = choice.get("delta") if isinstance(choice.get("delta"), dict) else {}
    if content := delta.get("content"):
        events.append(Token(str(content)))
    for key in ("reasoning", "reasoning_content"):
        if text := delta.get(key):
            if isinstance(text, str):
                state.saw_reasoning = True
                events.append(ReasoningToken(text))
    collect_reasoning_details(choice.get("message"), state)
    usage = payload.get("usage")
    if isinstance(usage, dict):
        events.append(
            state.set_usage(
                tokens_input=usage.get("prompt_tokens") or 0,
                tokens_output=usage.get("completion_tokens") or 0,
            )
        )
    return events


__all__ = ["translate_frame", "collect_reasoning_details"]
