"""Inline thinking markup extraction.

Models without a structured reasoning channel often wrap their reasoning in
markup inside the answer text. ``extract_thinking`` splits such text into the
reasoning and the visible answer. Recognized dialects, applied in order:

* ``<thinking>…</thinking>``, ``<think>…</think>``, ``<thought>…</thought>``,
  ``<reasoning>…</reasoning>``
* ``[THINKING]…[/THINKING]``
* ``◁think▷…◁/think▷``
* ``<seed:think>…</seed:think>``
* a ``### Thinking`` heading running up to ``### Response`` or end of text

Matching is case-insensitive. Captured text is trimmed and joined with blank
lines; every matched span is removed from the content, and a leftover
``### Response`` heading is dropped. Passes repeat until the content stops
changing, so the result is a fixed point: extracting again from the returned
content yields no thinking and the same content.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Tuple

THINKING_PATTERNS: Tuple[re.Pattern, ...] = tuple(
    re.compile(p, re.IGNORECASE | re.DOTALL)
    for p in (
        r"<thinking>(.*?)</thinking>",
        r"<think>(.*?)</think>",
        r"<thought>(.*?)</thought>",
        r"<reasoning>(.*?)</reasoning>",
        r"\[THINKING\](.*?)\[/THINKING\]",
        r"◁think▷(.*?)◁/think▷",
        r"<seed:think>(.*?)</seed:think>",
        r"###\s*Thinking\s*\n(.*?)(?=###\s*Response|\Z)",
    )
)

RESPONSE_HEADING = re.compile(r"^###\s*Response\s*\n?", re.IGNORECASE | re.MULTILINE)


@dataclass(frozen=True)
class ThinkingContent:
    """Result of splitting text into reasoning and visible answer."""

    thinking: str
    content: str


def _extract_pass(text: str, thinking: List[str]) -> str:
    content = text
    for pattern in THINKING_PATTERNS:
        for match in pattern.finditer(content):
            captured = (match.group(1) or "").strip()
            if captured:
                thinking.append(captured)
        content = pattern.sub("", content)
    content = RESPONSE_HEADING.sub("", content)
    return content.strip()


def extract_thinking(text: str) -> ThinkingContent:
    """Separate inline thinking markup from ``text``.

    >>> extract_thinking("<think>abc</think>Result")
    ThinkingContent(thinking='abc', content='Result')
    """
    thinking: List[str] = []
    content = (text or "").strip()
    while True:
        updated = _extract_pass(content, thinking)
        if updated == content:
            break
        content = updated
    return ThinkingContent(thinking="\n\n".join(thinking).strip(), content=content)


def wrap_thinking(thinking: str, content: str) -> str:
    """Reattach structured ``thinking`` to ``content`` as a ``<think>`` prefix."""
    if not thinking:
        return content
    return f"<think>{thinking}</think>{content}"


__all__ = ["ThinkingContent", "THINKING_PATTERNS", "extract_thinking", "wrap_thinking"]
