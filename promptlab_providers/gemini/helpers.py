"""Gemini ``generateContent`` request helpers.

* Turns become ``contents`` entries with ``assistant`` renamed to ``model``.
* System messages are joined into ``systemInstruction``.
* Image and PDF attachments become ``inline_data`` parts ahead of the text of
  the last user turn.
* Sampling parameters live in ``generationConfig``; structured output sets
  ``responseMimeType`` and, when a JSON schema is given, ``responseSchema``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..base.models import ChatRequest, FileReference
from ..base.utils.files import effective_mime_type
from ..base.utils.messages import deep_merge, prepare_messages
from ..config.defaults import DEFAULT_TEMPERATURE, GEMINI_DEFAULT_MAX_OUTPUT_TOKENS

_ROLE_MAP = {"user": "user", "assistant": "model"}


def inline_part(ref: FileReference) -> Dict[str, Any]:
    return {"inline_data": {"mime_type": effective_mime_type(ref.name, ref.mime_type), "data": ref.data}}


def build_generation_config(request: ChatRequest) -> Dict[str, Any]:
    params = request.parameters
    config: Dict[str, Any] = {
        "temperature": DEFAULT_TEMPERATURE if params.temperature is None else params.temperature,
        "maxOutputTokens": params.max_tokens or GEMINI_DEFAULT_MAX_OUTPUT_TOKENS,
    }
    optional = (
        ("topP", params.top_p),
        ("frequencyPenalty", params.frequency_penalty),
        ("presencePenalty", params.presence_penalty),
    )
    for key, value in optional:
        if value is not None:
            config[key] = value
    schema = response_schema(request.response_format)
    if request.response_format and request.response_format.get("type") != "text":
        config["responseMimeType"] = "application/json"
        if schema is not None:
            config["responseSchema"] = schema
    return config


def response_schema(response_format: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    """Pull ``json_schema.schema`` out of an OpenAI-style ``response_format``."""
    if not response_format:
        return None
    json_schema = response_format.get("json_schema")
    if isinstance(json_schema, Mapping) and isinstance(json_schema.get("schema"), Mapping):
        return dict(json_schema["schema"])
    return None


def build_body(request: ChatRequest, fragment: Mapping[str, Any]) -> Dict[str, Any]:
    """Return the ``streamGenerateContent`` body with ``fragment`` merged in."""
    prepared = prepare_messages(request.messages, request.files, system_separator="\n")
    contents: List[Dict[str, Any]] = []
    for idx, turn in enumerate(prepared.turns):
        parts: List[Dict[str, Any]] = []
        if idx == prepared.attach_index:
            parts.extend(inline_part(ref) for ref in prepared.binary_files)
        parts.append({"text": turn.content})
        contents.append({"role": _ROLE_MAP[turn.role], "parts": parts})

    body: Dict[str, Any] = {
        "contents": contents,
        "generationConfig": build_generation_config(request),
    }
    if prepared.system:
        body["systemInstruction"] = {"parts": [{"text": prepared.system}]}
    return deep_merge(body, fragment)


__all__ = ["inline_part", "build_generation_config", "response_schema", "build_body"]
