"""Tests for promptlab_providers.base.dto.

Covers happy paths and key edge cases for message/file validation, parameter
bounds and the conversion into the frozen ``ChatRequest``.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from promptlab_providers.base.dto import ChatRequestDTO, FileDTO, MessageDTO
from promptlab_providers.base.models import ChatMessage, ChatRequest, ReasoningConfig


def _messages():
    return [
        MessageDTO(role="system", content="You are helpful."),
        MessageDTO(role="user", content="Hello"),
    ]


def test_chat_request_happy_path():
    req = ChatRequestDTO(model="gpt-4o-mini", messages=_messages(), max_tokens=128, temperature=0.7)
    assert req.model == "gpt-4o-mini"
    assert len(req.messages) == 2


def test_plain_dict_payload_is_accepted():
    req = ChatRequestDTO.model_validate(
        {
            "model": "claude-sonnet-4",
            "messages": [{"role": "user", "content": "hi"}],
            "files": [{"name": "a.png", "mime_type": "image/png", "data": "AAAA"}],
            "reasoning": {"enabled": True, "effort": "medium"},
        }
    )
    assert req.files[0].name == "a.png"
    assert req.reasoning.effort == "medium"


def test_user_and_system_content_must_be_non_empty():
    with pytest.raises(ValidationError):
        MessageDTO(role="user", content="   ")
    with pytest.raises(ValidationError):
        MessageDTO(role="system", content="")


def test_assistant_may_be_empty():
    assert MessageDTO(role="assistant", content="").content == ""


def test_unknown_role_rejected():
    with pytest.raises(ValidationError):
        MessageDTO(role="tool", content="x")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_tokens": 0},
        {"temperature": 2.5},
        {"temperature": -0.1},
        {"top_p": 1.5},
        {"frequency_penalty": -3},
        {"presence_penalty": 2.1},
    ],
)
def test_bounds_validation(kwargs):
    with pytest.raises(ValidationError):
        ChatRequestDTO(model="x", messages=_messages(), **kwargs)


def test_model_and_messages_required_non_empty():
    with pytest.raises(ValidationError):
        ChatRequestDTO(model="", messages=_messages())
    with pytest.raises(ValidationError):
        ChatRequestDTO(model="x", messages=[])


def test_file_needs_exactly_one_source():
    with pytest.raises(ValidationError):
        FileDTO(name="a.txt")
    with pytest.raises(ValidationError):
        FileDTO(name="a.txt", data="eA==", file_id="f1")
    assert FileDTO(name="a.txt", file_id="f1").data is None


def test_files_require_a_user_message():
    with pytest.raises(ValidationError):
        ChatRequestDTO(
            model="x",
            messages=[MessageDTO(role="system", content="only system")],
            files=[FileDTO(name="a.txt", data="eA==")],
        )


def test_effort_must_be_known():
    with pytest.raises(ValidationError):
        ChatRequestDTO.model_validate(
            {"model": "x", "messages": [{"role": "user", "content": "hi"}], "reasoning": {"effort": "max"}}
        )


def test_to_request_builds_frozen_request():
    dto = ChatRequestDTO(
        model="gpt-4o",
        messages=_messages(),
        files=[FileDTO(name="doc.pdf", mime_type="application/pdf", file_id="f1")],
        temperature=0.2,
        top_p=0.9,
        reasoning={"enabled": True, "effort": "high"},
        response_format={"type": "json_object"},
    )
    req = dto.to_request()
    assert isinstance(req, ChatRequest)
    assert req.messages == (
        ChatMessage("system", "You are helpful."),
        ChatMessage("user", "Hello"),
    )
    assert req.files[0].file_id == "f1"
    assert req.files[0].is_resolved is False
    assert req.parameters.temperature == 0.2
    assert req.parameters.top_p == 0.9
    assert req.parameters.max_tokens is None
    assert req.reasoning == ReasoningConfig(enabled=True, effort="high")
    assert req.reasoning.active_effort == "high"
    assert req.response_format == {"type": "json_object"}
