"""SSE frame decoding: buffering, UTF-8 boundaries, malformed and error frames."""
from __future__ import annotations

import json
import logging

import pytest

from promptlab_providers.base.errors import ErrorCode, ProviderError
from promptlab_providers.base.log_support import LogContext
from promptlab_providers.base.streaming import LineBuffer, ReasoningToken, StreamFrameDecoder, Token, UsageUpdate
from promptlab_providers.openai.client import OpenAICompatibleAdapter


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


def _decoder(**kwargs) -> StreamFrameDecoder:
    return StreamFrameDecoder(OpenAICompatibleAdapter(), provider="openai-compatible", model="gpt-4o", **kwargs)


def _chunk(text: str) -> bytes:
    return json.dumps({"choices": [{"delta": {"content": text}}]}, ensure_ascii=False).encode("utf-8")


def test_frame_split_across_chunks_is_reassembled() -> None:
    decoder = _decoder()
    frame = b"data: " + _chunk("Hello") + b"\n\n"
    cut = len(frame) // 2
    assert decoder.feed(frame[:cut]) == []  # nosec B101
    assert decoder.feed(frame[cut:]) == [Token("Hello")]  # nosec B101


def test_multibyte_character_split_across_chunks() -> None:
    decoder = _decoder()
    frame = b"data: " + _chunk("héllo wörld") + b"\n"
    cut = frame.index("é".encode("utf-8")) + 1
    events = decoder.feed(frame[:cut]) + decoder.feed(frame[cut:])
    assert events == [Token("héllo wörld")]  # nosec B101


def test_many_frames_in_one_chunk_keep_order() -> None:
    decoder = _decoder()
    body = b"".join(b"data: " + _chunk(t) + b"\n\n" for t in ("Hel", "lo", "!"))
    assert decoder.feed(body) == [Token("Hel"), Token("lo"), Token("!")]  # nosec B101
    assert decoder.state.frames == 3  # nosec B101


def test_unterminated_last_line_is_flushed_on_close() -> None:
    decoder = _decoder()
    assert decoder.feed(b"data: " + _chunk("tail")) == []  # nosec B101
    assert decoder.close() == [Token("tail")]  # nosec B101
    assert decoder.close() == []  # nosec B101


def test_crlf_line_endings() -> None:
    decoder = _decoder()
    assert decoder.feed(b"data: " + _chunk("x") + b"\r\n\r\n") == [Token("x")]  # nosec B101


def test_non_data_lines_and_done_sentinel_are_ignored() -> None:
    decoder = _decoder()
    body = (
        b": keep-alive\n"
        b"event: message\n"
        b"id: 7\n"
        b"retry: 1000\n"
        b"data: [DONE]\n"
        b"data:\n"
        b"data: [1, 2]\n"
        b"\n"
    )
    assert decoder.feed(body) == []  # nosec B101
    assert decoder.state.frames == 0  # nosec B101


def test_malformed_json_is_skipped_and_logged() -> None:
    logger = logging.getLogger("providers.test.decoder")
    handler = _ListHandler()
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    decoder = _decoder(logger=logger, ctx=LogContext(provider="openai-compatible", model="gpt-4o"))

    events = decoder.feed(b"data: {not json\n\ndata: " + _chunk("ok") + b"\n\n")

    assert events == [Token("ok")]  # nosec B101
    assert decoder.malformed == 1  # nosec B101
    payload = json.loads(handler.messages[-1])
    assert payload["event"] == "stream.decode_error"  # nosec B101
    assert payload["provider"] == "openai-compatible"  # nosec B101


def test_error_frame_raises_provider_error() -> None:
    decoder = _decoder()
    frame = {"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}}
    with pytest.raises(ProviderError) as info:
        decoder.feed(b"data: " + json.dumps(frame).encode() + b"\n\n")
    assert info.value.code is ErrorCode.UNAVAILABLE  # nosec B101
    assert info.value.message == "Overloaded"  # nosec B101
    assert info.value.model == "gpt-4o"  # nosec B101


def test_reasoning_and_usage_frames() -> None:
    decoder = _decoder()
    body = (
        b'data: {"choices":[{"delta":{"reasoning":"think"}}]}\n\n'
        b'data: {"choices":[{"delta":{"reasoning_content":"more"}}]}\n\n'
        b'data: {"choices":[],"usage":{"prompt_tokens":5,"completion_tokens":3}}\n\n'
    )
    assert decoder.feed(body) == [  # nosec B101
        ReasoningToken("think"),
        ReasoningToken("more"),
        UsageUpdate(tokens_input=5, tokens_output=3),
    ]
    assert decoder.state.saw_reasoning is True  # nosec B101


def test_line_buffer_keeps_pending_text() -> None:
    buf = LineBuffer()
    assert buf.feed(b"one\ntw") == ["one"]  # nosec B101
    assert buf.pending == "tw"  # nosec B101
    assert buf.feed(b"o\n") == ["two"]  # nosec B101
    assert buf.close() == []  # nosec B101
