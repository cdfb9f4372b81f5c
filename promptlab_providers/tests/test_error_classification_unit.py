from __future__ import annotations

import asyncio

import httpx
import pytest

from promptlab_providers.base.errors import (
    ErrorCode,
    ProviderError,
    classify_exception,
    code_for_status,
    is_retryable,
)
from promptlab_providers.base.utils.vendor_errors import (
    error_code_for_payload,
    extract_error_message,
    http_error_message,
    parse_error_body,
)


def test_classify_provider_error_passthrough():
    e = ProviderError(code=ErrorCode.AUTH, message="nope", provider="anthropic")
    assert classify_exception(e) is ErrorCode.AUTH  # nosec B101 - assert is appropriate in unit tests


def test_classify_http_status_error():
    request = httpx.Request("POST", "https://api.example.com/v1/chat/completions")
    for status, code in ((404, ErrorCode.NOT_FOUND), (503, ErrorCode.UNAVAILABLE)):
        response = httpx.Response(status, request=request)
        exc = httpx.HTTPStatusError("boom", request=request, response=response)
        assert classify_exception(exc) is code  # nosec B101


def test_classify_transport_and_timeouts():
    assert classify_exception(httpx.ConnectError("refused")) is ErrorCode.TRANSIENT  # nosec B101
    assert classify_exception(httpx.RemoteProtocolError("peer closed")) is ErrorCode.TRANSIENT  # nosec B101
    assert classify_exception(httpx.ReadTimeout("slow")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(asyncio.TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(ValueError("random")) is ErrorCode.UNKNOWN  # nosec B101


@pytest.mark.parametrize(
    ("status", "code"),
    [
        (400, ErrorCode.VALIDATION),
        (401, ErrorCode.AUTH),
        (403, ErrorCode.AUTH),
        (404, ErrorCode.NOT_FOUND),
        (429, ErrorCode.RATE_LIMIT),
        (500, ErrorCode.SERVER_ERROR),
        (502, ErrorCode.TRANSIENT),
        (503, ErrorCode.UNAVAILABLE),
        (529, ErrorCode.UNAVAILABLE),
        (599, ErrorCode.SERVER_ERROR),
        (418, ErrorCode.UNKNOWN),
    ],
)
def test_code_for_status(status: int, code: ErrorCode):
    assert code_for_status(status) is code  # nosec B101


def test_retryable_codes():
    retryable = {c for c in ErrorCode if is_retryable(c)}
    assert retryable == {  # nosec B101
        ErrorCode.RATE_LIMIT,
        ErrorCode.TIMEOUT,
        ErrorCode.TRANSIENT,
        ErrorCode.UNAVAILABLE,
    }


def test_provider_error_retryable_defaults_to_code():
    assert ProviderError(code=ErrorCode.TIMEOUT, message="slow", provider="gemini").retryable is True  # nosec B101
    assert ProviderError(code=ErrorCode.AUTH, message="no", provider="gemini").retryable is False  # nosec B101
    forced = ProviderError(code=ErrorCode.AUTH, message="no", provider="gemini", retryable=True)
    assert forced.retryable is True  # nosec B101


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ({"error": {"message": "bad key", "code": 401}}, "bad key"),
        ({"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}}, "Overloaded"),
        ({"error": {"code": 429, "message": "quota", "status": "RESOURCE_EXHAUSTED"}}, "quota"),
        ({"error": {"error": {"message": "nested"}}}, "nested"),
        ({"error": "plain string"}, "plain string"),
        ({"error": {"message": "   "}}, None),
        ({"error": None}, None),
        ({"choices": []}, None),
        (["error"], None),
    ],
)
def test_extract_error_message(payload, message):
    assert extract_error_message(payload) == message  # nosec B101


@pytest.mark.parametrize(
    ("payload", "code"),
    [
        ({"error": {"type": "overloaded_error", "message": "x"}}, ErrorCode.UNAVAILABLE),
        ({"error": {"type": "authentication_error", "message": "x"}}, ErrorCode.AUTH),
        ({"error": {"status": "RESOURCE_EXHAUSTED", "code": 429, "message": "x"}}, ErrorCode.RATE_LIMIT),
        ({"error": {"code": 404, "message": "x"}}, ErrorCode.NOT_FOUND),
        ({"error": {"code": "bad", "message": "x"}}, ErrorCode.SERVER_ERROR),
        ({"error": "x"}, ErrorCode.SERVER_ERROR),
    ],
)
def test_error_code_for_payload(payload, code):
    assert error_code_for_payload(payload) is code  # nosec B101


def test_parse_error_body_variants():
    assert parse_error_body(b'{"error": {"message": "nope"}}') == "nope"  # nosec B101
    assert parse_error_body("<html>Bad Gateway</html>") is None  # nosec B101
    assert parse_error_body(b'{"ok": true}') is None  # nosec B101


def test_http_error_message_formats():
    assert http_error_message("Gemini", 400, b'{"error": {"message": "bad model"}}') == (  # nosec B101
        "Gemini API error: 400 - bad model"
    )
    assert http_error_message("Custom gateway", 502, b"upstream") == "Custom gateway API error: HTTP 502"  # nosec B101
    rewritten = http_error_message("OpenRouter", 401, b'{"error": {"message": "No cookie auth credentials found"}}')
    assert rewritten.startswith("OpenRouter authentication failed: API key is missing or invalid")  # nosec B101
    # The rewrite applies only to 401 responses.
    assert http_error_message("OpenRouter", 403, b'{"error": {"message": "No cookie auth credentials found"}}') == (  # nosec B101
        "OpenRouter API error: 403 - No cookie auth credentials found"
    )
