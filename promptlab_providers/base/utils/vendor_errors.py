"""Vendor error payload helpers.

All three wire formats report failures as a JSON object with an ``error``
member, either in a non-2xx response body or as an in-stream frame:

* OpenAI / OpenRouter: ``{"error": {"message": "...", "code": 429}}``
* Anthropic: ``{"type": "error", "error": {"type": "overloaded_error", "message": "..."}}``
* Gemini: ``{"error": {"code": 429, "message": "...", "status": "RESOURCE_EXHAUSTED"}}``

Some gateways nest one level further (``{"error": {"error": {...}}}``) or
send a bare string.
"""
from __future__ import annotations

import json
import re
from typing import Any, Optional

from ..errors import ErrorCode, code_for_status

_COOKIE_AUTH = re.compile(r"cookie auth credentials", re.IGNORECASE)

_ERROR_TYPE_CODES = {
    "authentication_error": ErrorCode.AUTH,
    "permission_error": ErrorCode.AUTH,
    "invalid_request_error": ErrorCode.VALIDATION,
    "not_found_error": ErrorCode.NOT_FOUND,
    "rate_limit_error": ErrorCode.RATE_LIMIT,
    "overloaded_error": ErrorCode.UNAVAILABLE,
    "api_error": ErrorCode.SERVER_ERROR,
    "RESOURCE_EXHAUSTED": ErrorCode.RATE_LIMIT,
    "UNAUTHENTICATED": ErrorCode.AUTH,
    "PERMISSION_DENIED": ErrorCode.AUTH,
    "INVALID_ARGUMENT": ErrorCode.VALIDATION,
    "UNAVAILABLE": ErrorCode.UNAVAILABLE,
    "DEADLINE_EXCEEDED": ErrorCode.TIMEOUT,
}


def _unwrap(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if not isinstance(value, dict):
        return None
    if isinstance(value.get("message"), str):
        return value["message"]
    if "error" in value:
        return _unwrap(value["error"])
    return None


def extract_error_message(payload: Any) -> Optional[str]:
    """Return the vendor error message of ``payload``, or ``None`` when it is not an error."""
    if not isinstance(payload, dict) or "error" not in payload:
        return None
    message = _unwrap(payload["error"])
    if message is None:
        return None
    return message.strip() or None


def error_code_for_payload(payload: Any, default: ErrorCode = ErrorCode.SERVER_ERROR) -> ErrorCode:
    """Classify an error payload by its numeric code or vendor error type."""
    error = payload.get("error") if isinstance(payload, dict) else None
    if not isinstance(error, dict):
        return default
    for key in ("type", "status"):
        if (code := _ERROR_TYPE_CODES.get(str(error.get(key)))) is not None:
            return code
    numeric = error.get("code")
    if isinstance(numeric, int) and 400 <= numeric < 600:
        return code_for_status(numeric)
    return default


def parse_error_body(body: bytes | str) -> Optional[str]:
    """Extract the vendor message from a raw error response body."""
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    try:
        payload = json.loads(text)
    except ValueError:
        return None
    return extract_error_message(payload)


def http_error_message(vendor_label: str, status: int, body: bytes | str) -> str:
    """Build the user-facing message for a non-2xx vendor response.

    Uses the parsed vendor message when available, ``HTTP <status>``
    otherwise. OpenRouter answers a missing key with a message about cookie
    auth, which is rewritten into an actionable hint.
    """
    message = parse_error_body(body)
    if message and status == 401 and _COOKIE_AUTH.search(message):
        return (
            f"{vendor_label} authentication failed: API key is missing or invalid "
            "(cookie auth is not supported). Please configure the provider API key."
        )
    if message:
        return f"{vendor_label} API error: {status} - {message}"
    return f"{vendor_label} API error: HTTP {status}"


__all__ = [
    "extract_error_message",
    "error_code_for_payload",
    "parse_error_body",
    "http_error_message",
]
