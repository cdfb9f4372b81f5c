"""Map HTTP statuses and transport exceptions onto :class:`ErrorCode`."""
from __future__ import annotations

import asyncio
from typing import Dict

import httpx

from .error_code import ErrorCode
from .provider_error import ProviderError

STATUS_CODES: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    413: ErrorCode.VALIDATION,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
    # Anthropic "overloaded"
    529: ErrorCode.UNAVAILABLE,
}


def code_for_status(status: int) -> ErrorCode:
    """Code for a non-2xx vendor response; unlisted 5xx are ``SERVER_ERROR``."""
    code = STATUS_CODES.get(status)
    if code is not None:
        return code
    return ErrorCode.SERVER_ERROR if status >= 500 else ErrorCode.UNKNOWN


def is_retryable(code: ErrorCode) -> bool:
    return code.retryable


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify a failure raised while a request was being sent or streamed.

    ``ProviderError`` keeps its own code, timeouts of any flavor become
    ``TIMEOUT``, ``httpx.HTTPStatusError`` goes through the status map, and
    remaining httpx transport failures are ``TRANSIENT``.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, httpx.HTTPStatusError):
        return code_for_status(exc.response.status_code)
    if isinstance(exc, httpx.TransportError):
        return ErrorCode.TRANSIENT
    return ErrorCode.UNKNOWN


__all__ = ["STATUS_CODES", "classify_exception", "code_for_status", "is_retryable"]
