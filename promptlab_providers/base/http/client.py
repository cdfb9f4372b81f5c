"""HTTP client construction for stream sessions.

Sessions either borrow an ``httpx.AsyncClient`` supplied by the caller (and
never close it) or build a private one here. Timeouts derive exclusively from
:func:`get_timeout_config`.

Async clients are bound to the event loop that first uses them, so unlike a
thread pool of sync clients they are not cached process-wide; long-lived
callers should create one client per loop and pass it to every session.
"""

from __future__ import annotations

from typing import Optional

import httpx

from ..timeouts import get_timeout_config


def build_async_client(
    *,
    timeout: Optional[httpx.Timeout] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Return a new ``httpx.AsyncClient`` configured for streaming.

    Parameters:
        timeout: Explicit timeout; defaults to ``get_timeout_config().to_httpx()``.
        transport: Optional transport (``httpx.MockTransport`` in tests).

    Returns:
        An ``httpx.AsyncClient`` owned by the caller, who must ``aclose`` it.
    """
    kwargs = {"timeout": timeout or get_timeout_config().to_httpx()}
    if transport is not None:
        kwargs["transport"] = transport
    return httpx.AsyncClient(**kwargs)


__all__ = ["build_async_client"]
