"""Unified timeout configuration for stream sessions.

All network timeouts used by the adapters come from ``get_timeout_config()``;
no module hard-codes its own values.

Environment overrides (all optional, positive floats):
    PT_TIMEOUT_START_SECONDS   connect + wait for response headers
    PT_TIMEOUT_STREAM_SECONDS  idle gap allowed between two network reads
    PT_TIMEOUT_HTTP_SECONDS    write / pool acquisition

The parsed configuration is cached per process and refreshed when the
environment values change, which lets tests adjust it with ``monkeypatch``.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        start_timeout_seconds: Time allowed to connect and receive the
            response status of a streaming request.
        stream_timeout_seconds: Idle timeout while waiting for the next chunk.
        http_timeout_seconds: Timeout for request upload and pool acquisition.
    """

    start_timeout_seconds: float = 30.0
    stream_timeout_seconds: float = 60.0
    http_timeout_seconds: float = 30.0

    def to_httpx(self) -> httpx.Timeout:
        """Express this configuration as an ``httpx.Timeout``."""
        return httpx.Timeout(
            connect=self.start_timeout_seconds,
            read=self.stream_timeout_seconds,
            write=self.http_timeout_seconds,
            pool=self.http_timeout_seconds,
        )


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None
_ENV_NAMES = ("PT_TIMEOUT_START_SECONDS", "PT_TIMEOUT_STREAM_SECONDS", "PT_TIMEOUT_HTTP_SECONDS")


def _parse_env_float(name: str, default: float) -> float:
    """Read ``name`` as a positive float, returning ``default`` otherwise."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached ``TimeoutConfig``."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(name, "") for name in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        start_timeout_seconds=_parse_env_float("PT_TIMEOUT_START_SECONDS", 30.0),
        stream_timeout_seconds=_parse_env_float("PT_TIMEOUT_STREAM_SECONDS", 60.0),
        http_timeout_seconds=_parse_env_float("PT_TIMEOUT_HTTP_SECONDS", 30.0),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
