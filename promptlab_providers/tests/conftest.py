"""Pytest configuration for the providers test suite.

Every test runs with provider credential variables cleared, the ``.env``
loader pointed at a missing file and the config cache reset, so a developer's
shell never leaks into assertions.

``mock_server`` builds an in-process SSE endpoint on ``httpx.MockTransport``:
the response body is served chunk by chunk through an async stream, which is
how a real streaming response reaches ``aiter_bytes``.
"""

from __future__ import annotations

import json
from typing import Any, AsyncIterator, Callable, Dict, Iterator, List, Optional, Sequence

import httpx
import pytest

from promptlab_providers.config import ENV_FIELD_MAP, reset_config_cache
from promptlab_providers.config.env import ENV_ALIASES, ENV_PREFIX


def sse_frames(*frames: Any) -> bytes:
    """Encode ``frames`` as ``data:`` lines; dicts are JSON-encoded."""
    out: List[str] = []
    for frame in frames:
        data = frame if isinstance(frame, str) else json.dumps(frame)
        out.append(f"data: {data}\n\n")
    return "".join(out).encode("utf-8")


async def _aiter(chunks: Sequence[bytes]) -> AsyncIterator[bytes]:
    for chunk in chunks:
        yield chunk


class MockServer:
    """Records requests and answers each with the configured stream."""

    def __init__(
        self,
        chunks: Sequence[bytes],
        *,
        status: int = 200,
        error: Optional[Exception] = None,
    ) -> None:
        self.chunks = list(chunks)
        self.status = status
        self.error = error
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.status >= 400:
            return httpx.Response(self.status, content=b"".join(self.chunks))
        return httpx.Response(
            self.status,
            headers={"content-type": "text/event-stream"},
            content=_aiter(self.chunks),
        )

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    @property
    def sent_json(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture(autouse=True)
def isolated_provider_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Clear provider variables and config caches for the duration of a test."""
    for prefix in ENV_PREFIX.values():
        for suffix in ENV_FIELD_MAP.values():
            monkeypatch.delenv(f"{prefix}_{suffix}", raising=False)
    for aliases in ENV_ALIASES.values():
        for name in aliases:
            monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("PROVIDERS_CONFIG_FILE", raising=False)
    monkeypatch.delenv("PROVIDERS_LOG_LEVEL", raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture()
def sse() -> Callable[..., bytes]:
    return sse_frames


@pytest.fixture()
def mock_server() -> Callable[..., MockServer]:
    """Return a factory: ``mock_server(chunk, ..., status=200, error=None)``."""

    def _make(*chunks: bytes, status: int = 200, error: Optional[Exception] = None) -> MockServer:
        return MockServer(chunks, status=status, error=error)

    return _make
