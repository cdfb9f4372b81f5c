"""Unit tests for the provider factory and the top-level driver helpers."""
from __future__ import annotations

import pytest

import promptlab_providers
from promptlab_providers import Completed, Token, open_session, stream_chat
from promptlab_providers.anthropic import AnthropicAdapter
from promptlab_providers.base.errors import ErrorCode, ProviderError
from promptlab_providers.base.factory import ProviderFactory, UnknownProviderError, create_adapter
from promptlab_providers.base.models import ChatMessage, ChatRequest, ProviderDescriptor, ProviderKind
from promptlab_providers.gemini import GeminiAdapter
from promptlab_providers.openai import OpenAICompatibleAdapter


@pytest.mark.parametrize(
    ("kind", "klass"),
    [
        (ProviderKind.OPENAI_COMPATIBLE, OpenAICompatibleAdapter),
        (ProviderKind.OPENROUTER, OpenAICompatibleAdapter),
        (ProviderKind.CUSTOM_GATEWAY, OpenAICompatibleAdapter),
        (ProviderKind.ANTHROPIC, AnthropicAdapter),
        (ProviderKind.GEMINI, GeminiAdapter),
        ("openai", OpenAICompatibleAdapter),
    ],
)
def test_create_adapter_by_kind(kind, klass) -> None:
    assert isinstance(create_adapter(kind), klass)  # nosec B101


def test_adapters_are_cached() -> None:
    assert ProviderFactory.create("anthropic") is ProviderFactory.create(ProviderKind.ANTHROPIC)  # nosec B101


def test_unknown_provider_raises() -> None:
    with pytest.raises(UnknownProviderError, match="mistral"):
        create_adapter("mistral")


def test_supported_kinds() -> None:
    assert set(ProviderFactory.supported()) == {k.value for k in ProviderKind}  # nosec B101


@pytest.mark.parametrize(
    ("kind", "label"),
    [
        (ProviderKind.OPENAI_COMPATIBLE, "OpenAI"),
        (ProviderKind.OPENROUTER, "OpenRouter"),
        (ProviderKind.CUSTOM_GATEWAY, "Custom gateway"),
        (ProviderKind.ANTHROPIC, "Anthropic"),
        (ProviderKind.GEMINI, "Gemini"),
    ],
)
def test_labels_follow_descriptor_kind(kind: ProviderKind, label: str) -> None:
    descriptor = ProviderDescriptor(kind=kind, api_key="k")
    assert create_adapter(kind).label_for(descriptor) == label  # nosec B101


def test_gateway_descriptor_check() -> None:
    adapter = create_adapter(ProviderKind.CUSTOM_GATEWAY)
    with pytest.raises(ProviderError) as info:
        adapter.check_descriptor(ProviderDescriptor(kind=ProviderKind.CUSTOM_GATEWAY, api_key="k", base_url="  "))
    assert info.value.code is ErrorCode.VALIDATION  # nosec B101
    adapter.check_descriptor(
        ProviderDescriptor(kind=ProviderKind.CUSTOM_GATEWAY, api_key="k", base_url="http://localhost:8080")
    )


def test_version_exported() -> None:
    assert promptlab_providers.__version__  # nosec B101
    assert "stream_chat" in promptlab_providers.__all__  # nosec B101


@pytest.mark.asyncio
async def test_stream_chat_yields_session_events(mock_server, sse) -> None:
    server = mock_server(sse({"choices": [{"delta": {"content": "ok"}}]}))
    descriptor = ProviderDescriptor(kind=ProviderKind.OPENAI_COMPATIBLE, api_key="sk-test")
    request = ChatRequest(model="gpt-4o", messages=(ChatMessage("user", "hi"),))
    async with server.client() as client:
        events = [e async for e in stream_chat(descriptor, request, client=client)]
        session = open_session(descriptor, request, client=client)

    assert events[0] == Token("ok")  # nosec B101
    assert isinstance(events[-1], Completed)  # nosec B101
    assert session.state.value == "idle"  # nosec B101


@pytest.mark.asyncio
async def test_stream_chat_closes_session_when_consumer_stops_early(monkeypatch: pytest.MonkeyPatch, mock_server, sse) -> None:
    server = mock_server(sse({"choices": [{"delta": {"content": "a"}}]}, {"choices": [{"delta": {"content": "b"}}]}))
    clients = []

    def _build(*args, **kwargs):
        client = server.client()
        clients.append(client)
        return client

    monkeypatch.setattr("promptlab_providers.base.streaming.stream_session.build_async_client", _build)
    descriptor = ProviderDescriptor(kind=ProviderKind.OPENAI_COMPATIBLE, api_key="sk-test")
    request = ChatRequest(model="gpt-4o", messages=(ChatMessage("user", "hi"),))
    stream = stream_chat(descriptor, request)
    first = await stream.__anext__()
    await stream.aclose()

    assert first == Token("a")  # nosec B101
    assert clients[0].is_closed  # nosec B101
