"""Gemini ``streamGenerateContent`` adapter.

The API key travels as the ``key`` query parameter; ``HttpRequestSpec``
masks it in ``redacted_url`` so logs never carry it.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping
from urllib.parse import quote

from ..base.interfaces import ProviderAdapter
from ..base.models import ChatRequest, HttpRequestSpec, ProviderDescriptor
from ..base.streaming.events import FrameEvent
from ..base.streaming.frame_state import FrameState
from ..base.utils.urls import join_endpoint
from ..config.defaults import GEMINI_DEFAULT_BASE_URL
from .helpers import build_body
from .stream_helpers import translate_frame


def stream_path(model: str) -> str:
    """Return the streaming path for ``model`` (``models/`` prefix tolerated)."""
    name = model[len("models/"):] if model.startswith("models/") else model
    return f"/v1beta/models/{quote(name, safe='.-_')}:streamGenerateContent"


class GeminiAdapter(ProviderAdapter):
    """Streams Gemini responses as server-sent events (``alt=sse``)."""

    vendor_label = "Gemini"

    def build_request(
        self,
        request: ChatRequest,
        descriptor: ProviderDescriptor,
        fragment: Mapping[str, Any],
    ) -> HttpRequestSpec:
        base_url = (descriptor.base_url or "").strip() or GEMINI_DEFAULT_BASE_URL
        return HttpRequestSpec(
            url=join_endpoint(base_url, stream_path(request.model)),
            headers={"Content-Type": "application/json", "Accept": "text/event-stream"},
            body=build_body(request, fragment),
            params={"alt": "sse", "key": descriptor.api_key},
        )

    def parse_frame(self, payload: Dict[str, Any], state: FrameState) -> List[FrameEvent]:
        return translate_frame(payload, state)


__all__ = ["GeminiAdapter", "stream_path"]
