"""Anthropic Messages API adapter."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from ..base.interfaces import ProviderAdapter
from ..base.models import ChatRequest, HttpRequestSpec, ProviderDescriptor
from ..base.streaming.events import FrameEvent
from ..base.streaming.frame_state import FrameState
from ..base.utils.urls import join_endpoint
from ..config.defaults import ANTHROPIC_BETA, ANTHROPIC_DEFAULT_BASE_URL, ANTHROPIC_VERSION
from .helpers import build_body
from .stream_helpers import translate_frame

MESSAGES_PATH = "/v1/messages"


class AnthropicAdapter(ProviderAdapter):
    """Streams ``/v1/messages`` with extended thinking and PDF support enabled."""

    vendor_label = "Anthropic"

    def build_request(
        self,
        request: ChatRequest,
        descriptor: ProviderDescriptor,
        fragment: Mapping[str, Any],
    ) -> HttpRequestSpec:
        base_url = (descriptor.base_url or "").strip() or ANTHROPIC_DEFAULT_BASE_URL
        headers = {
            "x-api-key": descriptor.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "anthropic-beta": ANTHROPIC_BETA,
            "content-type": "application/json",
            "accept": "text/event-stream",
        }
        return HttpRequestSpec(
            url=join_endpoint(base_url, MESSAGES_PATH),
            headers=headers,
            body=build_body(request, fragment),
        )

    def parse_frame(self, payload: Dict[str, Any], state: FrameState) -> List[FrameEvent]:
        return translate_frame(payload, state)


__all__ = ["AnthropicAdapter", "MESSAGES_PATH"]
