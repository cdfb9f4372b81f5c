"""OpenAI-compatible adapter.

Serves OpenAI itself, OpenRouter and custom gateways; the differences live in
``OpenAICompatiblePolicy`` presets selected by the descriptor kind.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..base.interfaces import ProviderAdapter
from ..base.models import ChatRequest, HttpRequestSpec, ProviderDescriptor
from ..base.streaming.events import FrameEvent
from ..base.streaming.frame_state import FrameState
from ..base.utils.messages import deep_merge
from ..base.utils.urls import join_endpoint
from .helpers import build_body
from .policies import OPENAI, POLICIES, OpenAICompatiblePolicy
from .stream_helpers import translate_frame

CHAT_COMPLETIONS_PATH = "/v1/chat/completions"


class OpenAICompatibleAdapter(ProviderAdapter):
    """Chat-completions streaming adapter.

    Parameters
    ----------
    policy:
        Force a specific policy; by default it is chosen per descriptor kind.
    """

    vendor_label = "OpenAI"

    def __init__(self, policy: Optional[OpenAICompatiblePolicy] = None) -> None:
        self._policy = policy

    def policy_for(self, descriptor: ProviderDescriptor) -> OpenAICompatiblePolicy:
        return self._policy or POLICIES.get(descriptor.kind, OPENAI)

    def label_for(self, descriptor: ProviderDescriptor) -> str:
        return self.policy_for(descriptor).label

    def check_descriptor(self, descriptor: ProviderDescriptor) -> None:
        if self.policy_for(descriptor).default_base_url is None:
            self.require_base_url(descriptor)

    def build_request(
        self,
        request: ChatRequest,
        descriptor: ProviderDescriptor,
        fragment: Mapping[str, Any],
    ) -> HttpRequestSpec:
        policy = self.policy_for(descriptor)
        base_url = policy.base_url(descriptor)
        if base_url is None:
            self.require_base_url(descriptor)
        headers: Dict[str, str] = {
            "Authorization": f"Bearer {descriptor.api_key}",
            "Content-Type": "application/json",
            "Accept": "text/event-stream",
        }
        headers.update(policy.extra_headers(descriptor))
        body = deep_merge(build_body(request), fragment)
        return HttpRequestSpec(url=join_endpoint(base_url, CHAT_COMPLETIONS_PATH), headers=headers, body=body)

    def parse_frame(self, payload: Dict[str, Any], state: FrameState) -> List[FrameEvent]:
        return translate_frame(payload, state)


__all__ = ["OpenAICompatibleAdapter", "CHAT_COMPLETIONS_PATH"]
