"""ProviderAdapter abstract base (single-class module).

One adapter exists per wire-format family. An adapter is stateless: all
per-stream state lives in the ``FrameState`` the decoder passes in, so one
adapter instance may serve any number of concurrent sessions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping

from ..errors import ErrorCode, ProviderError
from ..models import ChatRequest, HttpRequestSpec, ProviderDescriptor
from ..reasoning import map_reasoning_parameters
from ..streaming.events import FrameEvent
from ..streaming.frame_state import FrameState
from ..utils.vendor_errors import http_error_message


class ProviderAdapter(ABC):
    """Builds vendor requests and parses vendor stream frames."""

    #: Short label used in log events and error messages.
    vendor_label: str = "Provider"

    def build(self, request: ChatRequest, descriptor: ProviderDescriptor) -> HttpRequestSpec:
        """Map reasoning for ``request`` and build the vendor request."""
        fragment = map_reasoning_parameters(descriptor, request.model, request.reasoning)
        return self.build_request(request, descriptor, fragment)

    def check_descriptor(self, descriptor: ProviderDescriptor) -> None:
        """Raise ``ProviderError`` when ``descriptor`` cannot be used.

        The default accepts any descriptor; credential checks happen in the
        session before this is called.
        """

    def label_for(self, descriptor: ProviderDescriptor) -> str:
        return self.vendor_label

    @abstractmethod
    def build_request(
        self,
        request: ChatRequest,
        descriptor: ProviderDescriptor,
        fragment: Mapping[str, Any],
    ) -> HttpRequestSpec:
        """Return the streaming HTTP request for ``request``.

        ``fragment`` is the reasoning fragment to deep-merge into the body.
        """

    @abstractmethod
    def parse_frame(self, payload: Dict[str, Any], state: FrameState) -> List[FrameEvent]:
        """Translate one decoded JSON frame into zero or more events."""

    def http_error(self, descriptor: ProviderDescriptor, status: int, body: bytes) -> str:
        """Return the failure message for a non-2xx response."""
        return http_error_message(self.label_for(descriptor), status, body)

    def require_base_url(self, descriptor: ProviderDescriptor) -> None:
        if not (descriptor.base_url or "").strip():
            raise ProviderError(
                code=ErrorCode.VALIDATION,
                message=f"{self.label_for(descriptor)} requires a base URL",
                provider=descriptor.kind.value,
            )


__all__ = ["ProviderAdapter"]
