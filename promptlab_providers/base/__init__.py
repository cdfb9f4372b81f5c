"""
Providers Base Package

Exports the provider-agnostic contracts used by the vendor adapter families:

- Models: frozen request/descriptor value types
- Interfaces: the ``ProviderAdapter`` contract and ``FileResolver`` protocol
- Factory: lazy creation of adapters by provider kind
- Streaming: typed events, callback sink and the ``StreamSession`` driver
"""

from .factory import ProviderFactory, UnknownProviderError, create_adapter
from .interfaces import FileResolver, ProviderAdapter
from .models import (
    ChatMessage,
    ChatRequest,
    FileReference,
    HttpRequestSpec,
    ModelParameters,
    ProviderDescriptor,
    ProviderKind,
    ReasoningConfig,
    ResolvedFile,
    Role,
    TokenUsage,
)
from .errors import ErrorCode, ProviderError
from .timeouts import TimeoutConfig, get_timeout_config
from .cancellation import CancellationToken, CancelledError
from .streaming import (
    Aborted,
    CallbackSink,
    Completed,
    Failed,
    ReasoningToken,
    StreamEvent,
    StreamMetrics,
    Token,
    UsageUpdate,
    finalize_stream,
)
from .streaming.stream_session import SessionState, StreamSession

__all__ = [
    # Models
    "Role",
    "ProviderKind",
    "ChatMessage",
    "FileReference",
    "ResolvedFile",
    "ModelParameters",
    "ReasoningConfig",
    "ProviderDescriptor",
    "ChatRequest",
    "TokenUsage",
    "HttpRequestSpec",
    # Interfaces
    "ProviderAdapter",
    "FileResolver",
    # Factory
    "ProviderFactory",
    "UnknownProviderError",
    "create_adapter",
    # Errors
    "ErrorCode",
    "ProviderError",
    # Timeouts / cancellation
    "TimeoutConfig",
    "get_timeout_config",
    "CancellationToken",
    "CancelledError",
    # Streaming
    "Token",
    "ReasoningToken",
    "UsageUpdate",
    "Completed",
    "Aborted",
    "Failed",
    "StreamEvent",
    "CallbackSink",
    "StreamMetrics",
    "finalize_stream",
    "StreamSession",
    "SessionState",
]
