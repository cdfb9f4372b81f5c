"""
Provider-agnostic domain models public surface.

Re-exports the one-class-per-file implementations under
``promptlab_providers.base.models_parts``.
"""

from .models_parts.provider_kind import ProviderKind
from .models_parts.chat_message import ChatMessage, Role
from .models_parts.file_reference import FileReference
from .models_parts.resolved_file import ResolvedFile
from .models_parts.model_parameters import ModelParameters
from .models_parts.reasoning_config import ReasoningConfig, ReasoningEffort
from .models_parts.provider_descriptor import ProviderDescriptor
from .models_parts.chat_request import ChatRequest
from .models_parts.token_usage import TokenUsage
from .models_parts.http_request_spec import HttpRequestSpec

__all__ = [
    "ProviderKind",
    "ChatMessage",
    "Role",
    "FileReference",
    "ResolvedFile",
    "ModelParameters",
    "ReasoningConfig",
    "ReasoningEffort",
    "ProviderDescriptor",
    "ChatRequest",
    "TokenUsage",
    "HttpRequestSpec",
]
