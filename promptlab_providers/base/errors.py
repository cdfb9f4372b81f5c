"""Unified provider error taxonomy public surface.

Re-exports the one-class-per-file implementations under
``promptlab_providers.base.errors_parts``.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import classify_exception, code_for_status, is_retryable

__all__ = ["ErrorCode", "ProviderError", "classify_exception", "code_for_status", "is_retryable"]
