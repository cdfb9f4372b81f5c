"""Capabilities package.

Exports model capability inference and attachment gating helpers.
"""

from .core import (
    FileUploadCapabilities,
    ModelCapabilities,
    get_file_upload_capabilities,
    get_model_capabilities,
    infer_function_calling_support,
    infer_pdf_support,
    infer_reasoning_support,
    infer_vision_support,
    is_file_type_allowed,
)

__all__ = [
    "FileUploadCapabilities",
    "ModelCapabilities",
    "get_file_upload_capabilities",
    "get_model_capabilities",
    "infer_function_calling_support",
    "infer_pdf_support",
    "infer_reasoning_support",
    "infer_vision_support",
    "is_file_type_allowed",
]
