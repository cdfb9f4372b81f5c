"""Attachment type detection and text inlining.

Attachments fall into three kinds the builders care about:

* ``image`` – sent as a vendor image part.
* ``pdf`` – sent as a vendor document/file part.
* ``text`` – never sent as binary; decoded and appended to the last user
  message as a fenced block.

Anything else is ``unsupported`` and replaced by a one-line note. Detection
trusts a known MIME type first and falls back to the file extension, since
browsers frequently upload YAML or Markdown as ``application/octet-stream``.
"""
from __future__ import annotations

import os
from typing import Literal

from ..models import FileReference

FileKind = Literal["image", "pdf", "text", "unsupported"]

TEXT_MIME_TYPES = frozenset(
    {
        "text/plain",
        "text/markdown",
        "application/json",
        "text/csv",
        "application/xml",
        "text/xml",
        "text/yaml",
        "application/x-yaml",
    }
)
IMAGE_MIME_TYPES = frozenset({"image/jpeg", "image/png", "image/gif", "image/webp"})
PDF_MIME_TYPE = "application/pdf"

EXTENSION_TO_MIME = {
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".markdown": "text/markdown",
    ".json": "application/json",
    ".csv": "text/csv",
    ".xml": "application/xml",
    ".yaml": "text/yaml",
    ".yml": "text/yaml",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".pdf": PDF_MIME_TYPE,
}

TEXT_EXTENSIONS = tuple(ext for ext, mime in EXTENSION_TO_MIME.items() if mime in TEXT_MIME_TYPES)


def file_extension(name: str) -> str:
    return os.path.splitext(name or "")[1].lower()


def effective_mime_type(name: str, mime_type: str) -> str:
    """Return ``mime_type`` unless it is empty or generic, else guess from the name."""
    mime = (mime_type or "").strip().lower()
    if mime and mime != "application/octet-stream":
        return mime
    return EXTENSION_TO_MIME.get(file_extension(name), mime or "application/octet-stream")


def classify_file(name: str, mime_type: str) -> FileKind:
    """Classify an attachment by MIME type, then by extension."""
    mime = (mime_type or "").strip().lower()
    ext_mime = EXTENSION_TO_MIME.get(file_extension(name))
    if mime in IMAGE_MIME_TYPES or ext_mime in IMAGE_MIME_TYPES or mime.startswith("image/"):
        return "image"
    if mime == PDF_MIME_TYPE or ext_mime == PDF_MIME_TYPE:
        return "pdf"
    if mime in TEXT_MIME_TYPES or ext_mime in TEXT_MIME_TYPES or mime.startswith("text/"):
        return "text"
    return "unsupported"


def file_kind(ref: FileReference) -> FileKind:
    return classify_file(ref.name, ref.mime_type)


def render_text_file(ref: FileReference) -> str:
    """Render a text attachment as the fenced block appended to the prompt."""
    text = ref.raw_bytes().decode("utf-8", errors="replace")
    return f"[File: {ref.name}]\n```\n{text}\n```"


def render_unsupported_file(ref: FileReference) -> str:
    return f"[File: {ref.name}] (unsupported file type: {ref.mime_type or 'unknown'})"


__all__ = [
    "FileKind",
    "TEXT_MIME_TYPES",
    "IMAGE_MIME_TYPES",
    "PDF_MIME_TYPE",
    "EXTENSION_TO_MIME",
    "TEXT_EXTENSIONS",
    "file_extension",
    "effective_mime_type",
    "classify_file",
    "file_kind",
    "render_text_file",
    "render_unsupported_file",
]
