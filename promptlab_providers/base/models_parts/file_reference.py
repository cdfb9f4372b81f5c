"""
File attachment reference.

A reference carries either inline base64 ``data`` or an opaque ``file_id``
that a ``FileResolver`` turns into bytes before the request is built.
"""
from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FileReference:
    """An attachment on the last user message.

    Attributes:
        name: Display file name (also used for extension-based type detection).
        mime_type: Declared MIME type; may be empty or generic.
        data: Base64-encoded file content.
        file_id: Identifier resolved through a ``FileResolver``.

    Exactly one of ``data`` and ``file_id`` must be set.
    """

    name: str
    mime_type: str = ""
    data: Optional[str] = None
    file_id: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.data is None) == (self.file_id is None):
            raise ValueError("FileReference needs exactly one of data or file_id")

    @property
    def is_resolved(self) -> bool:
        return self.data is not None

    def raw_bytes(self) -> bytes:
        """Return the decoded content of an inline reference."""
        if self.data is None:
            raise ValueError(f"file {self.name!r} has not been resolved")
        return base64.b64decode(self.data)

    def data_url(self) -> str:
        """Return a ``data:`` URL embedding the base64 content."""
        return f"data:{self.mime_type};base64,{self.data}"


__all__ = ["FileReference"]
