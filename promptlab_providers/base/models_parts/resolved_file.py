"""
Resolved file payload returned by a ``FileResolver``.
"""
from __future__ import annotations

import base64
from dataclasses import dataclass

from .file_reference import FileReference


@dataclass(frozen=True)
class ResolvedFile:
    """Raw bytes of a stored file plus its metadata."""

    name: str
    mime_type: str
    data: bytes

    def to_reference(self) -> FileReference:
        """Return an inline ``FileReference`` carrying this payload."""
        return FileReference(
            name=self.name,
            mime_type=self.mime_type,
            data=base64.b64encode(self.data).decode("ascii"),
        )


__all__ = ["ResolvedFile"]
