"""FileResolver Protocol (single-class module)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models import ResolvedFile


@runtime_checkable
class FileResolver(Protocol):
    """Resolves stored attachment identifiers into file bytes.

    Implementations raise on unknown identifiers; the session reports the
    failure without opening a vendor connection.
    """

    async def resolve(self, file_id: str) -> ResolvedFile:
        ...
