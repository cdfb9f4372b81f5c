"""Per-session fields stamped onto every provider log line."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class LogContext:
    """Provider kind, model and session id shared by one session's events.

    Unset fields are left out of the emitted line.
    """

    provider: Optional[str] = None
    model: Optional[str] = None
    session_id: Optional[str] = None

    def as_fields(self) -> Dict[str, Any]:
        fields = {"provider": self.provider, "model": self.model, "session_id": self.session_id}
        return {k: v for k, v in fields.items() if v is not None}


__all__ = ["LogContext"]
