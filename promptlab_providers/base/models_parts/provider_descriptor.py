"""
Provider descriptor: which backend to call and with what credential.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .provider_kind import ProviderKind


@dataclass(frozen=True)
class ProviderDescriptor:
    """Connection details for one backend.

    Attributes:
        kind: Wire-format family and vendor.
        api_key: Credential sent with the request.
        base_url: Endpoint root; ``None`` selects the per-kind default.
            Required for ``custom-gateway``.
        options: Extra per-provider settings (e.g. OpenRouter ``referer``).
    """

    kind: ProviderKind
    api_key: str
    base_url: Optional[str] = None
    options: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_config(cls, kind: "str | ProviderKind", **overrides: Any) -> "ProviderDescriptor":
        """Build a descriptor from the merged configuration layer.

        ``overrides`` win over file and environment values (``api_key``,
        ``base_url``, ``referer``, ``app_title``).
        """
        from ...config import get_provider_config

        resolved = ProviderKind.parse(kind)
        cfg = get_provider_config(resolved.value, overrides)
        api_key = cfg.pop("api_key", "") or ""
        base_url = cfg.pop("base_url", None)
        return cls(kind=resolved, api_key=api_key, base_url=base_url, options=cfg)


__all__ = ["ProviderDescriptor"]
