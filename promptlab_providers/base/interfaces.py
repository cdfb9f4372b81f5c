"""
Provider-agnostic interfaces for the providers layer.

Re-exports the single-class modules under
``promptlab_providers.base.interfaces_parts``.
"""

from __future__ import annotations

from .interfaces_parts import FileResolver, ProviderAdapter

__all__ = ["FileResolver", "ProviderAdapter"]
