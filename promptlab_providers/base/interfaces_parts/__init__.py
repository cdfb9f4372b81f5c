"""Interface parts; prefer ``promptlab_providers.base.interfaces``."""

from .file_resolver import FileResolver
from .provider_adapter import ProviderAdapter

__all__ = ["FileResolver", "ProviderAdapter"]
