"""Provider adapter factory.

Maps a provider kind to its ``ProviderAdapter`` family. Adapter modules are
imported lazily with ``importlib`` so importing the base layer never pulls in
every vendor package. OpenRouter and custom gateways resolve to the
OpenAI-compatible adapter; the descriptor kind selects their policy.
"""

from __future__ import annotations

from importlib import import_module
from typing import Dict, Tuple

from .interfaces import ProviderAdapter
from .models import ProviderKind


class UnknownProviderError(Exception):
    """Raised when a provider kind cannot be resolved to an adapter."""


class ProviderFactory:
    """Create adapters by provider kind.

    Adapters are stateless and cached per kind.
    """

    _ADAPTERS: Dict[ProviderKind, Tuple[str, str]] = {
        ProviderKind.OPENAI_COMPATIBLE: ("promptlab_providers.openai.client", "OpenAICompatibleAdapter"),
        ProviderKind.OPENROUTER: ("promptlab_providers.openai.client", "OpenAICompatibleAdapter"),
        ProviderKind.CUSTOM_GATEWAY: ("promptlab_providers.openai.client", "OpenAICompatibleAdapter"),
        ProviderKind.ANTHROPIC: ("promptlab_providers.anthropic.client", "AnthropicAdapter"),
        ProviderKind.GEMINI: ("promptlab_providers.gemini.client", "GeminiAdapter"),
    }
    _CACHE: Dict[ProviderKind, ProviderAdapter] = {}

    @classmethod
    def create(cls, kind: "ProviderKind | str") -> ProviderAdapter:
        """Return the adapter for ``kind``.

        Raises
        ------
        UnknownProviderError
            If the kind is unknown or its adapter class cannot be found.
        """
        try:
            resolved = ProviderKind.parse(kind)
        except ValueError as exc:
            raise UnknownProviderError(f"Unknown provider '{kind}'") from exc
        if resolved in cls._CACHE:
            return cls._CACHE[resolved]
        module_path, class_name = cls._ADAPTERS[resolved]
        mod = import_module(module_path)
        try:
            klass = getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownProviderError(
                f"Adapter class '{class_name}' not found in '{module_path}' for provider '{resolved.value}'"
            ) from exc
        adapter = klass()
        cls._CACHE[resolved] = adapter
        return adapter

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the supported provider kind values in declaration order."""
        return tuple(kind.value for kind in cls._ADAPTERS)


def create_adapter(kind: "ProviderKind | str") -> ProviderAdapter:
    """Shortcut for :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(kind)


__all__ = ["ProviderFactory", "UnknownProviderError", "create_adapter"]
