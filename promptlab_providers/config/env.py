"""promptlab_providers.config.env
===============================

Environment variable mapping and credential helpers.

- ``ENV_PREFIX`` maps each provider kind to the prefix of its variables
  (``<PREFIX>_API_KEY``, ``<PREFIX>_BASE_URL``, ...).
- ``ENV_ALIASES`` lists additional accepted key variables, canonical first.
- ``is_unusable_key`` decides whether a stored credential can be sent at all;
  the stream session refuses to open a connection when it returns True.

Helpers never raise on unknown providers or unset variables.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

ENV_PREFIX: Dict[str, str] = {
    "openai-compatible": "OPENAI",
    "anthropic": "ANTHROPIC",
    "gemini": "GEMINI",
    "openrouter": "OPENROUTER",
    "custom-gateway": "CUSTOM_GATEWAY",
}

# Gemini keys are also commonly exported as GOOGLE_API_KEY.
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
}

# Marker written by the credential store when a stored key cannot be decrypted.
DECRYPTION_FAILED_MARKER = "***decryption-failed***"
_MASKED_KEY_MAX_LEN = 20


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. Case-insensitive and tolerant of surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "example" in v or v.startswith("test_")


def is_masked_key(val: Optional[str]) -> bool:
    """Return True for display-masked keys such as ``sk-abc...``."""
    if not val:
        return False
    v = val.strip()
    return v.endswith("...") and len(v) <= _MASKED_KEY_MAX_LEN


def is_unusable_key(val: Optional[str]) -> bool:
    """Return True when ``val`` cannot authenticate a vendor request.

    Empty, whitespace-only, the decryption-failure marker and masked keys are
    all unusable.
    """
    if val is None or not val.strip():
        return True
    if val.strip() == DECRYPTION_FAILED_MARKER:
        return True
    return is_masked_key(val)


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the canonical API key variable name for a provider kind."""
    prefix = ENV_PREFIX.get((provider or "").lower())
    return f"{prefix}_API_KEY" if prefix else None


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield acceptable API key variable names, canonical first."""
    p = (provider or "").lower()
    canonical = get_env_var_name(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):
        if alias != canonical:
            yield alias


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for a provider from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)`` for the first non-empty candidate, or
        ``(None, None)`` when nothing is set.
    """
    for name in get_env_var_candidates(provider):
        if val := os.environ.get(name):
            return val, name
    return None, None


__all__ = [
    "ENV_PREFIX",
    "ENV_ALIASES",
    "DECRYPTION_FAILED_MARKER",
    "is_placeholder",
    "is_masked_key",
    "is_unusable_key",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_provider_key",
]
