"""Provider configuration lookup.

``get_provider_config(kind, overrides)`` returns the settings used to build a
``ProviderDescriptor``. Sources, later ones winning key by key:

1. Built-in defaults (base URLs, OpenRouter attribution headers).
2. The file named by ``PROVIDERS_CONFIG_FILE``: ``.json`` as JSON,
   ``.yaml``/``.yml`` as YAML, anything else JSON first then YAML. A file
   that cannot be parsed is skipped with a warning.
3. Environment variables ``<PREFIX>_API_KEY``, ``_BASE_URL``, ``_REFERER``
   and ``_APP_TITLE``. Gemini also accepts ``GOOGLE_API_KEY``.
4. Non-``None`` overrides passed by the caller.

A ``.env`` file (``DOTENV_FILE``, default ``.env``) is read once, before the
environment. Its values never replace a real variable, only placeholders.

File example::

    openrouter:
      referer: https://promptlab.example.org
    custom-gateway:
      base_url: http://localhost:8080/v1
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from .defaults import (
    ANTHROPIC_DEFAULT_BASE_URL,
    GEMINI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_APP_TITLE,
    OPENROUTER_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_REFERER,
)
from .env import ENV_PREFIX, is_placeholder, resolve_provider_key

logger = logging.getLogger("providers.config")

CONFIG_FILE_ENV = "PROVIDERS_CONFIG_FILE"
DOTENV_FILE_ENV = "DOTENV_FILE"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai-compatible": {"base_url": OPENAI_DEFAULT_BASE_URL},
    "anthropic": {"base_url": ANTHROPIC_DEFAULT_BASE_URL},
    "gemini": {"base_url": GEMINI_DEFAULT_BASE_URL},
    "openrouter": {
        "base_url": OPENROUTER_DEFAULT_BASE_URL,
        "referer": OPENROUTER_DEFAULT_REFERER,
        "app_title": OPENROUTER_DEFAULT_APP_TITLE,
    },
    # must be configured explicitly
    "custom-gateway": {},
}

# descriptor field -> environment suffix
ENV_FIELD_MAP = {
    "api_key": "API_KEY",  # pragma: allowlist secret
    "base_url": "BASE_URL",
    "referer": "REFERER",
    "app_title": "APP_TITLE",
}

_file_config: Optional[Dict[str, Any]] = None
_dotenv_read = False


def _parse_dotenv_line(line: str) -> Optional[Tuple[str, str]]:
    line = line.strip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    key, value = line.split("=", 1)
    key = key.strip()
    if key.startswith("export "):
        key = key[len("export "):].strip()
    if not key:
        return None
    return key, value.strip().strip("\"'")


def _read_dotenv() -> None:
    global _dotenv_read
    if _dotenv_read:
        return
    _dotenv_read = True
    path = Path(os.getenv(DOTENV_FILE_ENV, ".env"))
    if not path.is_file():
        return
    for raw in path.read_text(encoding="utf-8").splitlines():
        pair = _parse_dotenv_line(raw)
        if pair is None:
            continue
        key, value = pair
        current = os.environ.get(key)
        if current is None or is_placeholder(current):
            os.environ[key] = value


def _parse_config_text(text: str, suffix: str) -> Any:
    if suffix == ".json":
        return json.loads(text)
    if suffix in (".yaml", ".yml"):
        return yaml.safe_load(text)
    try:
        return json.loads(text)
    except ValueError:
        return yaml.safe_load(text)


def _config_file() -> Dict[str, Any]:
    """Per-provider sections of ``PROVIDERS_CONFIG_FILE``, parsed once."""
    global _file_config
    if _file_config is not None:
        return _file_config
    _file_config = {}
    name = os.getenv(CONFIG_FILE_ENV)
    if not name:
        return _file_config
    path = Path(name)
    if not path.is_file():
        logger.warning("provider config file %s not found", path)
        return _file_config
    try:
        data = _parse_config_text(path.read_text(encoding="utf-8"), path.suffix.lower())
    except (ValueError, yaml.YAMLError) as exc:
        logger.warning("ignoring unparseable provider config file %s: %s", path, exc)
        return _file_config
    if isinstance(data, dict):
        _file_config = data
    return _file_config


def reset_config_cache() -> None:
    """Re-read the config file and ``.env`` on the next lookup."""
    global _file_config, _dotenv_read
    _file_config = None
    _dotenv_read = False


def _from_environment(provider: str) -> Dict[str, Any]:
    prefix = ENV_PREFIX.get(provider)
    if prefix is None:
        return {}
    found = {
        field: os.environ[f"{prefix}_{suffix}"]
        for field, suffix in ENV_FIELD_MAP.items()
        if f"{prefix}_{suffix}" in os.environ
    }
    if "api_key" not in found:
        key, _ = resolve_provider_key(provider)
        if key:
            found["api_key"] = key
    return found


def get_provider_config(provider: str, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Merged settings for ``provider`` (a ``ProviderKind`` value, case-insensitive)."""
    _read_dotenv()
    name = (provider or "").strip().lower()
    merged: Dict[str, Any] = dict(DEFAULTS.get(name, {}))
    section = _config_file().get(name)
    if isinstance(section, dict):
        merged.update(section)
    merged.update(_from_environment(name))
    if overrides:
        merged.update({k: v for k, v in overrides.items() if v is not None})
    return merged


__all__ = [
    "DEFAULTS",
    "ENV_FIELD_MAP",
    "get_provider_config",
    "reset_config_cache",
]
