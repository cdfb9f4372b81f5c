"""Structured logging for stream sessions and adapters.

Everything logs below the shared ``providers`` logger, which writes one JSON
line per record to stderr at the level named by ``PROVIDERS_LOG_LEVEL``.
Sessions receive a logger by injection; they never configure logging
themselves.

Two helpers produce the lines:

* ``log_event`` for ad-hoc events (``stream.http_error``, ``stream.decode_error``).
* ``normalized_log_event`` for lifecycle events (``stream.start`` and the
  ``stream.adapter.*`` finalize events), which always carry the keys in
  ``REQUIRED_NORMALIZED_KEYS`` so dashboards can rely on them.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Mapping, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "providers"
LEVEL_ENV = "PROVIDERS_LOG_LEVEL"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

REQUIRED_NORMALIZED_KEYS = ("structured", "phase", "attempt", "error_code", "emitted", "tokens")

_MANAGED_ATTR = "_providers_managed"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


def _parse_level(value: Optional[str], default: int = logging.INFO) -> int:
    """Resolve a level name such as ``"debug"`` or ``"WARN"``; ``default`` otherwise."""
    if not value:
        return default
    name = value.strip().upper()
    level = logging.getLevelName(_LEVEL_ALIASES.get(name, name))
    return level if isinstance(level, int) else default


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _managed(logger: logging.Logger, kind: str) -> list:
    return [h for h in logger.handlers if getattr(h, _MANAGED_ATTR, None) == kind]


def _set_level(logger: logging.Logger, level: int) -> None:
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


def _drop_handler(logger: logging.Logger, handler: logging.Handler) -> None:
    logger.removeHandler(handler)
    with contextlib.suppress(OSError):
        handler.close()


def _base_logger(json_mode: bool = True, default_level: int = logging.INFO) -> logging.Logger:
    """Return the ``providers`` logger, attaching its stderr handler on first use.

    The environment level is re-read on every call, so tests and long-running
    hosts can change ``PROVIDERS_LOG_LEVEL`` without a restart.
    """
    logger = logging.getLogger(BASE_LOGGER_NAME)
    level = _parse_level(os.getenv(LEVEL_ENV), default=default_level)
    if not _managed(logger, "console"):
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(_formatter(json_mode))
        setattr(console, _MANAGED_ATTR, "console")
        logger.handlers[:] = [console]
        logger.propagate = False
    if logger.level != level:
        _set_level(logger, level)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return ``name`` routed through the shared ``providers`` handlers.

    Children (``providers.session``, ``providers.cli``) have no handlers of
    their own and inherit the base level.
    """
    base = _base_logger(json_mode=json_mode, default_level=level)
    if name == BASE_LOGGER_NAME:
        return base
    child = logging.getLogger(name)
    child.setLevel(logging.NOTSET)
    child.propagate = True
    return child


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Adjust the shared logger at runtime.

    Parameters
    ----------
    level:
        New level, numeric or by name; ``None`` keeps the current one.
    file_path:
        Mirror records into a rotating file (10 MB, 5 backups). ``None``
        detaches a file handler previously added here.
    json_mode:
        Formatter of the file handler.

    Returns
    -------
    logging.Logger
        The ``providers`` logger.
    """
    logger = _base_logger(json_mode=json_mode)
    if level is not None:
        _set_level(logger, _parse_level(level, default=logger.level) if isinstance(level, str) else level)

    existing = _managed(logger, "file")
    target = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    for handler in existing:
        if target is not None and getattr(handler, "baseFilename", None) == target:
            handler.setFormatter(_formatter(json_mode))
            handler.setLevel(logger.level)
            return logger
        _drop_handler(logger, handler)
    if target is None:
        return logger

    os.makedirs(os.path.dirname(target) or ".", exist_ok=True)
    handler = RotatingFileHandler(target, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8")
    setattr(handler, _MANAGED_ATTR, "file")
    handler.setLevel(logger.level)
    handler.setFormatter(_formatter(json_mode))
    logger.addHandler(handler)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Log ``event`` as one JSON object.

    ``ctx`` fields come first, then ``fields``; ``None`` values are dropped
    unless ``keep_none`` is set. Nothing is serialized when ``level`` is
    disabled.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx is not None:
        payload.update(ctx.as_fields())
    payload.update(fields if keep_none else {k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


def _tokens_field(tokens: Any) -> Optional[Dict[str, Any]]:
    """Normalize token counts given as a mapping, ``TokenUsage`` or key/value pairs."""
    if tokens is None:
        return None
    if isinstance(tokens, Mapping):
        return dict(tokens)
    if hasattr(tokens, "to_dict"):
        return tokens.to_dict()
    try:
        return dict(tokens)
    except (TypeError, ValueError):
        return {"value": repr(tokens)}


def normalized_log_event(  # noqa: PLR0913
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | None = None,
    tokens: Any = None,
    structured: bool = True,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Log a lifecycle event carrying every key of ``REQUIRED_NORMALIZED_KEYS``.

    Unknown values are written as ``null``, except ``error_code`` which is
    left out until a failure sets it. Extra fields are added only when not
    ``None`` and never replace a normalized key.
    """
    fields: Dict[str, Any] = {
        "structured": structured,
        "phase": phase,
        "attempt": attempt,
        "emitted": emitted,
        "tokens": _tokens_field(tokens),
    }
    if error_code is not None:
        fields["error_code"] = error_code
    for key, value in extra_fields.items():
        if value is not None and fields.get(key) is None:
            fields[key] = value
    log_event(logger, event, ctx, level=level, keep_none=True, **fields)


__all__ = [
    "BASE_LOGGER_NAME",
    "LogContext",
    "REQUIRED_NORMALIZED_KEYS",
    "configure_logger",
    "get_logger",
    "log_event",
    "normalized_log_event",
]
