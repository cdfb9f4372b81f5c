"""Endpoint URL joining."""
from __future__ import annotations


def join_endpoint(base_url: str, path: str) -> str:
    """Join ``base_url`` and ``path`` without doubling a shared version segment.

    ``https://api.openai.com/v1`` + ``/v1/chat/completions`` and
    ``https://api.openai.com`` + ``/v1/chat/completions`` both yield
    ``https://api.openai.com/v1/chat/completions``.
    """
    base = (base_url or "").rstrip("/")
    suffix = "/" + path.lstrip("/")
    version = "/" + suffix.split("/")[1]
    if version != "/" and base.endswith(version):
        base = base[: -len(version)]
    return base + suffix


__all__ = ["join_endpoint"]
