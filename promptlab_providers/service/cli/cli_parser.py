"""CLI parser construction for promptlab-chat.

This module wires argument shapes only; execution lives in ``cli_actions``.
"""

from __future__ import annotations

import argparse

from ...base.models import ProviderKind
from ...config.defaults import PROVIDER_CLI_DEFAULT_PROVIDER

EFFORT_CHOICES = ("default", "none", "low", "medium", "high")


def build_parser() -> argparse.ArgumentParser:
    """Construct the CLI parser.

    Returns
    -------
    argparse.ArgumentParser
        Parser for a single streaming chat call. No I/O happens here.
    """
    p = argparse.ArgumentParser(
        prog="promptlab-chat",
        description="Stream one chat completion from a configured provider",
    )
    p.add_argument(
        "--provider",
        default=PROVIDER_CLI_DEFAULT_PROVIDER,
        help="Provider kind: " + ", ".join(k.value for k in ProviderKind) + " (alias: openai)",
    )
    p.add_argument("--model", required=True, help="Model identifier as the vendor expects it")
    p.add_argument("--effort", choices=EFFORT_CHOICES, default="default", help="Reasoning effort")
    p.add_argument("--system", default=None, help="System prompt")
    p.add_argument("--file", dest="files", action="append", default=[], metavar="PATH", help="Attach a file (repeatable)")
    p.add_argument("--temperature", type=float, default=None)
    p.add_argument("--max-tokens", type=int, default=None)
    p.add_argument("--base-url", default=None, help="Override the provider base URL")
    p.add_argument(
        "--no-reattach-thinking",
        dest="reattach_thinking",
        action="store_false",
        help="Keep streamed thinking out of the final content",
    )
    p.add_argument("--json", action="store_true", help="Print the final result as JSON instead of streaming text")
    p.add_argument("--dry-run", action="store_true", help="Print the planned request without sending it")
    p.add_argument("--log-level", default=None, help="Provider log level (DEBUG, INFO, WARNING, ...)")
    p.add_argument("--log-file", default=None, help="Also write JSON logs to this file")
    p.add_argument("prompt", help="User prompt text")
    return p


__all__ = ["build_parser", "EFFORT_CHOICES"]
