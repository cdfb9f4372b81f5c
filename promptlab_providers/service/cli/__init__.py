"""Streaming chat CLI (package entrypoint).

Wires argument parsing to the action handlers in ``cli_actions``. It performs
no provider logic directly.

Public API re-exports:
- ``main``: CLI entrypoint callable
- ``plan_run``: dry-run planner used by tests
"""

from __future__ import annotations

import sys
from typing import Optional

from .cli_actions import handle_run, plan_run
from .cli_parser import build_parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code: ``0`` completed, ``1`` failed, ``2`` usage or
        configuration error, ``130`` cancelled.
    """
    p = build_parser()
    args = p.parse_args(list(sys.argv[1:] if argv is None else argv))
    return handle_run(args)


__all__ = ["main", "plan_run"]


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
