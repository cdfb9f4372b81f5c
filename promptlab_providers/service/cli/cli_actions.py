"""CLI action handlers.

Purpose
-------
Turn parsed CLI arguments into a ``ChatRequest``, stream it through a
``StreamSession`` and render the events to the console. This module has no
top-level side effects and is safe to import in tests.

Output Contract
---------------
- Answer tokens are written to stdout as they arrive.
- Reasoning tokens are written to stderr so stdout stays pipeable.
- A usage line (or, with ``--json``, one JSON object on stdout) follows the
  terminal event.
- Configuration and validation errors are printed as JSON to stderr. Arguments
  are validated through ``ChatRequestDTO``; attachments the model cannot take
  are rejected before any request is sent.

Cancellation
------------
Ctrl-C cancels the session's ``CancellationToken``; the session observes it
at the next network read or decoded frame and ends with ``Aborted``.
"""

from __future__ import annotations

import argparse
import asyncio
import base64
import json
import logging
import os
import signal
import sys
from typing import Any, Dict, List, Optional, TextIO

from pydantic import ValidationError

from ...base.cancellation import CancellationToken
from ...base.capabilities.core import get_model_capabilities, is_file_type_allowed
from ...base.dto.chat import ChatRequestDTO
from ...base.errors import ProviderError
from ...base.factory import create_adapter
from ...base.logging import LogContext, configure_logger, get_logger, normalized_log_event
from ...base.models import ChatRequest, FileReference, ProviderDescriptor, ProviderKind, TokenUsage
from ...base.streaming import Aborted, CallbackSink, Completed
from ...base.streaming.stream_session import StreamSession
from ...base.utils.files import effective_mime_type
from ...config.env import get_env_var_candidates, is_unusable_key

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2
EXIT_CANCELLED = 130


def _print_error(payload: Dict[str, Any], stream: Optional[TextIO] = None) -> None:
    print(json.dumps(payload), file=stream or sys.stderr)


def load_file(path: str) -> FileReference:
    """Read ``path`` into an inline ``FileReference``.

    Raises
    ------
    OSError
        If the file cannot be read.
    """
    name = os.path.basename(path)
    with open(path, "rb") as fh:
        raw = fh.read()
    return FileReference(
        name=name,
        mime_type=effective_mime_type(name, ""),
        data=base64.b64encode(raw).decode("ascii"),
    )


def build_request(args: argparse.Namespace) -> ChatRequest:
    """Build the ``ChatRequest`` described by the CLI arguments.

    Raises
    ------
    OSError
        If an attachment cannot be read.
    pydantic.ValidationError
        If the arguments do not form a valid request (empty prompt,
        out-of-range temperature, non-positive ``--max-tokens``).
    """
    messages: List[Dict[str, str]] = []
    if args.system:
        messages.append({"role": "system", "content": args.system})
    messages.append({"role": "user", "content": args.prompt})
    files = [load_file(p) for p in args.files]
    effort = args.effort
    dto = ChatRequestDTO(
        model=args.model,
        messages=messages,
        files=[{"name": f.name, "mime_type": f.mime_type, "data": f.data} for f in files],
        temperature=args.temperature,
        max_tokens=args.max_tokens,
        reasoning={"enabled": effort not in ("default", "none"), "effort": effort},
    )
    return dto.to_request()


def validation_details(exc: ValidationError) -> List[str]:
    """Flatten pydantic errors into ``"<field>: <message>"`` lines."""
    return [
        f"{'.'.join(str(part) for part in err['loc']) or 'request'}: {err['msg']}"
        for err in exc.errors()
    ]


def unsupported_attachments(descriptor: ProviderDescriptor, request: ChatRequest) -> List[str]:
    """Names of attachments the target model cannot accept.

    Vision support is inferred from the model id; PDFs additionally need a
    provider/model pair that reads documents.
    """
    vision = get_model_capabilities(descriptor.kind, request.model).supports_vision
    return [
        f.name
        for f in request.files
        if not is_file_type_allowed(f.name, f.mime_type, descriptor.kind, request.model, vision)
    ]


def resolve_descriptor(args: argparse.Namespace) -> ProviderDescriptor:
    """Resolve the provider descriptor from config, env and CLI overrides.

    Raises
    ------
    ValueError
        If ``--provider`` is not a known provider kind.
    """
    kind = ProviderKind.parse(args.provider)
    overrides: Dict[str, Any] = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
    return ProviderDescriptor.from_config(kind, **overrides)


def plan_run(descriptor: ProviderDescriptor, request: ChatRequest) -> Dict[str, Any]:
    """Return the request a run would send, without network I/O.

    Header values and the query key are withheld; only header names and the
    redacted URL are reported.
    """
    adapter = create_adapter(descriptor.kind)
    plan: Dict[str, Any] = {
        "provider": descriptor.kind.value,
        "model": request.model,
        "has_api_key": not is_unusable_key(descriptor.api_key),
        "files": [f.name for f in request.files],
    }
    try:
        adapter.check_descriptor(descriptor)
        spec = adapter.build(request, descriptor)
    except ProviderError as exc:
        plan["error"] = exc.message
        return plan
    plan["url"] = spec.redacted_url
    plan["headers"] = sorted(spec.headers)
    plan["body"] = spec.body
    return plan


class ConsoleSink(CallbackSink):
    """Renders session callbacks to stdout/stderr.

    With ``json_mode`` deltas are not echoed; the final result is printed as
    a single JSON object instead.
    """

    def __init__(self, out: TextIO, err: TextIO, *, json_mode: bool = False) -> None:
        self.out = out
        self.err = err
        self.json_mode = json_mode
        self._reasoning_open = False

    def on_token(self, text: str) -> None:
        if self.json_mode:
            return
        if self._reasoning_open:
            self.err.write("\n")
            self._reasoning_open = False
        self.out.write(text)
        self.out.flush()

    def on_reasoning_token(self, text: str) -> None:
        if self.json_mode:
            return
        self._reasoning_open = True
        self.err.write(text)
        self.err.flush()

    def on_complete(self, content: str, thinking: Optional[str], usage: TokenUsage) -> None:
        if self.json_mode:
            result = {"content": content, "thinking": thinking, "usage": usage.to_dict()}
            self.out.write(json.dumps(result, ensure_ascii=False) + "\n")
            return
        self.out.write("\n")
        self.out.flush()
        self.err.write(
            f"[usage] prompt={usage.tokens_input} completion={usage.tokens_output} total={usage.total}\n"
        )

    def on_error(self, message: str) -> None:
        _print_error({"error": message}, self.err)

    def on_abort(self) -> None:
        self.err.write("\n[cancelled]\n")


def _install_interrupt(loop: asyncio.AbstractEventLoop, token: CancellationToken) -> bool:
    try:
        loop.add_signal_handler(signal.SIGINT, token.cancel, "interrupted")
    except (NotImplementedError, RuntimeError):
        # Event loops without signal support (Windows proactor) keep Ctrl-C as KeyboardInterrupt.
        return False
    return True


async def stream_to_console(
    session: StreamSession,
    sink: CallbackSink,
) -> int:
    """Run ``session`` into ``sink`` with Ctrl-C wired to its token.

    Returns
    -------
    int
        Exit code derived from the terminal event.
    """
    loop = asyncio.get_running_loop()
    installed = _install_interrupt(loop, session.token)
    try:
        terminal = await session.run(sink)
    finally:
        if installed:
            loop.remove_signal_handler(signal.SIGINT)
    if isinstance(terminal, Completed):
        return EXIT_OK
    if isinstance(terminal, Aborted):
        return EXIT_CANCELLED
    return EXIT_FAILED


def _cli_logger(args: argparse.Namespace) -> logging.Logger:
    logger = get_logger("providers.cli", level=logging.WARNING)
    if args.log_level or args.log_file:
        configure_logger(level=args.log_level, file_path=args.log_file)
    return logger


def handle_run(args: argparse.Namespace, *, out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> int:
    """Execute a parsed CLI invocation.

    Parameters
    ----------
    args: argparse.Namespace
        Parsed arguments from :func:`build_parser`.
    out, err: Optional[TextIO]
        Output streams; default to ``sys.stdout``/``sys.stderr``.

    Returns
    -------
    int
        ``0`` completed or dry-run, ``1`` failed, ``2`` bad arguments, unsupported
        attachment or missing credential, ``130`` cancelled.
    """
    out = out or sys.stdout
    err = err or sys.stderr
    try:
        descriptor = resolve_descriptor(args)
    except ValueError:
        _print_error({"error": f"unknown provider '{args.provider}'"}, err)
        return EXIT_USAGE
    try:
        request = build_request(args)
    except OSError as exc:
        _print_error({"error": f"cannot read attachment: {exc}"}, err)
        return EXIT_USAGE
    except ValidationError as exc:
        _print_error({"error": "invalid request", "details": validation_details(exc)}, err)
        return EXIT_USAGE
    rejected = unsupported_attachments(descriptor, request)
    if rejected:
        _print_error({"error": f"attachment not supported by model '{request.model}'", "files": rejected}, err)
        return EXIT_USAGE

    if args.dry_run:
        out.write(json.dumps(plan_run(descriptor, request), ensure_ascii=False) + "\n")
        return EXIT_OK

    if is_unusable_key(descriptor.api_key):
        hint = {
            "error": f"missing API key for provider '{descriptor.kind.value}'",
            "set_one_of_env": list(get_env_var_candidates(descriptor.kind.value)),
        }
        _print_error(hint, err)
        return EXIT_USAGE

    logger = _cli_logger(args)
    ctx = LogContext(provider=descriptor.kind.value, model=request.model)
    normalized_log_event(logger, "cli.start", ctx, phase="start", attempt=1, emitted=None, tokens=None)
    session = StreamSession(
        descriptor,
        request,
        logger=logger,
        reattach_thinking=args.reattach_thinking,
    )
    sink = ConsoleSink(out, err, json_mode=args.json)
    return asyncio.run(stream_to_console(session, sink))


__all__ = [
    "EXIT_OK",
    "EXIT_FAILED",
    "EXIT_USAGE",
    "EXIT_CANCELLED",
    "load_file",
    "build_request",
    "validation_details",
    "unsupported_attachments",
    "resolve_descriptor",
    "plan_run",
    "ConsoleSink",
    "stream_to_console",
    "handle_run",
]
