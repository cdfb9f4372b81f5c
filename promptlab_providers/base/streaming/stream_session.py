"""Stream session: one chat request from credential check to terminal event.

State machine::

    IDLE ──► REQUESTING ──► STREAMING ──► COMPLETED
      │           │             ├────────► ABORTED
      │           │             └────────► FAILED
      └───────────┴──► FAILED / ABORTED

* ``IDLE → FAILED`` without any network call when the credential is unusable,
  the descriptor is incomplete (custom gateway without base URL) or a stored
  attachment cannot be resolved.
* ``REQUESTING → FAILED`` on a non-2xx status, with the vendor error message.
* ``STREAMING`` forwards each ``Token``/``ReasoningToken``/``UsageUpdate`` as
  it is decoded and awaits ``yield_to_host`` after every text delta so the
  host loop can render before decoding resumes.
* The cancellation token is polled before the request, between network reads
  and between decoded frames. Text accumulated before an abort stays readable
  on the session but is only reported through ``Aborted``.

Exactly one terminal event ends ``events()``; ``asyncio.CancelledError`` (host
task teardown) is not converted and propagates.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from contextlib import aclosing
from enum import Enum
from typing import AsyncIterator, Awaitable, Callable, List, Optional

import httpx

from ..cancellation import DEFAULT_CANCEL_REASON, CancellationToken, CancelledError
from ...config.env import is_unusable_key
from ..errors import ErrorCode, ProviderError, classify_exception, code_for_status
from ..factory import create_adapter
from ..http import build_async_client
from ..interfaces import FileResolver, ProviderAdapter
from ..log_support import LogContext
from ..logging import log_event, normalized_log_event
from ..models import ChatRequest, FileReference, ProviderDescriptor, ResolvedFile, TokenUsage
from ..thinking import ThinkingContent, extract_thinking, wrap_thinking
from .callbacks import CallbackSink, dispatch_event
from .events import (
    Aborted,
    Completed,
    Failed,
    FrameEvent,
    ReasoningToken,
    StreamEvent,
    TerminalEvent,
    Token,
    UsageUpdate,
)
from .frame_decoder import StreamFrameDecoder
from .streaming_finalize import finalize_stream
from .streaming_metrics import StreamMetrics


class SessionState(str, Enum):
    """Lifecycle states of a :class:`StreamSession`."""

    IDLE = "idle"
    REQUESTING = "requesting"
    STREAMING = "streaming"
    COMPLETED = "completed"
    ABORTED = "aborted"
    FAILED = "failed"


TERMINAL_STATES = frozenset({SessionState.COMPLETED, SessionState.ABORTED, SessionState.FAILED})


async def _sleep_zero() -> None:
    await asyncio.sleep(0)


class StreamSession:
    """Runs one streaming chat request against one provider.

    Parameters
    ----------
    descriptor:
        Provider to call and its credential.
    request:
        Normalized chat request.
    adapter:
        Vendor adapter; resolved from ``descriptor.kind`` when omitted.
    cancellation_token:
        Token the caller cancels to abort; a private one is created otherwise.
    client:
        Shared ``httpx.AsyncClient``. Borrowed clients are never closed; without
        one the session builds and closes its own.
    logger:
        Optional structured logger. ``None`` disables session logging.
    file_resolver:
        Resolves ``FileReference.file_id`` attachments to bytes.
    reattach_thinking:
        Prefix reasoning that arrived incrementally to the completed
        content as ``<think>…</think>``. On by default; the
        ``reasoning_details`` fallback and inline markup are never reattached.
    yield_to_host:
        Awaited after every text delta; defaults to ``asyncio.sleep(0)``.
    """

    def __init__(
        self,
        descriptor: ProviderDescriptor,
        request: ChatRequest,
        *,
        adapter: Optional[ProviderAdapter] = None,
        cancellation_token: Optional[CancellationToken] = None,
        client: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
        file_resolver: Optional[FileResolver] = None,
        reattach_thinking: bool = True,
        yield_to_host: Optional[Callable[[], Awaitable[None]]] = None,
    ) -> None:
        self.descriptor = descriptor
        self.request = request
        self.adapter = adapter or create_adapter(descriptor.kind)
        self.token = cancellation_token or CancellationToken()
        self._client = client
        self._logger = logger
        self._file_resolver = file_resolver
        self._reattach_thinking = reattach_thinking
        self._yield_to_host = yield_to_host or _sleep_zero
        self._state = SessionState.IDLE
        self._started = False
        self._content: List[str] = []
        self._thinking: List[str] = []
        self._usage = TokenUsage()
        self._decoder: Optional[StreamFrameDecoder] = None
        self._terminal: Optional[TerminalEvent] = None
        self.metrics = StreamMetrics()
        self.ctx = LogContext(
            provider=descriptor.kind.value,
            model=request.model,
            session_id=uuid.uuid4().hex[:12],
        )

    # ------------------------------------------------------------------ state

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def content(self) -> str:
        """Answer text accumulated so far."""
        return "".join(self._content)

    @property
    def thinking(self) -> str:
        """Structured reasoning text accumulated so far."""
        return "".join(self._thinking)

    @property
    def usage(self) -> TokenUsage:
        return self._usage

    @property
    def outcome(self) -> Optional[TerminalEvent]:
        """The terminal event once the session has ended."""
        return self._terminal

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cancellation; takes effect at the next poll point."""
        self.token.cancel(reason or "cancelled by caller")

    def snapshot(self) -> ThinkingContent:
        """Split the text received so far into thinking and visible content.

        Structured reasoning wins; otherwise inline markup is extracted from
        the accumulated content. Suitable for live rendering.
        """
        if self._thinking:
            return ThinkingContent(thinking=self.thinking.strip(), content=self.content)
        return extract_thinking(self.content)

    # ---------------------------------------------------------------- drivers

    async def events(self) -> AsyncIterator[StreamEvent]:
        """Yield the session's events, ending with exactly one terminal event.

        Raises
        ------
        RuntimeError
            If the session was already started.
        """
        if self._started:
            raise RuntimeError("StreamSession is single-use; create a new session per request")
        self._started = True
        self.metrics.start()
        try:
            async with aclosing(self._drive()) as frames:
                async for event in frames:
                    yield event
            terminal: TerminalEvent = self._completed()
        except CancelledError as exc:
            terminal = Aborted(reason=exc.reason)
        except ProviderError as exc:
            terminal = Failed(message=exc.message, code=exc.code)
        except httpx.HTTPError as exc:
            terminal = self._transport_failure(exc)
        except Exception as exc:  # noqa: BLE001 - any other failure ends the session as Failed
            if self._logger is not None:
                self._logger.exception("stream session crashed", extra={"session_id": self.ctx.session_id})
            terminal = Failed(message=str(exc) or exc.__class__.__name__, code=ErrorCode.INTERNAL)
        self._finish(terminal)
        yield terminal

    async def run(self, sink: CallbackSink) -> TerminalEvent:
        """Drive the session, dispatching every event to ``sink``."""
        async with aclosing(self.events()) as stream:
            async for event in stream:
                dispatch_event(sink, event)
        assert self._terminal is not None  # nosec B101 - events() always ends with a terminal event
        return self._terminal

    async def complete(self) -> Completed:
        """Drain the stream and return the ``Completed`` result.

        Raises
        ------
        CancelledError
            If the session was aborted.
        ProviderError
            If the session failed.
        """
        async with aclosing(self.events()) as stream:
            async for _ in stream:
                pass
        terminal = self._terminal
        if isinstance(terminal, Completed):
            return terminal
        if isinstance(terminal, Aborted):
            raise CancelledError(terminal.reason or DEFAULT_CANCEL_REASON)
        assert isinstance(terminal, Failed)  # nosec B101 - exhaustive over TerminalEvent
        raise ProviderError(
            code=terminal.code,
            message=terminal.message,
            provider=self.descriptor.kind.value,
            model=self.request.model,
        )

    # -------------------------------------------------------------- internals

    def _error(self, code: ErrorCode, message: str, raw: object = None) -> ProviderError:
        return ProviderError(
            code=code,
            message=message,
            provider=self.descriptor.kind.value,
            model=self.request.model,
            raw=raw,
        )

    def _check_descriptor(self) -> None:
        if is_unusable_key(self.descriptor.api_key):
            label = self.adapter.label_for(self.descriptor)
            raise self._error(
                ErrorCode.AUTH,
                f"{label} API key is not configured. Please set it in Settings.",
            )
        self.adapter.check_descriptor(self.descriptor)

    async def _resolve_file(self, ref: FileReference) -> FileReference:
        if ref.is_resolved:
            return ref
        if self._file_resolver is None:
            raise self._error(ErrorCode.VALIDATION, f"Cannot attach {ref.name}: no file resolver configured")
        try:
            resolved: ResolvedFile = await self._file_resolver.resolve(ref.file_id or "")
        except ProviderError:
            raise
        except Exception as exc:
            code = ErrorCode.NOT_FOUND if isinstance(exc, (LookupError, FileNotFoundError)) else classify_exception(exc)
            raise self._error(code, f"Cannot attach {ref.name}: {exc}", raw=exc) from exc
        return FileReference(
            name=ref.name or resolved.name,
            mime_type=ref.mime_type or resolved.mime_type,
            data=resolved.to_reference().data,
        )

    async def _resolved_request(self) -> ChatRequest:
        if all(ref.is_resolved for ref in self.request.files):
            return self.request
        files = [await self._resolve_file(ref) for ref in self.request.files]
        return self.request.with_files(files)

    async def _drive(self) -> AsyncIterator[FrameEvent]:
        self.token.raise_if_cancelled()
        self._check_descriptor()
        request = await self._resolved_request()
        spec = self.adapter.build(request, self.descriptor)

        self._state = SessionState.REQUESTING
        if self._logger is not None:
            normalized_log_event(
                self._logger,
                "stream.start",
                self.ctx,
                phase="start",
                attempt=1,
                emitted=False,
                tokens=None,
                url=spec.redacted_url,
                files=len(request.files),
                reasoning=request.reasoning.active_effort,
            )

        owned = self._client is None
        client = build_async_client() if owned else self._client
        try:
            self.token.raise_if_cancelled()
            response = await client.send(spec.to_httpx(client), stream=True)
            try:
                if not response.is_success:
                    body = await response.aread()
                    raise self._http_failure(response.status_code, body)
                self._state = SessionState.STREAMING
                decoder = StreamFrameDecoder(
                    self.adapter,
                    provider=self.descriptor.kind.value,
                    model=self.request.model,
                    logger=self._logger,
                    ctx=self.ctx,
                )
                self._decoder = decoder
                async for chunk in response.aiter_bytes():
                    self.token.raise_if_cancelled()
                    for event in decoder.feed(chunk):
                        self.token.raise_if_cancelled()
                        yield await self._forward(event)
                for event in decoder.close():
                    self.token.raise_if_cancelled()
                    yield await self._forward(event)
                self.token.raise_if_cancelled()
            finally:
                await response.aclose()
        finally:
            if owned:
                await client.aclose()

    async def _forward(self, event: FrameEvent) -> FrameEvent:
        """Absorb ``event`` into the aggregates; pauses for the host on text deltas."""
        if isinstance(event, Token):
            self._content.append(event.text)
            self.metrics.record_delta()
            await self._yield_to_host()
        elif isinstance(event, ReasoningToken):
            self._thinking.append(event.text)
            self.metrics.record_delta()
            await self._yield_to_host()
        elif isinstance(event, UsageUpdate):
            self._usage = event.to_usage()
            self.metrics.record_usage(self._usage)
        return event

    def _http_failure(self, status: int, body: bytes) -> ProviderError:
        code = code_for_status(status)
        message = self.adapter.http_error(self.descriptor, status, body)
        if self._logger is not None:
            log_event(
                self._logger,
                "stream.http_error",
                self.ctx,
                level=logging.WARNING,
                status=status,
                error_code=code.value,
            )
        return self._error(code, message)

    def _transport_failure(self, exc: httpx.HTTPError) -> Failed:
        label = self.adapter.label_for(self.descriptor)
        detail = str(exc) or exc.__class__.__name__
        return Failed(message=f"{label} request failed: {detail}", code=classify_exception(exc))

    def _completed(self) -> Completed:
        content = self.content
        thinking: Optional[str] = self.thinking or None
        if thinking is not None:
            if self._reattach_thinking:
                content = wrap_thinking(thinking, content)
            return Completed(content=content, thinking=thinking, usage=self._usage)
        if self._decoder is not None:
            thinking = self._decoder.state.fallback_thinking()
        if thinking is None:
            extracted = extract_thinking(content)
            if extracted.thinking:
                thinking, content = extracted.thinking, extracted.content
        return Completed(content=content, thinking=thinking, usage=self._usage)

    def _finish(self, terminal: TerminalEvent) -> None:
        self._terminal = terminal
        if isinstance(terminal, Completed):
            self._state = SessionState.COMPLETED
        elif isinstance(terminal, Aborted):
            self._state = SessionState.ABORTED
        else:
            self._state = SessionState.FAILED
        finalize_stream(logger=self._logger, ctx=self.ctx, metrics=self.metrics, outcome=terminal)


__all__ = ["StreamSession", "SessionState", "TERMINAL_STATES"]
