"""Server-sent event frame decoding.

``StreamFrameDecoder`` turns raw response chunks into typed events:

1. Bytes are decoded with an incremental UTF-8 decoder, so a multi-byte
   character split across two network reads is not mangled.
2. Text is split into lines. The trailing partial line is kept and prefixed
   to the next chunk; ``close()`` flushes whatever remains at end of stream.
3. Blank lines, ``:`` comments and ``event:``/``id:``/``retry:`` fields are
   ignored. ``data:`` lines carry JSON; the ``[DONE]`` sentinel is ignored.
4. Malformed JSON is skipped (debug-logged) and decoding continues.
5. A frame carrying an ``error`` member raises ``ProviderError``.
6. Everything else is handed to the vendor adapter's ``parse_frame``.
"""

from __future__ import annotations

import codecs
import json
import logging
from typing import TYPE_CHECKING, List, Optional

from ..errors import ProviderError
from ..log_support import LogContext
from ..logging import log_event
from ..utils.vendor_errors import error_code_for_payload, extract_error_message
from .events import FrameEvent
from .frame_state import FrameState

if TYPE_CHECKING:
    from ..interfaces import ProviderAdapter

DATA_PREFIX = "data:"
DONE_SENTINEL = "[DONE]"
_IGNORED_FIELDS = ("event:", "id:", "retry:")


class LineBuffer:
    """Reassembles newline-delimited lines from arbitrary byte chunks."""

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending = ""

    def feed(self, chunk: bytes) -> List[str]:
        """Return the complete lines contained in ``chunk`` plus buffered text."""
        text = self._pending + self._decoder.decode(chunk)
        lines = text.split("\n")
        self._pending = lines.pop()
        return [line.rstrip("\r") for line in lines]

    def close(self) -> List[str]:
        """Flush the decoder and return the final unterminated line, if any."""
        tail = self._pending + self._decoder.decode(b"", final=True)
        self._pending = ""
        return [tail] if tail else []

    @property
    def pending(self) -> str:
        return self._pending


class StreamFrameDecoder:
    """Decodes one response body into ``Token``/``ReasoningToken``/``UsageUpdate`` events.

    Parameters
    ----------
    adapter:
        Vendor adapter whose ``parse_frame`` interprets JSON payloads.
    provider:
        Provider kind value, used in raised errors.
    model:
        Model id, used in raised errors.
    logger:
        Optional logger; malformed frames are reported at debug level.
    ctx:
        Optional log context of the owning session.
    """

    def __init__(
        self,
        adapter: "ProviderAdapter",
        *,
        provider: str,
        model: str,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
    ) -> None:
        self._adapter = adapter
        self._provider = provider
        self._model = model
        self._logger = logger
        self._ctx = ctx
        self._lines = LineBuffer()
        self.state = FrameState()
        self.malformed = 0

    def feed(self, chunk: bytes) -> List[FrameEvent]:
        events: List[FrameEvent] = []
        for line in self._lines.feed(chunk):
            events.extend(self.decode_line(line))
        return events

    def close(self) -> List[FrameEvent]:
        events: List[FrameEvent] = []
        for line in self._lines.close():
            events.extend(self.decode_line(line))
        return events

    def decode_line(self, line: str) -> List[FrameEvent]:
        """Decode a single SSE line."""
        line = line.strip()
        if not line or line.startswith(":") or line.startswith(_IGNORED_FIELDS):
            return []
        if not line.startswith(DATA_PREFIX):
            return []
        data = line[len(DATA_PREFIX):].strip()
        if not data or data == DONE_SENTINEL:
            return []
        try:
            payload = json.loads(data)
        except ValueError:
            self.malformed += 1
            if self._logger is not None:
                log_event(
                    self._logger,
                    "stream.decode_error",
                    self._ctx,
                    level=logging.DEBUG,
                    preview=data[:120],
                )
            return []
        if not isinstance(payload, dict):
            return []
        message = extract_error_message(payload)
        if message is not None:
            code = error_code_for_payload(payload)
            raise ProviderError(code=code, message=message, provider=self._provider, model=self._model, raw=payload)
        self.state.frames += 1
        return self._adapter.parse_frame(payload, self.state)


__all__ = ["StreamFrameDecoder", "LineBuffer", "DATA_PREFIX", "DONE_SENTINEL"]
