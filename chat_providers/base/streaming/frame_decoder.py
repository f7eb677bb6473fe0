"""Line-oriented frame decoders for streamed HTTP bodies.

Purpose
-------
Turn an unbounded sequence of raw byte buffers (sizes and boundaries chosen
by the transport) into complete protocol frames. Two dialects are supported:

- ``SSE``: ``\\n``-terminated lines; only lines starting with the literal
  ``"data: "`` prefix carry a payload and the frame is the text after it.
  Every other line (``event:``, ``id:``, comments, blanks) is ignored.
- ``NDJSON``: ``\\n``-terminated lines; each non-blank (after stripping) line
  is one frame.

Partial lines
-------------
Bytes go through an incremental UTF-8 decoder (a multi-byte character split
across two reads is reassembled) into a text buffer that is split on
``\\n``. The trailing segment after the last separator is retained until more
bytes complete it. At end of stream a retained segment that never closed is
discarded, never emitted: a truncated final line cannot produce a false frame.
A trailing ``\\r`` is removed from every line so CRLF servers decode the same.
"""
from __future__ import annotations

import codecs
import logging
from enum import Enum
from typing import Iterable, Iterator, List, Optional

from ..constants import FRAME_SEPARATOR, SSE_DATA_PREFIX
from ..logging import get_logger, log_event

_logger = get_logger("providers.streaming.decoder")


class FrameDialect(str, Enum):
    """Wire framing conventions understood by :func:`make_decoder`."""

    SSE = "sse"
    NDJSON = "ndjson"


class FrameDecoder:
    """Buffering line splitter; subclasses decide which lines are frames.

    The decoder is push-style (``feed`` / ``close``) with a pull-style
    convenience (``decode``) for composing with transport iterators. One
    instance serves exactly one response body.
    """

    dialect: FrameDialect

    def __init__(self) -> None:
        self._text = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self._closed = False

    @property
    def pending(self) -> str:
        """Retained incomplete segment (not yet a frame)."""
        return self._buffer

    def feed(self, chunk: bytes) -> List[str]:
        """Consume one transport buffer; return the frames it completed."""
        if self._closed:
            raise ValueError("decoder already closed")
        if not chunk:
            return []
        self._buffer += self._text.decode(chunk)
        if FRAME_SEPARATOR not in self._buffer:
            return []
        *lines, self._buffer = self._buffer.split(FRAME_SEPARATOR)
        frames: List[str] = []
        for line in lines:
            frame = self._frame_from_line(line.rstrip("\r"))
            if frame is not None:
                frames.append(frame)
        return frames

    def close(self) -> None:
        """Signal end of stream; drop any unterminated trailing segment."""
        if self._closed:
            return
        self._closed = True
        tail = self._buffer + self._text.decode(b"", final=True)
        self._buffer = ""
        if tail.strip():
            log_event(
                _logger,
                "stream.truncated",
                level=logging.DEBUG,
                dialect=self.dialect.value,
                dropped_chars=len(tail),
            )

    def decode(self, chunks: Iterable[bytes]) -> Iterator[str]:
        """Yield frames lazily from ``chunks`` and close at exhaustion."""
        for chunk in chunks:
            yield from self.feed(chunk)
        self.close()

    def _frame_from_line(self, line: str) -> Optional[str]:  # pragma: no cover - abstract
        raise NotImplementedError


class SseLineDecoder(FrameDecoder):
    """``data: <body>`` lines become frames; all other lines are ignored."""

    dialect = FrameDialect.SSE

    def _frame_from_line(self, line: str) -> Optional[str]:
        if line.startswith(SSE_DATA_PREFIX):
            return line[len(SSE_DATA_PREFIX):]
        return None


class NdjsonDecoder(FrameDecoder):
    """Every non-blank line is one JSON document."""

    dialect = FrameDialect.NDJSON

    def _frame_from_line(self, line: str) -> Optional[str]:
        stripped = line.strip()
        return stripped or None


def make_decoder(dialect: FrameDialect) -> FrameDecoder:
    """Return a fresh decoder for ``dialect``."""
    if dialect is FrameDialect.SSE:
        return SseLineDecoder()
    if dialect is FrameDialect.NDJSON:
        return NdjsonDecoder()
    raise ValueError(f"unsupported frame dialect: {dialect!r}")


__all__ = [
    "FrameDialect",
    "FrameDecoder",
    "SseLineDecoder",
    "NdjsonDecoder",
    "make_decoder",
]
