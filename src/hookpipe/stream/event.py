"""Buffering state for one streamed response."""

from __future__ import annotations

import codecs
from typing import Any, Optional

from hookpipe.stream.processors import StreamProcessor


class StreamEvent:
    """Accumulates stream text and hands complete lines to a processor.

    Text after the last newline stays buffered until more data arrives or
    :meth:`done` flushes it.

    Args:
        processor: Splits complete lines into messages.
        encoding: Used to decode ``bytes`` chunks.

    Example::

        event = StreamEvent(SSEStreamProcessor())
        event.append(event.parse_chunk(b"data: a\\ndata: b"))
        event.process_buffer()   # ["a"]
        event.done()             # "b"
    """

    def __init__(self, processor: StreamProcessor, encoding: str = "utf-8") -> None:
        self.processor = processor
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._buffer = ""
        self._times = 0
        self._finished = False
        self.last_message: Optional[str] = None

    @property
    def times(self) -> int:
        """Number of chunks parsed so far."""
        return self._times

    def parse_chunk(self, chunk: Any) -> str:
        self._times += 1
        if isinstance(chunk, (bytes, bytearray, memoryview)):
            return self._decoder.decode(bytes(chunk))
        return str(chunk)

    def append(self, text: str) -> None:
        if text:
            self._buffer += text

    def process_buffer(self) -> list[str]:
        """Return messages from every complete line in the buffer."""
        complete, sep, rest = self._buffer.rpartition("\n")
        if not sep:
            return []
        self._buffer = rest
        messages = self.processor.process_chunk(complete)
        if messages:
            self.last_message = messages[-1]
        return messages

    def flush(self) -> Optional[str]:
        """Process the unterminated tail and return its last message, if any."""
        tail = self._buffer + self._decoder.decode(b"", final=True)
        self._buffer = ""
        if not tail:
            return None
        final = self.processor.process_final(tail)
        if final is not None:
            self.last_message = final
        return final

    def done(self) -> Optional[str]:
        """Finish the stream and return the final message.

        Returns:
            The last message in the unterminated tail, or the last message
            seen when the tail holds none.
        """
        self.finish()
        self.flush()
        return self.last_message

    def finish(self) -> None:
        self._finished = True

    def is_finished(self) -> bool:
        return self._finished
