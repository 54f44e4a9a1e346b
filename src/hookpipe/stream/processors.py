"""Stream processors: turn complete lines of streamed text into messages."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class StreamProcessor(ABC):
    """Splits buffered stream text into messages."""

    @abstractmethod
    def process_chunk(self, chunk: str) -> list[str]:
        """Return the messages contained in *chunk* (complete lines only)."""

    @abstractmethod
    def process_final(self, data: str) -> Optional[str]:
        """Return the last message in the unterminated tail *data*, if any."""


class LineStreamProcessor(StreamProcessor):
    """One message per non-blank line, e.g. newline-delimited JSON."""

    def process_chunk(self, chunk: str) -> list[str]:
        return [line.strip() for line in chunk.split("\n") if line.strip()]

    def process_final(self, data: str) -> Optional[str]:
        lines = self.process_chunk(data)
        return lines[-1] if lines else None


class SSEStreamProcessor(StreamProcessor):
    """Server-sent events: keep ``data:`` lines and strip the prefix.

    Args:
        prefix: Line prefix that marks a payload line.
    """

    def __init__(self, prefix: str = "data: ") -> None:
        self.prefix = prefix

    def _payload_lines(self, data: str) -> list[str]:
        lines = (line.strip() for line in data.split("\n"))
        return [line for line in lines if line and line.startswith(self.prefix)]

    def process_chunk(self, chunk: str) -> list[str]:
        return [line[len(self.prefix):].strip() for line in self._payload_lines(chunk)]

    def process_final(self, data: str) -> Optional[str]:
        lines = self._payload_lines(data)
        if not lines:
            return None
        return lines[-1][len(self.prefix):].strip()
