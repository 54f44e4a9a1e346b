"""Streamed response handling -- processors, buffering, and success plugins."""

from hookpipe.stream.event import StreamEvent
from hookpipe.stream.plugin import (
    DEFAULT_STREAM_CONTENT_TYPES,
    AsyncResponseStreamPlugin,
    ResponseStreamPlugin,
)
from hookpipe.stream.processors import (
    LineStreamProcessor,
    SSEStreamProcessor,
    StreamProcessor,
)

__all__ = [
    "AsyncResponseStreamPlugin",
    "DEFAULT_STREAM_CONTENT_TYPES",
    "LineStreamProcessor",
    "ResponseStreamPlugin",
    "SSEStreamProcessor",
    "StreamEvent",
    "StreamProcessor",
]
