"""Success plugins that consume streamed ``httpx`` responses.

When a task returns an :class:`httpx.Response` carrying a stream content
type, the plugin reads it chunk by chunk during ``onSuccess``, splits it
into messages with a :class:`~hookpipe.stream.processors.StreamProcessor`,
and reports each one through ``on_stream_chunk``.

Example::

    plugin = AsyncResponseStreamPlugin(
        sse_prefix="data: ",
        on_stream_chunk=lambda message, event: print(message),
    )
    executor = AsyncExecutor().use(plugin)
    await executor.exec({"url": url}, lambda ctx: client.send(request, stream=True))
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Callable, Iterable, Optional

import httpx

from hookpipe.exceptions import HookpipeError
from hookpipe.executor.context import ExecutionContext
from hookpipe.executor.plugin import ExecutorPlugin
from hookpipe.stream.event import StreamEvent
from hookpipe.stream.processors import (
    LineStreamProcessor,
    SSEStreamProcessor,
    StreamProcessor,
)

DEFAULT_STREAM_CONTENT_TYPES = ("text/event-stream", "application/x-ndjson")

ChunkCallback = Callable[[str, StreamEvent], None]
DoneCallback = Callable[[], None]


class _ResponseStreamBase(ExecutorPlugin):
    def __init__(
        self,
        processor: Optional[StreamProcessor] = None,
        stream_content_types: Sequence[str] = (),
        sse_prefix: Optional[str] = None,
        on_stream_chunk: Optional[ChunkCallback] = None,
        on_stream_done: Optional[DoneCallback] = None,
    ) -> None:
        self.processor = processor
        self.stream_content_types = tuple(DEFAULT_STREAM_CONTENT_TYPES) + tuple(stream_content_types)
        self.sse_prefix = sse_prefix
        self._on_chunk = on_stream_chunk
        self._on_done = on_stream_done

    def emit_chunk(self, message: str, event: StreamEvent) -> None:
        """Report one message. Override instead of passing ``on_stream_chunk``."""
        if self._on_chunk is not None:
            self._on_chunk(message, event)

    def emit_done(self) -> None:
        if self._on_done is not None:
            self._on_done()

    def create_processor(self) -> StreamProcessor:
        if self.processor is not None:
            return self.processor
        if self.sse_prefix:
            return SSEStreamProcessor(self.sse_prefix)
        return LineStreamProcessor()

    def is_stream_response(self, context: ExecutionContext) -> bool:
        response = context.return_value
        if not isinstance(response, httpx.Response):
            return False
        params = context.parameters
        if isinstance(params, Mapping) and params.get("response_type") == "stream":
            return True
        content_type = response.headers.get("content-type", "")
        return any(kind in content_type for kind in self.stream_content_types)

    def _stream_failed(self, response: httpx.Response) -> HookpipeError:
        return HookpipeError(
            f"Stream request failed with status {response.status_code}: {response.text}"
        )

    def _feed(self, event: StreamEvent, chunk: Any) -> None:
        event.append(event.parse_chunk(chunk))
        for message in event.process_buffer():
            self.emit_chunk(message, event)

    def _close(self, event: StreamEvent) -> Optional[str]:
        tail = event.flush()
        event.finish()
        if tail is not None:
            self.emit_chunk(tail, event)
        self.emit_done()
        return event.last_message


class ResponseStreamPlugin(_ResponseStreamBase):
    """Read a streamed response synchronously with ``iter_text()``.

    Args:
        processor: Message splitter. Defaults to :class:`SSEStreamProcessor`
            when *sse_prefix* is set, otherwise :class:`LineStreamProcessor`.
        stream_content_types: Extra content types treated as streams.
        sse_prefix: Payload prefix for server-sent events.
        on_stream_chunk: Called with ``(message, event)`` per message.
        on_stream_done: Called once the stream is exhausted.
    """

    plugin_name = "ResponseStreamPlugin"

    def on_success(self, context: ExecutionContext) -> None:
        if self.is_stream_response(context):
            self.handle_stream_response(context.return_value)

    def handle_stream_response(self, response: httpx.Response) -> Optional[str]:
        """Consume *response* and return its final message.

        Raises:
            HookpipeError: If the response status is not 2xx.
        """
        if not response.is_success:
            response.read()
            raise self._stream_failed(response)
        event = StreamEvent(self.create_processor())
        try:
            return self.stream_with_event(response.iter_text(), event)
        finally:
            response.close()

    def stream_with_event(self, chunks: Iterable[Any], event: StreamEvent) -> Optional[str]:
        for chunk in chunks:
            if event.is_finished():
                break
            self._feed(event, chunk)
        return self._close(event)


class AsyncResponseStreamPlugin(_ResponseStreamBase):
    """Async twin of :class:`ResponseStreamPlugin`, reading with ``aiter_text()``."""

    plugin_name = "AsyncResponseStreamPlugin"

    async def on_success(self, context: ExecutionContext) -> None:
        if self.is_stream_response(context):
            await self.handle_stream_response(context.return_value)

    async def handle_stream_response(self, response: httpx.Response) -> Optional[str]:
        if not response.is_success:
            await response.aread()
            raise self._stream_failed(response)
        event = StreamEvent(self.create_processor())
        try:
            async for chunk in response.aiter_text():
                if event.is_finished():
                    break
                self._feed(event, chunk)
        finally:
            await response.aclose()
        return self._close(event)
