"""ChatStream: the cancellable iterator handed to callers.

Wraps the decoder's async generator so that every way of leaving a stream
(terminal chunk, error, ``break`` plus ``aclose()``, ``async with`` exit,
task cancellation) releases the underlying HTTP response promptly, without
waiting for garbage collection to finalize the generator.
"""
from __future__ import annotations

from typing import AsyncIterator, List, Optional

from .streaming import StreamChunk


class ChatStream:
    """Finite, non-restartable async iterator of :class:`StreamChunk`.

    Usage::

        async with client.chat.completions.create_stream(request) as stream:
            async for chunk in stream:
                print(chunk.content, end="")

    The connection opens on the first iteration step. Once the terminal chunk
    has been produced (or the stream was closed) further iteration stops
    immediately; open a new stream to ask again.
    """

    def __init__(self, source: AsyncIterator[StreamChunk]) -> None:
        self._source = source
        self._finished = False
        self._closed = False
        self._emitted = 0
        self._terminal: Optional[StreamChunk] = None

    def __aiter__(self) -> "ChatStream":
        return self

    async def __anext__(self) -> StreamChunk:
        if self._finished or self._closed:
            raise StopAsyncIteration
        try:
            chunk = await self._source.__anext__()
        except StopAsyncIteration:
            self._finished = True
            await self.aclose()
            raise
        except BaseException:
            self._finished = True
            await self.aclose()
            raise
        if chunk.done:
            self._finished = True
            self._terminal = chunk
            await self.aclose()
        else:
            self._emitted += 1
        return chunk

    async def aclose(self) -> None:
        """Stop the stream and release its connection. Idempotent."""
        if self._closed:
            return
        self._closed = True
        aclose = getattr(self._source, "aclose", None)
        if aclose is not None:
            await aclose()

    async def __aenter__(self) -> "ChatStream":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def collect(self) -> str:
        """Consume the remaining chunks and return their joined content."""
        parts: List[str] = []
        async for chunk in self:
            parts.append(chunk.content)
        return "".join(parts)

    @property
    def finished(self) -> bool:  # noqa: D401 - short property
        """Whether the terminal chunk was produced or iteration ended."""
        return self._finished

    @property
    def closed(self) -> bool:  # noqa: D401 - short property
        """Whether the underlying source has been closed."""
        return self._closed

    @property
    def emitted(self) -> int:  # noqa: D401 - short property
        """Number of content chunks produced so far."""
        return self._emitted


__all__ = ["ChatStream"]
