"""Streaming package.

Exposes the chunk type, SSE line helpers, the decoder and the cancellable
stream wrapper under a single namespace.
"""

from .streaming import StreamChunk, TERMINAL_CHUNK, accumulate_chunks
from .sse import LineBuffer, event_data, translate_payload
from .decoder import StreamDecoder
from .stream_controller import ChatStream

__all__ = [
    "StreamChunk",
    "TERMINAL_CHUNK",
    "accumulate_chunks",
    "LineBuffer",
    "event_data",
    "translate_payload",
    "StreamDecoder",
    "ChatStream",
]
