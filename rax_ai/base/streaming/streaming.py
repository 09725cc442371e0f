"""Streaming primitives.

Keeps streaming value types separate from the request/response DTOs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class StreamChunk:
    """One incremental piece of assistant output.

    Fields:
      content: text fragment (empty on the terminal chunk)
      done: True on the terminal chunk; nothing follows it
    """

    content: str
    done: bool = False


TERMINAL_CHUNK = StreamChunk(content="", done=True)


def accumulate_chunks(chunks: Iterable[StreamChunk]) -> str:
    """Concatenate the content of ``chunks`` up to and including the terminal one."""
    parts = []
    for chunk in chunks:
        parts.append(chunk.content)
        if chunk.done:
            break
    return "".join(parts)


__all__ = [
    "StreamChunk",
    "TERMINAL_CHUNK",
    "accumulate_chunks",
]
