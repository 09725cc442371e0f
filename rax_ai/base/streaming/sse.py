"""Server-sent event line handling for chat streaming.

Purpose:
- ``LineBuffer`` turns arbitrarily split byte reads into complete text lines.
  Multi-byte UTF-8 sequences split across reads are reassembled by an
  incremental decoder, and a trailing partial line is held back until its
  newline arrives, so a line is never parsed early.
- ``event_data`` and ``translate_payload`` map one complete line to a
  :class:`StreamChunk`.

Notes:
- These helpers do no I/O. ``translate_payload`` raises ``ValueError`` on
  malformed JSON so the caller decides whether to log and skip.
"""

from __future__ import annotations

import codecs
import json
from typing import Any, List, Optional

from ..constants import SSE_DATA_PREFIX, SSE_DONE_SENTINEL
from .streaming import TERMINAL_CHUNK, StreamChunk


class LineBuffer:
    """Incremental assembler of newline-delimited text.

    ``feed`` returns the lines completed by the new data (without the
    delimiter and without a trailing ``\\r``). Text after the last newline is
    retained for the next ``feed``.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._pending = ""

    @property
    def pending(self) -> str:
        """Text received after the last complete line."""
        return self._pending

    def feed(self, data: bytes | str) -> List[str]:
        text = self._decoder.decode(data) if isinstance(data, (bytes, bytearray)) else data
        if not text:
            return []
        self._pending += text
        *complete, self._pending = self._pending.split("\n")
        return [line[:-1] if line.endswith("\r") else line for line in complete]

    def close(self) -> str:
        """Flush the decoder and return (and clear) any unterminated remainder."""
        rest = self._pending + self._decoder.decode(b"", final=True)
        self._pending = ""
        return rest


def event_data(line: str) -> Optional[str]:
    """Return the payload of a ``data:`` line, or ``None`` for any other line.

    Comment (``:``), keep-alive, ``event:``/``id:`` and blank lines yield
    ``None``.
    """
    if not line.startswith(SSE_DATA_PREFIX):
        return None
    return line[len(SSE_DATA_PREFIX):].strip()


def _delta_content(data: Any) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return None
    delta = choices[0].get("delta")
    if not isinstance(delta, dict):
        return None
    content = delta.get("content")
    return content if isinstance(content, str) else None


def translate_payload(payload: str) -> Optional[StreamChunk]:
    """Translate one event payload into a chunk.

    Returns:
        The terminal chunk for ``[DONE]``, a content chunk when the payload
        carries non-empty ``choices[0].delta.content``, otherwise ``None``
        (role-only deltas, finish markers, unknown shapes).

    Raises:
        ValueError: The payload is not valid JSON.
    """
    if payload == SSE_DONE_SENTINEL:
        return TERMINAL_CHUNK
    data = json.loads(payload)
    if content := _delta_content(data):
        return StreamChunk(content=content, done=False)
    return None


__all__ = [
    "LineBuffer",
    "event_data",
    "translate_payload",
]
