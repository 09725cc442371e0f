"""Timeout guard for blocking request phases.

``operation_timeout`` is the single place where a wall-clock bound is put
around an awaited network operation. Both the request executor (send plus
body read, per attempt) and the stream decoder (connection start) use it, so
no other module introduces ad-hoc timers.

The guard delegates to :func:`asyncio.timeout`: when the deadline elapses the
enclosed task is cancelled at its current suspension point, which makes
httpx abort the in-flight request and release its connection, and
:class:`TimeoutError` is raised to the caller.

Failure Modes
-------------
TimeoutError raised from the ``async with`` block when the deadline elapses.
A non-positive ``seconds`` makes the guard inert.
"""
from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator


@asynccontextmanager
async def operation_timeout(seconds: float | None) -> AsyncIterator[None]:
    """Async context manager enforcing a wall-clock timeout.

    If ``seconds`` is ``None`` or <= 0 the guard is inert.
    """
    if not seconds or seconds <= 0:
        yield
        return
    async with asyncio.timeout(seconds):
        yield


__all__ = ["operation_timeout"]
