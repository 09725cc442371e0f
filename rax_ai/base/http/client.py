"""HTTP client construction and standard request headers.

Purpose:
    Build the ``httpx.AsyncClient`` owned by a :class:`~rax_ai.client.RaxAI`
    instance and the header set attached to every request. Timeouts derive
    from :class:`~rax_ai.config.ClientConfig` only; no numeric literals are
    introduced here.

External dependencies:
    - ``httpx`` for the asynchronous HTTP transport.

Timeout strategy:
    - The client's per-operation httpx timeout (connect, read, write, pool)
      equals ``config.timeout``. While streaming this bounds the wait for each
      body read, so a silent server cannot hang a consumer. The executor
      still wraps every attempt in ``operation_timeout`` to bound the whole
      attempt, including body download.

Lifecycle & cleanup:
    - The owning client closes the ``AsyncClient`` via ``aclose()`` or its
      ``async with`` block. Tests inject an ``httpx.MockTransport`` through
      the ``transport`` argument.
"""

from __future__ import annotations

import uuid
from typing import Dict, Optional

import httpx

from ..constants import (
    EVENT_STREAM_CONTENT_TYPE,
    HEADER_ACCEPT,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    HEADER_PLATFORM,
    HEADER_REQUEST_ID,
    HEADER_USER_AGENT,
    JSON_CONTENT_TYPE,
)


def build_async_client(
    config,  # ClientConfig; untyped to keep base free of config imports
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Return a new ``httpx.AsyncClient`` configured from ``config``.

    Parameters:
        config: Client settings providing ``timeout``.
        transport: Optional transport override (``httpx.MockTransport`` in
            tests, custom proxies/retries-free transports in production).

    Returns:
        An ``AsyncClient`` the caller must close.
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.timeout),
        transport=transport,
        follow_redirects=True,
    )


def new_request_id() -> str:
    """Return a fresh identifier for one logical call (shared by its attempts)."""
    return f"req_{uuid.uuid4().hex}"


def build_headers(config, request_id: str, *, stream: bool = False) -> Dict[str, str]:
    """Build the standard header set for a request.

    Parameters:
        config: Client settings providing ``api_key``, ``user_agent`` and
            ``platform``.
        request_id: Identifier sent as ``X-Request-ID``.
        stream: When True, ask for a server-sent event body.

    Returns:
        Mapping of header names to values.
    """
    headers = {
        HEADER_AUTHORIZATION: f"Bearer {config.api_key}",
        HEADER_CONTENT_TYPE: JSON_CONTENT_TYPE,
        HEADER_USER_AGENT: config.user_agent,
        HEADER_PLATFORM: config.platform,
        HEADER_REQUEST_ID: request_id,
    }
    if stream:
        headers[HEADER_ACCEPT] = EVENT_STREAM_CONTENT_TYPE
    return headers


__all__ = ["build_async_client", "build_headers", "new_request_id"]
