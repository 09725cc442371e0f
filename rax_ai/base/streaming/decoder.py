"""Stream decoder: chat completions over server-sent events.

Summary:
- One POST with ``stream=true`` and ``Accept: text/event-stream``; streaming
  is single-attempt and never retried
- A non-2xx first response fails the sequence before any chunk is produced
- The body is read incrementally; complete ``data:`` lines are translated to
  :class:`StreamChunk` values in arrival order

Termination:
- ``data: [DONE]`` produces the terminal chunk and ends the sequence
- A clean end of body without ``[DONE]`` also produces the terminal chunk; an
  unterminated trailing fragment is discarded, never parsed
- A transport failure mid-body raises ``ApiError`` (``network_error``)

Resources:
- The response is closed on every exit path, including a consumer that stops
  iterating early (``aclose()``) and task cancellation.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Callable, Mapping

import httpx

from ..constants import CHAT_COMPLETIONS_ENDPOINT
from ..errors import error_from_response, network_error
from ..http.client import build_headers, new_request_id
from ..logging import LogContext, get_logger, log_event, normalized_log_event
from ..timeouts import operation_timeout
from .sse import LineBuffer, event_data, translate_payload
from .streaming import TERMINAL_CHUNK, StreamChunk


class StreamDecoder:
    """Opens a streaming chat completion and yields its chunks.

    Parameters:
        http_client: The ``httpx.AsyncClient`` used to open the stream.
        config_getter: Zero-argument callable returning the current
            :class:`~rax_ai.config.ClientConfig`.
    """

    def __init__(self, http_client: httpx.AsyncClient, config_getter: Callable[[], Any]) -> None:
        self._http = http_client
        self._config_getter = config_getter
        self._logger = get_logger("rax_ai.stream")

    async def stream(self, payload: Mapping[str, Any]) -> AsyncIterator[StreamChunk]:
        """Yield chunks for the chat request ``payload``.

        ``payload["stream"]`` is forced to ``True``; the caller's mapping is
        not modified. Nothing happens on the network until the first
        ``__anext__``.

        Raises:
            ApiError: Connection failure, timeout while starting, non-2xx
                status, or a transport failure while reading.
        """
        config = self._config_getter()
        request_id = new_request_id()
        body = {**payload, "stream": True}
        ctx = LogContext(
            endpoint=CHAT_COMPLETIONS_ENDPOINT,
            method="POST",
            model=body.get("model"),
            request_id=request_id,
        )
        request = self._http.build_request(
            "POST",
            f"{config.base_url}{CHAT_COMPLETIONS_ENDPOINT}",
            headers=build_headers(config, request_id, stream=True),
            json=body,
        )
        normalized_log_event(self._logger, "stream.start", ctx, phase="start", attempt=0)

        try:
            async with operation_timeout(config.timeout):
                response = await self._http.send(request, stream=True)
        except (httpx.RequestError, TimeoutError) as e:
            err = network_error(e, request_id)
            self._log_error(ctx, err, emitted=0)
            raise err from e

        emitted = 0
        try:
            if not response.is_success:
                try:
                    async with operation_timeout(config.timeout):
                        await response.aread()
                except (httpx.RequestError, TimeoutError) as e:
                    err = network_error(e, request_id)
                    self._log_error(ctx, err, emitted=0)
                    raise err from e
                err = error_from_response(response, request_id)
                self._log_error(ctx, err, emitted=0)
                raise err

            buffer = LineBuffer()
            try:
                async for raw in response.aiter_bytes():
                    for line in buffer.feed(raw):
                        chunk = self._translate(line, ctx)
                        if chunk is None:
                            continue
                        if chunk.done:
                            self._log_finalize(ctx, emitted, reason="done")
                            yield chunk
                            return
                        emitted += 1
                        yield chunk
            except httpx.RequestError as e:
                err = network_error(e, request_id)
                self._log_error(ctx, err, emitted=emitted)
                raise err from e

            if leftover := buffer.close().strip():
                log_event(self._logger, "stream.partial_discarded", ctx, level=logging.DEBUG, size=len(leftover))
            self._log_finalize(ctx, emitted, reason="eof")
            yield TERMINAL_CHUNK
        finally:
            await response.aclose()

    def _translate(self, line: str, ctx: LogContext) -> StreamChunk | None:
        payload = event_data(line)
        if payload is None:
            return None
        try:
            return translate_payload(payload)
        except ValueError:
            log_event(self._logger, "stream.decode_error", ctx, level=logging.DEBUG, code="DECODE", size=len(payload))
            return None

    def _log_finalize(self, ctx: LogContext, emitted: int, *, reason: str) -> None:
        normalized_log_event(self._logger, "stream.finalize", ctx, phase="finalize", attempt=0, emitted=emitted, reason=reason)

    def _log_error(self, ctx: LogContext, err, *, emitted: int) -> None:
        normalized_log_event(
            self._logger,
            "stream.error",
            ctx,
            phase="start" if emitted == 0 else "stream",
            attempt=0,
            error_code=err.type.value,
            emitted=emitted,
            level=logging.WARNING,
            status=err.status,
            message=err.message,
        )


__all__ = ["StreamDecoder"]
