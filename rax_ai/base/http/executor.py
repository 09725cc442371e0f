"""Request executor: one logical API operation with timeout and retry.

Summary:
- Builds the request from the endpoint, method and optional JSON body
- Guards every attempt (send + body read) with ``operation_timeout``
- Classifies outcomes: 2xx returns decoded JSON, 4xx (except 429) fails
  immediately, 429/5xx/transport failures are retried with exponential
  backoff through :func:`~rax_ai.base.resilience.retry.retry`

Errors:
- Every failure surfaces as :class:`~rax_ai.base.errors.ApiError`. Transport
  failures that exhaust the budget surface with ``status=0`` and type
  ``network_error``; a 2xx body that is not JSON is a non-retryable
  ``server_error`` with code ``invalid_json``.

State:
- The executor holds only the HTTP client and a config getter. Retry
  counters and request ids live in the ``execute`` call frame, so concurrent
  calls never share mutable state.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Optional

import httpx

from ..errors import ApiError, decode_error, error_from_response, network_error
from ..logging import LogContext, get_logger, normalized_log_event
from ..resilience.retry import RetryConfig, retry
from ..timeouts import operation_timeout
from .client import build_headers, new_request_id

_ALLOWED_METHODS = ("GET", "POST")


class RequestExecutor:
    """Executes API operations against the configured base URL.

    Parameters:
        http_client: The ``httpx.AsyncClient`` used for every attempt.
        config_getter: Zero-argument callable returning the current
            :class:`~rax_ai.config.ClientConfig`. Read once per call so a
            credential rotation applies to the next call, never mid-call.
        sleep: Optional awaitable sleep used for backoff waits (tests inject a
            recorder; production uses ``asyncio.sleep``).
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        config_getter: Callable[[], Any],
        *,
        sleep: Optional[Callable[[float], Any]] = None,
    ) -> None:
        self._http = http_client
        self._config_getter = config_getter
        self._sleep = sleep
        self._logger = get_logger("rax_ai.http")

    def _retry_config(self, config, ctx: LogContext) -> RetryConfig:
        def _log_attempt(*, attempt: int, max_attempts: int, delay: float | None, error: ApiError | None) -> None:
            if error is None:
                return
            normalized_log_event(
                self._logger,
                "request.retry" if delay is not None else "request.error",
                ctx,
                phase="attempt" if delay is not None else "finalize",
                attempt=attempt,
                error_code=error.type.value,
                emitted=False,
                level=logging.WARNING,
                status=error.status,
                delay_s=delay,
                max_attempts=max_attempts,
                message=error.message,
            )

        kwargs = {"sleep": self._sleep} if self._sleep is not None else {}
        return RetryConfig(
            max_retries=config.max_retries,
            base_delay=config.retry_delay,
            attempt_logger=_log_attempt,
            **kwargs,
        )

    async def execute(self, method: str, endpoint: str, body: Any = None) -> Any:
        """Perform the operation and return the decoded JSON payload.

        Parameters:
            method: ``"GET"`` or ``"POST"`` (case-insensitive).
            endpoint: Path (and optional query string) appended verbatim to
                the configured base URL.
            body: JSON-serializable request body; ignored for GET.

        Returns:
            The decoded JSON value of the first successful response.

        Raises:
            ValueError: Unsupported HTTP method.
            ApiError: Non-retryable failure, or the last failure once
                ``max_retries + 1`` attempts are spent.
        """
        method = method.upper()
        if method not in _ALLOWED_METHODS:
            raise ValueError(f"unsupported HTTP method: {method}")
        config = self._config_getter()
        request_id = new_request_id()
        url = f"{config.base_url}{endpoint}"
        headers = build_headers(config, request_id)
        payload = None if method == "GET" else body
        model = payload.get("model") if isinstance(payload, dict) else None
        ctx = LogContext(endpoint=endpoint, method=method, model=model, request_id=request_id)
        counter = {"attempt": 0}
        normalized_log_event(
            self._logger, "request.start", ctx, phase="start", attempt=0, max_attempts=config.total_attempts
        )

        @retry(self._retry_config(config, ctx))
        async def _attempt() -> Any:
            attempt = counter["attempt"]
            counter["attempt"] += 1
            return await self._send_once(method, url, headers, payload, config.timeout, request_id, ctx, attempt)

        return await _attempt()

    async def _send_once(
        self,
        method: str,
        url: str,
        headers: dict,
        payload: Any,
        timeout: float,
        request_id: str,
        ctx: LogContext,
        attempt: int,
    ) -> Any:
        """Run a single attempt and translate its outcome.

        Returns the decoded JSON on success; raises :class:`ApiError` (flagged
        ``retryable`` for 429/5xx/transport failures) otherwise.
        """
        normalized_log_event(self._logger, "request.attempt", ctx, phase="start", attempt=attempt, level=logging.DEBUG)
        started = time.perf_counter()
        try:
            async with operation_timeout(timeout):
                response = await self._http.request(method, url, headers=headers, json=payload)
        except (httpx.RequestError, TimeoutError) as e:
            raise network_error(e, request_id) from e

        if not response.is_success:
            raise error_from_response(response, request_id)

        try:
            result = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise decode_error(response.status_code, e, request_id) from e

        normalized_log_event(
            self._logger,
            "request.success",
            ctx,
            phase="finalize",
            attempt=attempt,
            emitted=True,
            status=response.status_code,
            latency_ms=int((time.perf_counter() - started) * 1000),
        )
        return result


__all__ = ["RequestExecutor"]
