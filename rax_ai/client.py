"""Rax AI API client.

Summary:
- ``RaxAI`` owns one ``httpx.AsyncClient`` and exposes the API as resource
  namespaces (``chat.completions``, ``models``, ``usage``) plus flat
  convenience methods
- Non-streaming calls go through :class:`RequestExecutor` (timeout, retry,
  error classification); streaming calls return a :class:`ChatStream` backed
  by :class:`StreamDecoder` (single attempt)
- JSON results are validated into pydantic DTOs; a success body with an
  unexpected shape surfaces as ``ApiError(server_error, code="invalid_response")``

Configuration:
- Built from :meth:`ClientConfig.from_env` merged with explicit arguments,
  or passed ready-made via ``config=``. The config is immutable;
  :meth:`RaxAI.set_api_key` swaps in a new instance (single writer: do not
  rotate while requests are in flight).
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Type, TypeVar, Union
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel, ValidationError

from .base.constants import CHAT_COMPLETIONS_ENDPOINT, MODELS_ENDPOINT, USAGE_ENDPOINT
from .base.errors import ApiError, ErrorType
from .base.http import RequestExecutor, build_async_client
from .base.logging import get_logger, log_event
from .base.models import ChatRequest, ChatResponse, ModelList, UsageStats
from .base.streaming import ChatStream, StreamDecoder
from .config import ClientConfig

M = TypeVar("M", bound=BaseModel)

ChatRequestLike = Union[ChatRequest, Mapping[str, Any]]
DateLike = Union[str, _dt.date, None]


def _coerce_request(request: ChatRequestLike) -> ChatRequest:
    """Accept a ``ChatRequest`` or a plain mapping; validate the latter."""
    if isinstance(request, ChatRequest):
        return request
    return ChatRequest.model_validate(dict(request))


def _decode(model: Type[M], data: Any) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ApiError(
            status=200,
            type=ErrorType.SERVER,
            message=f"unexpected {model.__name__} shape: {e.error_count()} validation error(s)",
            code="invalid_response",
            retryable=False,
            raw=e,
        ) from e


def _date_param(value: DateLike) -> Optional[str]:
    if value is None or value == "":
        return None
    if isinstance(value, _dt.datetime):
        return value.date().isoformat()
    if isinstance(value, _dt.date):
        return value.isoformat()
    return str(value)


def usage_endpoint(start_date: DateLike = None, end_date: DateLike = None) -> str:
    """Return the usage path with only the query parameters that are set."""
    params = {
        k: v
        for k, v in (("start_date", _date_param(start_date)), ("end_date", _date_param(end_date)))
        if v is not None
    }
    return f"{USAGE_ENDPOINT}?{urlencode(params)}" if params else USAGE_ENDPOINT


class ChatCompletions:
    """``client.chat.completions`` namespace."""

    def __init__(self, client: "RaxAI") -> None:
        self._client = client

    async def create(self, request: ChatRequestLike) -> ChatResponse:
        """Run a non-streaming chat completion.

        The request's ``stream`` flag is sent as ``false`` regardless of its
        value; use :meth:`create_stream` for streaming.
        """
        payload = _coerce_request(request).to_payload(stream=False)
        data = await self._client._executor.execute("POST", CHAT_COMPLETIONS_ENDPOINT, payload)
        return _decode(ChatResponse, data)

    def create_stream(self, request: ChatRequestLike) -> ChatStream:
        """Return a lazy stream of chunks for ``request``.

        Request validation happens here; the connection opens on the first
        iteration. Always close the stream (``async with`` or ``aclose()``)
        when stopping before the terminal chunk.
        """
        payload = _coerce_request(request).to_payload(stream=True)
        return ChatStream(self._client._decoder.stream(payload))


class Chat:
    """``client.chat`` namespace; calling it runs a non-streaming completion."""

    def __init__(self, client: "RaxAI") -> None:
        self.completions = ChatCompletions(client)

    async def __call__(self, request: ChatRequestLike) -> ChatResponse:
        return await self.completions.create(request)


class Models:
    """``client.models`` namespace."""

    def __init__(self, client: "RaxAI") -> None:
        self._client = client

    async def list(self) -> ModelList:
        data = await self._client._executor.execute("GET", MODELS_ENDPOINT)
        return _decode(ModelList, data)


class Usage:
    """``client.usage`` namespace."""

    def __init__(self, client: "RaxAI") -> None:
        self._client = client

    async def get(self, start_date: DateLike = None, end_date: DateLike = None) -> UsageStats:
        """Fetch usage statistics, optionally bounded by ISO dates (inclusive)."""
        data = await self._client._executor.execute("GET", usage_endpoint(start_date, end_date))
        return _decode(UsageStats, data)


class RaxAI:
    """Asynchronous client for the Rax AI API.

    Parameters:
        api_key: Bearer credential. Falls back to ``RAX_API_KEY``; a missing
            or blank key raises :class:`~rax_ai.config.ConfigError` here,
            never on the first call.
        base_url: API root (default production URL).
        timeout: Per-attempt timeout in seconds.
        max_retries: Retries after the first attempt for transient failures.
        retry_delay: Base backoff delay in seconds.
        config: A complete :class:`ClientConfig`; when given the arguments
            above must be omitted.
        transport: Optional ``httpx`` transport for the owned client.
        http_client: Optional externally managed ``httpx.AsyncClient``; it is
            not closed by :meth:`aclose`.
        sleep: Optional backoff sleep (defaults to ``asyncio.sleep``).

    Usage::

        async with RaxAI(api_key="...") as rax:
            reply = await rax.chat({"model": "rax-4.0", "messages": [...]})
            print(reply.text)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ) -> None:
        explicit = {
            "api_key": api_key,
            "base_url": base_url,
            "timeout": timeout,
            "max_retries": max_retries,
            "retry_delay": retry_delay,
        }
        if config is not None:
            if any(v is not None for v in explicit.values()):
                raise ValueError("pass either config or individual settings, not both")
            self._config = config
        else:
            self._config = ClientConfig.from_env(**explicit)

        self._owns_http = http_client is None
        self._http = http_client or build_async_client(self._config, transport=transport)
        self._executor = RequestExecutor(self._http, lambda: self._config, sleep=sleep)
        self._decoder = StreamDecoder(self._http, lambda: self._config)
        self._logger = get_logger("rax_ai.client")

        self.chat = Chat(self)
        self.models = Models(self)
        self.usage = Usage(self)

    # ---- Flat convenience API ----
    async def chat_completion(self, request: ChatRequestLike) -> ChatResponse:
        return await self.chat.completions.create(request)

    def chat_stream(self, request: ChatRequestLike) -> ChatStream:
        return self.chat.completions.create_stream(request)

    async def get_models(self) -> ModelList:
        return await self.models.list()

    async def get_usage(self, start_date: DateLike = None, end_date: DateLike = None) -> UsageStats:
        return await self.usage.get(start_date, end_date)

    async def validate_key(self) -> bool:
        """Return True when the credential can list models.

        Any :class:`ApiError` (including network failures after retries)
        yields False.
        """
        try:
            await self.models.list()
        except ApiError as e:
            log_event(self._logger, "client.validate_key", ok=False, error_code=e.type.value, status=e.status)
            return False
        log_event(self._logger, "client.validate_key", ok=True)
        return True

    # ---- Configuration ----
    @property
    def config(self) -> ClientConfig:
        return self._config

    def get_config(self) -> Dict[str, Any]:
        """Return the non-secret settings (``base_url``, ``timeout``, retry policy)."""
        return self._config.public_dict()

    def set_api_key(self, api_key: str) -> None:
        """Rotate the credential for subsequent calls.

        Not safe to call concurrently with in-flight requests: a call reads
        the config once when it starts.
        """
        self._config = self._config.with_api_key(api_key)

    # ---- Lifecycle ----
    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "RaxAI":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


__all__ = [
    "RaxAI",
    "Chat",
    "ChatCompletions",
    "Models",
    "Usage",
    "usage_endpoint",
]
