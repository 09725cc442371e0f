"""
Client Base Package

Exports the request/stream engines, error taxonomy, DTOs and shared
infrastructure (logging, timeouts, retry policy) used by ``rax_ai.client``.

Layering:
- Errors: closed-set classification carried by ``ApiError``
- Models (DTOs): pydantic request/response shapes
- HTTP: client construction, headers and the retrying request executor
- Streaming: SSE line assembly, the stream decoder and ``ChatStream``

Nothing in this package imports ``rax_ai.config`` or ``rax_ai.client``; the
configuration object is passed in through a getter.
"""

from .errors import ApiError, ErrorType
from .http import RequestExecutor, build_async_client, build_headers
from .models import (
    ChatChoice,
    ChatMessage,
    ChatRequest,
    ChatResponse,
    DailyUsage,
    DateRange,
    Model,
    ModelList,
    Role,
    TokenUsage,
    UsageStats,
)
from .resilience import RetryConfig, retry
from .streaming import ChatStream, LineBuffer, StreamChunk, StreamDecoder
from .timeouts import operation_timeout

__all__ = [
    "ApiError",
    "ErrorType",
    "RequestExecutor",
    "build_async_client",
    "build_headers",
    "ChatChoice",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "DailyUsage",
    "DateRange",
    "Model",
    "ModelList",
    "Role",
    "TokenUsage",
    "UsageStats",
    "RetryConfig",
    "retry",
    "ChatStream",
    "LineBuffer",
    "StreamChunk",
    "StreamDecoder",
    "operation_timeout",
]
