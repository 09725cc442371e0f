"""rax_ai: asynchronous client for the Rax AI chat-completion API.

Public surface:
- ``RaxAI``: the client (chat completions, streaming, models, usage)
- ``ClientConfig`` / ``ConfigError``: validated settings
- ``ApiError`` / ``ErrorType``: the single error type raised for failed calls
- Request and response DTOs plus ``StreamChunk`` / ``ChatStream``
"""

from .base.constants import SDK_VERSION
from .base.errors import ApiError, ErrorType
from .base.models import (
    ChatChoice,
    ChatMessage,
    ChatRequest,
    ChatResponse,
    DailyUsage,
    DateRange,
    Model,
    ModelList,
    TokenUsage,
    UsageStats,
)
from .base.streaming import ChatStream, StreamChunk
from .client import RaxAI
from .config import ClientConfig, ConfigError, get_default_model

__version__ = SDK_VERSION

__all__ = [
    "RaxAI",
    "ClientConfig",
    "ConfigError",
    "get_default_model",
    "ApiError",
    "ErrorType",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "ChatChoice",
    "TokenUsage",
    "Model",
    "ModelList",
    "UsageStats",
    "DailyUsage",
    "DateRange",
    "StreamChunk",
    "ChatStream",
    "__version__",
]
