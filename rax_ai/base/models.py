"""Typed request and response shapes (stable import path).

Request DTOs live in ``base.dto``; response DTOs in ``base.models_parts``.
"""

from .dto.chat import ChatMessage, ChatRequest, Role
from .models_parts import (
    ChatChoice,
    ChatResponse,
    DailyUsage,
    DateRange,
    Model,
    ModelList,
    TokenUsage,
    UsageStats,
)

__all__ = [
    "Role",
    "ChatMessage",
    "ChatRequest",
    "ChatChoice",
    "ChatResponse",
    "TokenUsage",
    "Model",
    "ModelList",
    "DailyUsage",
    "DateRange",
    "UsageStats",
]
