"""Models parts package public surface.

Re-exports individual response DTOs so callers can import from
`rax_ai.base.models_parts` if needed, while `rax_ai.base.models` remains the
primary stable import path.
"""

from .chat_response import ChatChoice, ChatResponse, TokenUsage
from .model_info import Model, ModelList
from .usage_stats import DailyUsage, DateRange, UsageStats

__all__ = [
    "ChatChoice",
    "ChatResponse",
    "TokenUsage",
    "Model",
    "ModelList",
    "DailyUsage",
    "DateRange",
    "UsageStats",
]
