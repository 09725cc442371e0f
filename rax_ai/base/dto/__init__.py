"""Request DTOs validated with Pydantic before any network I/O."""

from .chat import ChatMessage, ChatRequest, Role

__all__ = ["ChatMessage", "ChatRequest", "Role"]
