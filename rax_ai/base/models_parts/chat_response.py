"""
ChatResponse DTOs decoded from ``/v1/chat/completions``.

Unknown fields returned by the server are preserved (``extra="allow"``) so
newer API versions do not break older clients.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from ..dto.chat import ChatMessage


class TokenUsage(BaseModel):
    """Token accounting for one completion.

    ``total_tokens`` must equal ``prompt_tokens + completion_tokens``.
    """

    model_config = ConfigDict(extra="allow")

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int

    @model_validator(mode="after")
    def _total_matches(self) -> "TokenUsage":
        if self.total_tokens != self.prompt_tokens + self.completion_tokens:
            raise ValueError(
                "total_tokens must equal prompt_tokens + completion_tokens "
                f"({self.total_tokens} != {self.prompt_tokens} + {self.completion_tokens})"
            )
        return self


class ChatChoice(BaseModel):
    model_config = ConfigDict(extra="allow")

    index: int
    message: ChatMessage
    finish_reason: Optional[str] = None


class ChatResponse(BaseModel):
    """A non-streaming chat completion.

    Attributes:
        id: Completion identifier.
        object: Object tag (``"chat.completion"``).
        created: Creation time (epoch seconds).
        model: Model that produced the completion.
        choices: Candidate completions, in server order.
        usage: Token counts, when reported.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    object: str = "chat.completion"
    created: int
    model: str
    choices: List[ChatChoice]
    usage: Optional[TokenUsage] = None

    @property
    def text(self) -> str:
        """Content of the first choice (``""`` when there is none)."""
        return self.choices[0].message.content if self.choices else ""

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


__all__ = [
    "TokenUsage",
    "ChatChoice",
    "ChatResponse",
]
