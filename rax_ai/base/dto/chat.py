"""
Pydantic DTOs and validators for outbound chat requests.

Purpose
-------
Validate chat payloads before they leave the process. Roles, the non-empty
message sequence and numeric parameter bounds are enforced here so a bad
request fails locally with a ``pydantic.ValidationError`` instead of costing
a round trip that ends in ``invalid_request_error``.

External dependencies: Pydantic only (no network calls).

Design
------
- The generation parameters are an open set: fields not declared below are
  accepted and forwarded unchanged (``extra="allow"``).
- ``to_payload`` produces the JSON body, dropping unset parameters.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


Role = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    """A single conversation turn.

    Attributes:
        role: One of ``system``, ``user`` or ``assistant``.
        content: Message text. ``null`` from the server is read as ``""``.
        name: Optional participant name.
    """

    model_config = ConfigDict(extra="allow")

    role: Role
    content: str = ""
    name: Optional[str] = None

    @field_validator("content", mode="before")
    @classmethod
    def _none_content_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ChatRequest(BaseModel):
    """Chat completion request.

    Parameters:
        model: Target model identifier (non-empty).
        messages: Conversation in order (non-empty).
        max_tokens: If provided, must be positive.
        temperature: If provided, must be within [0.0, 2.0].
        top_p: Nucleus-sampling threshold within [0.0, 1.0].
        frequency_penalty: Within [-2.0, 2.0].
        presence_penalty: Within [-2.0, 2.0].
        stop: A stop sequence or a list of them.
        stream: Streaming flag; the client sets it per operation.
        user: Opaque end-user tag.

    Raises:
        ValidationError: On invalid roles, an empty message list or
            out-of-range parameters.
    """

    model_config = ConfigDict(extra="allow")

    model: str = Field(..., min_length=1)
    messages: List[ChatMessage] = Field(..., min_length=1)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    frequency_penalty: Optional[float] = Field(default=None, ge=-2.0, le=2.0)
    presence_penalty: Optional[float] = Field(default=None, ge=-2.0, le=2.0)
    stop: Optional[Union[str, List[str]]] = None
    stream: Optional[bool] = None
    user: Optional[str] = None

    def to_payload(self, *, stream: Optional[bool] = None) -> Dict[str, Any]:
        """Return the JSON request body.

        Unset parameters are omitted. When ``stream`` is given it overrides
        the instance's flag (``False`` is sent explicitly).
        """
        data = self.model_dump(exclude_none=True)
        if stream is not None:
            data["stream"] = stream
        return data


__all__ = [
    "Role",
    "ChatMessage",
    "ChatRequest",
]
