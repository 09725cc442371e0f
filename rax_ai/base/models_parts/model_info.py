"""
Model listing DTOs decoded from ``/v1/models``.

Both listing shapes seen in the wild are accepted: the OpenAI-style
``{id, object, created, owned_by}`` entry and the platform shape carrying
``name``, ``description`` and ``context_length``.
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Model(BaseModel):
    """A single model listing entry."""

    model_config = ConfigDict(extra="allow")

    id: str
    object: Optional[str] = None
    created: Optional[int] = None
    owned_by: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    context_length: Optional[int] = None

    @property
    def display_name(self) -> str:
        return self.name or self.id


class ModelList(BaseModel):
    model_config = ConfigDict(extra="allow")

    object: str = "list"
    data: List[Model] = Field(default_factory=list)

    def ids(self) -> List[str]:
        """Return model identifiers in listing order."""
        return [m.id for m in self.data]


__all__ = [
    "Model",
    "ModelList",
]
