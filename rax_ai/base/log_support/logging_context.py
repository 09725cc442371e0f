"""Structured logging context object.

This module defines :class:`LogContext`, a dataclass carrying the common
fields of request and stream log events (model, request id, endpoint and
attempt metadata). ``to_dict`` merges the ``extra`` mapping and prunes
``None`` values for clean structured output.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for client logging events."""

    endpoint: Optional[str] = None
    method: Optional[str] = None
    model: Optional[str] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
