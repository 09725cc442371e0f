"""
Closed set of API error classifications.

Values mirror the ``error.type`` strings emitted by the remote API and are
considered a stable public contract: callers branch on them instead of on
exception subclasses or message text.
"""
from __future__ import annotations

from enum import Enum


class ErrorType(str, Enum):
    """Enumerated error categories surfaced on :class:`ApiError`."""

    AUTHENTICATION = "authentication_error"
    RATE_LIMIT = "rate_limit_exceeded"
    INVALID_REQUEST = "invalid_request_error"
    SERVER = "server_error"
    NETWORK = "network_error"

    @classmethod
    def parse(cls, value: object) -> "ErrorType | None":
        """Return the member whose value equals ``value`` or ``None``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value == value:
                    return member
        return None


__all__ = ["ErrorType"]
