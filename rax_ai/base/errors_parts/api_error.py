"""
Structured API error exception type.

Every remote failure (HTTP error response, undecodable success body, or a
transport failure that outlived the retry budget) surfaces as a single
:class:`ApiError` tagged with an :class:`ErrorType`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .error_type import ErrorType


@dataclass(eq=False)
class ApiError(Exception):
    """Represents a failed API operation.

    Attributes:
        status: HTTP status code of the failed response, ``0`` when no
            response was received.
        type: Normalized :class:`ErrorType` classification.
        message: Human-readable message, taken from the error body when present.
        code: Optional machine-readable code from the error body.
        param: Optional offending request parameter reported by the server.
        retry_after: Optional server hint (seconds) before retrying.
        request_id: ``X-Request-ID`` of the logical call that failed.
        retryable: Whether the executor treats this failure as transient.
        raw: Optional underlying exception for diagnostics.
    """

    status: int
    type: ErrorType
    message: str
    code: Optional[str] = None
    param: Optional[str] = None
    retry_after: Optional[float] = None
    request_id: Optional[str] = None
    retryable: bool = False
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.type.value} ({self.status}): {self.message}"

    @property
    def is_authentication(self) -> bool:
        return self.type is ErrorType.AUTHENTICATION

    @property
    def is_rate_limit(self) -> bool:
        return self.type is ErrorType.RATE_LIMIT

    @property
    def is_invalid_request(self) -> bool:
        return self.type is ErrorType.INVALID_REQUEST

    @property
    def is_server_error(self) -> bool:
        return self.type is ErrorType.SERVER

    @property
    def is_network(self) -> bool:
        return self.type is ErrorType.NETWORK

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable view (excludes ``raw``)."""
        return {
            "name": "ApiError",
            "message": self.message,
            "status": self.status,
            "type": self.type.value,
            "code": self.code,
            "param": self.param,
            "retry_after": self.retry_after,
            "request_id": self.request_id,
        }


__all__ = ["ApiError"]
