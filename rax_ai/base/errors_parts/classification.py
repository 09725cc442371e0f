"""
Error classification helpers.

Maps HTTP statuses to :class:`ErrorType`, decides which failures are
transient, and builds :class:`ApiError` instances from error responses and
transport exceptions.
"""
from __future__ import annotations

import json
from email.utils import parsedate_to_datetime
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from .api_error import ApiError
from .error_type import ErrorType


_HTTP_STATUS_MAP = {
    400: ErrorType.INVALID_REQUEST,
    401: ErrorType.AUTHENTICATION,
    403: ErrorType.AUTHENTICATION,
    429: ErrorType.RATE_LIMIT,
}

# Longest body excerpt used as a fallback message for non-JSON error bodies.
_MESSAGE_EXCERPT = 200


def type_for_status(status: int) -> ErrorType:
    """Return the :class:`ErrorType` implied by an HTTP status code.

    ``0`` (no response) maps to ``network_error``; unknown 4xx statuses map to
    ``invalid_request_error`` and everything else to ``server_error``.
    """
    if status == 0:
        return ErrorType.NETWORK
    if status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if 400 <= status < 500:
        return ErrorType.INVALID_REQUEST
    return ErrorType.SERVER


def is_retryable_status(status: int) -> bool:
    """Return True for statuses the executor retries (429 and 5xx)."""
    return status == 429 or status >= 500


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    """Parse a ``Retry-After`` header into seconds.

    Accepts delta-seconds or an HTTP date. Returns ``None`` for missing,
    negative or unparseable values.
    """
    if not value:
        return None
    value = value.strip()
    try:
        seconds = float(value)
    except ValueError:
        try:
            when = parsedate_to_datetime(value)
        except (TypeError, ValueError):
            return None
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        seconds = (when - datetime.now(timezone.utc)).total_seconds()
    return seconds if seconds >= 0 else None


def _error_section(body: Any) -> Mapping[str, Any]:
    if isinstance(body, Mapping):
        section = body.get("error")
        if isinstance(section, Mapping):
            return section
        if isinstance(section, str):
            return {"message": section}
    return {}


def error_from_body(
    status: int,
    body: Any,
    *,
    text: str = "",
    retry_after: Optional[float] = None,
    request_id: Optional[str] = None,
) -> ApiError:
    """Build an :class:`ApiError` from a decoded error body.

    The body's ``error.type`` wins when it belongs to the closed set; other
    values fall back to :func:`type_for_status`. Missing messages fall back to
    an excerpt of the raw text, then to a generic ``HTTP <status>`` string.
    """
    section = _error_section(body)
    error_type = ErrorType.parse(section.get("type")) or type_for_status(status)
    message = section.get("message") or text.strip()[:_MESSAGE_EXCERPT] or f"HTTP {status}"
    code = section.get("code")
    param = section.get("param")
    return ApiError(
        status=status,
        type=error_type,
        message=str(message),
        code=str(code) if code is not None else None,
        param=str(param) if param is not None else None,
        retry_after=retry_after,
        request_id=request_id,
        retryable=is_retryable_status(status),
    )


def error_from_response(response: Any, request_id: Optional[str] = None) -> ApiError:
    """Build an :class:`ApiError` from an ``httpx.Response`` whose body was read."""
    text = response.text
    try:
        body = json.loads(text) if text else None
    except ValueError:
        body = None
    return error_from_body(
        response.status_code,
        body,
        text=text,
        retry_after=parse_retry_after(response.headers.get("retry-after")),
        request_id=request_id,
    )


def network_error(exc: BaseException, request_id: Optional[str] = None) -> ApiError:
    """Wrap a transport-level failure (no response received)."""
    message = str(exc) or exc.__class__.__name__
    return ApiError(
        status=0,
        type=ErrorType.NETWORK,
        message=message,
        request_id=request_id,
        retryable=True,
        raw=exc,
    )


def decode_error(status: int, exc: BaseException, request_id: Optional[str] = None) -> ApiError:
    """Wrap a success response whose body is not valid JSON (never retried)."""
    return ApiError(
        status=status,
        type=ErrorType.SERVER,
        message=f"invalid JSON in response body: {exc}",
        code="invalid_json",
        request_id=request_id,
        retryable=False,
        raw=exc,
    )


__all__ = [
    "type_for_status",
    "is_retryable_status",
    "parse_retry_after",
    "error_from_body",
    "error_from_response",
    "network_error",
    "decode_error",
    "_HTTP_STATUS_MAP",
]
