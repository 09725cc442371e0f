"""Unified API error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``rax_ai.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_type import ErrorType
from .errors_parts.api_error import ApiError
from .errors_parts.classification import (
    decode_error,
    error_from_body,
    error_from_response,
    is_retryable_status,
    network_error,
    parse_retry_after,
    type_for_status,
)

__all__ = [
    "ErrorType",
    "ApiError",
    "decode_error",
    "error_from_body",
    "error_from_response",
    "is_retryable_status",
    "network_error",
    "parse_retry_after",
    "type_for_status",
]
