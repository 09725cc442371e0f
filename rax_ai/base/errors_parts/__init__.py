"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `rax_ai.base.errors` for the stable surface.
"""

from .error_type import ErrorType
from .api_error import ApiError
from .classification import (
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
