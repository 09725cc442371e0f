"""Base shared constants for the client.

Central location to avoid scattering magic strings across the request and
streaming layers.

Security
--------
This module contains only generic sentinel strings and header names. There
are no credentials or tokens embedded.

# pragma: allowlist secret
"""
from __future__ import annotations

SDK_VERSION = "1.0.0"
SDK_NAME = "rax-ai-sdk"
USER_AGENT = f"{SDK_NAME}/{SDK_VERSION}"

# Header names
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_ACCEPT = "Accept"
HEADER_USER_AGENT = "User-Agent"
HEADER_PLATFORM = "X-Platform"
HEADER_REQUEST_ID = "X-Request-ID"

JSON_CONTENT_TYPE = "application/json"
EVENT_STREAM_CONTENT_TYPE = "text/event-stream"

# Server-sent event framing
SSE_DATA_PREFIX = "data:"
SSE_DONE_SENTINEL = "[DONE]"

# Longest wait honored from a server Retry-After hint (seconds)
MAX_RETRY_AFTER_SECONDS = 60.0

# API endpoints (appended verbatim to the configured base URL)
CHAT_COMPLETIONS_ENDPOINT = "/v1/chat/completions"
MODELS_ENDPOINT = "/v1/models"
USAGE_ENDPOINT = "/v1/usage"

# Missing credential sentinel
MISSING_API_KEY_ERROR = "missing_api_key"  # pragma: allowlist secret - generic placeholder string, not a real secret

__all__ = [
    "SDK_VERSION",
    "SDK_NAME",
    "USER_AGENT",
    "HEADER_AUTHORIZATION",
    "HEADER_CONTENT_TYPE",
    "HEADER_ACCEPT",
    "HEADER_USER_AGENT",
    "HEADER_PLATFORM",
    "HEADER_REQUEST_ID",
    "JSON_CONTENT_TYPE",
    "EVENT_STREAM_CONTENT_TYPE",
    "SSE_DATA_PREFIX",
    "SSE_DONE_SENTINEL",
    "MAX_RETRY_AFTER_SECONDS",
    "CHAT_COMPLETIONS_ENDPOINT",
    "MODELS_ENDPOINT",
    "USAGE_ENDPOINT",
    "MISSING_API_KEY_ERROR",
]
