"""Resilience policies (retry/backoff) shared by the request layer."""

from .retry import DEFAULT_RETRY_CONFIG, RetryConfig, retry

__all__ = ["DEFAULT_RETRY_CONFIG", "RetryConfig", "retry"]
