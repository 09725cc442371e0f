from __future__ import annotations

import asyncio
import functools
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Protocol, TypeVar

from ..constants import MAX_RETRY_AFTER_SECONDS
from ..errors import ApiError

T = TypeVar("T")


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: ApiError | None,
    ) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    """Exponential backoff policy.

    ``max_retries`` retries follow the first attempt. Before retry ``n``
    (0-based attempt index of the failure) the policy waits
    ``base_delay * 2**n`` seconds, raised to the server's ``Retry-After``
    hint when that is larger. The hint is capped at ``max_retry_after``.
    """

    max_retries: int = 3
    base_delay: float = 1.0
    max_retry_after: float = MAX_RETRY_AFTER_SECONDS
    attempt_logger: AttemptLogger | None = None
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def backoff(self, attempt: int, retry_after: Optional[float] = None) -> float:
        delay = self.base_delay * 2**attempt
        if retry_after is not None and retry_after > delay:
            return max(delay, min(retry_after, self.max_retry_after))
        return delay


DEFAULT_RETRY_CONFIG = RetryConfig()


def retry(config: RetryConfig = DEFAULT_RETRY_CONFIG):
    """Return a decorator applying the retry policy to a coroutine function.

    - Retries only on :class:`ApiError` instances flagged ``retryable``
    - Attempts are strictly sequential; never more than ``max_attempts`` calls
    - The last observed error is re-raised once attempts are exhausted
    - Cancellation during a backoff wait propagates immediately
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            for attempt in range(config.max_attempts):
                try:
                    result = await func(*args, **kwargs)
                except ApiError as e:
                    last = attempt == config.max_attempts - 1
                    delay = None if (last or not e.retryable) else config.backoff(attempt, e.retry_after)
                    if config.attempt_logger:
                        config.attempt_logger(
                            attempt=attempt,
                            max_attempts=config.max_attempts,
                            delay=delay,
                            error=e,
                        )
                    if delay is None:
                        raise
                    await config.sleep(delay)
                    continue
                if config.attempt_logger:
                    config.attempt_logger(
                        attempt=attempt,
                        max_attempts=config.max_attempts,
                        delay=None,
                        error=None,
                    )
                return result
            # max_attempts >= 1, so every path above returns or raises.
            raise RuntimeError("retry: reached terminal state without outcome")  # pragma: no cover

        return wrapper

    return decorator


__all__ = [
    "AttemptLogger",
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "retry",
]
