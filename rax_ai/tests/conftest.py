"""Pytest configuration for the rax_ai test suite.

Every test runs with the ``RAX_*`` environment cleared and ``.env`` loading
pointed at a non-existent file, so a developer's local credentials never
leak into assertions. Network access is faked with ``httpx.MockTransport``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Iterator, List

import httpx
import pytest

from rax_ai.base.logging import configure_logger
from rax_ai.client import RaxAI
from rax_ai.config.env import reset_dotenv_cache

_ENV_VARS = (
    "RAX_API_KEY",
    "RAXAI_API_KEY",
    "RAX_BASE_URL",
    "RAX_TIMEOUT",
    "RAX_MAX_RETRIES",
    "RAX_RETRY_DELAY",
    "RAX_MODEL",
    "RAX_LOG_LEVEL",
)

TEST_BASE_URL = "https://api.rax.test/api"
TEST_API_KEY = "sk-live-0123456789"  # pragma: allowlist secret - fake credential


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Clear client env vars and disable ``.env`` discovery for one test."""

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "absent.env"))
    reset_dotenv_cache()
    yield
    reset_dotenv_cache()
    configure_logger(level=logging.WARNING)


class SleepRecorder:
    """Awaitable stand-in for ``asyncio.sleep`` that records requested delays."""

    def __init__(self) -> None:
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture()
def sleeps() -> SleepRecorder:
    return SleepRecorder()


class RecordingStream(httpx.AsyncByteStream):
    """Async byte stream yielding fixed parts; remembers whether it was closed.

    ``fail_after`` raises ``httpx.ReadError`` once that many parts were sent.
    """

    def __init__(self, parts: List[bytes], *, fail_after: int | None = None) -> None:
        self.parts = parts
        self.fail_after = fail_after
        self.sent = 0
        self.closed = False

    async def __aiter__(self):
        for part in self.parts:
            if self.fail_after is not None and self.sent >= self.fail_after:
                raise httpx.ReadError("connection reset by peer")
            self.sent += 1
            yield part

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture()
def make_client(sleeps: SleepRecorder) -> Callable[..., RaxAI]:
    """Return a factory building a ``RaxAI`` bound to a mock transport handler."""

    def _make(handler: Callable[[httpx.Request], Any], **kwargs: Any) -> RaxAI:
        kwargs.setdefault("api_key", TEST_API_KEY)
        kwargs.setdefault("base_url", TEST_BASE_URL)
        kwargs.setdefault("sleep", sleeps)
        return RaxAI(transport=httpx.MockTransport(handler), **kwargs)

    return _make


def completion_body(content: str = "Hello!", **overrides: Any) -> dict:
    body = {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "rax-4.0",
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}
        ],
        "usage": {"prompt_tokens": 5, "completion_tokens": 2, "total_tokens": 7},
    }
    body.update(overrides)
    return body


def chat_request(**overrides: Any) -> dict:
    req = {"model": "rax-4.0", "messages": [{"role": "user", "content": "Hi"}]}
    req.update(overrides)
    return req


def sse_lines(*payloads: Any, done: bool = True) -> bytes:
    """Encode payloads as ``data:`` lines (dicts become JSON)."""
    out = []
    for p in payloads:
        out.append(f"data: {json.dumps(p) if isinstance(p, dict) else p}\n")
    if done:
        out.append("data: [DONE]\n")
    return "".join(out).encode("utf-8")


def delta(content: str) -> dict:
    return {"choices": [{"delta": {"content": content}}]}


@pytest.fixture()
def helpers():
    """Expose the payload builders above to test modules."""

    class _Helpers:
        completion_body = staticmethod(completion_body)
        chat_request = staticmethod(chat_request)
        sse_lines = staticmethod(sse_lines)
        delta = staticmethod(delta)
        RecordingStream = RecordingStream
        base_url = TEST_BASE_URL
        api_key = TEST_API_KEY

    return _Helpers
