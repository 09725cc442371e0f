"""Validation rules of request and response DTOs."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from rax_ai.base.models import (
    ChatMessage,
    ChatRequest,
    ChatResponse,
    ModelList,
    TokenUsage,
    UsageStats,
)


def test_chat_request_payload_drops_unset_fields():
    req = ChatRequest(model="rax-4.0", messages=[ChatMessage(role="user", content="Hi")], temperature=0.7)
    payload = req.to_payload()
    assert payload == {  # nosec B101
        "model": "rax-4.0",
        "messages": [{"role": "user", "content": "Hi"}],
        "temperature": 0.7,
    }
    assert req.to_payload(stream=False)["stream"] is False  # nosec B101


def test_chat_request_forwards_extra_parameters():
    req = ChatRequest.model_validate(
        {"model": "m", "messages": [{"role": "user", "content": "x"}], "seed": 42, "response_format": {"type": "json"}}
    )
    payload = req.to_payload()
    assert payload["seed"] == 42 and payload["response_format"] == {"type": "json"}  # nosec B101


def test_message_order_and_name_preserved():
    req = ChatRequest.model_validate(
        {
            "model": "m",
            "messages": [
                {"role": "system", "content": "be brief"},
                {"role": "user", "content": "q", "name": "alice"},
                {"role": "assistant", "content": "a"},
            ],
        }
    )
    assert [m.role for m in req.messages] == ["system", "user", "assistant"]  # nosec B101
    assert req.to_payload()["messages"][1]["name"] == "alice"  # nosec B101


@pytest.mark.parametrize(
    "overrides",
    [
        {"messages": []},
        {"model": ""},
        {"max_tokens": 0},
        {"temperature": 2.5},
        {"temperature": -0.1},
        {"top_p": 1.5},
        {"presence_penalty": 3},
        {"messages": [{"role": "tool", "content": "x"}]},
    ],
)
def test_chat_request_rejects_invalid_values(overrides):
    data = {"model": "m", "messages": [{"role": "user", "content": "x"}]}
    data.update(overrides)
    with pytest.raises(ValidationError):
        ChatRequest.model_validate(data)


def test_chat_response_literal_round_trip():
    raw = {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "rax-4.0",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": "Hello!"}, "finish_reason": "stop"}],
        "usage": {"prompt_tokens": 5, "completion_tokens": 2, "total_tokens": 7},
    }
    resp = ChatResponse.model_validate(raw)
    assert resp.text == "Hello!"  # nosec B101
    assert resp.usage is not None and resp.usage.total_tokens == 7  # nosec B101
    assert resp.to_dict() == raw  # nosec B101


def test_null_content_and_unknown_fields_tolerated():
    resp = ChatResponse.model_validate(
        {
            "id": "x",
            "created": 1,
            "model": "m",
            "choices": [{"index": 0, "message": {"role": "assistant", "content": None}, "finish_reason": None}],
            "system_fingerprint": "fp_1",
        }
    )
    assert resp.text == ""  # nosec B101
    assert resp.usage is None  # nosec B101
    assert resp.to_dict()["system_fingerprint"] == "fp_1"  # nosec B101


def test_token_usage_total_must_match():
    with pytest.raises(ValidationError):
        TokenUsage(prompt_tokens=5, completion_tokens=2, total_tokens=8)


def test_model_list_accepts_both_entry_shapes():
    listing = ModelList.model_validate(
        {
            "object": "list",
            "data": [
                {"id": "rax-4.0", "object": "model", "created": 1, "owned_by": "rax"},
                {"id": "rax-mini", "name": "Rax Mini", "context_length": 32000, "tier": "free"},
            ],
        }
    )
    assert listing.ids() == ["rax-4.0", "rax-mini"]  # nosec B101
    assert listing.data[0].display_name == "rax-4.0"  # nosec B101
    assert listing.data[1].display_name == "Rax Mini"  # nosec B101
    assert listing.data[1].model_dump()["tier"] == "free"  # nosec B101


@pytest.mark.parametrize(
    "window_key,rows_key",
    [("period", "daily_breakdown"), ("date_range", "breakdown")],
)
def test_usage_stats_accepts_both_spellings(window_key, rows_key):
    stats = UsageStats.model_validate(
        {
            "total_requests": 3,
            "total_tokens": 120,
            "total_cost": 0.02,
            window_key: {"start": "2024-01-01", "end": "2024-01-31"},
            rows_key: [{"date": "2024-01-02", "requests": 3, "tokens": 120, "cost": 0.02}],
        }
    )
    assert stats.window is not None and stats.window.end == "2024-01-31"  # nosec B101
    assert [d.date for d in stats.days] == ["2024-01-02"]  # nosec B101


def test_usage_stats_minimal():
    stats = UsageStats.model_validate({"total_requests": 0, "total_tokens": 0, "total_cost": 0})
    assert stats.window is None and stats.days == []  # nosec B101


def test_minimal_literal_response():
    resp = ChatResponse.model_validate_json(
        '{"id":"x","object":"chat.completion","created":1,"model":"m","choices":[{"index":0,'
        '"message":{"role":"assistant","content":"hi"},"finish_reason":"stop"}],'
        '"usage":{"prompt_tokens":1,"completion_tokens":1,"total_tokens":2}}'
    )
    assert resp.choices[0].message.content == "hi"  # nosec B101
