"""Public client surface: typed operations, key handling and configuration."""

from __future__ import annotations

import asyncio
import datetime as dt
import json

import httpx
import pytest

from rax_ai import ApiError, ClientConfig, ConfigError, RaxAI
from rax_ai.client import usage_endpoint


async def test_chat_completion_returns_typed_response(make_client, helpers):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=helpers.completion_body("Hello!"))

    async with make_client(handler) as client:
        resp = await client.chat.completions.create(helpers.chat_request(stream=True, temperature=0.2))
        flat = await client.chat_completion(helpers.chat_request())
        called = await client.chat(helpers.chat_request())

    assert resp.text == flat.text == called.text == "Hello!"  # nosec B101
    assert resp.usage.total_tokens == 7  # nosec B101
    body = json.loads(seen[0].content)
    assert body["stream"] is False  # nosec B101 - non-streaming always sends false
    assert body["temperature"] == 0.2  # nosec B101
    assert seen[0].url.path == "/api/v1/chat/completions"  # nosec B101


async def test_unexpected_response_shape_is_api_error(make_client, helpers):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"unexpected": True})

    async with make_client(handler) as client:
        with pytest.raises(ApiError) as ei:
            await client.chat_completion(helpers.chat_request())
    assert ei.value.is_server_error and ei.value.code == "invalid_response"  # nosec B101


async def test_usage_mismatch_in_response_is_rejected(make_client, helpers):
    bad = helpers.completion_body(usage={"prompt_tokens": 1, "completion_tokens": 1, "total_tokens": 5})

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=bad)

    async with make_client(handler) as client:
        with pytest.raises(ApiError):
            await client.chat_completion(helpers.chat_request())


async def test_models_list(make_client):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"  # nosec B101
        return httpx.Response(200, json={"object": "list", "data": [{"id": "rax-4.0"}, {"id": "rax-mini"}]})

    async with make_client(handler) as client:
        assert (await client.models.list()).ids() == ["rax-4.0", "rax-mini"]  # nosec B101
        assert len((await client.get_models()).data) == 2  # nosec B101


async def test_usage_query_parameters(make_client):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url)
        return httpx.Response(200, json={"total_requests": 1, "total_tokens": 10, "total_cost": 0.5})

    async with make_client(handler) as client:
        stats = await client.usage.get("2024-01-01", dt.date(2024, 1, 31))
        await client.get_usage()
        await client.get_usage(end_date="2024-02-01")

    assert stats.total_cost == 0.5  # nosec B101
    assert dict(seen[0].params) == {"start_date": "2024-01-01", "end_date": "2024-01-31"}  # nosec B101
    assert seen[1].query == b""  # nosec B101
    assert dict(seen[2].params) == {"end_date": "2024-02-01"}  # nosec B101


def test_usage_endpoint_builder():
    assert usage_endpoint() == "/v1/usage"  # nosec B101
    assert usage_endpoint("", None) == "/v1/usage"  # nosec B101
    assert usage_endpoint(dt.datetime(2024, 3, 1, 12, 0)) == "/v1/usage?start_date=2024-03-01"  # nosec B101


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(401, json={"error": {"message": "Invalid API key", "type": "authentication_error"}}),
        httpx.Response(403, text="forbidden"),
    ],
)
async def test_validate_key_false_on_api_error(make_client, response):
    async with make_client(lambda request: response) as client:
        assert await client.validate_key() is False  # nosec B101


async def test_validate_key_false_on_network_error(make_client, sleeps):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=request)

    async with make_client(handler, max_retries=1) as client:
        assert await client.validate_key() is False  # nosec B101
    assert sleeps.calls == [1.0]  # nosec B101


async def test_validate_key_true(make_client):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"object": "list", "data": []})

    async with make_client(handler) as client:
        assert await client.validate_key() is True  # nosec B101


def test_missing_key_fails_at_construction():
    with pytest.raises(ConfigError):
        RaxAI()
    with pytest.raises(ConfigError):
        RaxAI(api_key="   ")


def test_key_from_environment(monkeypatch):
    monkeypatch.setenv("RAX_API_KEY", "env-key")
    client = RaxAI()
    assert client.config.api_key == "env-key"  # nosec B101


def test_config_and_settings_are_exclusive():
    with pytest.raises(ValueError):
        RaxAI(api_key="k", config=ClientConfig(api_key="k"))


def test_get_config_is_stable_and_secret_free():
    client = RaxAI(api_key="secret-key", base_url="https://x.test/api/", timeout=10, max_retries=2, retry_delay=0.5)
    first, second = client.get_config(), client.get_config()
    assert first == second == {  # nosec B101
        "base_url": "https://x.test/api",
        "timeout": 10.0,
        "max_retries": 2,
        "retry_delay": 0.5,
    }
    assert "secret-key" not in json.dumps(first)  # nosec B101
    first["timeout"] = 99
    assert client.get_config()["timeout"] == 10.0  # nosec B101


async def test_set_api_key_applies_to_next_call(make_client):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers["Authorization"])
        return httpx.Response(200, json={"data": []})

    async with make_client(handler, api_key="old-key") as client:
        await client.get_models()
        client.set_api_key("new-key")
        await client.get_models()
        with pytest.raises(ConfigError):
            client.set_api_key("")
    assert seen == ["Bearer old-key", "Bearer new-key"]  # nosec B101
    assert client.config.api_key == "new-key"  # nosec B101


async def test_concurrent_operations_are_independent(make_client, helpers):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/models"):
            return httpx.Response(200, json={"data": [{"id": "m"}]})
        return httpx.Response(200, json=helpers.completion_body("hi"))

    async with make_client(handler) as client:
        models, reply = await asyncio.gather(client.get_models(), client.chat_completion(helpers.chat_request()))
    assert models.ids() == ["m"] and reply.text == "hi"  # nosec B101


async def test_external_http_client_not_closed():
    http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200, json={"data": []})))
    async with RaxAI(api_key="k", http_client=http) as client:
        await client.get_models()
    assert not http.is_closed  # nosec B101
    await http.aclose()
