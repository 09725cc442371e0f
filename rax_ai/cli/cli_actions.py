"""CLI action handlers.

Purpose
-------
Subcommand handlers for ``rax-ai``, keeping the entrypoint a thin
presentation layer. No top-level side effects; safe to import in tests.

Client Construction
-------------------
- The client is built from the environment (``ClientConfig.from_env``) with
  the optional ``--base-url``/``--timeout``/``--max-retries`` overrides.
- ``client_factory`` is an injection point so tests can supply a client
  backed by ``httpx.MockTransport``.

Exit Codes
----------
- ``0`` success
- ``1`` remote failure (``ApiError`` printed as JSON to stderr), or
  ``validate`` reporting an invalid key
- ``2`` configuration or local validation error
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, Awaitable, Callable, Dict, List

from pydantic import ValidationError

from ..base.errors import ApiError
from ..base.logging import LogContext, configure_logger, get_logger, normalized_log_event
from ..base.models import ChatMessage, ChatRequest
from ..client import RaxAI
from ..config import ConfigError, get_default_model

ClientFactory = Callable[..., RaxAI]
Handler = Callable[[RaxAI, argparse.Namespace], Awaitable[int]]

_logger = get_logger("rax_ai.cli")


def _print_json(obj: Any) -> None:
    print(json.dumps(obj, ensure_ascii=False, default=str))


def _print_error(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, ensure_ascii=False, default=str), file=sys.stderr)


def build_client(args: argparse.Namespace, client_factory: ClientFactory = RaxAI) -> RaxAI:
    """Instantiate the client from the environment plus CLI overrides.

    Raises
    ------
    ConfigError
        Missing API key or invalid override values.
    """
    return client_factory(
        base_url=getattr(args, "base_url", None),
        timeout=getattr(args, "timeout", None),
        max_retries=getattr(args, "max_retries", None),
    )


def build_chat_request(args: argparse.Namespace) -> ChatRequest:
    """Translate ``chat`` arguments into a validated :class:`ChatRequest`."""
    messages: List[ChatMessage] = []
    if args.system:
        messages.append(ChatMessage(role="system", content=args.system))
    messages.append(ChatMessage(role="user", content=args.prompt))
    return ChatRequest(
        model=get_default_model(args.model),
        messages=messages,
        max_tokens=args.max_tokens,
        temperature=args.temperature,
    )


async def handle_validate(client: RaxAI, args: argparse.Namespace) -> int:
    ok = await client.validate_key()
    _print_json({"valid": ok, **client.get_config()})
    return 0 if ok else 1


async def handle_models(client: RaxAI, args: argparse.Namespace) -> int:
    listing = await client.models.list()
    if args.json:
        _print_json(listing.model_dump(exclude_none=True))
        return 0
    for m in listing.data:
        suffix = f"  ({m.context_length} ctx)" if m.context_length else ""
        print(f"{m.id}{suffix}")
    return 0


async def handle_usage(client: RaxAI, args: argparse.Namespace) -> int:
    stats = await client.usage.get(args.start, args.end)
    if args.json:
        _print_json(stats.model_dump(exclude_none=True))
        return 0
    print(f"requests: {stats.total_requests}")
    print(f"tokens:   {stats.total_tokens}")
    print(f"cost:     {stats.total_cost:.4f}")
    for day in stats.days:
        print(f"  {day.date}  requests={day.requests} tokens={day.tokens} cost={day.cost:.4f}")
    return 0


async def handle_chat(client: RaxAI, args: argparse.Namespace) -> int:
    """Run one prompt, streaming tokens to stdout when ``--stream`` is set.

    With ``--json`` the full response (or the joined stream text) is printed
    as a single JSON object instead.
    """
    request = build_chat_request(args)
    ctx = LogContext(model=request.model)
    normalized_log_event(_logger, "cli.start", ctx, phase="start", attempt=None, emitted=None, stream=bool(args.stream))

    if args.stream:
        parts: List[str] = []
        async with client.chat.completions.create_stream(request) as stream:
            async for chunk in stream:
                if chunk.done:
                    break
                parts.append(chunk.content)
                if not args.json:
                    print(chunk.content, end="", flush=True)
        text = "".join(parts)
        if args.json:
            _print_json({"model": request.model, "content": text})
        else:
            print()
    else:
        response = await client.chat.completions.create(request)
        text = response.text
        if args.json:
            _print_json(response.to_dict())
        else:
            print(text)

    normalized_log_event(_logger, "cli.finalize", ctx, phase="finalize", attempt=None, emitted=bool(text))
    return 0


HANDLERS: Dict[str, Handler] = {
    "validate": handle_validate,
    "models": handle_models,
    "usage": handle_usage,
    "chat": handle_chat,
}


def run_command(args: argparse.Namespace, *, client_factory: ClientFactory = RaxAI) -> int:
    """Execute the parsed subcommand and map failures to exit codes.

    Parameters
    ----------
    args: argparse.Namespace
        Parsed arguments; ``args.cmd`` selects the handler.
    client_factory: ClientFactory
        Callable accepting ``base_url``/``timeout``/``max_retries`` keyword
        overrides and returning a :class:`RaxAI`.

    Returns
    -------
    int
        Process exit code (see module docstring).
    """
    if getattr(args, "log_level", None):
        configure_logger(level=args.log_level)
    handler = HANDLERS[args.cmd]

    try:
        client = build_client(args, client_factory)
    except ConfigError as e:
        _print_error({"error": str(e), "set_one_of_env": ["RAX_API_KEY", "RAXAI_API_KEY"]})
        return 2

    async def _run() -> int:
        async with client:
            return await handler(client, args)

    try:
        return asyncio.run(_run())
    except ApiError as e:
        normalized_log_event(
            _logger,
            "cli.error",
            phase="finalize",
            attempt=None,
            error_code=e.type.value,
            emitted=False,
            status=e.status,
        )
        _print_error({"error": e.to_dict()})
        return 1
    except (ValidationError, ConfigError) as e:
        _print_error({"error": str(e)})
        return 2


__all__ = [
    "HANDLERS",
    "build_client",
    "build_chat_request",
    "handle_validate",
    "handle_models",
    "handle_usage",
    "handle_chat",
    "run_command",
]
