"""CLI parser construction for rax-ai.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions`` to keep files small and testable.
"""

from __future__ import annotations

import argparse

from ..base.constants import SDK_VERSION


def _str2bool(v: str | None) -> bool:
    """Best-effort conversion of common truthy/falsey strings to bool.

    Parameters
    ----------
    v: str | None
        Incoming string value (e.g., "true", "false", "1", "0"). When ``None``
        and used via argparse with ``const=True``, this returns ``True``.
    """
    if v is None:
        return True
    val = v.strip().lower()
    if val in {"1", "t", "true", "y", "yes", "on"}:
        return True
    return False if val in {"0", "f", "false", "n", "no", "off"} else bool(val)


def add_stream_flags(parser: argparse.ArgumentParser) -> None:
    """Attach ``--stream``/``--no-stream`` flags to a parser.

    ``--stream`` accepts an optional boolean (``--stream``, ``--stream false``).
    ``--no-stream`` is an explicit negation alias.
    """
    grp = parser.add_mutually_exclusive_group()
    grp.add_argument("--stream", nargs="?", const=True, type=_str2bool, default=False)
    grp.add_argument("--no-stream", dest="stream", action="store_false")


def add_connection_flags(parser: argparse.ArgumentParser) -> None:
    """Attach optional overrides for the environment-derived client config."""
    parser.add_argument("--base-url", default=None, help="API root (default: RAX_BASE_URL or production)")
    parser.add_argument("--timeout", type=float, default=None, help="Per-attempt timeout in seconds")
    parser.add_argument("--max-retries", type=int, default=None)
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Parser with ``validate``, ``models``, ``usage`` and ``chat``
        subcommands. No I/O happens here.
    """
    p = argparse.ArgumentParser(prog="rax-ai", description="Command-line access to the Rax AI API")
    p.add_argument("--version", action="version", version=f"%(prog)s {SDK_VERSION}")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_validate = sub.add_parser("validate", help="Check that the configured API key is accepted")
    add_connection_flags(p_validate)

    p_models = sub.add_parser("models", help="List available models")
    add_connection_flags(p_models)
    p_models.add_argument("--json", action="store_true")

    p_usage = sub.add_parser("usage", help="Show usage statistics")
    add_connection_flags(p_usage)
    p_usage.add_argument("--start", default=None, help="Start date (YYYY-MM-DD)")
    p_usage.add_argument("--end", default=None, help="End date (YYYY-MM-DD)")
    p_usage.add_argument("--json", action="store_true")

    p_chat = sub.add_parser("chat", help="Send a single prompt")
    add_connection_flags(p_chat)
    p_chat.add_argument("--prompt", required=True)
    p_chat.add_argument("--model", default=None, help="Model id (default: RAX_MODEL or rax-4.0)")
    p_chat.add_argument("--system", default=None, help="Optional system message")
    p_chat.add_argument("--max-tokens", type=int, default=None)
    p_chat.add_argument("--temperature", type=float, default=None)
    add_stream_flags(p_chat)
    p_chat.add_argument("--json", action="store_true")

    return p


__all__ = ["build_parser", "add_stream_flags", "add_connection_flags"]
