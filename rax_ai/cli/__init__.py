"""rax-ai command-line interface (package entrypoint).

Argument parsing lives in ``cli_parser`` and subcommand handlers in
``cli_actions``; this module only wires them together.

Public API re-exports:
- ``main``: CLI entrypoint callable
"""

from __future__ import annotations

import sys
from typing import Optional

from ..client import RaxAI
from .cli_actions import ClientFactory, run_command
from .cli_parser import build_parser


def main(argv: Optional[list[str]] = None, *, client_factory: ClientFactory = RaxAI) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.
    client_factory: ClientFactory
        Client constructor; tests substitute one bound to a mock transport.

    Returns
    -------
    int
        Process exit code (0 success, 1 API failure, 2 configuration error).
    """
    args = build_parser().parse_args(list(sys.argv[1:] if argv is None else argv))
    return run_command(args, client_factory=client_factory)


__all__ = ["main"]
