"""rax_ai.config.env
=================

Centralized environment variable names and helpers for client settings.

Design Notes
------------
- Canonical names live in ``ENV_MAP``. The credential historically also used
  ``RAXAI_API_KEY``; aliases are listed in ``ENV_ALIASES`` with the canonical
  name first to establish precedence.
- A lightweight ``.env`` loader is provided so scripts and the CLI pick up a
  local credential without an extra dependency.

Failure Modes
-------------
- Lookup helpers return ``None`` when nothing is set; they never raise.
  Callers decide how to proceed (``ClientConfig`` raises on a missing key).
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Setting name -> canonical environment variable
ENV_MAP: Dict[str, str] = {
    "api_key": "RAX_API_KEY",  # pragma: allowlist secret - env var name, not a secret
    "base_url": "RAX_BASE_URL",
    "timeout": "RAX_TIMEOUT",
    "max_retries": "RAX_MAX_RETRIES",
    "retry_delay": "RAX_RETRY_DELAY",
    "model": "RAX_MODEL",
}

# Setting name -> ordered tuple of acceptable env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "api_key": ("RAX_API_KEY", "RAXAI_API_KEY"),
}

_DOTENV_LOADED = False


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'your-api-key', 'example',
    or starts with 'test_'. The check is case-insensitive and resilient to
    surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "your-api-key" in v
        or "example" in v
        or v.startswith("test_")
    )


def get_env_var_candidates(setting: str) -> Iterable[str]:
    """Yield acceptable environment variable names for a setting.

    The canonical name is yielded first, followed by any aliases.
    """
    canonical = ENV_MAP.get(setting)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(setting, ()):  # pragma: no branch - small tuples
        if alias != canonical:
            yield alias


def resolve_setting(setting: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_var_used)`` for the first non-empty candidate.

    ``(None, None)`` when nothing is set.
    """
    load_dotenv_once()
    for name in get_env_var_candidates(setting):
        if val := os.environ.get(name):
            return val, name
    return None, None


def resolve_api_key() -> Optional[str]:
    """Resolve the API credential from the process environment."""
    value, _ = resolve_setting("api_key")
    return value


def load_dotenv_once() -> None:
    """Lightweight .env loader (no external dependency).

    Parses KEY=VALUE lines from ``DOTENV_FILE`` (default ``.env``), ignoring
    comments and blank lines. Existing environment variables are only
    overridden when their current values look like placeholders.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def reset_dotenv_cache() -> None:
    """Allow the next lookup to re-read the ``.env`` file (tests)."""
    global _DOTENV_LOADED
    _DOTENV_LOADED = False


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_var_candidates",
    "resolve_setting",
    "resolve_api_key",
    "load_dotenv_once",
    "reset_dotenv_cache",
]
