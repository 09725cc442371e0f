"""Client configuration layer.

Goals
-----
* Centralize defaults (base URL, timeout, retry policy).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults (``rax_ai.config.defaults``)
    2. ``.env`` file (only fills unset or placeholder variables)
    3. Environment variables (``RAX_API_KEY``, ``RAX_BASE_URL``, ...)
    4. In-code overrides passed to :meth:`ClientConfig.from_env`
* Validate eagerly: a missing credential or a nonsensical timeout fails at
  construction time, never on the first request.

Environment Variable Conventions
--------------------------------
RAX_API_KEY (alias RAXAI_API_KEY), RAX_BASE_URL, RAX_TIMEOUT,
RAX_MAX_RETRIES, RAX_RETRY_DELAY, RAX_MODEL.

Public API
----------
* ClientConfig
* ConfigError
* get_default_model() -> str
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from ..base.constants import MISSING_API_KEY_ERROR, USER_AGENT
from ..base.logging import get_logger
from .defaults import (
    DEFAULT_BASE_URL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_MODEL,
    DEFAULT_PLATFORM,
    DEFAULT_RETRY_DELAY_SECONDS,
    DEFAULT_TIMEOUT_SECONDS,
)
from .env import is_placeholder, resolve_api_key, resolve_setting

_logger = get_logger("rax_ai.config")


class ConfigError(ValueError):
    """Raised when client configuration is missing or invalid."""


def _coerce_float(name: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be a number, got {value!r}") from e


def _coerce_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e


@dataclass(frozen=True)
class ClientConfig:
    """Immutable client settings shared by every call made through a client.

    Attributes:
        api_key: Bearer credential (required, non-blank). Hidden from ``repr``.
        base_url: API root; trailing slashes are stripped so endpoints can be
            appended verbatim.
        timeout: Per-attempt timeout in seconds (> 0).
        max_retries: Retries after the first attempt (>= 0).
        retry_delay: Base backoff delay in seconds (>= 0).
        user_agent: Client identification string.
        platform: Value of the ``X-Platform`` header.

    Rotation:
        Instances never change. Use :meth:`with_api_key` to derive a config
        carrying a new credential.
    """

    api_key: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay: float = DEFAULT_RETRY_DELAY_SECONDS
    user_agent: str = USER_AGENT
    platform: str = DEFAULT_PLATFORM

    def __post_init__(self) -> None:
        if not isinstance(self.api_key, str) or not self.api_key.strip():
            raise ConfigError(f"{MISSING_API_KEY_ERROR}: api_key is required")
        if is_placeholder(self.api_key):
            _logger.warning("api_key looks like a placeholder value")

        base_url = (self.base_url or DEFAULT_BASE_URL).strip().rstrip("/")
        if not base_url.startswith(("http://", "https://")):
            raise ConfigError(f"base_url must be an http(s) URL, got {self.base_url!r}")
        timeout = _coerce_float("timeout", self.timeout)
        if timeout <= 0:
            raise ConfigError("timeout must be greater than 0")
        max_retries = _coerce_int("max_retries", self.max_retries)
        if max_retries < 0:
            raise ConfigError("max_retries must be >= 0")
        retry_delay = _coerce_float("retry_delay", self.retry_delay)
        if retry_delay < 0:
            raise ConfigError("retry_delay must be >= 0")

        object.__setattr__(self, "base_url", base_url)
        object.__setattr__(self, "timeout", timeout)
        object.__setattr__(self, "max_retries", max_retries)
        object.__setattr__(self, "retry_delay", retry_delay)

    @property
    def total_attempts(self) -> int:
        return self.max_retries + 1

    def with_api_key(self, api_key: str) -> "ClientConfig":
        """Return a copy of this config carrying ``api_key``."""
        return replace(self, api_key=api_key)

    def public_dict(self) -> Dict[str, Any]:
        """Return the non-secret settings as a plain dict."""
        return {
            "base_url": self.base_url,
            "timeout": self.timeout,
            "max_retries": self.max_retries,
            "retry_delay": self.retry_delay,
        }

    @classmethod
    def from_env(cls, **overrides: Any) -> "ClientConfig":
        """Build a config from defaults, ``.env``, environment and overrides.

        ``None``-valued overrides are ignored so callers can forward optional
        CLI arguments directly.
        """
        values: Dict[str, Any] = {}
        if key := resolve_api_key():
            values["api_key"] = key
        for setting in ("base_url", "timeout", "max_retries", "retry_delay"):
            raw, _ = resolve_setting(setting)
            if raw is not None:
                values[setting] = raw
        values |= {k: v for k, v in overrides.items() if v is not None}
        if "api_key" not in values:
            raise ConfigError(
                f"{MISSING_API_KEY_ERROR}: set RAX_API_KEY or pass api_key explicitly"
            )
        return cls(**values)


def get_default_model(override: Optional[str] = None) -> str:
    """Return ``override``, else ``RAX_MODEL``, else the built-in default."""
    if override:
        return override
    value, _ = resolve_setting("model")
    return value or DEFAULT_MODEL


__all__ = [
    "ClientConfig",
    "ConfigError",
    "get_default_model",
]
