"""Structured logging utilities for the client.

Rationale:
- Central place to configure consistent JSON (or plain) logging.
- Avoid ad-hoc logger setup in the request and streaming layers.
- Dependency-free: stdlib ``logging`` plus a small JSON formatter.

All loggers handed out by :func:`get_logger` are children of the shared
``rax_ai`` logger, which owns a single stderr handler. The level defaults to
WARNING so a library import stays quiet; ``RAX_LOG_LEVEL`` or
:func:`configure_logger` turn request tracing on.

``normalized_log_event`` wraps ``log_event`` and guarantees the canonical
keys ``phase``, ``attempt``, ``error_code`` and ``emitted`` so downstream
filters work the same for request and stream events.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "rax_ai"
LOG_LEVEL_ENV = "RAX_LOG_LEVEL"

_BASE_LOGGER_ATTR = "_rax_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_rax_console_handler"
_FILE_HANDLER_ATTR = "_rax_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _parse_level(value: str | None, default: int = logging.WARNING) -> int:
    """Parse a logging level name into its integer constant.

    Accepts common names (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    case-insensitively. Falls back to ``default`` on unknown values.
    """
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _console_handler(level: int, formatter: logging.Formatter) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    return handler


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize (once) and return the shared ``rax_ai`` logger."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    env_level = os.getenv(LOG_LEVEL_ENV)
    desired_level = _parse_level(env_level, default=level)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        # Later lookups keep a level chosen via configure_logger unless the env pins one.
        if env_level:
            logger.setLevel(desired_level)
        for existing in list(logger.handlers):
            if not getattr(existing, _CONSOLE_HANDLER_ATTR, False):
                continue
            if env_level:
                existing.setLevel(desired_level)
            stream_obj = getattr(existing, "stream", None)
            if stream_obj is None or getattr(stream_obj, "closed", False):
                # setStream would flush the dead stream first and fail.
                logger.removeHandler(existing)
                with contextlib.suppress(Exception):
                    existing.close()
                logger.addHandler(_console_handler(existing.level, existing.formatter or _formatter(json_mode)))
                continue
            # Streams captured by test runners get swapped between tests.
            if hasattr(existing, "setStream"):
                with contextlib.suppress(ValueError):
                    existing.setStream(sys.stderr)
        return logger

    logger.setLevel(desired_level)
    logger.handlers[:] = [_console_handler(desired_level, _formatter(json_mode))]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(
    name: str = BASE_LOGGER_NAME,
    json_mode: bool = True,
    level: int = logging.WARNING,
) -> logging.Logger:
    """Return a logger wired to the shared ``rax_ai`` handler.

    Child loggers carry no handlers of their own and propagate to the base
    logger, so records are emitted exactly once.
    """
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base_logger
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared ``rax_ai`` logger at runtime.

    Parameters
    ----------
    level: int | str | None
        Desired level as a number or a name (``"DEBUG"``). ``None`` keeps the
        current level.
    file_path: Optional[str]
        When provided, attach (or retarget) a rotating file handler writing to
        ``file_path``. When ``None``, any file handler previously attached by
        this function is removed.
    json_mode: bool
        JSON formatter (default) or the plain text formatter.

    Returns
    -------
    logging.Logger
        The configured base logger. Handlers not managed by this module are
        left untouched.
    """
    logger = get_logger(BASE_LOGGER_NAME, json_mode=json_mode)
    if level is not None:
        resolved = _parse_level(level, default=logger.level) if isinstance(level, str) else level
        logger.setLevel(resolved)
        for h in logger.handlers:
            h.setLevel(resolved)
    for h in logger.handlers:
        if getattr(h, _CONSOLE_HANDLER_ATTR, False):
            h.setFormatter(_formatter(json_mode))

    managed = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    abs_path = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    existing: Optional[logging.FileHandler] = None
    for h in managed:
        if abs_path and getattr(h, "baseFilename", None) == abs_path:
            existing = h
            continue
        logger.removeHandler(h)
        h.close()
    if abs_path is None:
        return logger

    if existing is None:
        os.makedirs(os.path.dirname(abs_path), exist_ok=True)
        # Bound log growth to 10MB x 5 backups.
        existing = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
        setattr(existing, _FILE_HANDLER_ATTR, True)
        logger.addHandler(existing)
    existing.setFormatter(_formatter(json_mode))
    existing.setLevel(logger.level)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit a structured log event as a single JSON message.

    Keys whose value is ``None`` are dropped unless ``keep_none`` is set.
    The check against ``isEnabledFor`` keeps disabled events free of JSON
    encoding cost.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = ("phase", "attempt", "error_code", "emitted")


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: int | bool | None = None,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit an event carrying the normalized key set.

    ``error_code`` is omitted when ``None`` to read naturally as "no error";
    the other required keys are always present. Extra fields never clobber
    normalized values.
    """
    fields: Dict[str, Any] = {
        "phase": phase,
        "attempt": attempt,
        "emitted": emitted,
    }
    if error_code is not None:
        fields["error_code"] = error_code
    for k, v in extra_fields.items():
        if v is None or k in fields:
            continue
        fields[k] = v
    log_event(logger, event, ctx, level=level, keep_none=True, **fields)


__all__ = [
    "BASE_LOGGER_NAME",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
