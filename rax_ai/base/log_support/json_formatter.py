"""JSON logging formatter used by the client logging setup.

This module defines :class:`JsonFormatter`, a minimal JSON formatter that
serializes standard logging fields, hoists keys from JSON-encoded messages
(as produced by ``log_event``) and merges ``extra=`` attributes from the
``LogRecord``.
"""
from __future__ import annotations

import contextlib
import json
import logging
from datetime import datetime, timezone

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

# Attributes present on every LogRecord; anything else came from ``extra=``.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}

# Keys never written to log output, even when passed explicitly.
_REDACTED_KEYS = frozenset({"api_key", "authorization", "Authorization"})


class JsonFormatter(logging.Formatter):
    """Lightweight JSON formatter for structured logs.

    Output always carries ``ts``, ``level`` and ``logger``. When the message
    is itself a JSON object its keys are promoted to the top level so lines
    are not double encoded; the raw ``msg`` is dropped for CLI events to keep
    terminal output readable.
    """

    def format(self, record: logging.LogRecord) -> str:  # pragma: no cover - trivial formatting
        out = {
            "ts": datetime.now(timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
        }
        msg_text = record.getMessage()
        out["msg"] = msg_text
        with contextlib.suppress(ValueError):
            parsed = json.loads(msg_text)
            if isinstance(parsed, dict):
                out.update(parsed)
                event = parsed.get("event")
                if isinstance(event, str) and event.startswith("cli."):
                    out.pop("msg", None)
        for key, value in record.__dict__.items():
            if key.startswith("_") or key in _RECORD_ATTRS or key in out:
                continue
            out[key] = value
        if record.exc_info:
            out["exc"] = self.formatException(record.exc_info)
        for key in _REDACTED_KEYS & out.keys():
            out[key] = "***"
        return json.dumps(out, ensure_ascii=False, default=str)


__all__ = ["JsonFormatter", "ISO"]
