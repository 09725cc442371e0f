"""rax_ai.config.defaults
======================

Central place for small, stable default values used across the rax_ai
package and its CLI. These defaults can be overridden via environment
variables or explicit constructor arguments, but provide sensible fallbacks
for local development and tests.

This module intentionally avoids importing from other rax_ai packages to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Remote API ----
# Production platform endpoint; local development typically uses
# "http://localhost:3000/api".
DEFAULT_BASE_URL = "https://ai.raxcore.dev/api"
DEFAULT_MODEL = "rax-4.0"
DEFAULT_PLATFORM = "rax-ai"

# ---- Request policy ----
# Per-attempt timeout (seconds), retry count (attempts = retries + 1) and the
# base delay for exponential backoff (delay * 2**attempt).
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY_SECONDS = 1.0


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_MODEL",
    "DEFAULT_PLATFORM",
    "DEFAULT_TIMEOUT_SECONDS",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_RETRY_DELAY_SECONDS",
]
