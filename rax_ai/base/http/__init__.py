"""HTTP utilities package.

Exposes client construction, header building and the request executor.
"""

from .client import build_async_client, build_headers, new_request_id
from .executor import RequestExecutor

__all__ = ["build_async_client", "build_headers", "new_request_id", "RequestExecutor"]
