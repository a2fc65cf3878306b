"""Public logging API for Warden services.

Wraps Python's ``logging`` module with stdout defaults, credential redaction
and structured context propagation.
"""

from .config import configure_logging, get_logger
from .context import bind_context, clear_context, get_context, log_context
from .public_api import ApiCall, ApiOutcome, public_api_instrumented

__all__ = [
    "ApiCall",
    "ApiOutcome",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_context",
    "get_logger",
    "log_context",
    "public_api_instrumented",
]
