"""Public logging API for stackerr.

This package wraps Python's ``logging`` module with opinionated defaults for
stdout emission, structured context propagation and structured error records.
"""

from .config import configure_logging, get_logger
from .context import bind_context, clear_context, get_context, log_context
from .errors import error_fields, log_error

__all__ = [
    "bind_context",
    "clear_context",
    "configure_logging",
    "error_fields",
    "get_context",
    "get_logger",
    "log_context",
    "log_error",
]
