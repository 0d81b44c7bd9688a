"""Public structured error API.

    err = newf(500, Code.DEPENDENCY_TIMEOUT, "db timeout after %dms", 200)
    print(err.stack)

    tests/shared/test_store.py:26
    services/store/repository.py:88
    /site-packages/grpc/_server.py:443
"""

from .codec import SENTINEL, decode, encode, from_string, is_encoded
from .codes import Code, code_name, is_unset
from .factories import format_message, join_values, new, new_from_values, newf, wrap
from .stack import capture_stack, configure_stack, get_stack_settings, render_frames
from .types import Error, as_exception, error_text, get_code, merge

__all__ = [
    "SENTINEL",
    "Code",
    "Error",
    "as_exception",
    "capture_stack",
    "code_name",
    "configure_stack",
    "decode",
    "encode",
    "error_text",
    "format_message",
    "from_string",
    "get_code",
    "get_stack_settings",
    "is_encoded",
    "is_unset",
    "join_values",
    "merge",
    "new",
    "new_from_values",
    "newf",
    "render_frames",
    "wrap",
]
