"""Context propagation helpers for structured logging.

A ``contextvars``-backed mapping is attached to every record by
``ContextFilter``, so request ids and error classification only need to be
bound once per request or per reported error.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Mapping

_LOG_CONTEXT: ContextVar[dict[str, str]] = ContextVar(
    "stackerr_log_context", default={}
)


def get_context() -> dict[str, str]:
    """Return a shallow copy of current logging context."""
    return dict(_LOG_CONTEXT.get())


def bind_context(**values: object) -> None:
    """Bind values into the current logging context.

    Values are stringified; ``None`` and ``""`` are skipped so unset error
    fields never show up as empty keys.
    """
    current = _LOG_CONTEXT.get().copy()
    current.update(_stringify(values))
    _LOG_CONTEXT.set(current)


def clear_context(*keys: str) -> None:
    """Clear selected keys or the entire logging context."""
    if not keys:
        _LOG_CONTEXT.set({})
        return
    current = _LOG_CONTEXT.get().copy()
    for key in keys:
        current.pop(key, None)
    _LOG_CONTEXT.set(current)


@contextmanager
def log_context(values: Mapping[str, object]) -> Iterator[None]:
    """Temporarily bind logging context for the duration of a block."""
    token = _LOG_CONTEXT.set({**_LOG_CONTEXT.get(), **_stringify(values)})
    try:
        yield
    finally:
        _LOG_CONTEXT.reset(token)


def _stringify(values: Mapping[str, object]) -> dict[str, str]:
    return {
        str(key): str(value)
        for key, value in values.items()
        if value is not None and value != ""
    }
