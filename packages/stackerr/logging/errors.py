"""Structured log records for ``Error`` values."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from . import fields
from .context import log_context

if TYPE_CHECKING:
    from packages.stackerr.errors.types import Error


def error_fields(err: Error) -> dict[str, Any]:
    """Return the classification fields of ``err`` for log context."""
    return {
        fields.ERROR_CODE: err.code,
        fields.ERROR_CLASS: err.error_class or None,
        fields.REQUEST_ID: err.request_id,
        fields.ROOT: err.root,
    }


def log_error(
    logger: logging.Logger,
    err: Error,
    message: str | None = None,
    *,
    level: int = logging.ERROR,
) -> None:
    """Emit one record describing ``err``.

    The message defaults to the first description line. The captured stack is
    attached only when ``logger`` is enabled for DEBUG.
    """
    if not logger.isEnabledFor(level):
        return
    text = message or err.description.split("\n", 1)[0] or err.code or "error"
    extra: dict[str, Any] = {}
    if err.stack and logger.isEnabledFor(logging.DEBUG):
        extra[fields.STACK] = err.stack
    with log_context(error_fields(err)):
        logger.log(level, text, extra=extra)
