"""Structured error value shared across service boundaries.

An ``Error`` is an ordinary exception carrying a classification, a
cumulative description, the stack that located its origin and a one-level
root cause. ``str(err)`` yields the transport encoding, so an ``Error`` can be
sent anywhere a plain error message is accepted.
"""

from __future__ import annotations

from dataclasses import dataclass

from .codes import is_unset
from .wire import encode


@dataclass
class Error(Exception):
    """Structured error. Mutable only through ``merge``/``wrap``."""

    # Human readable message, grows by one line per enriching wrap
    description: str = ""
    debug: str = ""
    # HTTP-style class such as 400 or 500; 0 means unset
    error_class: int = 0
    # Filtered call stack, innermost frame first
    stack: str = ""
    # Creation time in nanoseconds since epoch
    created: int = 0
    code: str = ""
    # String form of the foreign error this one wraps
    root: str = ""
    request_id: str = ""

    # Field-wise equality, identity hashing like any other exception
    __hash__ = Exception.__hash__

    def __str__(self) -> str:
        """Return the ``"#ERR " + JSON`` transport encoding."""
        return encode(self)

    def get_code(self) -> str:
        """Return the symbolic code."""
        return self.code


def merge(existing: Error, incoming: Error) -> Error:
    """Fold ``incoming`` into ``existing`` and return ``existing``.

    Code and class are first-write-wins: they are copied only while the
    existing value is unset (``""``/``"unknown"`` and ``0``). A non-empty
    incoming description is appended on a new line. Stack, creation time and
    root cause are never touched.
    """
    if incoming.code and is_unset(existing.code):
        existing.code = incoming.code

    if incoming.error_class and not existing.error_class:
        existing.error_class = incoming.error_class

    if incoming.description:
        if existing.description:
            existing.description += "\n" + incoming.description
        else:
            existing.description = incoming.description
    return existing


def error_text(err: Error | None) -> str:
    """Return the transport encoding, ``""`` for ``None``."""
    if err is None:
        return ""
    return str(err)


def get_code(err: Error | None) -> str:
    """Return the symbolic code, ``""`` for ``None``."""
    if err is None:
        return ""
    return err.code


def as_exception(err: Error | None) -> BaseException | None:
    """Return ``err`` as a plain exception, keeping ``None`` as ``None``.

    Lets ``if as_exception(err) is None`` hold for a missing error.
    """
    if err is None:
        return None
    return err
