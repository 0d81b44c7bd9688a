"""Symbolic error code table.

Codes are stable, machine-readable names that travel inside the encoded error
string. ``UNKNOWN`` is the "unset" placeholder a later wrap may still replace,
and ``JSON_MARSHAL_ERROR`` marks transport strings that failed to decode.
"""

from __future__ import annotations

from enum import Enum


class Code(str, Enum):
    """Closed set of shared error codes rendered by their wire name."""

    UNKNOWN = "unknown"
    JSON_MARSHAL_ERROR = "json-marshal-error"

    # Caller input
    INVALID_ARGUMENT = "invalid_argument"
    MISSING_REQUIRED_FIELD = "missing_required_field"

    # Lookup
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"

    # Access
    UNAUTHENTICATED = "unauthenticated"
    PERMISSION_DENIED = "permission_denied"

    # Dependency / external system
    DEPENDENCY_FAILURE = "dependency_failure"
    DEPENDENCY_TIMEOUT = "dependency_timeout"
    DEPENDENCY_UNAVAILABLE = "dependency_unavailable"

    # Internal
    INTERNAL_ERROR = "internal_error"
    NOT_IMPLEMENTED = "not_implemented"

    def __str__(self) -> str:
        """Return the wire name of this code."""
        return self.value


UNSET_CODES: frozenset[str] = frozenset({"", Code.UNKNOWN.value})


def code_name(code: Code | str | None) -> str:
    """Return the wire name for a code, ``""`` when no code was given."""
    if code is None:
        return ""
    return str(code)


def is_unset(code: str) -> bool:
    """Tell whether a stored code may still be replaced by a merge."""
    return code in UNSET_CODES
