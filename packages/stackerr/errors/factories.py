"""Constructors for structured errors.

``newf`` and ``new_from_values`` are the explicit forms. ``new`` picks one of
them from the type of its first argument. ``wrap`` enriches an existing
``Error`` in place or builds a fresh one around a foreign exception.

None of these raise: a format string that does not match its values renders
as the format followed by the values.
"""

from __future__ import annotations

import re
import time

from .codes import Code, code_name
from .stack import capture_stack
from .types import Error, merge

_VERB = re.compile(r"%(%|v)")


def new(error_class: int, code: Code | str | None, *args: object) -> Error:
    """Build an error from ``(format, *values)`` or a plain list of values.

    The stack starts at the caller of ``new``.
    """
    return _build(error_class, code, _message(args), skip=1)


def newf(
    error_class: int, code: Code | str | None, format: str = "", *values: object
) -> Error:
    """Build an error whose description is ``format`` applied to ``values``."""
    return _build(error_class, code, format_message(format, *values), skip=1)


def new_from_values(
    error_class: int, code: Code | str | None, *values: object
) -> Error:
    """Build an error whose description concatenates ``values``."""
    return _build(error_class, code, join_values(*values), skip=1)


def wrap(
    err: BaseException | None,
    error_class: int = 0,
    code: Code | str | None = None,
    *args: object,
) -> Error:
    """Enrich ``err`` with a classification and extra description.

    - ``None`` is treated as an empty ``Error``.
    - A foreign exception becomes the ``root`` of a fresh ``Error``; without
      ``args`` its text is also used as the description.
    - An existing ``Error`` is merged in place and returned, keeping its
      stack and creation time.
    """
    if err is None:
        err = Error()

    if not isinstance(err, Error):
        foreign = str(err)
        description = _message(args) if args else foreign
        fresh = _build(error_class, code, description, skip=1)
        fresh.root = foreign
        return fresh

    merge(err, Error(error_class=error_class, code=code_name(code)))
    if args:
        # A payload always adds a line, even one that formats to ""
        message = _message(args)
        err.description = (
            f"{err.description}\n{message}" if err.description else message
        )
    return err


def format_message(format: str, *values: object) -> str:
    """Apply printf-style ``values`` to ``format``; ``%v`` acts as ``%s``."""
    template = _VERB.sub(lambda match: "%%" if match.group(1) == "%" else "%s", format)
    try:
        return template % values
    except (TypeError, ValueError, KeyError):
        if not values:
            return format
        return " ".join([format, *(str(value) for value in values)])


def join_values(*values: object) -> str:
    """Concatenate the string forms of ``values`` with no separator."""
    return "".join(str(value) for value in values)


def _message(args: tuple[object, ...]) -> str:
    """Render a ``new``-style payload."""
    if not args:
        return ""
    first = args[0]
    if isinstance(first, str):
        return format_message(first, *args[1:])
    return join_values(*args)


def _build(
    error_class: int, code: Code | str | None, description: str, *, skip: int
) -> Error:
    """Create a fresh error; ``skip`` counts frames between here and the user."""
    return Error(
        description=description,
        error_class=error_class,
        stack=capture_stack(skip + 1),
        created=time.time_ns(),
        code=code_name(code),
    )
