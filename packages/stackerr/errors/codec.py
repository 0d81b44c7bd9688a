"""Transport codec for structured errors.

``decode`` never raises: text without the sentinel becomes an ``unknown``
error carrying the text, and a sentinel followed by an undecodable payload
becomes a ``json-marshal-error`` error that embeds both the parse failure and
the offending text.
"""

from __future__ import annotations

from pydantic import ValidationError

from packages.stackerr.logging import get_logger

from .codes import Code
from .factories import newf
from .types import Error
from .wire import SENTINEL, encode, parse_record

_LOGGER = get_logger(__name__)

__all__ = ["SENTINEL", "decode", "encode", "from_string", "is_encoded"]


def is_encoded(text: str) -> bool:
    """Tell whether ``text`` carries the structured error sentinel."""
    return text.startswith(SENTINEL)


def decode(text: str) -> Error:
    """Rebuild an ``Error`` from its transport string."""
    if not is_encoded(text):
        return newf(500, Code.UNKNOWN, "%s", text)

    try:
        record = parse_record(text[len(SENTINEL) :])
    except ValidationError as exc:
        reason = _reason(exc)
        _LOGGER.warning(
            "undecodable structured error payload",
            extra={"reason": reason, "payload_length": len(text)},
        )
        return newf(500, Code.JSON_MARSHAL_ERROR, "%s, %s", reason, text)

    return Error(
        description=record.description,
        debug=record.debug,
        error_class=record.error_class,
        stack=record.stack,
        created=record.created,
        code=record.code,
        root=record.root,
        request_id=record.request_id,
    )


from_string = decode


def _reason(exc: ValidationError) -> str:
    """Condense a pydantic validation failure into one line."""
    parts: list[str] = []
    for item in exc.errors():
        location = ".".join(str(segment) for segment in item.get("loc", ()))
        message = item.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or str(exc)
