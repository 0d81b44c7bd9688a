"""Wire shape of an encoded error.

An encoded error is the sentinel ``"#ERR "`` followed by compact JSON. Keys
appear in a fixed order and zero-valued fields are omitted:
``description, debug, class, stack, created, code, root, request_id``.
"""

from __future__ import annotations

import re
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

SENTINEL = "#ERR "

_SURROGATE = re.compile("[\ud800-\udfff]")


class ErrorFields(Protocol):
    """Attribute shape shared by ``Error`` and anything encodable like it."""

    description: str
    debug: str
    error_class: int
    stack: str
    created: int
    code: str
    root: str
    request_id: str


class ErrorRecord(BaseModel):
    """JSON document carried after the sentinel."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    description: str = ""
    debug: str = ""
    error_class: int = Field(default=0, alias="class")
    stack: str = ""
    created: int = 0
    code: str = ""
    root: str = ""
    request_id: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_zero(cls, value: Any, info: ValidationInfo) -> Any:
        """Treat JSON ``null`` as the field's zero value."""
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


def encode(err: ErrorFields) -> str:
    """Render an error as ``"#ERR " + JSON``."""
    record = ErrorRecord(
        description=_text(err.description),
        debug=_text(err.debug),
        error_class=int(err.error_class),
        stack=_text(err.stack),
        created=int(err.created),
        code=_text(err.code),
        root=_text(err.root),
        request_id=_text(err.request_id),
    )
    return SENTINEL + record.model_dump_json(by_alias=True, exclude_defaults=True)


def _text(value: object) -> str:
    """Coerce to text that UTF-8 can carry.

    Lone surrogates, such as ``surrogateescape`` bytes from OS file names,
    become U+FFFD.
    """
    return _SURROGATE.sub("\ufffd", str(value))


def parse_record(payload: str) -> ErrorRecord:
    """Validate the JSON part of an encoded error.

    Raises ``pydantic.ValidationError`` on malformed JSON or mistyped fields.
    """
    return ErrorRecord.model_validate_json(_text(payload), strict=True)
