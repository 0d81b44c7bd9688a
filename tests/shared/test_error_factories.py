"""Tests for structured error constructors and wrap/merge semantics."""

from __future__ import annotations

import time

from packages.stackerr.errors import (
    Code,
    Error,
    format_message,
    merge,
    new,
    new_from_values,
    newf,
    wrap,
)


def test_new_formats_printf_payload_and_stamps_origin() -> None:
    """``new`` should format its payload and record class, code, stack and time."""
    before = time.time_ns()
    err = new(500, Code.UNKNOWN, "db timeout after %dms", 200)

    assert err.description == "db timeout after 200ms"
    assert err.error_class == 500
    assert err.code == "unknown"
    assert err.stack != ""
    assert err.created >= before > 0
    assert err.root == ""
    assert err.request_id == ""
    assert err.debug == ""


def test_new_concatenates_values_when_first_argument_is_not_text() -> None:
    """Non-text payloads should be joined with no separator."""
    err = new(400, Code.INVALID_ARGUMENT, 42, "items", None)

    assert err.description == "42itemsNone"


def test_new_without_payload_has_empty_description() -> None:
    """A bare classification should produce an empty description."""
    err = new(404, Code.NOT_FOUND)

    assert err.description == ""
    assert err.code == "not_found"


def test_newf_treats_v_verb_as_string_placeholder() -> None:
    """``%v`` should render like ``%s`` and ``%%`` should stay a literal percent."""
    err = newf(500, Code.INTERNAL_ERROR, "%v of %v done (100%%)", 3, 4)

    assert err.description == "3 of 4 done (100%)"


def test_newf_with_text_that_looks_like_a_format_never_raises() -> None:
    """Mismatched formats fall back to the raw format plus values."""
    assert newf(500, None, "disk 90% full").description == "disk 90% full"
    assert newf(500, None, "%d items", "many").description == "%d items many"
    assert newf(500, None, "no verbs", 1, 2).description == "no verbs 1 2"


def test_new_from_values_never_interprets_text_as_format() -> None:
    """Explicit value lists keep ``%`` sequences untouched."""
    err = new_from_values(400, Code.INVALID_ARGUMENT, "rate %d", " exceeded")

    assert err.description == "rate %d exceeded"


def test_code_accepts_plain_strings_and_none() -> None:
    """Codes outside the enum pass through; ``None`` means no code."""
    assert newf(409, "lock_held", "busy").code == "lock_held"
    assert newf(409, None, "busy").code == ""


def test_format_message_handles_tuple_values() -> None:
    """A tuple passed as one value must format as a single argument."""
    assert format_message("got %s", (1, 2)) == "got (1, 2)"


def test_wrap_foreign_error_records_root_cause() -> None:
    """Wrapping a foreign exception should keep its text as ``root``."""
    cause = ValueError("bad port 'abc'")

    err = wrap(cause, 400, Code.INVALID_ARGUMENT, "parsing %s", "listen address")

    assert isinstance(err, Error)
    assert err.root == "bad port 'abc'"
    assert err.description == "parsing listen address"
    assert err.error_class == 400
    assert err.code == "invalid_argument"
    assert err.stack != ""
    assert err.created > 0


def test_wrap_foreign_error_without_payload_uses_its_text() -> None:
    """Without extra payload the foreign message becomes the description."""
    err = wrap(KeyError("user"), 404, Code.NOT_FOUND)

    assert err.description == "'user'"
    assert err.root == "'user'"


def test_wrap_existing_error_merges_in_place() -> None:
    """Re-wrapping returns the same value and appends the extra description."""
    inner = newf(0, None, "query failed")
    stack, created = inner.stack, inner.created

    outer = wrap(inner, 503, Code.DEPENDENCY_UNAVAILABLE, "loading account %d", 7)

    assert outer is inner
    assert outer.description == "query failed\nloading account 7"
    assert outer.error_class == 503
    assert outer.code == "dependency_unavailable"
    assert outer.stack == stack
    assert outer.created == created
    assert outer.root == ""


def test_wrap_without_payload_leaves_description_unchanged() -> None:
    """A classification-only wrap must not touch the description."""
    inner = newf(500, Code.INTERNAL_ERROR, "boom")

    wrap(inner, 400, Code.INVALID_ARGUMENT)

    assert inner.description == "boom"


def test_wrap_class_and_code_are_first_write_wins() -> None:
    """Later, less specific classifications must not clobber earlier ones."""
    err = newf(0, None, "origin")

    wrap(wrap(err, 404, Code.NOT_FOUND), 500, Code.INTERNAL_ERROR)

    assert err.error_class == 404
    assert err.code == "not_found"


def test_wrap_replaces_unknown_placeholder_only_once() -> None:
    """``unknown`` counts as unset, but only until a real code lands."""
    err = newf(500, Code.UNKNOWN, "origin")

    wrap(err, 0, Code.NOT_FOUND)
    wrap(err, 0, Code.ALREADY_EXISTS)

    assert err.code == "not_found"


def test_wrap_keeps_stack_of_foreign_wrap_on_rewrap() -> None:
    """Stack and root from the first wrap survive later wraps."""
    err = wrap(OSError("disk full"), 507, Code.INTERNAL_ERROR, "writing snapshot")
    stack = err.stack

    wrap(err, 500, None, "during checkpoint")

    assert err.stack == stack
    assert err.root == "disk full"
    assert err.description == "writing snapshot\nduring checkpoint"


def test_wrap_none_treats_it_as_empty_error() -> None:
    """``None`` is merged like an empty error: no stack, no timestamp."""
    err = wrap(None, 500, Code.INTERNAL_ERROR, "late failure")

    assert err == Error(
        description="late failure",
        error_class=500,
        code="internal_error",
    )


def test_merge_fills_only_unset_fields() -> None:
    """``merge`` copies unset class/code and appends non-empty descriptions."""
    existing = Error(description="a", code="unknown", stack="x.py:1\n", created=5)
    incoming = Error(description="b", error_class=400, code="invalid_argument")

    result = merge(existing, incoming)

    assert result is existing
    assert result == Error(
        description="a\nb",
        error_class=400,
        stack="x.py:1\n",
        created=5,
        code="invalid_argument",
    )


def test_merge_ignores_empty_incoming_fields() -> None:
    """Zero-valued incoming fields leave the existing value untouched."""
    existing = Error(description="a", error_class=404, code="not_found")

    merge(existing, Error())

    assert existing == Error(description="a", error_class=404, code="not_found")


def test_wrap_payload_that_formats_empty_still_adds_a_line() -> None:
    """Any payload appends a line, even when it renders as ``""``."""
    err = newf(500, Code.UNKNOWN, "a")

    wrap(err, 0, None, "")

    assert err.description == "a\n"


def test_wrap_payload_on_empty_description_replaces_it() -> None:
    """No leading blank line when the existing description is empty."""
    err = newf(500, Code.UNKNOWN)

    wrap(err, 0, None, "first")

    assert err.description == "first"
