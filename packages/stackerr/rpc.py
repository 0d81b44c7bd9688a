"""gRPC boundary helpers for structured errors.

Servers abort with the encoded error as status details; clients turn the
resulting ``grpc.RpcError`` back into an ``Error``. Peers that send plain
details still produce a classified ``Error`` derived from the status code.
"""

from __future__ import annotations

import logging

import grpc

from packages.stackerr.errors import Code, Error, decode, encode, is_encoded, newf
from packages.stackerr.logging import get_logger, log_error

_LOGGER = get_logger(__name__)


def status_for_class(error_class: int) -> grpc.StatusCode:
    """Map an HTTP-style error class onto a gRPC status code."""
    status = _CLASS_TO_STATUS.get(error_class)
    if status is not None:
        return status
    if 400 <= error_class < 500:
        return grpc.StatusCode.FAILED_PRECONDITION
    if 500 <= error_class < 600:
        return grpc.StatusCode.INTERNAL
    return grpc.StatusCode.UNKNOWN


def class_for_status(status: grpc.StatusCode) -> int:
    """Map a gRPC status code onto an HTTP-style error class."""
    return _STATUS_TO_CLASS.get(status, 500)


def abort_with_error(*, context: grpc.ServicerContext, err: Error) -> None:
    """Log ``err`` and abort the current RPC with its transport encoding."""
    status = status_for_class(err.error_class)
    level = logging.WARNING if 400 <= err.error_class < 500 else logging.ERROR
    log_error(_LOGGER, err, f"rpc aborted with {status.name}", level=level)
    context.abort(status, encode(err))


def error_from_rpc(error: grpc.RpcError, *, operation: str = "") -> Error:
    """Rebuild the ``Error`` a peer aborted with.

    Encoded details decode losslessly. Anything else becomes a fresh error
    whose class and code follow the status and whose root keeps the raw
    status and details.
    """
    status = error.code() if hasattr(error, "code") else grpc.StatusCode.UNKNOWN
    details = error.details() if hasattr(error, "details") else str(error)
    details = details or ""
    if is_encoded(details):
        return decode(details)

    prefix = f"{operation} transport failure" if operation else "transport failure"
    err = newf(
        class_for_status(status),
        _STATUS_TO_CODE.get(status, Code.UNKNOWN),
        "%s (%s): %s",
        prefix,
        status.name,
        details,
    )
    err.root = f"{status.name}: {details}"
    return err


_CLASS_TO_STATUS: dict[int, grpc.StatusCode] = {
    400: grpc.StatusCode.INVALID_ARGUMENT,
    401: grpc.StatusCode.UNAUTHENTICATED,
    403: grpc.StatusCode.PERMISSION_DENIED,
    404: grpc.StatusCode.NOT_FOUND,
    409: grpc.StatusCode.ALREADY_EXISTS,
    429: grpc.StatusCode.RESOURCE_EXHAUSTED,
    499: grpc.StatusCode.CANCELLED,
    500: grpc.StatusCode.INTERNAL,
    501: grpc.StatusCode.UNIMPLEMENTED,
    503: grpc.StatusCode.UNAVAILABLE,
    504: grpc.StatusCode.DEADLINE_EXCEEDED,
}

_STATUS_TO_CLASS: dict[grpc.StatusCode, int] = {
    grpc.StatusCode.INVALID_ARGUMENT: 400,
    grpc.StatusCode.OUT_OF_RANGE: 400,
    grpc.StatusCode.FAILED_PRECONDITION: 400,
    grpc.StatusCode.UNAUTHENTICATED: 401,
    grpc.StatusCode.PERMISSION_DENIED: 403,
    grpc.StatusCode.NOT_FOUND: 404,
    grpc.StatusCode.ALREADY_EXISTS: 409,
    grpc.StatusCode.ABORTED: 409,
    grpc.StatusCode.RESOURCE_EXHAUSTED: 429,
    grpc.StatusCode.CANCELLED: 499,
    grpc.StatusCode.UNIMPLEMENTED: 501,
    grpc.StatusCode.UNAVAILABLE: 503,
    grpc.StatusCode.DEADLINE_EXCEEDED: 504,
}

_STATUS_TO_CODE: dict[grpc.StatusCode, Code] = {
    grpc.StatusCode.INVALID_ARGUMENT: Code.INVALID_ARGUMENT,
    grpc.StatusCode.UNAUTHENTICATED: Code.UNAUTHENTICATED,
    grpc.StatusCode.PERMISSION_DENIED: Code.PERMISSION_DENIED,
    grpc.StatusCode.NOT_FOUND: Code.NOT_FOUND,
    grpc.StatusCode.ALREADY_EXISTS: Code.ALREADY_EXISTS,
    grpc.StatusCode.UNIMPLEMENTED: Code.NOT_IMPLEMENTED,
    grpc.StatusCode.UNAVAILABLE: Code.DEPENDENCY_UNAVAILABLE,
    grpc.StatusCode.DEADLINE_EXCEEDED: Code.DEPENDENCY_TIMEOUT,
    grpc.StatusCode.INTERNAL: Code.INTERNAL_ERROR,
}
