"""Canonical logging field names.

Keeping names centralized prevents drift between services that log the same
structured error.
"""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EXCEPTION = "exception"

# Structured error fields.
ERROR_CODE = "error_code"
ERROR_CLASS = "error_class"
REQUEST_ID = "request_id"
STACK = "stack"
ROOT = "root"

# Common service-level fields.
SERVICE = "service"
ENVIRONMENT = "environment"
