"""Process startup wiring: logging first, then stack capture policy."""

from __future__ import annotations

from packages.stackerr.config import StackerrSettings, load_settings
from packages.stackerr.errors import configure_stack
from packages.stackerr.logging import configure_logging, get_logger

_LOGGER = get_logger(__name__)


def configure(settings: StackerrSettings | None = None) -> StackerrSettings:
    """Apply logging and stack settings, loading them when not given."""
    resolved = settings if settings is not None else load_settings()
    configure_logging(
        level=resolved.logging.level,
        json_output=resolved.logging.json_output,
        service=resolved.logging.service,
        environment=resolved.logging.environment,
    )
    configure_stack(resolved.stack)
    _LOGGER.info(
        "stackerr configured",
        extra={
            "max_frames": resolved.stack.max_frames,
            "vendor_markers": list(resolved.stack.vendor_markers),
        },
    )
    return resolved
