"""Public API for stackerr configuration utilities."""

from .loader import load_settings
from .models import (
    DEFAULT_CONFIG_PATH,
    LoggingSettings,
    StackerrSettings,
    StackSettings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "LoggingSettings",
    "StackerrSettings",
    "StackSettings",
    "load_settings",
]
