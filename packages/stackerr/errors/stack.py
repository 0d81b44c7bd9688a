"""Call-stack capture for structured errors.

The captured trace is compact and host independent:

- frames from this package and from the interpreter's standard library are
  dropped
- third-party paths collapse to their vendor marker, e.g.
  ``/site-packages/grpc/_server.py``
- first-party paths lose well-known source-host prefixes

CPython reports ``f_lineno`` of a suspended caller frame as the line of the
call in progress, so no return-address correction is applied.
"""

from __future__ import annotations

import os
import sys
import sysconfig
from functools import lru_cache
from pathlib import Path
from types import FrameType
from typing import Iterable, Iterator

from packages.stackerr.config.models import StackSettings

INTERNAL_DIR = os.path.realpath(Path(__file__).resolve().parents[1]) + os.sep

_active_settings = StackSettings()


def configure_stack(settings: StackSettings) -> None:
    """Replace the process-wide stack capture settings."""
    global _active_settings
    _active_settings = settings


def get_stack_settings() -> StackSettings:
    """Return the process-wide stack capture settings."""
    return _active_settings


def capture_stack(skip: int = 0, *, settings: StackSettings | None = None) -> str:
    """Return up to ``max_frames`` filtered frames as ``path:line`` lines.

    ``skip=0`` starts at the caller of this function, ``skip=1`` at the
    caller's caller. Frames are ordered innermost first.
    """
    active = settings if settings is not None else _active_settings
    try:
        frame = sys._getframe(skip + 1)
    except ValueError:
        return ""
    return render_frames(_walk(frame, limit=active.max_frames), settings=active)


def render_frames(
    frames: Iterable[tuple[str, int]], *, settings: StackSettings | None = None
) -> str:
    """Filter and render ``(path, line)`` pairs into a newline-joined trace."""
    active = settings if settings is not None else _active_settings
    lines: list[str] = []
    for path, line in frames:
        shortened = shorten_path(path, settings=active)
        if shortened is None:
            continue
        lines.append(f"{shortened}:{line}\n")
    return "".join(lines)


def shorten_path(path: str, *, settings: StackSettings | None = None) -> str | None:
    """Return the display form of ``path``, or ``None`` if the frame is noise."""
    active = settings if settings is not None else _active_settings
    if path.startswith("<"):
        # <frozen importlib._bootstrap>, <string>, <stdin>
        return None

    resolved = os.path.realpath(path)
    if resolved.startswith(INTERNAL_DIR):
        return None

    display = path.replace(os.sep, "/") if os.sep != "/" else path
    for marker in active.vendor_markers:
        if marker in display:
            return trim_to_prefix(display, marker)

    if _is_runtime_path(resolved, active.runtime_prefixes):
        return None

    for prefix in active.host_prefixes:
        display = trim_out_prefix(display, prefix)
    return display


def trim_to_prefix(value: str, prefix: str) -> str:
    """Drop everything before the first ``prefix``, keeping the prefix.

    Returns ``value`` itself when the prefix does not occur.
    """
    index = value.find(prefix)
    if index < 0:
        return value
    return value[index:]


def trim_out_prefix(value: str, prefix: str) -> str:
    """Drop everything up to and including the first ``prefix``.

    Returns ``value`` itself when the prefix does not occur.
    """
    index = value.find(prefix)
    if index < 0:
        return value
    return value[index + len(prefix) :]


def _walk(frame: FrameType | None, *, limit: int) -> Iterator[tuple[str, int]]:
    """Yield ``(filename, lineno)`` for at most ``limit`` frames outward."""
    count = 0
    while frame is not None and count < limit:
        yield frame.f_code.co_filename, frame.f_lineno or 0
        frame = frame.f_back
        count += 1


def _is_runtime_path(resolved: str, extra_prefixes: Iterable[str]) -> bool:
    """Tell whether a resolved path belongs to the interpreter runtime."""
    if any(resolved.startswith(prefix) for prefix in _stdlib_prefixes()):
        return True
    return any(resolved.startswith(prefix) for prefix in extra_prefixes)


@lru_cache(maxsize=1)
def _stdlib_prefixes() -> tuple[str, ...]:
    """Return real paths of the standard library directories."""
    paths = sysconfig.get_paths()
    found: list[str] = []
    for key in ("stdlib", "platstdlib"):
        value = paths.get(key)
        if not value:
            continue
        prefix = os.path.realpath(value) + os.sep
        if prefix not in found:
            found.append(prefix)
    return tuple(found)
