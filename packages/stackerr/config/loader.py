"""Settings loading with deterministic precedence.

The cascade is always:
1) CLI params
2) Environment variables
3) ~/.config/stackerr/secrets.yaml (when present)
4) ~/.config/stackerr/stackerr.yaml
5) Model defaults

Environment variable format:
- Prefix: ``STACKERR_``
- Nested keys: ``__`` separator
- Example: ``STACKERR_STACK__MAX_FRAMES=40`` -> ``stack.max_frames = 40``
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, ClassVar, Mapping

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from .models import DEFAULT_CONFIG_PATH, StackerrSettings

ENV_PREFIX = "STACKERR_"


def load_settings(
    *,
    cli_params: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
    config_path: str | Path | None = None,
) -> StackerrSettings:
    """Resolve settings from CLI params, env, YAML files and defaults.

    When ``environ`` is given it replaces the process environment entirely,
    which keeps tests hermetic.
    """
    resolved_path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    read_process_env = environ is None

    class _ResolvedSettings(StackerrSettings):
        _config_path: ClassVar[Path] = resolved_path

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,
            file_secret_settings: PydanticBaseSettingsSource,
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            sources = super().settings_customise_sources(
                settings_cls,
                init_settings,
                env_settings,
                dotenv_settings,
                file_secret_settings,
            )
            if read_process_env:
                return sources
            return tuple(source for source in sources if source is not env_settings)

    init_data: dict[str, Any] = {}
    if environ is not None:
        init_data = _load_env_config(environ=environ, prefix=ENV_PREFIX)
    if cli_params is not None:
        init_data = _merge_dicts(init_data, cli_params)
    return _ResolvedSettings(**init_data)


def _load_env_config(
    *, environ: Mapping[str, str], prefix: str
) -> dict[str, Any]:
    """Extract and map prefixed environment variables into nested config."""
    output: dict[str, Any] = {}

    for key, raw_value in environ.items():
        if not key.startswith(prefix):
            continue

        remainder = key[len(prefix) :]
        if not remainder:
            continue

        path = [
            segment.strip().lower()
            for segment in remainder.split("__")
            if segment.strip()
        ]
        if not path:
            continue

        _set_nested(output, path, _coerce_scalar(raw_value))

    return output


def _set_nested(target: dict[str, Any], path: list[str], value: Any) -> None:
    """Set a nested mapping value by path, creating intermediate dicts."""
    cursor: dict[str, Any] = target
    for segment in path[:-1]:
        child = cursor.get(segment)
        if not isinstance(child, dict):
            child = {}
            cursor[segment] = child
        cursor = child
    cursor[path[-1]] = value


def _merge_dicts(
    base: Mapping[str, Any], override: Mapping[str, Any]
) -> dict[str, Any]:
    """Recursively merge mappings, with ``override`` taking precedence."""
    result = {str(key): copy.deepcopy(value) for key, value in base.items()}
    for key, override_value in override.items():
        base_value = result.get(key)
        if isinstance(base_value, dict) and isinstance(override_value, Mapping):
            result[key] = _merge_dicts(base_value, override_value)
            continue
        result[key] = copy.deepcopy(override_value)
    return result


def _coerce_scalar(raw: str) -> Any:
    """Coerce scalar env strings into bool/int/float/JSON when obvious."""
    value = raw.strip()
    lowered = value.lower()

    if lowered in {"true", "false"}:
        return lowered == "true"

    if lowered in {"null", "none"}:
        return None

    if value.startswith("{") or value.startswith("["):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return raw

    try:
        return int(value)
    except ValueError:
        pass

    try:
        return float(value)
    except ValueError:
        return raw
