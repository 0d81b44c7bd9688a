"""Tests for pydantic-settings-backed configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from packages.stackerr.config import load_settings
from packages.stackerr.config.models import DEFAULT_HOST_PREFIXES, DEFAULT_VENDOR_MARKERS


def test_load_settings_uses_model_defaults_when_sources_missing(tmp_path: Path) -> None:
    """Settings fall back to model defaults when env and YAML are absent."""
    settings = load_settings(config_path=tmp_path / "stackerr.yaml", environ={})

    assert settings.logging.level == "INFO"
    assert settings.logging.service == "stackerr"
    assert settings.stack.max_frames == 20
    assert settings.stack.vendor_markers == DEFAULT_VENDOR_MARKERS
    assert settings.stack.host_prefixes == DEFAULT_HOST_PREFIXES
    assert settings.stack.runtime_prefixes == ()


def test_load_settings_uses_precedence_cascade(tmp_path: Path) -> None:
    """CLI params override env, env overrides YAML, YAML overrides defaults."""
    config_file = tmp_path / "stackerr.yaml"
    config_file.write_text(
        "\n".join(
            [
                "logging:",
                "  level: WARNING",
                "  service: billing",
                "stack:",
                "  max_frames: 8",
            ]
        ),
        encoding="utf-8",
    )

    settings = load_settings(
        cli_params={"logging": {"level": "DEBUG"}},
        environ={
            "STACKERR_LOGGING__LEVEL": "ERROR",
            "STACKERR_STACK__MAX_FRAMES": "12",
            "OTHER_STACK__MAX_FRAMES": "99",
        },
        config_path=config_file,
    )

    assert settings.logging.level == "DEBUG"
    assert settings.logging.service == "billing"
    assert settings.stack.max_frames == 12


def test_load_settings_parses_json_lists_from_env(tmp_path: Path) -> None:
    """List-valued settings accept JSON arrays in environment variables."""
    settings = load_settings(
        environ={"STACKERR_STACK__HOST_PREFIXES": '["/git.corp.example/"]'},
        config_path=tmp_path / "stackerr.yaml",
    )

    assert settings.stack.host_prefixes == ("/git.corp.example/",)


def test_load_settings_applies_secrets_yaml_over_main_yaml(tmp_path: Path) -> None:
    """A sibling secrets.yaml overrides matching keys from the main file."""
    config_file = tmp_path / "stackerr.yaml"
    config_file.write_text(
        "logging:\n  environment: staging\n  service: billing\n", encoding="utf-8"
    )
    (tmp_path / "secrets.yaml").write_text(
        "logging:\n  environment: prod\n", encoding="utf-8"
    )

    settings = load_settings(config_path=config_file, environ={})

    assert settings.logging.environment == "prod"
    assert settings.logging.service == "billing"


def test_load_settings_rejects_invalid_values(tmp_path: Path) -> None:
    """Out-of-range values surface as validation errors."""
    with pytest.raises(ValidationError):
        load_settings(
            cli_params={"stack": {"max_frames": 0}},
            environ={},
            config_path=tmp_path / "stackerr.yaml",
        )
