"""Typed configuration models for stackerr runtime settings."""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "stackerr" / "stackerr.yaml"

DEFAULT_VENDOR_MARKERS: tuple[str, ...] = (
    "/vendor/",
    "/site-packages/",
    "/dist-packages/",
)
DEFAULT_HOST_PREFIXES: tuple[str, ...] = (
    "/git.subiz.net/",
    "/github.com/",
    "/gitlab.com/",
    "/bitbucket.org/",
    "/gopkg.in/",
)


class LoggingSettings(BaseModel):
    """Structured logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_output: bool = True
    service: str = "stackerr"
    environment: str = "dev"


class StackSettings(BaseModel):
    """Call-stack capture and path shortening policy."""

    max_frames: int = Field(default=20, gt=0)
    vendor_markers: tuple[str, ...] = DEFAULT_VENDOR_MARKERS
    host_prefixes: tuple[str, ...] = DEFAULT_HOST_PREFIXES
    runtime_prefixes: tuple[str, ...] = ()

    @field_validator("vendor_markers", "host_prefixes")
    @classmethod
    def _reject_blank_markers(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Blank markers would match every path."""
        if any(not item for item in value):
            raise ValueError("path markers must be non-empty strings")
        return value


class StackerrSettings(BaseSettings):
    """Root runtime settings resolved from init/env/yaml/defaults sources."""

    model_config = SettingsConfigDict(
        env_prefix="STACKERR_",
        env_nested_delimiter="__",
        extra="ignore",
        nested_model_default_partial_update=True,
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    stack: StackSettings = Field(default_factory=StackSettings)

    _config_path: ClassVar[Path] = DEFAULT_CONFIG_PATH

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Apply precedence: init > env > secrets yaml > yaml > defaults."""
        sources: list[PydanticBaseSettingsSource] = [init_settings, env_settings]
        secrets_path = cls._config_path.with_name("secrets.yaml")
        if secrets_path.exists():
            sources.append(
                YamlConfigSettingsSource(
                    settings_cls,
                    yaml_file=secrets_path,
                    yaml_file_encoding="utf-8",
                )
            )
        sources.append(
            YamlConfigSettingsSource(
                settings_cls,
                yaml_file=cls._config_path,
                yaml_file_encoding="utf-8",
            )
        )
        return tuple(sources)
