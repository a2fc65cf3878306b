"""Typed configuration models for Warden runtime settings."""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "warden" / "warden.yaml"

_CONFIG_PATH: ContextVar[Path] = ContextVar(
    "warden_config_path", default=DEFAULT_CONFIG_PATH
)


class LoggingSettings(BaseModel):
    """Structured logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_output: bool = True
    service: str = "warden"
    environment: str = "dev"


class PlatformSettings(BaseModel):
    """Connection settings for the hosted identity/data platform.

    ``service_role_key`` is the privileged credential used for the role check,
    the unlock mutation and the audit insert. ``anon_key`` is the public
    credential sent alongside the caller's own token when resolving identity.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    url: str
    service_role_key: SecretStr
    anon_key: SecretStr
    timeout_seconds: float = Field(default=10.0, gt=0)
    health_timeout_seconds: float = Field(default=2.0, gt=0)

    @field_validator("url", mode="before")
    @classmethod
    def _normalize_url(cls, value: object) -> object:
        if not isinstance(value, str):
            return value
        url = value.strip().rstrip("/")
        if url == "":
            raise ValueError("platform.url must not be empty")
        return url

    @field_validator("service_role_key", "anon_key", mode="after")
    @classmethod
    def _require_key(cls, value: SecretStr) -> SecretStr:
        if value.get_secret_value().strip() == "":
            raise ValueError("platform credentials must not be empty")
        return value


class HttpSettings(BaseModel):
    """Inbound HTTP listener settings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)
    route_path: str = "/unlock-account"
    log_level: Literal["critical", "error", "warning", "info", "debug"] = "info"

    @field_validator("route_path", mode="before")
    @classmethod
    def _normalize_route_path(cls, value: object) -> object:
        """Normalize the route to a canonical absolute URL path."""
        if not isinstance(value, str):
            return value
        path = value.strip()
        if path == "":
            raise ValueError("route_path must not be empty")
        if not path.startswith("/"):
            path = f"/{path}"
        return path


class WardenSettings(BaseSettings):
    """Root runtime settings resolved from init/env/yaml sources.

    ``platform`` has no defaults: a process without a platform URL and both
    credentials fails validation at startup instead of per request.
    """

    model_config = SettingsConfigDict(
        env_prefix="WARDEN_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)
    platform: PlatformSettings

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Apply Warden precedence: init > env > yaml > model defaults."""
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(
                settings_cls,
                yaml_file=_CONFIG_PATH.get(),
                yaml_file_encoding="utf-8",
            ),
        )
