"""Core configuration.

Why here:
- Centralizes environment variables and the config file (pydantic-settings)
  without polluting the CLI.
- Loaded once at startup; the resulting frozen `AppSettings` is passed
  explicitly to adapters instead of each one reading `os.environ`.

Precedence, highest first: CLI flags (init kwargs), environment, legacy
environment names, `.env`, TOML config file.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from core import __version__
from core.domain.errors import ConfigurationError
from core.domain.models import Credentials

APP_NAME = "beeminder"
CONFIG_FILE_NAME = "default-config.toml"


def get_user_config_dir() -> Path:
    """Per-user config directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_user_config_file() -> Path:
    override = os.environ.get("BEEMINDER_CONFIG_FILE")
    if override:
        return Path(override).expanduser()
    return get_user_config_dir() / CONFIG_FILE_NAME


class LegacyEnvSettingsSource(PydanticBaseSettingsSource):
    """Variable names used by older releases (`BEEMINDER_USER`, `BEEMINDER_TOKEN`)."""

    names: dict[str, str] = {
        "username": "BEEMINDER_USER",
        "auth_token": "BEEMINDER_TOKEN",
    }

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        env_name = self.names.get(field_name)
        if env_name is None:
            return None, field_name, False
        return os.environ.get(env_name) or None, field_name, False

    def __call__(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for field_name, field in self.settings_cls.model_fields.items():
            value, key, _ = self.get_field_value(field, field_name)
            if value is not None:
                data[key] = value
        return data


class AppSettings(BaseSettings):
    """Central application configuration.

    Why pydantic-settings:
    - Typing and validation at the edge (env vars, config file).
    - The source chain encodes the credential precedence in one place.
    """

    model_config = SettingsConfigDict(
        env_prefix="BEEMINDER_",
        extra="ignore",
        case_sensitive=False,
        env_ignore_empty=True,
        env_file=".env",
        env_file_encoding="utf-8",
        frozen=True,
    )

    username: str | None = Field(
        default=None,
        description="Beeminder username.",
    )
    auth_token: str | None = Field(
        default=None,
        repr=False,
        description="Personal API token (https://www.beeminder.com/api/v1/auth_token.json).",
    )
    api_root: str = Field(
        default="https://www.beeminder.com/api/v1",
        min_length=8,
        description="REST root; `/users/<username>` is appended.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default=f"beeminder-cli/{__version__}",
        min_length=1,
        description="Client signature sent on every request.",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            LegacyEnvSettingsSource(settings_cls),
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=get_user_config_file()),
        )


def load_settings(*, username: str | None = None, auth_token: str | None = None) -> AppSettings:
    """Build settings once, with CLI flags as the highest-priority source.

    Empty flags count as unset so the next source still applies.
    """

    overrides = {
        key: value
        for key, value in (("username", username), ("auth_token", auth_token))
        if value
    }
    return AppSettings(**overrides)


def resolve_credentials(settings: AppSettings) -> Credentials:
    """Return the effective credentials or raise `ConfigurationError`.

    Pure: no network. Both fields are reported when both are missing.
    """

    missing = [name for name in ("username", "auth_token") if not getattr(settings, name)]
    if missing:
        raise ConfigurationError(missing, config_file=get_user_config_file())
    return Credentials(username=settings.username, auth_token=settings.auth_token)
