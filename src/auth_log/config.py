"""Configuration loading and validation.

Settings come from a YAML file (optionally rooted under an ``auth_log``
key), from a plain mapping, or from ``AUTH_LOG_*`` environment variables.
Invalid combinations are rejected here, before anything is wired.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from auth_log.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ROOT_KEY = "auth_log"

GEOIP2 = "geoip2"
IP_API = "ip_api"

# Spellings accepted for the location provider
_PROVIDER_ALIASES = {
    "geoip2": GEOIP2,
    "ip_api": IP_API,
    "ipapi": IP_API,
    "none": None,
    "": None,
}


class TransportsConfig(BaseModel):
    """Sender identity and mail transport used for notifications."""

    sender_email: str = Field(default="no-reply@example.com", min_length=1)
    sender_name: str = Field(default="Security", min_length=1)
    smtp_host: str = "localhost"
    smtp_port: int = 25


class LocationConfig(BaseModel):
    """Which location provider is active, if any."""

    provider: Literal["geoip2", "ip_api"] | None = None
    geoip2_database_path: str | None = None

    @field_validator("provider", mode="before")
    @classmethod
    def _normalize_provider(cls, value: Any) -> Any:
        if isinstance(value, str):
            key = value.strip().lower()
            if key in _PROVIDER_ALIASES:
                return _PROVIDER_ALIASES[key]
            raise ValueError(
                f'The provider "{value}" is not supported. Choose "geoip2" or "ip_api".'
            )
        return value

    @model_validator(mode="after")
    def _require_database_path(self) -> "LocationConfig":
        if self.provider == GEOIP2 and not self.geoip2_database_path:
            raise ValueError(
                'The "geoip2_database_path" field is required when the "geoip2" provider is used.'
            )
        return self


class AuthLogConfig(BaseSettings):
    """Top-level settings."""

    model_config = SettingsConfigDict(
        env_prefix="AUTH_LOG_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    messenger: bool = False
    transports: TransportsConfig = Field(default_factory=TransportsConfig)
    location: LocationConfig | None = None


def load_config(source: Mapping[str, Any] | Path | str | None = None) -> AuthLogConfig:
    """Load and validate settings.

    Args:
        source: A mapping of settings, a path to a YAML file, or None for
            defaults (environment variables still apply).

    Returns:
        Validated AuthLogConfig.

    Raises:
        ConfigurationError: If the file is missing or unreadable, or the
            settings are invalid.
    """
    if source is None:
        data: Any = {}
    elif isinstance(source, Mapping):
        data = dict(source)
    else:
        data = _read_yaml(Path(source))

    if not isinstance(data, Mapping):
        raise ConfigurationError("Configuration must be a mapping")

    if ROOT_KEY in data:
        data = data[ROOT_KEY] or {}

    try:
        config = AuthLogConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid auth_log configuration: {e}") from e

    logger.debug(
        f"Loaded configuration (messenger={config.messenger}, "
        f"location={config.location.provider if config.location else None})"
    )
    return config


def dump_config(config: AuthLogConfig) -> dict[str, Any]:
    """Render settings as a YAML-ready mapping rooted under ``auth_log``."""
    return {ROOT_KEY: config.model_dump(exclude_none=True)}


def _read_yaml(path: Path) -> Any:
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Cannot parse configuration file {path}: {e}") from e

    return data if data is not None else {}
