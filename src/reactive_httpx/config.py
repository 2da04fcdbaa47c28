"""
Runtime settings for reactive-httpx.

Settings are read from ``REACTIVE_HTTPX_*`` environment variables the first
time they are needed and cached for the life of the process.
"""

from __future__ import annotations

import os
import warnings
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

_ENV_PREFIX = "REACTIVE_HTTPX_"

_settings: Settings | None = None


class Settings(BaseModel):
    """Library-wide settings."""

    model_config = ConfigDict(frozen=True)

    log_level: str = Field(default="WARNING", description="Level for library loggers")
    log_format: Literal["text", "json"] = Field(
        default="text", description="Log output format: text or json"
    )
    string_encoding: str = Field(
        default="utf-8", description="Encoding used by map_string for raw payloads"
    )
    key_path_separator: str = Field(
        default=".", min_length=1, description="Separator between key path segments"
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("string_encoding")
    @classmethod
    def _check_encoding(cls, value: str) -> str:
        import codecs

        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {value}") from e
        return value

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from (default: ``os.environ``)

        Returns:
            Settings with every ``REACTIVE_HTTPX_<FIELD>`` variable applied
        """
        env = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            raw = env.get(f"{_ENV_PREFIX}{name.upper()}")
            if raw:
                values[name] = raw
        return cls(**values)


def get_settings() -> Settings:
    """Get the process-wide settings, loading them from the environment once.

    Invalid environment values fall back to the defaults with a
    ``RuntimeWarning``, so a bad variable never breaks import or decoding.
    """
    global _settings
    if _settings is None:
        try:
            _settings = Settings.from_env()
        except ValidationError as e:
            fields = ", ".join(
                f"{_ENV_PREFIX}{str(err['loc'][0]).upper()}" for err in e.errors()
            )
            warnings.warn(
                f"Ignoring invalid reactive-httpx settings ({fields}); using defaults",
                RuntimeWarning,
                stacklevel=2,
            )
            _settings = Settings()
    return _settings


def reset_settings(settings: Settings | None = None) -> None:
    """Replace the cached settings (``None`` reloads from the environment)."""
    global _settings
    _settings = settings
