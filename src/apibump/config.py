"""Pydantic configuration models with env var support.

Precedence (highest to lowest):
1. Direct kwargs to load_settings()
2. Environment variables (APIBUMP_<SECTION>__<KEY>)
3. Built-in defaults (this file)

Examples:
    APIBUMP_LOGGING__LEVEL=DEBUG
    APIBUMP_LOGGING__FORMAT=json
    APIBUMP_REPORT__INDENT=2
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from apibump.errors import ConfigError

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        APIBUMP_LOGGING__LEVEL: Log level (default: WARNING)
        APIBUMP_LOGGING__FORMAT: console or json
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG shows per-module diff outcomes.",
    )
    format: Literal["console", "json"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


class ReportConfig(BaseModel):
    """Diff report output.

    Env vars:
        APIBUMP_REPORT__INDENT: JSON indentation; unset for compact canonical JSON
    """

    indent: Optional[int] = Field(default=None, ge=0, le=8)


class ApiBumpSettings(BaseSettings):
    """Root settings."""

    model_config = SettingsConfigDict(
        env_prefix="APIBUMP_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    logging: LoggingConfig = LoggingConfig()
    report: ReportConfig = ReportConfig()


def load_settings(**overrides: Any) -> ApiBumpSettings:
    """Load settings: defaults < env vars < overrides.

    Args:
        **overrides: Section values, e.g. ``logging={"level": "DEBUG"}``.

    Raises:
        ConfigError: If any value fails validation.
    """
    try:
        return ApiBumpSettings(**overrides)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
