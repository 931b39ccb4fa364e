"""TaskSpine configuration.

Application settings loaded from environment variables with TASKSPINE_ prefix.

Example:
    >>> from taskspine.core.config import get_settings
    >>> settings = get_settings(log_level="DEBUG")
    >>> settings.log_level
    'DEBUG'
    >>> settings.default_quota
    0
"""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from taskspine.models.weight import MAX_WEIGHT


class Settings(BaseSettings):
    """Application settings.

    Loads from environment variables with TASKSPINE_ prefix.

    Example:
        >>> from taskspine.core.config import Settings
        >>> s = Settings(default_quota=12)
        >>> s.default_quota
        12
        >>> s.log_format
        'console'
    """

    model_config = SettingsConfigDict(
        env_prefix="TASKSPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Log format: json or console")

    # Execution
    default_quota: int = Field(
        default=0,
        ge=0,
        le=MAX_WEIGHT,
        description="Weight cap per execute() call for SettingsQuota",
    )

    # Host storage costs
    db_read_weight: int = Field(default=25_000_000, ge=0, le=MAX_WEIGHT)
    db_write_weight: int = Field(default=100_000_000, ge=0, le=MAX_WEIGHT)


def get_settings(**overrides: Any) -> Settings:
    """Get settings with optional overrides.

    Example:
        >>> from taskspine.core.config import get_settings
        >>> s = get_settings(default_quota=7)
        >>> s.default_quota
        7
    """
    return Settings(**overrides)
