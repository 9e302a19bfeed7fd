"""
Configuration Management for filterfs

Uses Pydantic Settings so chain behaviour can be tuned from the
environment without code changes.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Library configuration loaded from environment variables.

    Environment variables should be prefixed with FILTERFS_.
    Example: FILTERFS_TRACE_OPERATIONS=true
    """

    model_config = SettingsConfigDict(
        env_prefix="FILTERFS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    trace_operations: bool = Field(
        default=False,
        description="Log every filter and source invocation at debug level"
    )

    log_rejections: bool = Field(
        default=True,
        description="Log a warning whenever a filter rejects an operation"
    )


# Global settings instance - lazy loaded
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the library settings instance.

    Parsed on first use, so environment variables and .env files can
    be prepared before any chain is built.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """
    Reset the settings instance.

    Useful for testing or when environment variables change.
    """
    global _settings
    _settings = None
