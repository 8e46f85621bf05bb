"""
Configuration

Application settings and environment configuration for gateway-config.
"""

from typing import Literal, Optional

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gateway_config.core.error_codes import ConfigurationErrorCode
from gateway_config.core.exceptions import ConfigurationException


class Settings(BaseSettings):
    """
    Application configuration settings.

    Supports both environment variables and .env file loading.
    Environment variables take precedence over .env file values.
    """

    # Application settings
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(
        default="info", description="Log level (debug, info, warning, error)"
    )
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Application environment"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate log level."""
        allowed_levels = {"debug", "info", "warning", "error"}
        normalized = v.lower().strip()
        if normalized not in allowed_levels:
            raise ValueError(
                f"log_level must be one of {sorted(allowed_levels)}, got '{v}'"
            )
        return normalized

    # Database settings
    database__url: str = Field(
        default="sqlite+aiosqlite:///./database.db",
        description="SQLite database URL (aiosqlite driver)",
    )
    database__echo: bool = Field(default=False, description="Enable SQL query logging")
    database__busy_timeout: int = Field(
        default=5000, ge=0, description="SQLite busy timeout in milliseconds"
    )

    # Remote mirror settings
    sync__enabled: bool = Field(
        default=True, description="Mirror the store after each successful write"
    )
    sync__timeout: Optional[float] = Field(
        default=None, gt=0, description="Deadline for one sync call in seconds"
    )

    # Category quota defaults
    quota__default_pro: int = Field(
        default=50, ge=0, description="Pro category quota when none is stored"
    )
    quota__default_flash: int = Field(
        default=1500, ge=0, description="Flash category quota when none is stored"
    )

    # Logfire monitoring settings
    logfire__enabled: bool = Field(
        default=False, description="Enable Logfire monitoring"
    )
    logfire__service_name: str = Field(
        default="gateway_config", description="Logfire service name"
    )
    logfire__environment: str = Field(
        default="development", description="Logfire environment"
    )
    logfire__token: Optional[SecretStr] = Field(
        default=None, description="Logfire token"
    )
    logfire__disable_scrubbing: Optional[bool] = Field(
        default=False, description="Disable Logfire scrubbing"
    )
    logfire__instrument__sqlalchemy: bool = Field(
        default=True, description="Enable Logfire SQLAlchemy instrumentation"
    )

    # Logging file settings (optional)
    log__dir: str = Field(
        default="logs", description="Directory where log files are stored"
    )
    log__file_path: Optional[str] = Field(
        default=None, description="Custom log file path; overrides log__dir if set"
    )
    log__file_level: str = Field(default="INFO", description="File handler log level")
    log__file_max_bytes: int = Field(
        default=10 * 1024 * 1024,
        gt=0,
        description="Max size of a log file before rotation",
    )
    log__file_backup_count: int = Field(
        default=3, ge=0, description="Number of backup log files to keep"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )


def create_settings() -> Settings:
    """
    Create and validate settings instance.

    Returns:
        Settings: Configured settings instance

    Raises:
        ConfigurationException: If configuration loading or validation fails
    """
    try:
        return Settings()
    except ValidationError as e:
        print(f"Configuration validation failed: {e}")
        print("Please ensure all environment variables in your .env file are valid")
        raise ConfigurationException(
            f"Configuration validation failed: {e}",
            ConfigurationErrorCode.INVALID_CONFIG,
            details={"fields": [str(err["loc"][0]) for err in e.errors() if err["loc"]]},
            cause=e,
        ) from e
    except Exception as e:
        print(f"Configuration loading failed: {e}")
        raise ConfigurationException(
            f"Configuration loading failed: {e}",
            ConfigurationErrorCode.CONFIG_LOAD_FAILED,
            cause=e,
        ) from e


# Global configuration instance
settings = create_settings()
