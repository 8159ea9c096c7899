"""
Configuration management for the Attendance Bot.

Loads and validates all required environment variables with clear error messages.
Uses Pydantic Settings for type safety and validation.
"""

import logging
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All required variables must be set, or the application will fail fast
    with a clear error message indicating which variables are missing.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # CyberVidya portal configuration
    cybervidya_base_url: str = Field(
        default="https://kiet.cybervidya.net",
        description="Base URL for the CyberVidya portal"
    )
    cybervidya_username: str = Field(
        ...,
        description="CyberVidya login username (roll number)"
    )
    cybervidya_password: str = Field(
        ...,
        description="CyberVidya login password"
    )

    # Telegram Bot API Configuration
    telegram_bot_token: str = Field(
        ...,
        description="Telegram Bot API token (from @BotFather)"
    )
    telegram_chat_id: str = Field(
        ...,
        description="Telegram chat ID (user, group, or channel)"
    )

    # Snapshot storage
    snapshot_backend: Literal["supabase", "file"] = Field(
        default="supabase",
        description="Where the last-known attendance snapshot is kept"
    )
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL"
    )
    supabase_service_role_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key (not anon key)"
    )
    snapshot_key: str = Field(
        default="state",
        description="Row id of the snapshot document in the attendance_state table"
    )
    snapshot_file: str = Field(
        default="attendance_state.json",
        description="Path of the snapshot document when using the file backend"
    )

    # Optional Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator("cybervidya_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensure base URL doesn't have trailing slash."""
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return upper

    @model_validator(mode="after")
    def validate_backend_credentials(self) -> "Settings":
        """The Supabase backend needs both the URL and the service key."""
        if self.snapshot_backend == "supabase":
            missing = [
                name for name in ("supabase_url", "supabase_service_role_key")
                if not getattr(self, name)
            ]
            if missing:
                raise ValueError(
                    f"Missing Supabase configuration: {', '.join(missing)}"
                )
        return self

    @property
    def login_url(self) -> str:
        """Full URL of the CyberVidya login endpoint."""
        return f"{self.cybervidya_base_url}/api/auth/login"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Validated application settings

    Raises:
        ValidationError: If required environment variables are missing or invalid
    """
    return Settings()


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Configure application logging.

    Args:
        settings: Optional settings instance, will be loaded if not provided

    Returns:
        logging.Logger: Configured logger instance
    """
    level = logging.INFO
    try:
        settings = settings or get_settings()
        level = getattr(logging, settings.log_level)
    except ValidationError:
        # main() reports the configuration error itself
        pass

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    return logging.getLogger("attendance_bot")
