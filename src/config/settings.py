"""
Module: settings.py
Description: Queue transport configuration using pydantic-settings.

Reads the SQS connection and worker polling settings from environment
variables with validation and defaults. Supports .env files for local
development against a local SQS endpoint.
"""

import re
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Queue transport settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application settings
    app_name: str = Field(default="SQS Queue Transport", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    log_level: str = Field(default="INFO", description="Logging level")

    # AWS settings
    aws_region: str = Field(default="us-east-1", description="AWS region")
    sqs_endpoint_url: Optional[str] = Field(
        default=None,
        description="Override SQS endpoint (local emulators)"
    )

    # Queue settings
    default_queue: str = Field(
        default="default",
        description="Queue name used when a job does not name one"
    )
    wait_time_seconds: int = Field(
        default=0,
        ge=0,
        le=20,
        description="Long-poll wait when receiving a message"
    )
    visibility_timeout: Optional[int] = Field(
        default=None,
        ge=0,
        le=43200,
        description="Visibility timeout requested on receive; queue default when unset"
    )
    list_page_size: int = Field(
        default=1000,
        ge=1,
        le=1000,
        description="Queue names fetched per list-queues page"
    )

    @field_validator('default_queue')
    @classmethod
    def validate_queue_name(cls, v: str) -> str:
        """Validate SQS queue names."""
        if not v or not isinstance(v, str):
            raise ValueError("Queue name must be a non-empty string")

        # Standard and FIFO queue names, up to 80 characters
        if not re.match(r'^[a-zA-Z0-9_-]{1,75}(\.fifo)?$', v) or len(v) > 80:
            raise ValueError(
                "Queue name must contain only letters, numbers, hyphens, and underscores"
            )

        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()


# Global settings instance
settings = Settings()
