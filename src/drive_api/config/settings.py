# src/drive_api/config/settings.py
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MAX_PRESIGNED_URL_EXPIRY_SECONDS = 7 * 24 * 60 * 60


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from drive_api.config.settings import get_settings
        settings = get_settings()
        bucket_name = settings.s3_bucket_name
    """

    # Application Settings
    app_name: str = Field(
        default="drive-api",
        description="Application name"
    )

    # AWS Core Settings
    aws_region: str = Field(
        default="ap-south-1",
        alias="AWS_DEFAULT_REGION"
    )

    aws_access_key_id: Optional[str] = Field(
        default=None,
        alias="AWS_ACCESS_KEY_ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default=None,
        alias="AWS_SECRET_ACCESS_KEY"
    )

    aws_endpoint_url: Optional[str] = Field(
        default=None,
        alias="AWS_ENDPOINT_URL",
        description="Custom S3 endpoint (MinIO, moto server); None means AWS"
    )

    # S3 Configuration
    s3_bucket_name: Optional[str] = Field(
        default=None,
        description="Bucket holding every file and folder marker"
    )

    presigned_url_expiry_seconds: int = Field(
        default=3600,
        ge=1,
        le=MAX_PRESIGNED_URL_EXPIRY_SECONDS,
        description="Lifetime of presigned download/upload URLs"
    )

    # HTTP
    cors_allow_origins: List[str] = Field(
        default=["http://localhost:3000"],
        description="Origins allowed to call the API from a browser"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator("s3_bucket_name", "aws_access_key_id", "aws_secret_access_key", "aws_endpoint_url")
    @classmethod
    def blank_as_unset(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty strings from the environment as missing values."""
        if v is not None and not v.strip():
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        level = v.upper()
        if level not in valid_levels:
            raise ValueError(f"Invalid log_level: {v}. Must be one of {valid_levels}")
        return level

    @property
    def bucket_configured(self) -> bool:
        return bool(self.s3_bucket_name)

    def describe(self) -> dict:
        """Settings as a printable dict with secrets masked."""
        return {
            "app_name": self.app_name,
            "aws_region": self.aws_region,
            "aws_endpoint_url": self.aws_endpoint_url,
            "aws_access_key_id": _mask(self.aws_access_key_id),
            "aws_secret_access_key": _mask(self.aws_secret_access_key),
            "s3_bucket_name": self.s3_bucket_name,
            "presigned_url_expiry_seconds": self.presigned_url_expiry_seconds,
            "log_level": self.log_level,
        }

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


def _mask(secret: Optional[str]) -> Optional[str]:
    if not secret:
        return None
    return secret[:4] + "*" * max(len(secret) - 4, 0)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()
