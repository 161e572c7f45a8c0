from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application-wide settings populated from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="RESTCOV_",
        extra="ignore",
    )

    swagger_path: str | None = None
    audit_log_path: str | None = None
    filter: str = ""
    output_path: str | None = None
    output_format: str | None = None
    detailed: bool = False
    ignore_resource_version: bool = False
