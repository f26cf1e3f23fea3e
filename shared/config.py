"""
Shared configuration management for the currency conversion service.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Environment
    env: str = Field(default="local", validation_alias="CURRENCY_ENV")
    log_level: str = Field(default="info", validation_alias="CURRENCY_LOG_LEVEL")

    # Networking (uvicorn)
    host: str = Field(default="0.0.0.0", validation_alias="CURRENCY_HOST")
    port: int = Field(default=80, validation_alias="CURRENCY_PORT")
