"""Configuration management for tinylinks."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=3000,
        description="Port to listen on"
    )

    base_url: str = Field(
        default="http://localhost:3000",
        description="Base URL for short links when the request carries no Host header"
    )

    # Storage settings
    data_file: str = Field(
        default="urls.json",
        description="Path of the JSON snapshot holding all short URLs"
    )

    storage_strict: bool = Field(
        default=True,
        description="Fail on a corrupt snapshot instead of treating it as empty"
    )

    # URL shortener settings
    short_code_length: int = Field(
        default=6,
        ge=1,
        description="Length of generated short codes"
    )

    max_collision_retries: int = Field(
        default=10,
        ge=0,
        description="Random codes to try before falling back to a longer code"
    )

    fallback_code_length: int = Field(
        default=8,
        ge=1,
        description="Length of the fallback code used after repeated collisions"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
