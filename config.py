"""Configuration management for the content shortener."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


STORE_BACKENDS = ("auto", "memory", "redis")


class Config(BaseSettings):
    """Application configuration."""

    # Backing store settings
    store_backend: str = Field(
        default="auto",
        description="Backing store: 'auto' (Redis if REDIS_URL is set, else memory), 'memory' or 'redis'"
    )

    redis_url: Optional[str] = Field(
        default=None,
        description="Redis connection URL for the durable store"
    )

    key_prefix: str = Field(
        default="shorten/",
        description="Namespace prefix prepended to every stored key"
    )

    # Shortening settings
    max_payload_bytes: int = Field(
        default=128 * 1024,
        ge=1,
        description="Largest accepted payload, in bytes"
    )

    identifier_length: int = Field(
        default=12,
        ge=1,
        le=64,
        description="Number of SHA-256 hex characters kept as the identifier"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=9200,
        description="Port to listen on"
    )

    workers: int = Field(
        default=1,
        ge=1,
        description="Number of uvicorn worker processes. Use >1 only with the redis backend; memory stores are per process."
    )

    base_url: str = Field(
        default="http://localhost:9200",
        description="Base URL for generating share links"
    )

    path_prefix: str = Field(
        default="/s",
        description="Path prefix for share links (e.g., '/s' for /s/0123456789ab)"
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
        "extra": "ignore",  # Ignore extra environment variables
    }

    @field_validator("store_backend")
    @classmethod
    def validate_store_backend(cls, v: str) -> str:
        """Normalize and check the backend name."""
        backend = v.strip().lower()
        if backend not in STORE_BACKENDS:
            raise ValueError(f"store_backend must be one of {', '.join(STORE_BACKENDS)}")
        return backend


def load_config(**overrides) -> Config:
    """Load configuration from environment."""
    return Config(**overrides)
