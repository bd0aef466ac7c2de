"""12-factor configuration adapter using environment variables and a .env file."""

from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=5001, description="Port to bind the server to")
    reload: bool = Field(default=False, description="Enable auto-reload for development")
    log_level: str = Field(default="INFO", description="Root log level")
    development: bool = Field(
        default=False,
        description="Development mode: session cookies are sent without the Secure flag",
    )
    static_dir: str | None = Field(
        default=None,
        description="Directory with a built frontend to serve at '/' (optional)",
    )

    # Sessions
    jwt_secret: str = Field(
        default="change-me",
        description="Secret used to sign session tokens",
    )
    session_ttl_days: int = Field(default=7, description="Lifetime of a session token in days")
    cookie_name: str = Field(default="jwt", description="Name of the session cookie")
    bcrypt_rounds: int = Field(default=10, description="bcrypt cost factor for password hashing")

    # Persistence
    database_path: str = Field(
        default="chat.db",
        description="SQLite database file for users and messages (':memory:' for ephemeral)",
    )

    # HTTP surface
    cors_origins: list[str] = Field(
        default=["http://localhost:5173"],
        description="Origins allowed to call the API with credentials",
    )
    rate_limit_per_minute: int = Field(
        default=300,
        description="Maximum number of requests allowed per IP address per minute",
    )

    # Image storage
    image_store: str = Field(
        default="inline",
        description="Image storage backend: 'inline' (keep data URIs) or 'cloudinary'",
    )
    cloudinary_cloud_name: str | None = Field(default=None, description="Cloudinary cloud name")
    cloudinary_api_key: str | None = Field(default=None, description="Cloudinary API key")
    cloudinary_api_secret: str | None = Field(default=None, description="Cloudinary API secret")
    cloudinary_timeout_seconds: int = Field(
        default=30, description="Timeout for Cloudinary upload requests in seconds"
    )

    # Realtime gateway
    outbound_queue_size: int = Field(
        default=100,
        description="Events buffered per connection before the oldest is dropped",
    )
    close_superseded_connections: bool = Field(
        default=True,
        description="Close the older connection when the same user connects again",
    )
    socket_requires_session: bool = Field(
        default=True,
        description="Only register a socket's userId if it matches the session cookie",
    )
    ws_ping_interval_seconds: float = Field(
        default=20.0, description="Transport-level WebSocket ping interval"
    )
    ws_ping_timeout_seconds: float = Field(
        default=20.0, description="Close a WebSocket whose ping is not answered in time"
    )

    @field_validator("image_store")
    @classmethod
    def validate_image_store(cls, v: str) -> str:
        """Validate image store is either 'inline' or 'cloudinary'."""
        if v.lower() not in ("inline", "cloudinary"):
            raise ValueError("image_store must be either 'inline' or 'cloudinary'")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        if v.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("log_level must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return v.upper()

    @field_validator("outbound_queue_size", "session_ttl_days")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate sizes and lifetimes are positive."""
        if v < 1:
            raise ValueError("value must be at least 1")
        return v

    @model_validator(mode="after")
    def validate_cloudinary_credentials(self) -> "AppConfig":
        """Require Cloudinary credentials when the Cloudinary backend is selected."""
        if self.image_store == "cloudinary" and not (
            self.cloudinary_cloud_name and self.cloudinary_api_key and self.cloudinary_api_secret
        ):
            raise ValueError(
                "image_store 'cloudinary' requires CLOUDINARY_CLOUD_NAME, "
                "CLOUDINARY_API_KEY and CLOUDINARY_API_SECRET"
            )
        return self

    @property
    def session_ttl_seconds(self) -> int:
        return self.session_ttl_days * 24 * 60 * 60

    @classmethod
    def for_testing(cls, **overrides: Any) -> "AppConfig":
        """Build a config that ignores the .env file, with an in-memory database."""
        values: dict[str, Any] = {
            "database_path": ":memory:",
            "jwt_secret": "test-secret",
            "bcrypt_rounds": 4,
            "development": True,
            "rate_limit_per_minute": 10_000,
        }
        values.update(overrides)
        return cls(_env_file=None, **values)
