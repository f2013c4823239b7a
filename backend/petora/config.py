"""
Petora Backend - Application Configuration
===========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and builds a `Settings` object.
Who:   Constructed once by the application factory and handed to every
       component that needs configuration (store, token issuer, media intake).
When:  At startup; the instance is kept on `app.state.settings`.

Compatibility:
    PORT, MONGO_URI and JWT_SECRET keep the fallback values the platform has
    always shipped with. They are fine for local development and must be
    overridden in production; startup logs a warning when the signing secret
    is still the fallback.
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_JWT_SECRET = "your-default-secret"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes are grouped by concern for readability.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # What: MongoDB connection string. The path component names the database.
    mongo_uri: str = Field(
        default="mongodb://localhost:27017/Petora",
        description="MongoDB connection URI",
    )

    # What: Database used when the URI carries no database path
    mongo_default_database: str = Field(default="Petora")

    # What: How long the driver waits to find a usable server (milliseconds)
    mongo_server_selection_timeout_ms: int = Field(default=5000, ge=100, le=120_000)

    # ── Authentication ────────────────────────────────────────────────────
    # What: Shared secret used to sign and verify session tokens
    jwt_secret: str = Field(default=DEFAULT_JWT_SECRET)
    jwt_algorithm: str = Field(default="HS256")

    # What: Lifetime of an issued session token
    token_ttl_hours: int = Field(default=24, ge=1, le=24 * 30)

    # What: bcrypt work factor (log2 of the number of rounds)
    # Valid range: 4-31 (bcrypt's own limits)
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    # ── Media Uploads ─────────────────────────────────────────────────────
    # What: Directory receiving pet images, relative to the process CWD
    upload_root: str = Field(default="uploads")

    # What: URL prefix the upload directory is served under.
    # Stored imageUrl values are this prefix (without the leading slash) + filename.
    upload_url_prefix: str = Field(default="/uploads")

    # What: Multipart field carrying the pet image
    upload_field_name: str = Field(default="image")

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated origins, or "*" for any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("upload_url_prefix")
    @classmethod
    def validate_upload_url_prefix(cls, v: str) -> str:
        """Normalizes the prefix to a single leading slash and no trailing slash."""
        stripped = v.strip().strip("/")
        if not stripped:
            raise ValueError("upload_url_prefix must not be empty")
        return f"/{stripped}"

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # MONGO_URI and mongo_uri both work
        "extra": "ignore",
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Checks security-sensitive settings.
        When:  Called during app startup (lifespan).
        How:   Collects problems and raises ValueError listing all of them.
        """
        errors = []
        if not self.jwt_secret or self.jwt_secret == DEFAULT_JWT_SECRET:
            errors.append(
                "JWT_SECRET is not set; tokens are signed with the built-in fallback secret."
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


@lru_cache
def get_settings() -> Settings:
    """Process default settings, read from the environment on first use."""
    return Settings()
