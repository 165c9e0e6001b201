"""Application configuration."""

import json

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    database_url: str = "postgresql+asyncpg://localhost/city_info"
    database_url_sync: str = "postgresql://localhost/city_info"

    # Logging
    log_level: str = "info"

    # Insert the demo cities when the database has none
    seed_on_startup: bool = True

    # Notifications: "local" logs messages, "smtp" delivers them
    mail_backend: str = "local"
    mail_to_address: str = "admin@mycompany.com"
    mail_from_address: str = "noreply@mycompany.com"
    smtp_host: str = "localhost"
    smtp_port: int = 25

    # CORS configuration
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from string (JSON or comma-separated) or list."""
        if isinstance(v, str):
            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return parsed
            except json.JSONDecodeError:
                pass
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("mail_backend")
    @classmethod
    def validate_mail_backend(cls, v: str) -> str:
        """Only the local and smtp senders exist."""
        backend = v.strip().lower()
        if backend not in ("local", "smtp"):
            raise ValueError(f"Unknown mail backend: {v}")
        return backend


settings = Settings()
