"""
Application configuration loaded from environment variables.
"""
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Document store
    data_file: str = "data.json"

    # Password reset
    reset_code_ttl_seconds: int = 120
    reset_store_backend: str = "memory"  # "memory" or "redis"

    # Redis (only used by the redis reset store backend)
    redis_host: str = "redis"
    redis_port: int = 6379
    redis_db: int = 0

    # Mail
    mail_backend: str = "log"  # "log" or "smtp"
    mail_from: str = "Memory Box <no-reply@memorybox.local>"
    smtp_host: str = "localhost"
    smtp_port: int = 25
    smtp_username: str | None = None
    smtp_password: str | None = None
    smtp_use_tls: bool = False
    smtp_timeout_seconds: float = 10.0

    # Credentials
    password_scheme: str = "plaintext"  # "plaintext" or "bcrypt"
    min_password_length: int = 6

    # Logging
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
