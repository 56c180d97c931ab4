"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Admin secrets come from environment variables (ADMIN_PASSWORD_HASH or ADMIN_PASSWORD)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box locally
    - max_page_limit unset by default: listing accepts any limit unless capped here
    - CORS_ORIGINS unset: any origin in development, none in production
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    app_name: str = "Guestbook"
    environment: str = "development"

    # Admin identity: digest wins over plaintext, plaintext wins over default
    admin_username: str = "admin"
    admin_password_hash: str | None = None
    admin_password: str | None = None

    # Storage
    messages_file: Path = Field(Path("data/messages.json"), validate_default=True)

    @field_validator("messages_file", mode="after")
    @classmethod
    def resolve_messages_file(cls, v: Path) -> Path:
        """Relative paths resolve against the working directory at startup."""
        return v if v.is_absolute() else Path.cwd() / v

    # Sessions
    session_ttl_hours: int = 24
    session_sweep_interval_seconds: int = 3600

    # Messages
    edit_window_days: int = 180
    default_page_limit: int = 10
    max_page_limit: int | None = None

    # API: unset means "*" outside production and no origins in production
    cors_origins: list[str] | None = None

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @model_validator(mode="after")
    def default_cors_origins(self) -> "Settings":
        if self.cors_origins is None:
            self.cors_origins = [] if self.is_production else ["*"]
        return self

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
