"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded in code paths)
    - get_settings() is cached (lru_cache): single instance per process
    - max_upload_bytes and session_ttl_seconds are the only size/time limits

Design Decisions:
    - Defaults provided for every setting: `uvicorn gallery.main:app` works against
      a local SQLite file with no .env present
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "sqlite+aiosqlite:///./gallery.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres URLs come as postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgres://"):
            v = v.replace("postgres://", "postgresql://", 1)
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Uploads
    upload_dir: str = "uploads"
    upload_url_prefix: str = "/uploads/"
    max_upload_bytes: int = 5 * 1024 * 1024
    sample_images_dir: str = "attached_assets/generated_images"

    # Admin sessions
    session_cookie_name: str = "gallery_session"
    session_ttl_seconds: int = 60 * 60 * 24 * 7
    session_cookie_secure: bool = False
    session_store_max_entries: int = 10_000
    bcrypt_rounds: int = 10

    # Seed data
    seed_admin_username: str = "admin"
    seed_admin_password: str = "admin123"
    default_share_link: str = "https://t.me"

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
