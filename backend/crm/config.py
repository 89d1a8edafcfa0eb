"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded in code paths)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - CORS origins live here, not in main.py: deployment origins are configuration
    - Policy toggles (protect_mutations, reset_statuses_on_update) default to the
      behaviour the deployed frontend relies on
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "postgresql+asyncpg://crm:crm@db:5432/crm"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Credentials
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    credential_ttl_hours: int = 24

    # API
    cors_origins: list[str] = [
        "https://symphonious-moonbeam-dc0aa2.netlify.app",
        "http://localhost:5173",
        "http://localhost:5174",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5000",
        "http://127.0.0.1:5000",
    ]
    environment: str = "development"

    # Policy
    protect_mutations: bool = False
    # "Omitted enums fall back to defaults" contradicts partial updates such as
    # {"notes": "x"} leaving every status untouched. False keeps updates strictly
    # partial; True resets omitted status/gstStatus/deliveryStatus to defaults.
    reset_statuses_on_update: bool = False

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
