"""Application configuration via pydantic settings."""

from functools import lru_cache
from pathlib import Path

from typing import Annotated, Any

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Typed application configuration."""

    app_env: str = Field("local", alias="APP_ENV")
    app_name: str = "Event Logistics API"
    api_v1_prefix: str = "/api/v1"
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    database_url: str = Field(..., alias="DATABASE_URL")
    sync_database_url: str | None = Field(default=None, alias="SYNC_DATABASE_URL")

    redis_url: str | None = Field(default=None, alias="REDIS_URL")
    rate_limit_default: str = Field("100/minute", alias="RATE_LIMIT_DEFAULT")

    cors_allow_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://localhost:5173",
        ],
        alias="CORS_ALLOW_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=False, alias="CORS_ALLOW_CREDENTIALS")
    cors_allowlist: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["http://localhost:3000"], alias="CORS_ALLOWLIST"
    )

    import_max_rows: int = Field(5000, alias="IMPORT_MAX_ROWS")

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[2] / ".env",
        case_sensitive=False,
    )

    @field_validator("cors_allow_origins", "cors_allowlist", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip().startswith("["):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()  # type: ignore[call-arg]
