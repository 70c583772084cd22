"""Application configuration via pydantic settings."""

from functools import lru_cache
from pathlib import Path

from typing import Annotated, Any, Literal

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Typed application configuration."""

    app_env: str = Field("local", alias="APP_ENV")
    app_name: str = "Moving Quote Pricing API"
    api_v1_prefix: str = "/api/v1"

    pricing_catalog_path: Path | None = Field(
        default=None, alias="PRICING_CATALOG_PATH"
    )

    quote_cache_backend: Literal["memory", "redis", "none"] = Field(
        "memory", alias="QUOTE_CACHE_BACKEND"
    )
    quote_cache_ttl_seconds: int = Field(300, ge=0, alias="QUOTE_CACHE_TTL_SECONDS")
    quote_cache_prefix: str = Field("quote:", alias="QUOTE_CACHE_PREFIX")

    redis_url: str | None = Field(default=None, alias="REDIS_URL")

    cors_allow_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://localhost:5173",
        ],
        alias="CORS_ALLOW_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=False, alias="CORS_ALLOW_CREDENTIALS")
    cors_allowlist: Annotated[list[str], NoDecode] = Field(
        default_factory=list, alias="CORS_ALLOWLIST"
    )

    rate_limit_default: str = Field("100/minute", alias="RATE_LIMIT_DEFAULT")
    rate_limit_quote: str = Field("30/minute", alias="RATE_LIMIT_QUOTE")

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[3] / ".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("cors_allow_origins", "cors_allowlist", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()  # type: ignore[call-arg]
