"""Specialized settings adapters for the pricing engine."""

from __future__ import annotations

import datetime
from typing import Literal

from pydantic import BaseModel

from app.core.config import Settings, get_settings


class QuoteCacheSettings(BaseModel):
    """Slim view of quote-cache configuration."""

    backend: Literal["memory", "redis", "none"] = "memory"
    ttl_seconds: int = 300
    prefix: str = "quote:"
    redis_url: str | None = None

    @property
    def ttl(self) -> datetime.timedelta:
        return datetime.timedelta(seconds=self.ttl_seconds)


def get_quote_cache_settings(settings: Settings | None = None) -> QuoteCacheSettings:
    """Return quote-cache specific configuration."""

    settings = settings or get_settings()
    return QuoteCacheSettings(
        backend=settings.quote_cache_backend,
        ttl_seconds=settings.quote_cache_ttl_seconds,
        prefix=settings.quote_cache_prefix,
        redis_url=settings.redis_url or None,
    )
