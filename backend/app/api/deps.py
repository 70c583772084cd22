"""Common API dependencies."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, Request, Response
from fastapi_limiter import FastAPILimiter
from fastapi_limiter.depends import RateLimiter

from app.core.config import get_settings
from app.services.pricing_engine import PricingEngine, build_pricing_engine

settings = get_settings()

_SECONDS_MAP = {
    "second": 1,
    "seconds": 1,
    "minute": 60,
    "minutes": 60,
    "hour": 3600,
    "hours": 3600,
    "day": 86400,
    "days": 86400,
}


@lru_cache
def get_pricing_engine() -> PricingEngine:
    """Return the process-wide pricing engine."""
    return build_pricing_engine(get_settings())


def parse_rate(value: str, *, fallback: tuple[int, int]) -> tuple[int, int]:
    """Parse ``"<count>/<unit>"`` into ``(count, seconds)``."""
    try:
        count_str, window_str = value.split("/", 1)
        count = int(count_str.strip())
    except ValueError:
        return fallback
    seconds = _SECONDS_MAP.get(window_str.strip().lower(), fallback[1])
    return count, seconds


def rate_dependency(limit: tuple[int, int]):
    async def _dependency(request: Request, response: Response) -> None:
        if FastAPILimiter.redis is None:
            return None
        limiter = RateLimiter(times=limit[0], seconds=limit[1])
        await limiter(request, response)

    return Depends(_dependency)


DEFAULT_RATE_DEP = rate_dependency(
    parse_rate(settings.rate_limit_default, fallback=(100, 60))
)
QUOTE_RATE_DEP = rate_dependency(parse_rate(settings.rate_limit_quote, fallback=(30, 60)))
