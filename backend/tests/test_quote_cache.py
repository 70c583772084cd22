"""Tests for quote caches and cache backend selection."""

from __future__ import annotations

import datetime
from decimal import Decimal

import redis

from app.core.config import Settings
from app.core.settings import get_quote_cache_settings
from app.services.pricing_engine import build_pricing_engine, cache_key
from app.services.quote_cache import (
    InMemoryQuoteCache,
    NullQuoteCache,
    RedisQuoteCache,
)


class _FakeRedis:
    def __init__(self) -> None:
        self.store: dict[str, bytes | str] = {}
        self.ttls: dict[str, int] = {}

    def get(self, key: str):
        return self.store.get(key)

    def setex(self, key: str, ttl: int, value) -> None:
        self.store[key] = value
        self.ttls[key] = ttl

    def delete(self, key: str) -> int:
        return 1 if self.store.pop(key, None) is not None else 0


class _BrokenRedis:
    def get(self, key: str):
        raise redis.ConnectionError("redis down")

    def setex(self, key: str, ttl: int, value) -> None:
        raise redis.ConnectionError("redis down")


def test_in_memory_cache_expires_entries(engine, make_input, clock) -> None:
    cache = InMemoryQuoteCache(datetime.timedelta(seconds=30), clock=clock)
    breakdown = engine.calculate_pricing(make_input())

    assert cache.get("quote-1") is None
    cache.set("quote-1", breakdown)
    assert cache.get("quote-1") is breakdown

    clock.advance(seconds=30)
    assert cache.get("quote-1") is None
    assert len(cache) == 0


def test_in_memory_cache_clear(engine, make_input, clock) -> None:
    cache = InMemoryQuoteCache(clock=clock)
    cache.set("a", engine.calculate_pricing(make_input()))
    cache.set("b", engine.calculate_pricing(make_input(distance=20)))
    assert len(cache) == 2

    cache.clear()
    assert cache.get("a") is None
    assert len(cache) == 0


def test_null_cache_never_hits(engine, make_input) -> None:
    cache = NullQuoteCache()
    cache.set("a", engine.calculate_pricing(make_input()))
    assert cache.get("a") is None


def test_redis_cache_round_trips_breakdown(engine, make_input) -> None:
    client = _FakeRedis()
    cache = RedisQuoteCache(client, datetime.timedelta(minutes=2), prefix="test:")
    breakdown = engine.calculate_pricing(
        make_input(promo_code="FIRST20", is_first_time_customer=True)
    )

    cache.set("abc", breakdown)
    cached = cache.get("abc")

    assert list(client.store) == ["test:abc"]
    assert client.ttls["test:abc"] == 120
    assert cached == breakdown
    assert cached is not breakdown
    assert cache.get("missing") is None


def test_unreadable_redis_entry_is_recomputed(engine, make_input) -> None:
    client = _FakeRedis()
    cache = RedisQuoteCache(client, prefix="test:")
    engine.cache = cache
    key = cache_key(make_input())
    client.store["test:" + key] = '{"not": "a breakdown"}'

    assert cache.get(key) is None
    assert "test:" + key not in client.store

    client.store["test:" + key] = "not json at all"
    breakdown = engine.calculate_pricing(make_input())

    assert breakdown.total == Decimal("214.20")
    assert cache.get(key) == breakdown


def test_redis_failures_degrade_to_misses(engine, make_input) -> None:
    cache = RedisQuoteCache(_BrokenRedis())
    cache.set("abc", engine.calculate_pricing(make_input()))
    assert cache.get("abc") is None


def test_quote_cache_settings_from_env_names() -> None:
    settings = Settings(
        QUOTE_CACHE_BACKEND="redis",
        QUOTE_CACHE_TTL_SECONDS=45,
        QUOTE_CACHE_PREFIX="q:",
        REDIS_URL="redis://localhost:6379/3",
    )
    cache_settings = get_quote_cache_settings(settings)

    assert cache_settings.backend == "redis"
    assert cache_settings.ttl == datetime.timedelta(seconds=45)
    assert cache_settings.prefix == "q:"
    assert cache_settings.redis_url == "redis://localhost:6379/3"


def test_cors_origins_split_from_string() -> None:
    settings = Settings(CORS_ALLOW_ORIGINS="https://a.example, https://b.example,")
    assert settings.cors_allow_origins == ["https://a.example", "https://b.example"]


def test_build_engine_selects_cache_backend(clock) -> None:
    memory = build_pricing_engine(Settings(QUOTE_CACHE_BACKEND="memory"), clock=clock)
    disabled = build_pricing_engine(Settings(QUOTE_CACHE_BACKEND="none"), clock=clock)
    zero_ttl = build_pricing_engine(
        Settings(QUOTE_CACHE_BACKEND="memory", QUOTE_CACHE_TTL_SECONDS=0), clock=clock
    )
    no_url = build_pricing_engine(
        Settings(QUOTE_CACHE_BACKEND="redis", REDIS_URL=""), clock=clock
    )
    shared = build_pricing_engine(
        Settings(QUOTE_CACHE_BACKEND="redis", REDIS_URL="redis://localhost:6379/0"),
        clock=clock,
    )

    assert isinstance(memory.cache, InMemoryQuoteCache)
    assert isinstance(disabled.cache, NullQuoteCache)
    assert isinstance(zero_ttl.cache, NullQuoteCache)
    assert isinstance(no_url.cache, InMemoryQuoteCache)
    assert isinstance(shared.cache, RedisQuoteCache)
    assert len(memory.catalog) == 5
