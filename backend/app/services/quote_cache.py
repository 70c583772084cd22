"""Short-lived caches for computed pricing breakdowns."""

from __future__ import annotations

import datetime
import logging
import threading
from typing import Callable, Protocol

import redis
from pydantic import TypeAdapter, ValidationError

from app.models.breakdown import PricingBreakdown

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime.datetime]


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class QuoteCache(Protocol):
    def get(self, key: str) -> PricingBreakdown | None: ...

    def set(self, key: str, breakdown: PricingBreakdown) -> None: ...


class NullQuoteCache:
    """Cache that never stores anything."""

    def get(self, key: str) -> PricingBreakdown | None:
        return None

    def set(self, key: str, breakdown: PricingBreakdown) -> None:
        return None


class InMemoryQuoteCache:
    """Process-local cache of breakdowns with wall-clock expiry.

    Entries are returned by reference, so a hit yields the very object
    that was stored. Concurrent misses on the same key may both compute
    and store; the later write wins.
    """

    def __init__(
        self,
        ttl: datetime.timedelta = datetime.timedelta(minutes=5),
        *,
        clock: Clock = utcnow,
    ) -> None:
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[str, tuple[PricingBreakdown, datetime.datetime]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> PricingBreakdown | None:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            breakdown, expires_at = entry
            if now >= expires_at:
                del self._entries[key]
                return None
            return breakdown

    def set(self, key: str, breakdown: PricingBreakdown) -> None:
        expires_at = self._clock() + self._ttl
        with self._lock:
            self._entries[key] = (breakdown, expires_at)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class RedisQuoteCache:
    """Breakdown cache shared across workers through Redis.

    Hits are deserialized copies that compare equal to the stored
    breakdown. Redis failures and unreadable payloads degrade to cache
    misses; unreadable payloads are deleted.
    """

    def __init__(
        self,
        client: redis.Redis,
        ttl: datetime.timedelta = datetime.timedelta(minutes=5),
        *,
        prefix: str = "quote:",
    ) -> None:
        self._client = client
        self._ttl_seconds = max(1, int(ttl.total_seconds()))
        self._prefix = prefix
        self._adapter: TypeAdapter[PricingBreakdown] = TypeAdapter(PricingBreakdown)

    @classmethod
    def from_url(
        cls,
        url: str,
        ttl: datetime.timedelta = datetime.timedelta(minutes=5),
        *,
        prefix: str = "quote:",
    ) -> "RedisQuoteCache":
        client = redis.Redis.from_url(url, encoding="utf-8", decode_responses=True)
        return cls(client, ttl, prefix=prefix)

    def get(self, key: str) -> PricingBreakdown | None:
        try:
            payload = self._client.get(self._prefix + key)
        except redis.RedisError:
            logger.warning("Quote cache read failed for %s", key, exc_info=True)
            return None
        if payload is None:
            return None
        try:
            return self._adapter.validate_json(payload)
        except ValidationError:
            logger.warning("Discarding unreadable cached quote %s", key, exc_info=True)
            self._discard(key)
            return None

    def _discard(self, key: str) -> None:
        try:
            self._client.delete(self._prefix + key)
        except redis.RedisError:
            logger.warning("Quote cache delete failed for %s", key, exc_info=True)

    def set(self, key: str, breakdown: PricingBreakdown) -> None:
        payload = self._adapter.dump_json(breakdown)
        try:
            self._client.setex(self._prefix + key, self._ttl_seconds, payload)
        except redis.RedisError:
            logger.warning("Quote cache write failed for %s", key, exc_info=True)
