# salon_booking/services/admission/rate_limit.py
"""
Fixed-window counters for booking quotas.

Window semantics (both stores):
- first hit of a key (or first hit after expiry) opens a window of
  `window` seconds with count = 1
- hits inside the window increment the count up to `limit`
- the window does not slide: it ends `window` seconds after it opened

InMemoryRateLimitStore: process-local, lost on restart, not shared between
instances. RedisRateLimitStore: shared between instances.
"""

import logging
import threading
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Protocol

from redis import Redis

from ...config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    remaining: int


class RateLimitStore(Protocol):
    def hit(
        self,
        key: str,
        limit: int,
        window: int,
        now: Optional[float] = None,
    ) -> RateLimitResult:
        ...


class InMemoryRateLimitStore:
    """
    Dict of key → [count, reset_at], guarded by a lock.

    Expired windows are swept on a hit at most once per `sweep_interval`
    seconds, so the map only holds keys seen within the last window.
    """

    def __init__(self, sweep_interval: float = 60.0):
        self._records: dict[str, list[float]] = {}
        self._lock = threading.Lock()
        self.sweep_interval = sweep_interval
        self._next_sweep = 0.0

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _sweep(self, now: float) -> None:
        expired = [key for key, (_, reset_at) in self._records.items() if now > reset_at]
        for key in expired:
            del self._records[key]
        self._next_sweep = now + self.sweep_interval

    def hit(
        self,
        key: str,
        limit: int,
        window: int,
        now: Optional[float] = None,
    ) -> RateLimitResult:
        now = time.time() if now is None else now

        with self._lock:
            if now >= self._next_sweep:
                self._sweep(now)

            record = self._records.get(key)

            if record is None or now > record[1]:
                self._records[key] = [1, now + window]
                return RateLimitResult(allowed=True, remaining=limit - 1)

            if record[0] >= limit:
                return RateLimitResult(allowed=False, remaining=0)

            record[0] += 1
            return RateLimitResult(allowed=True, remaining=limit - int(record[0]))

    def reset(self, key: Optional[str] = None) -> None:
        with self._lock:
            if key is None:
                self._records.clear()
            else:
                self._records.pop(key, None)


class RedisRateLimitStore:
    """INCR + TTL; EXPIRE is set only when a window opens."""

    KEY_PREFIX = "rl"

    def __init__(self, redis: Redis):
        self.redis = redis

    def _key(self, key: str) -> str:
        return f"{self.KEY_PREFIX}:{key}"

    def hit(
        self,
        key: str,
        limit: int,
        window: int,
        now: Optional[float] = None,
    ) -> RateLimitResult:
        redis_key = self._key(key)
        try:
            pipe = self.redis.pipeline()
            pipe.incr(redis_key)
            pipe.ttl(redis_key)
            count, ttl = pipe.execute()

            if ttl == -1:
                self.redis.expire(redis_key, window)

            if count > limit:
                return RateLimitResult(allowed=False, remaining=0)

            return RateLimitResult(allowed=True, remaining=limit - count)

        except Exception as e:
            logger.error(f"Rate limit check failed for {redis_key}: {e}")
            return RateLimitResult(allowed=True, remaining=limit)  # fail open


@lru_cache
def get_rate_limiter() -> RateLimitStore:
    """Process-wide rate-limit store selected by settings."""
    if settings.rate_limit_backend == "redis":
        from ...redis_client import get_redis_client

        logger.info("Booking rate limit backed by Redis")
        return RedisRateLimitStore(get_redis_client())

    logger.info("Booking rate limit backed by process memory")
    return InMemoryRateLimitStore()
