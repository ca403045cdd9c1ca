from functools import lru_cache

from redis import Redis

from .config import settings


@lru_cache
def get_redis_client() -> Redis:
    if not settings.redis_url:
        raise RuntimeError("REDIS_URL not set but rate_limit_backend=redis")

    return Redis.from_url(
        settings.redis_url,
        decode_responses=True,
        socket_timeout=settings.redis_socket_timeout,
    )
