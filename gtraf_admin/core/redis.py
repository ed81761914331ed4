import json
import logging
from typing import Optional
from redis.asyncio import Redis
from gtraf_admin.core.config import settings
from gtraf_admin.core.metrics import cache_hits, cache_misses

logger = logging.getLogger(__name__)

redis: Optional[Redis] = None

async def init_redis() -> Redis:
    global redis
    try:
        client = Redis.from_url(settings.REDIS_URL, decode_responses=False)
        await client.ping()
        redis = client
        logger.info(f"Connected to Redis at {settings.REDIS_URL}")
        return redis
    except Exception as e:
        logger.error(f"Failed to connect to Redis: {e}")
        raise

async def close_redis():
    global redis
    if redis:
        await redis.aclose()
        redis = None

def get_redis() -> Optional[Redis]:
    """Return the shared client, or None when Redis was never reached."""
    return redis


async def cache_get(cache: str, key: str) -> Optional[dict]:
    """Read a JSON document from the cache. Misses, and any Redis failure, return None."""
    if redis is None:
        return None
    try:
        cached = await redis.get(key)
    except Exception as e:
        logger.warning(f"Cache retrieval failed for {cache}: {e}")
        return None
    if not cached:
        cache_misses.labels(cache=cache).inc()
        return None
    cache_hits.labels(cache=cache).inc()
    return json.loads(cached)


async def cache_put(cache: str, key: str, value: str, ttl: int) -> None:
    if redis is None:
        return
    try:
        await redis.set(key, value, ex=ttl)
    except Exception as e:
        logger.warning(f"Cache write failed for {cache}: {e}")
