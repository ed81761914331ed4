import logging
from fastapi import HTTPException
from gtraf_admin.core.redis import get_redis
from gtraf_admin.core.config import settings
from gtraf_admin.core.metrics import rate_limit_exceeded

logger = logging.getLogger(__name__)


async def check_rate_limit(user_id: str):
    """Allow RATE_LIMIT dashboard mutations per user in each RATE_LIMIT_WINDOW.

    The window starts at the first mutation. Without Redis no limit applies.
    """
    redis = get_redis()
    if redis is None:
        return

    key = f"rl:{user_id}"
    count = await redis.incr(key)
    if count == 1:
        await redis.expire(key, settings.RATE_LIMIT_WINDOW)

    if count > settings.RATE_LIMIT:
        rate_limit_exceeded.labels(user_id=user_id).inc()
        logger.warning(f"Rate limit exceeded for user {user_id} ({count} requests)")
        raise HTTPException(
            status_code=429,
            detail="Rate limit exceeded",
            headers={"Retry-After": str(settings.RATE_LIMIT_WINDOW)},
        )
