import logging
from functools import lru_cache

import redis

from app.database import get_settings

logger = logging.getLogger(__name__)


@lru_cache
def get_redis() -> redis.Redis:
    """Process-wide Redis client shared by sessions and the job queue."""
    client = redis.Redis.from_url(get_settings().REDIS_URL, decode_responses=True)
    logger.info("Redis client created")
    return client


def is_alive(client: redis.Redis) -> bool:
    try:
        return bool(client.ping())
    except redis.exceptions.RedisError as e:
        logger.error(f"Redis ping failed: {e}")
        return False
