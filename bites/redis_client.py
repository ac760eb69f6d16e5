"""Redis client construction and connectivity probe."""

import logging

from redis.asyncio import Redis
from redis.exceptions import RedisError

from bites.config import settings

logger = logging.getLogger(__name__)


def create_redis(url: str | None = None) -> Redis:
    """Build a client for the configured store; the caller owns its lifetime."""
    return Redis.from_url(url or settings.redis_url, decode_responses=True)


async def check_redis_connectivity(redis: Redis) -> bool:
    """Return True if a PING succeeds."""
    try:
        return bool(await redis.ping())
    except RedisError as exc:
        logger.warning("Redis ping failed: %s", exc)
        return False
