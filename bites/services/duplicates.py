"""
Duplicate detector backed by a single Bloom filter over ``name|location``.

False positives are possible (bounded by the reserved error rate), false
negatives are not. Check-then-record is not atomic: two identical concurrent
submissions can both pass the probe.
"""

import logging
from typing import Optional

from redis.asyncio import Redis

from bites.config import settings
from bites.keys import bloom_key

logger = logging.getLogger(__name__)


def signature(name: str, location: str) -> str:
    return f"{name}|{location}"


async def probably_exists(redis: Redis, sig: str) -> bool:
    """False means definitely new; True means probably a duplicate."""
    return bool(await redis.bf().exists(bloom_key(), sig))


async def record(redis: Redis, sig: str) -> None:
    await redis.bf().add(bloom_key(), sig)


async def ensure_filter(
    redis: Redis,
    error_rate: Optional[float] = None,
    capacity: Optional[int] = None,
) -> bool:
    """
    Reserve the filter unless it already exists.

    Returns:
        True if a new filter was reserved
    """
    if await redis.exists(bloom_key()):
        return False
    await redis.bf().reserve(
        bloom_key(),
        error_rate if error_rate is not None else settings.bloom_error_rate,
        capacity if capacity is not None else settings.bloom_capacity,
    )
    logger.info("Reserved duplicate filter %s", bloom_key())
    return True


async def reset_filter(
    redis: Redis,
    error_rate: Optional[float] = None,
    capacity: Optional[int] = None,
) -> None:
    """Drop the filter and reserve an empty one. Forgets every recorded signature."""
    await redis.delete(bloom_key())
    await ensure_filter(redis, error_rate=error_rate, capacity=capacity)
