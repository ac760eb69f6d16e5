"""
Rating aggregation protocol and the score-ranked restaurant set.

The average is recomputed as ``round1(rating_sum / review_count)`` from the
two source terms on every change, and the ranking entry is rewritten with
the same value in the same batch. Concurrent submissions for one restaurant
can pair one request's count with another's sum, so the stored average may
briefly lag until the next review recomputes it.
"""

import asyncio
import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from redis.asyncio import Redis

from bites.keys import restaurants_by_rating_key
from bites.services import records

logger = logging.getLogger(__name__)

_ONE_DECIMAL = Decimal("0.1")


def round_average(total: int, count: int) -> float:
    """
    Average rounded half-up to one decimal.

    Args:
        total: Sum of all review ratings
        count: Number of reviews currently listed

    Returns:
        The rounded average, or 0.0 when there are no reviews
    """
    if count <= 0:
        return 0.0
    average = (Decimal(total) / Decimal(count)).quantize(
        _ONE_DECIMAL, rounding=ROUND_HALF_UP
    )
    return float(average)


async def initialise_ranking(redis: Redis, restaurant_id: str) -> None:
    """Insert the zero-score ranking entry for a new restaurant."""
    await redis.zadd(restaurants_by_rating_key(), {restaurant_id: 0})


async def update_ranking(redis: Redis, restaurant_id: str, score: float) -> None:
    await redis.zadd(restaurants_by_rating_key(), {restaurant_id: score})


async def recompute(redis: Redis, restaurant_id: str, total: int, count: int) -> float:
    """
    Write a fresh average to the record and the ranking in one parallel batch.

    Returns:
        The average that was written
    """
    average = round_average(total, count)
    await asyncio.gather(
        records.set_average_rating(redis, restaurant_id, average),
        update_ranking(redis, restaurant_id, average),
    )
    logger.debug(
        "Restaurant %s rated %.1f over %d review(s)", restaurant_id, average, count
    )
    return average


async def top_by_rating(redis: Redis, offset: int = 0, limit: int = 10) -> list[str]:
    """
    Restaurant ids ordered by descending score.

    Equal scores come back in the store's reverse lexicographic member order,
    which is stable for a fixed data state.
    """
    if limit <= 0:
        return []
    return await redis.zrevrange(
        restaurants_by_rating_key(), offset, offset + limit - 1
    )


async def score_of(redis: Redis, restaurant_id: str) -> Optional[float]:
    return await redis.zscore(restaurants_by_rating_key(), restaurant_id)
