"""Review store: a most-recent-first id list per restaurant plus one hash per review."""

import asyncio
import logging
import time
import uuid
from typing import Optional

from redis.asyncio import Redis

from bites.errors import IntegrityMismatchError, NotFoundError
from bites.keys import restaurant_reviews_key, review_key
from bites.models.review import Review
from bites.services import ratings, records

logger = logging.getLogger(__name__)


async def add_review(redis: Redis, restaurant_id: str, rating: int, body: str) -> Review:
    """
    Store a review and fold its rating into the restaurant's aggregate.

    The first batch pushes the id, writes the record and bumps the rating sum
    in parallel. ``LPUSH`` returns the list length including the new id, so
    the count used for the average always covers this review. The second
    batch writes the recomputed average and ranking score.

    Args:
        redis: Store client
        restaurant_id: Parent restaurant, already known to exist
        rating: Review rating
        body: Review text

    Returns:
        The stored review
    """
    review = Review(
        id=uuid.uuid4().hex,
        restaurant_id=restaurant_id,
        rating=rating,
        body=body,
        timestamp=int(time.time() * 1000),
    )

    review_count, _, rating_sum = await asyncio.gather(
        redis.lpush(restaurant_reviews_key(restaurant_id), review.id),
        redis.hset(review_key(review.id), mapping=review.to_hash()),
        records.apply_review_delta(redis, restaurant_id, rating),
    )

    await ratings.recompute(redis, restaurant_id, rating_sum, review_count)
    logger.info("Added review %s to restaurant %s", review.id, restaurant_id)
    return review


async def get_review(redis: Redis, review_id: str) -> Optional[Review]:
    data = await redis.hgetall(review_key(review_id))
    if not data:
        return None
    return Review.from_hash(data)


async def review_count(redis: Redis, restaurant_id: str) -> int:
    return await redis.llen(restaurant_reviews_key(restaurant_id))


async def list_reviews(
    redis: Redis, restaurant_id: str, offset: int = 0, limit: int = 10
) -> list[Review]:
    """
    Page through a restaurant's reviews, newest first.

    Ids whose record no longer resolves are skipped instead of failing the page.
    """
    if limit <= 0:
        return []
    review_ids = await redis.lrange(
        restaurant_reviews_key(restaurant_id), offset, offset + limit - 1
    )
    found = await asyncio.gather(*(get_review(redis, rid) for rid in review_ids))

    result: list[Review] = []
    for review_id, review in zip(review_ids, found):
        if review is None:
            logger.warning(
                "Review %s listed for restaurant %s has no record; skipping",
                review_id,
                restaurant_id,
            )
            continue
        result.append(review)
    return result


async def remove_review(redis: Redis, restaurant_id: str, review_id: str) -> Review:
    """
    Delete a review and reverse its effect on the restaurant's aggregate.

    Raises:
        NotFoundError: If the review record does not exist
        IntegrityMismatchError: If the review belongs to another restaurant;
            nothing is modified in that case
    """
    review = await get_review(redis, review_id)
    if review is None:
        raise NotFoundError("Review not found")
    if review.restaurant_id != restaurant_id:
        raise IntegrityMismatchError()

    removed, _ = await asyncio.gather(
        redis.lrem(restaurant_reviews_key(restaurant_id), 1, review_id),
        redis.delete(review_key(review_id)),
    )

    if removed:
        rating_sum, count = await asyncio.gather(
            records.apply_review_delta(redis, restaurant_id, -review.rating),
            review_count(redis, restaurant_id),
        )
        await ratings.recompute(redis, restaurant_id, rating_sum, count)
    else:
        logger.warning(
            "Review %s was not listed under restaurant %s; aggregate left as is",
            review_id,
            restaurant_id,
        )

    logger.info("Deleted review %s from restaurant %s", review_id, restaurant_id)
    return review
