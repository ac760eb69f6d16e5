"""Restaurant record store: scalar attributes and counters in one hash per restaurant."""

import uuid
from typing import Optional

from redis.asyncio import Redis

from bites.errors import NotFoundError
from bites.keys import restaurant_key
from bites.models.restaurant import Restaurant

VIEW_COUNT_FIELD = "viewCount"
RATING_SUM_FIELD = "totalReviews"
AVERAGE_RATING_FIELD = "averageRating"


def new_id() -> str:
    """Allocate a fresh, URL-safe identifier."""
    return uuid.uuid4().hex


async def create_record(
    redis: Redis,
    restaurant_id: str,
    name: str,
    location: str,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
) -> Restaurant:
    """
    Write a new restaurant hash with zeroed counters.

    Must only run after the duplicate detector cleared the submission, as part
    of the creation fan-out.
    """
    restaurant = Restaurant(
        id=restaurant_id,
        name=name,
        location=location,
        latitude=latitude,
        longitude=longitude,
    )
    await redis.hset(restaurant_key(restaurant_id), mapping=restaurant.to_hash())
    return restaurant


async def restaurant_exists(redis: Redis, restaurant_id: str) -> bool:
    return bool(await redis.exists(restaurant_key(restaurant_id)))


async def get_record(redis: Redis, restaurant_id: str) -> Restaurant:
    """
    Fetch a restaurant record.

    Raises:
        NotFoundError: If no hash exists for the identifier
    """
    data = await redis.hgetall(restaurant_key(restaurant_id))
    if not data:
        raise NotFoundError("Restaurant not found")
    return Restaurant.from_hash(data)


async def increment_view_count(redis: Redis, restaurant_id: str) -> int:
    """Atomically bump the view counter and return the new value."""
    return await redis.hincrby(restaurant_key(restaurant_id), VIEW_COUNT_FIELD, 1)


async def apply_review_delta(redis: Redis, restaurant_id: str, delta: int) -> int:
    """Atomically add ``delta`` to the rating-sum accumulator and return the new sum."""
    return await redis.hincrby(restaurant_key(restaurant_id), RATING_SUM_FIELD, delta)


async def set_average_rating(redis: Redis, restaurant_id: str, value: float) -> None:
    await redis.hset(restaurant_key(restaurant_id), AVERAGE_RATING_FIELD, value)


async def get_coordinates(
    redis: Redis, restaurant_id: str
) -> Optional[tuple[float, float]]:
    """Return the stored (latitude, longitude), or None when either is missing."""
    latitude, longitude = await redis.hmget(
        restaurant_key(restaurant_id), ["latitude", "longitude"]
    )
    if latitude is None or longitude is None:
        return None
    return float(latitude), float(longitude)
