"""
Composite operations spanning the individual store components.

Writes are sagas: batches of independently atomic sub-operations fired in
parallel. There is no retry and no compensating rollback, so a failure in
one sub-write leaves the ones that already succeeded in place. Reads fan
out in parallel and merge locally by identifier.
"""

import asyncio
import logging
from collections.abc import Iterable
from typing import Any, Optional

import httpx
from redis.asyncio import Redis

from bites.errors import ConflictError, NotFoundError, ValidationError, store_errors
from bites.keys import restaurant_key
from bites.models.restaurant import Restaurant, RestaurantView, SearchHit
from bites.models.review import Review
from bites.services import cuisines as cuisine_index
from bites.services import details, duplicates, ratings, records, reviews, search, weather

logger = logging.getLogger(__name__)


def _merge(restaurant: Restaurant, tags: Iterable[str]) -> RestaurantView:
    return RestaurantView.model_validate(
        {**restaurant.model_dump(), "cuisines": sorted(tags)}
    )


async def _load_view(redis: Redis, restaurant_id: str) -> Optional[RestaurantView]:
    data, tags = await asyncio.gather(
        redis.hgetall(restaurant_key(restaurant_id)),
        cuisine_index.tags_of(redis, restaurant_id),
    )
    if not data:
        return None
    return _merge(Restaurant.from_hash(data), tags)


async def _load_views(redis: Redis, restaurant_ids: list[str]) -> list[RestaurantView]:
    views = await asyncio.gather(*(_load_view(redis, rid) for rid in restaurant_ids))
    missing = [rid for rid, view in zip(restaurant_ids, views) if view is None]
    if missing:
        logger.warning("Skipping %d restaurant id(s) without a record: %s", len(missing), missing)
    return [view for view in views if view is not None]


def _check_window(offset: int, limit: int) -> None:
    # Negative range bounds would count from the tail of the store structures
    if offset < 0 or limit < 0:
        raise ValidationError("Page offset and limit must not be negative")


@store_errors
async def ensure_restaurant_exists(redis: Redis, restaurant_id: str) -> None:
    """
    Existence probe run before every restaurant-scoped operation.

    Raises:
        NotFoundError: If the restaurant does not exist
    """
    if not await records.restaurant_exists(redis, restaurant_id):
        raise NotFoundError("Restaurant not found")


@store_errors
async def create_restaurant(
    redis: Redis,
    name: str,
    location: str,
    cuisines: Iterable[str],
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
) -> RestaurantView:
    """
    Create a restaurant after clearing the duplicate detector.

    The record, the cuisine links, the zero ranking entry and the detector
    entry are written in one parallel fan-out.

    Raises:
        ConflictError: If the name/location signature was probably seen before.
            Nothing is written in that case.
    """
    tags = set(cuisines)
    sig = duplicates.signature(name, location)
    if await duplicates.probably_exists(redis, sig):
        logger.warning("Rejected probable duplicate restaurant %r", sig)
        raise ConflictError("Restaurant already exists")

    restaurant_id = records.new_id()
    restaurant, *_ = await asyncio.gather(
        records.create_record(
            redis,
            restaurant_id,
            name,
            location,
            latitude=latitude,
            longitude=longitude,
        ),
        cuisine_index.attach(redis, restaurant_id, tags),
        ratings.initialise_ranking(redis, restaurant_id),
        duplicates.record(redis, sig),
    )

    logger.info("Created restaurant %s (%s)", restaurant_id, name)
    return _merge(restaurant, tags)


@store_errors
async def view_restaurant(redis: Redis, restaurant_id: str) -> RestaurantView:
    """
    Fetch a restaurant with its cuisines and count the view.

    The returned ``view_count`` is the value produced by the atomic increment.
    """
    await ensure_restaurant_exists(redis, restaurant_id)
    view_count, restaurant, tags = await asyncio.gather(
        records.increment_view_count(redis, restaurant_id),
        records.get_record(redis, restaurant_id),
        cuisine_index.tags_of(redis, restaurant_id),
    )
    restaurant.view_count = view_count
    return _merge(restaurant, tags)


@store_errors
async def list_top_restaurants(
    redis: Redis, offset: int = 0, limit: int = 10
) -> list[RestaurantView]:
    """Highest-rated restaurants first, with their cuisines."""
    _check_window(offset, limit)
    restaurant_ids = await ratings.top_by_rating(redis, offset, limit)
    return await _load_views(redis, restaurant_ids)


@store_errors
async def submit_review(
    redis: Redis, restaurant_id: str, rating: int, body: str
) -> Review:
    await ensure_restaurant_exists(redis, restaurant_id)
    return await reviews.add_review(redis, restaurant_id, rating, body)


@store_errors
async def list_reviews(
    redis: Redis, restaurant_id: str, offset: int = 0, limit: int = 10
) -> list[Review]:
    _check_window(offset, limit)
    await ensure_restaurant_exists(redis, restaurant_id)
    return await reviews.list_reviews(redis, restaurant_id, offset, limit)


@store_errors
async def delete_review(redis: Redis, restaurant_id: str, review_id: str) -> Review:
    await ensure_restaurant_exists(redis, restaurant_id)
    return await reviews.remove_review(redis, restaurant_id, review_id)


@store_errors
async def list_cuisines(redis: Redis) -> list[str]:
    return sorted(await cuisine_index.all_tags(redis))


@store_errors
async def restaurants_for_cuisine(redis: Redis, cuisine: str) -> list[RestaurantView]:
    restaurant_ids = await cuisine_index.restaurants_by_tag(redis, cuisine)
    return await _load_views(redis, restaurant_ids)


@store_errors
async def search_restaurants(redis: Redis, text: str, limit: int = 10) -> list[SearchHit]:
    return await search.search(redis, text, limit)


@store_errors
async def get_weather(
    redis: Redis, http_client: httpx.AsyncClient, restaurant_id: str
) -> dict[str, Any]:
    """
    Current weather at a restaurant, served from cache while fresh.

    Raises:
        NotFoundError: If the restaurant or its coordinates are missing
        UpstreamUnavailableError: If the provider fails; nothing is cached
    """
    await ensure_restaurant_exists(redis, restaurant_id)

    cached = await weather.get_cached(redis, restaurant_id)
    if cached is not None:
        logger.debug("Weather cache hit for restaurant %s", restaurant_id)
        return cached

    coordinates = await records.get_coordinates(redis, restaurant_id)
    if coordinates is None:
        raise NotFoundError("Restaurant coordinates not found")

    payload = await weather.fetch_weather(http_client, *coordinates)
    await weather.put(redis, restaurant_id, payload)
    return payload


@store_errors
async def save_details(redis: Redis, restaurant_id: str, document: Any) -> None:
    await ensure_restaurant_exists(redis, restaurant_id)
    await details.save_details(redis, restaurant_id, document)


@store_errors
async def get_details(redis: Redis, restaurant_id: str) -> Any:
    await ensure_restaurant_exists(redis, restaurant_id)
    return await details.get_details(redis, restaurant_id)
