"""Cuisine index: three views (global, per tag, per restaurant) of one relation."""

import asyncio
from collections.abc import Iterable

from redis.asyncio import Redis

from bites.keys import cuisine_key, cuisines_key, restaurant_cuisines_key


async def attach(redis: Redis, restaurant_id: str, tags: Iterable[str]) -> None:
    """
    Link a restaurant to its cuisine tags.

    Every tag produces three set writes (global set, tag -> restaurants,
    restaurant -> tags), all fired in parallel. Tags are case-sensitive and
    only attached at creation time.
    """
    writes = []
    for tag in set(tags):
        writes.extend(
            [
                redis.sadd(cuisines_key(), tag),
                redis.sadd(cuisine_key(tag), restaurant_id),
                redis.sadd(restaurant_cuisines_key(restaurant_id), tag),
            ]
        )
    await asyncio.gather(*writes)


async def tags_of(redis: Redis, restaurant_id: str) -> set[str]:
    return set(await redis.smembers(restaurant_cuisines_key(restaurant_id)))


async def restaurants_by_tag(redis: Redis, tag: str) -> list[str]:
    # Sorted so that repeated reads of the same state agree
    return sorted(await redis.smembers(cuisine_key(tag)))


async def all_tags(redis: Redis) -> set[str]:
    return set(await redis.smembers(cuisines_key()))
