"""Free-form restaurant detail documents, stored and returned untouched."""

import json
from typing import Any

from redis.asyncio import Redis

from bites.errors import NotFoundError
from bites.keys import restaurant_details_key


async def save_details(redis: Redis, restaurant_id: str, document: Any) -> None:
    await redis.set(restaurant_details_key(restaurant_id), json.dumps(document))


async def get_details(redis: Redis, restaurant_id: str) -> Any:
    raw = await redis.get(restaurant_details_key(restaurant_id))
    if raw is None:
        raise NotFoundError("Restaurant details not found")
    return json.loads(raw)
