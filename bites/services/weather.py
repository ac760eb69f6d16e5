"""Weather cache and the third-party current-weather client it fronts."""

import json
import logging
from typing import Any, Optional

import httpx
from redis.asyncio import Redis

from bites.config import settings
from bites.errors import UpstreamUnavailableError
from bites.keys import weather_key

logger = logging.getLogger(__name__)


async def get_cached(redis: Redis, restaurant_id: str) -> Optional[dict[str, Any]]:
    """Return the cached payload, or None on a miss (never set or expired)."""
    raw = await redis.get(weather_key(restaurant_id))
    if raw is None:
        return None
    return json.loads(raw)


async def put(
    redis: Redis,
    restaurant_id: str,
    payload: dict[str, Any],
    ttl_seconds: Optional[int] = None,
) -> None:
    """Cache a payload; it reads as a miss once the TTL elapses."""
    ttl = ttl_seconds if ttl_seconds is not None else settings.weather_cache_ttl
    await redis.set(weather_key(restaurant_id), json.dumps(payload), ex=ttl)


async def fetch_weather(
    http_client: httpx.AsyncClient, latitude: float, longitude: float
) -> dict[str, Any]:
    """
    Call the weather provider for the given coordinates.

    Raises:
        UpstreamUnavailableError: On transport errors, non-2xx responses or
            a body that is not JSON
    """
    params = {
        "lat": latitude,
        "lon": longitude,
        "units": "metric",
        "appid": settings.weather_api_key,
    }
    try:
        resp = await http_client.get(
            settings.weather_api_url, params=params, timeout=settings.weather_timeout
        )
        resp.raise_for_status()
        return resp.json()
    except httpx.HTTPStatusError as exc:
        logger.error("Weather provider HTTP error: %s", exc.response.status_code)
        raise UpstreamUnavailableError("Weather provider unavailable") from exc
    except httpx.RequestError as exc:
        logger.error("Weather provider request failed: %s", exc)
        raise UpstreamUnavailableError("Weather provider unavailable") from exc
    except ValueError as exc:
        logger.error("Weather provider returned an unreadable body: %s", exc)
        raise UpstreamUnavailableError("Weather provider unavailable") from exc
