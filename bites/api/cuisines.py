"""Cuisine endpoints."""

from fastapi import APIRouter, Depends
from redis.asyncio import Redis

from bites.api.deps import get_redis
from bites.schemas.restaurant import ApiResponse
from bites.services import catalog

router = APIRouter(prefix="/cuisines", tags=["cuisines"])


@router.get("", response_model=ApiResponse)
async def list_cuisines(redis: Redis = Depends(get_redis)) -> ApiResponse:
    cuisines = await catalog.list_cuisines(redis)
    return ApiResponse(data=cuisines, message="Fetched all cuisines")


@router.get("/{cuisine}", response_model=ApiResponse)
async def restaurants_for_cuisine(
    cuisine: str, redis: Redis = Depends(get_redis)
) -> ApiResponse:
    restaurants = await catalog.restaurants_for_cuisine(redis, cuisine)
    return ApiResponse(
        data=[r.model_dump(by_alias=True) for r in restaurants],
        message=f"Fetched restaurants for cuisine {cuisine}",
    )
