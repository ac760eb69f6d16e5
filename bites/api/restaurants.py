"""Restaurant, review, weather and detail-document endpoints."""

from typing import Any

import httpx
from fastapi import APIRouter, Body, Depends, Query
from redis.asyncio import Redis

from bites.api.deps import PageParams, get_http_client, get_redis
from bites.schemas.restaurant import (
    ApiResponse,
    Pagination,
    RestaurantCreate,
    RestaurantPage,
    ReviewCreate,
)
from bites.services import catalog


router = APIRouter(prefix="/restaurants", tags=["restaurants"])


@router.get("", response_model=ApiResponse)
async def list_restaurants(
    page: PageParams = Depends(),
    redis: Redis = Depends(get_redis),
) -> ApiResponse:
    """Highest-rated restaurants first."""
    restaurants = await catalog.list_top_restaurants(redis, page.offset, page.limit)
    payload = RestaurantPage(
        restaurants=[r.model_dump(by_alias=True) for r in restaurants],
        pagination=Pagination(page=page.page, limit=page.limit, total=len(restaurants)),
    )
    return ApiResponse(data=payload.model_dump(), message="Fetched restaurants successfully")


@router.post("", response_model=ApiResponse)
async def create_restaurant(
    request: RestaurantCreate,
    redis: Redis = Depends(get_redis),
) -> ApiResponse:
    """
    Create a restaurant.

    Returns 409 when the name/location pair was probably submitted before.
    """
    restaurant = await catalog.create_restaurant(
        redis,
        name=request.name,
        location=request.location,
        cuisines=request.cuisines,
        latitude=request.latitude,
        longitude=request.longitude,
    )
    return ApiResponse(data=restaurant.model_dump(by_alias=True), message="Added new restaurant")


@router.get("/search", response_model=ApiResponse)
async def search_restaurants(
    q: str = Query(..., min_length=1, max_length=200),
    limit: int = Query(default=10, ge=1, le=100),
    redis: Redis = Depends(get_redis),
) -> ApiResponse:
    hits = await catalog.search_restaurants(redis, q, limit)
    return ApiResponse(
        data=[hit.model_dump(by_alias=True) for hit in hits],
        message="Search completed",
    )


@router.get("/{restaurant_id}", response_model=ApiResponse)
async def get_restaurant(
    restaurant_id: str,
    redis: Redis = Depends(get_redis),
) -> ApiResponse:
    """Restaurant details with cuisines. Every call counts as one view."""
    restaurant = await catalog.view_restaurant(redis, restaurant_id)
    return ApiResponse(
        data=restaurant.model_dump(by_alias=True),
        message="Fetched restaurant details and cuisines",
    )


@router.post("/{restaurant_id}/reviews", response_model=ApiResponse)
async def add_review(
    restaurant_id: str,
    request: ReviewCreate,
    redis: Redis = Depends(get_redis),
) -> ApiResponse:
    review = await catalog.submit_review(redis, restaurant_id, request.rating, request.body)
    return ApiResponse(data=review.model_dump(by_alias=True), message="Added review successfully")


@router.get("/{restaurant_id}/reviews", response_model=ApiResponse)
async def list_reviews(
    restaurant_id: str,
    page: PageParams = Depends(),
    redis: Redis = Depends(get_redis),
) -> ApiResponse:
    reviews = await catalog.list_reviews(redis, restaurant_id, page.offset, page.limit)
    return ApiResponse(
        data=[review.model_dump(by_alias=True) for review in reviews],
        message="Fetched reviews successfully",
    )


@router.delete("/{restaurant_id}/reviews/{review_id}", response_model=ApiResponse)
async def delete_review(
    restaurant_id: str,
    review_id: str,
    redis: Redis = Depends(get_redis),
) -> ApiResponse:
    await catalog.delete_review(redis, restaurant_id, review_id)
    return ApiResponse(data={"reviewId": review_id}, message="Review deleted successfully")


@router.get("/{restaurant_id}/weather", response_model=ApiResponse)
async def get_weather(
    restaurant_id: str,
    redis: Redis = Depends(get_redis),
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> ApiResponse:
    payload = await catalog.get_weather(redis, http_client, restaurant_id)
    return ApiResponse(data=payload, message="Fetched weather")


@router.post("/{restaurant_id}/details", response_model=ApiResponse)
async def save_details(
    restaurant_id: str,
    document: dict[str, Any] = Body(...),
    redis: Redis = Depends(get_redis),
) -> ApiResponse:
    await catalog.save_details(redis, restaurant_id, document)
    return ApiResponse(data=document, message="Saved restaurant details")


@router.get("/{restaurant_id}/details", response_model=ApiResponse)
async def get_details(
    restaurant_id: str,
    redis: Redis = Depends(get_redis),
) -> ApiResponse:
    document = await catalog.get_details(redis, restaurant_id)
    return ApiResponse(data=document, message="Fetched restaurant details")
