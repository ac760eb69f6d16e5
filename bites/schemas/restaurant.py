from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RestaurantCreate(BaseModel):
    """Request schema for creating a restaurant."""

    name: str = Field(..., min_length=1, max_length=200, description="Restaurant name")
    location: str = Field(
        ..., min_length=1, max_length=300, description="Free-text location"
    )
    cuisines: list[str] = Field(
        ..., min_length=1, description="Cuisine tags (case-sensitive)"
    )
    latitude: Optional[float] = Field(default=None, ge=-90.0, le=90.0)
    longitude: Optional[float] = Field(default=None, ge=-180.0, le=180.0)

    @field_validator("cuisines")
    @classmethod
    def strip_cuisines(cls, value: list[str]) -> list[str]:
        tags = [tag.strip() for tag in value]
        if any(not tag for tag in tags):
            raise ValueError("Cuisine tags must not be blank")
        return tags


class ReviewCreate(BaseModel):
    """Request schema for submitting a review."""

    rating: int = Field(..., ge=1, le=5, description="Rating from 1 to 5")
    body: str = Field(..., min_length=1, max_length=2000, description="Review text")


class Pagination(BaseModel):
    page: int
    limit: int
    total: int


class RestaurantPage(BaseModel):
    """A page of restaurants with its pagination info."""

    restaurants: list[dict[str, Any]]
    pagination: Pagination


class ApiResponse(BaseModel):
    """Envelope for every successful response."""

    success: bool = True
    message: str = "Success"
    data: Any = None
    timestamp: datetime = Field(default_factory=_utcnow)


class ErrorResponse(BaseModel):
    """Envelope for every failed response."""

    success: bool = False
    error: str
    details: Optional[list[dict[str, Any]]] = None
    timestamp: datetime = Field(default_factory=_utcnow)
