from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Restaurant(BaseModel):
    """Scalar attributes and counters of a restaurant as stored in its hash."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    location: str
    view_count: int = Field(default=0, alias="viewCount")
    average_rating: float = Field(default=0.0, alias="averageRating")
    # Sum of review ratings, not a review count
    total_reviews: int = Field(default=0, alias="totalReviews")
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @classmethod
    def from_hash(cls, data: dict[str, str]) -> Restaurant:
        """Build a record from ``HGETALL`` output; missing counters read as zero."""
        return cls.model_validate(data)

    def to_hash(self) -> dict[str, str | int | float]:
        """Flatten into the field mapping written with ``HSET``."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def __repr__(self) -> str:
        return f"<Restaurant(name='{self.name}', location='{self.location}')>"


class RestaurantView(Restaurant):
    """A restaurant record merged with its cuisine tags."""

    cuisines: list[str] = Field(default_factory=list)


class SearchHit(BaseModel):
    """A restaurant matched by the text index."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    location: Optional[str] = None
    average_rating: float = Field(default=0.0, alias="averageRating")
