from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Review(BaseModel):
    """A single review as stored in its own hash."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    restaurant_id: str = Field(alias="restaurantId")
    rating: int
    body: str = ""
    # Milliseconds since the epoch
    timestamp: int

    @classmethod
    def from_hash(cls, data: dict[str, str]) -> Review:
        return cls.model_validate(data)

    def to_hash(self) -> dict[str, str | int]:
        return self.model_dump(by_alias=True)

    def __repr__(self) -> str:
        return f"<Review(id='{self.id}', rating={self.rating}, restaurant_id='{self.restaurant_id}')>"
