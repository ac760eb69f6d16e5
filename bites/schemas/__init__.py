from bites.schemas.restaurant import (
    ApiResponse,
    ErrorResponse,
    Pagination,
    RestaurantCreate,
    RestaurantPage,
    ReviewCreate,
)

__all__ = [
    "ApiResponse",
    "ErrorResponse",
    "Pagination",
    "RestaurantCreate",
    "RestaurantPage",
    "ReviewCreate",
]
