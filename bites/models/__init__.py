from bites.models.restaurant import Restaurant, RestaurantView, SearchHit
from bites.models.review import Review

__all__ = ["Restaurant", "RestaurantView", "SearchHit", "Review"]
