"""Key namespace: maps (kind, identifier) pairs to physical store keys."""

from bites.config import settings


def get_key_name(*parts: str) -> str:
    """Join the configured prefix and the given parts with ``:``."""
    return ":".join([settings.key_prefix, *parts])


def restaurant_key(restaurant_id: str) -> str:
    return get_key_name("restaurant", restaurant_id)


def restaurant_key_prefix() -> str:
    """Prefix watched by the text index (trailing ``:`` excludes sibling kinds)."""
    return get_key_name("restaurant") + ":"


def restaurant_reviews_key(restaurant_id: str) -> str:
    return get_key_name("restaurant_reviews", restaurant_id)


def review_key(review_id: str) -> str:
    return get_key_name("review", review_id)


def cuisines_key() -> str:
    return get_key_name("cuisines")


def cuisine_key(name: str) -> str:
    return get_key_name("cuisine", name)


def restaurant_cuisines_key(restaurant_id: str) -> str:
    return get_key_name("restaurant_cuisines", restaurant_id)


def restaurants_by_rating_key() -> str:
    return get_key_name("restaurants_by_rating")


def weather_key(restaurant_id: str) -> str:
    return get_key_name("weather", restaurant_id)


def restaurant_details_key(restaurant_id: str) -> str:
    return get_key_name("restaurant_details", restaurant_id)


def index_key() -> str:
    return get_key_name("idx", "restaurants")


def bloom_key() -> str:
    return get_key_name("bloom", "restaurants")
