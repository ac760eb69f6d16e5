"""Error taxonomy shared by the store components and the HTTP layer."""

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


class BitesError(Exception):
    """Base class for failures surfaced to callers of the core."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(BitesError):
    """Raised when a referenced restaurant, review or document is absent."""

    status_code = 404
    default_message = "Resource not found"


class ValidationError(BitesError):
    """Raised on malformed input that slipped past the request schemas."""

    status_code = 400
    default_message = "Validation failed"


class ConflictError(BitesError):
    """Raised when a submission looks like an already-known restaurant."""

    status_code = 409
    default_message = "Resource already exists"


class UpstreamUnavailableError(BitesError):
    """Raised when the store or the weather provider fails."""

    status_code = 503
    default_message = "Upstream service unavailable. Please try again later."


class IntegrityMismatchError(BitesError):
    """Raised when a review does not belong to the restaurant in the path."""

    status_code = 400
    default_message = "Review does not belong to this restaurant"


def store_errors(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
    """Surface store client failures as ``UpstreamUnavailableError``.

    No retry and no rollback: sub-writes that already succeeded stay applied.
    """

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return await func(*args, **kwargs)
        except RedisError as exc:
            logger.error("Store failure in %s: %s", func.__name__, exc)
            raise UpstreamUnavailableError(
                "Database connection failed. Please try again later."
            ) from exc

    return wrapper
